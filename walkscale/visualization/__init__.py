"""Static figures for scaling experiments.

Provides the plot-series model and plot_series_set() to draw measured
traces and fitted power laws on linear or log-log axes.
"""

from walkscale.visualization.scaling import (
    fit_label,
    fit_series,
    plot_series_set,
    trace_label,
    trace_series,
)
from walkscale.visualization.series import BandSeries, FitAnnotation, LineSeries, SeriesSet
from walkscale.visualization.style import apply_style, save_figure

__all__ = [
    "fit_label",
    "fit_series",
    "plot_series_set",
    "trace_label",
    "trace_series",
    "BandSeries",
    "FitAnnotation",
    "LineSeries",
    "SeriesSet",
    "apply_style",
    "save_figure",
]
