"""Scaling chart: measured traces, fitted power laws, and their bands.

Builds plot series from traces and fits, and renders a SeriesSet to a
matplotlib figure on linear or log-log axes.
"""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np

from walkscale.analysis.evaluation import evaluate_fit
from walkscale.analysis.scaling_fit import FitResult
from walkscale.analysis.uncertainty import empirical_band, fit_band
from walkscale.config.experiment import WalkExperimentParams
from walkscale.visualization.series import BandSeries, LineSeries, SeriesSet
from walkscale.visualization.style import (
    BAND_ALPHA,
    FIT_LINESTYLE,
    apply_style,
    trace_color,
)
from walkscale.walk.types import Trace

_WALK_LABELS = {
    "simple": "Simple",
    "no_immediate_return": "No Immediate Returns",
}


def _as_tuple(values) -> tuple[float, ...]:
    return tuple(float(v) for v in values)


def trace_label(params: WalkExperimentParams) -> str:
    """Legend label for a measured trace."""
    walk = _WALK_LABELS.get(params.walk_type.value, params.walk_type.value)
    grid = params.grid_type.value.capitalize()
    return f"{params.trace_name} (Walk type: {walk}, Grid type: {grid})"


def fit_label(trace_name: str, fit: FitResult) -> str:
    """Legend label for a fitted curve."""
    return f"Fit - {trace_name} (c = {fit.prefactor:.4f}, alpha = {fit.exponent:.4f})"


def trace_series(
    trace: Trace, params: WalkExperimentParams
) -> tuple[LineSeries, BandSeries]:
    """Measured means with stderr bars, plus the matching stderr band."""
    steps = trace.steps
    lower, upper = empirical_band(trace)
    line = LineSeries(
        name=trace_label(params),
        group=trace.name,
        x=_as_tuple(steps),
        y=_as_tuple(trace.means),
        error=_as_tuple(trace.stderrs),
        hover=tuple(f"Number of walks: {s.num_walks}" for s in trace),
    )
    band = BandSeries(
        name=f"stderr {trace.name}",
        group=trace.name,
        x=_as_tuple(steps),
        lower=_as_tuple(lower),
        upper=_as_tuple(upper),
    )
    return line, band


def fit_series(
    fit: FitResult, trace: Trace
) -> tuple[LineSeries, BandSeries]:
    """Fitted curve over the trace's step counts, plus its confidence band."""
    predictions = evaluate_fit(fit, trace.steps)
    lower, upper = fit_band(predictions)
    x = _as_tuple(p.steps for p in predictions)
    line = LineSeries(
        name=fit_label(trace.name, fit),
        group=trace.name,
        x=x,
        y=_as_tuple(p.predicted_mean for p in predictions),
        is_fit=True,
    )
    band = BandSeries(
        name=f"fit stderr {trace.name}",
        group=trace.name,
        x=x,
        lower=_as_tuple(lower),
        upper=_as_tuple(upper),
    )
    return line, band


def plot_series_set(
    series: SeriesSet,
    log_scale: bool = False,
    title: str | None = None,
) -> plt.Figure:
    """Render a SeriesSet on a single axis.

    Bands are drawn first and translucent; measured series use markers with
    error bars; fitted series use dashed lines. All series of one trace
    share a palette color.

    Args:
        series: Accumulated series to draw.
        log_scale: Use log-log axes instead of linear ones.
        title: Optional axis title.

    Returns:
        The matplotlib Figure.
    """
    apply_style()
    fig, ax = plt.subplots()
    colors = {group: trace_color(i) for i, group in enumerate(series.groups)}

    for band in series.bands:
        ax.fill_between(
            band.x, band.lower, band.upper,
            color=colors[band.group], alpha=BAND_ALPHA,
            linewidth=0, label=band.name,
        )

    for line in series.lines:
        color = colors[line.group]
        if line.is_fit:
            ax.plot(
                line.x, line.y, color=color,
                linestyle=FIT_LINESTYLE, linewidth=1.5, label=line.name,
            )
        else:
            ax.errorbar(
                line.x, line.y,
                yerr=None if line.error is None else np.asarray(line.error),
                color=color, fmt="o", markersize=3,
                elinewidth=0.8, capsize=0, label=line.name,
            )

    if log_scale:
        ax.set_xscale("log", nonpositive="mask")
        ax.set_yscale("log", nonpositive="mask")

    ax.set_xlabel("Number of steps")
    ax.set_ylabel("Mean displacement")
    if title:
        ax.set_title(title)
    if series.lines or series.bands:
        ax.legend(loc="best")

    fig.tight_layout()
    return fig
