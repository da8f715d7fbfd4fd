"""Plot sink: self-contained HTML chart pages with base64-embedded figures."""

from walkscale.reporting.embed import figure_data_uri
from walkscale.reporting.sink import DEFAULT_OUTPUT_DIR, HtmlPlotSink, PlotSink

__all__ = [
    "figure_data_uri",
    "DEFAULT_OUTPUT_DIR",
    "HtmlPlotSink",
    "PlotSink",
]
