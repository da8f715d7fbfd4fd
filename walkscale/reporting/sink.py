"""HTML plot sink: persist a SeriesSet as linear and log-log chart pages.

For an output name NAME the sink writes, under its output directory:

- NAME.html and NAME_loglog.html, self-contained pages with the chart
  embedded as base64 and a table of fitted exponents;
- figures/NAME.{png,svg} and figures/NAME_loglog.{png,svg}.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from jinja2 import Environment, FileSystemLoader, select_autoescape

from walkscale.reporting.embed import figure_data_uri
from walkscale.visualization.scaling import plot_series_set
from walkscale.visualization.series import SeriesSet
from walkscale.visualization.style import save_figure

log = logging.getLogger(__name__)

# Template directory relative to this file
_TEMPLATE_DIR = Path(__file__).parent / "templates"

DEFAULT_OUTPUT_DIR = Path("plot")


class PlotSink(Protocol):
    """Consumer of accumulated plot series."""

    def write(self, series: SeriesSet, output_name: str) -> list[Path]:
        ...


@dataclass(frozen=True)
class _Scale:
    suffix: str
    log_scale: bool
    label: str


_SCALES = (
    _Scale(suffix="", log_scale=False, label="Linear"),
    _Scale(suffix="_loglog", log_scale=True, label="Log-log"),
)


def _format(value: float | None, spec: str = ".4f") -> str:
    if value is None:
        return "N/A"
    return format(value, spec)


def _fit_rows(series: SeriesSet) -> list[dict[str, Any]]:
    rows = []
    for ann in series.annotations:
        interval = "N/A"
        if ann.exponent_interval is not None:
            low, high = ann.exponent_interval
            interval = f"[{low:.4f}, {high:.4f}]"
        rows.append({
            "trace": ann.trace_name,
            "prefactor": _format(ann.prefactor),
            "exponent": _format(ann.exponent),
            "exponent_interval": interval,
            "sumsq": _format(ann.sumsq, ".3e"),
            "note": ann.note,
            "has_fit": ann.has_fit,
        })
    return rows


def _sample_tables(series: SeriesSet) -> list[dict[str, Any]]:
    tables = []
    for line in series.lines:
        if line.is_fit:
            continue
        rows = []
        for i, (x, y) in enumerate(zip(line.x, line.y)):
            rows.append({
                "steps": int(x),
                "mean": f"{y:.4f}",
                "stderr": "" if line.error is None else f"{line.error[i]:.4f}",
                "hover": "" if line.hover is None else line.hover[i],
            })
        tables.append({"name": line.name, "rows": rows})
    return tables


class HtmlPlotSink:
    """Writes linear and log-log HTML chart pages for a SeriesSet."""

    def __init__(self, output_dir: str | Path = DEFAULT_OUTPUT_DIR) -> None:
        self.output_dir = Path(output_dir)
        self._env = Environment(
            loader=FileSystemLoader(str(_TEMPLATE_DIR)),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def write(self, series: SeriesSet, output_name: str) -> list[Path]:
        """Render both charts and write their pages.

        Args:
            series: Accumulated series for this run.
            output_name: Base name of the artifacts.

        Returns:
            Paths of the written HTML pages, linear first.
        """
        output_name = output_name.strip()
        if not output_name:
            raise ValueError("output_name must not be empty")

        figures_dir = self.output_dir / "figures"
        template = self._env.get_template("scaling_plot.html")
        fit_rows = _fit_rows(series)
        sample_tables = _sample_tables(series)
        timestamp = datetime.now(timezone.utc).isoformat(timespec="seconds")
        pages: list[Path] = []

        for scale in _SCALES:
            name = f"{output_name}{scale.suffix}"
            fig = plot_series_set(
                series,
                log_scale=scale.log_scale,
                title=f"{output_name} ({scale.label.lower()})",
            )
            png_path, _ = save_figure(fig, figures_dir, name)
            sibling = next(s for s in _SCALES if s is not scale)

            html = template.render(
                output_name=output_name,
                scale_label=scale.label,
                timestamp=timestamp,
                figure=figure_data_uri(png_path),
                sibling_href=f"{output_name}{sibling.suffix}.html",
                sibling_label=sibling.label,
                fit_rows=fit_rows,
                sample_tables=sample_tables,
            )
            page_path = self.output_dir / f"{name}.html"
            page_path.parent.mkdir(parents=True, exist_ok=True)
            page_path.write_text(html, encoding="utf-8")
            pages.append(page_path)
            log.info("Plot written to %s", page_path)

        return pages
