"""Look of the scaling charts: theme, per-trace colors and figure export."""

import matplotlib
matplotlib.use("Agg")

import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path

# One colorblind-safe color per trace, reused past eight traces
PALETTE = sns.color_palette("colorblind", n_colors=8)
BAND_ALPHA = 0.15
FIT_LINESTYLE = "--"
EXPORT_FORMATS = ("png", "svg")
PNG_DPI = 300

_CHART_RC = {
    "figure.figsize": (10, 6),
    "figure.dpi": 150,
    "savefig.dpi": PNG_DPI,
    "font.size": 10,
    "axes.titlesize": 12,
    "axes.labelsize": 11,
    "xtick.labelsize": 9,
    "ytick.labelsize": 9,
    # Long trace labels carry the walk and grid type
    "legend.fontsize": 8,
    "legend.framealpha": 0.9,
    "errorbar.capsize": 2,
    "lines.markersize": 4,
    # Keep labels as text in SVG output
    "svg.fonttype": "none",
}


def trace_color(index: int) -> tuple[float, float, float]:
    return PALETTE[index % len(PALETTE)]


def apply_style() -> None:
    """Whitegrid theme with chart font sizes and export DPI. Safe to call repeatedly."""
    sns.set_theme(style="whitegrid", rc=_CHART_RC)


def save_figure(
    fig: plt.Figure,
    output_dir: Path,
    name: str,
    formats: tuple[str, ...] = EXPORT_FORMATS,
) -> tuple[Path, ...]:
    """Write fig as output_dir/name.<ext> for each format, then close it.

    Returns the written paths in the order of formats, so the default call
    unpacks as ``png_path, svg_path``.
    """
    target = Path(output_dir)
    target.mkdir(parents=True, exist_ok=True)
    written = []
    try:
        for ext in formats:
            path = target / f"{name}.{ext}"
            fig.savefig(path, dpi=PNG_DPI if ext == "png" else "figure", bbox_inches="tight")
            written.append(path)
    finally:
        plt.close(fig)
    return tuple(written)
