"""Inline saved figures into HTML pages as base64 data URIs."""

import base64
from pathlib import Path

_FIGURE_MIME: dict[str, str] = {
    ".png": "image/png",
    ".svg": "image/svg+xml",
}


def figure_data_uri(fig_path: Path | str) -> str:
    """Return a ``data:`` URI holding the bytes of a PNG or SVG figure.

    Raises:
        FileNotFoundError: If the figure has not been written.
        ValueError: If the file is neither PNG nor SVG.
    """
    fig_path = Path(fig_path)
    mime = _FIGURE_MIME.get(fig_path.suffix.lower())
    if mime is None:
        raise ValueError(f"Cannot embed {fig_path.name}: expected .png or .svg")
    encoded = base64.b64encode(fig_path.read_bytes()).decode("ascii")
    return f"data:{mime};base64,{encoded}"
