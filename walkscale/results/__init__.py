"""Per-trace outcomes and the JSON fit summary written with each run."""

from walkscale.results.outcome import TraceOutcome
from walkscale.results.summary import (
    build_summary,
    load_summary,
    validate_summary,
    write_summary,
)

__all__ = [
    "TraceOutcome",
    "build_summary",
    "load_summary",
    "validate_summary",
    "write_summary",
]
