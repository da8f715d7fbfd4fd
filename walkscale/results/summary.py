"""Fit summary: a JSON record of every trace in a run.

Written next to the chart pages as {output_name}_fits.json. Uses a Python
validation function (not jsonschema) to check required fields before
writing and after loading.
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np

from walkscale.analysis.scaling_fit import FitResult, parameter_intervals
from walkscale.config.hashing import trace_id
from walkscale.config.serialization import params_to_dict
from walkscale.results.outcome import (
    STATUS_FIT_FAILED,
    STATUS_OK,
    STATUS_ORACLE_FAILED,
    TraceOutcome,
)
from walkscale.walk.types import Trace

log = logging.getLogger(__name__)

SCHEMA_VERSION = "1.0"

REQUIRED_TOP_FIELDS = {"schema_version", "output_name", "timestamp", "traces"}
REQUIRED_TRACE_FIELDS = {"trace_id", "trace_name", "status", "params", "samples", "fit", "error"}
VALID_STATUSES = {STATUS_OK, STATUS_FIT_FAILED, STATUS_ORACLE_FAILED}


def _json_float(value: float) -> float | None:
    # Strict JSON has no NaN or Infinity
    return float(value) if np.isfinite(value) else None


def _trace_samples(trace: Trace | None) -> list[dict[str, Any]]:
    if trace is None:
        return []
    return [
        {
            "num_steps": s.num_steps,
            "num_walks": s.num_walks,
            "mean": _json_float(s.mean),
            "variance": _json_float(s.variance),
            "stderr": _json_float(s.stderr),
        }
        for s in trace
    ]


def _fit_block(fit: FitResult | None) -> dict[str, Any] | None:
    """Fit coefficients and intervals; non-finite values become null."""
    if fit is None:
        return None
    intervals = parameter_intervals(fit)
    return {
        "c0": _json_float(fit.c0),
        "c1": _json_float(fit.c1),
        "cov00": _json_float(fit.cov00),
        "cov01": _json_float(fit.cov01),
        "cov11": _json_float(fit.cov11),
        "sumsq": _json_float(fit.sumsq),
        "n_samples": fit.n_samples,
        "prefactor": _json_float(fit.prefactor),
        "exponent": _json_float(fit.exponent),
        "prefactor_ci95": [_json_float(v) for v in intervals["prefactor"]],
        "exponent_ci95": [_json_float(v) for v in intervals["exponent"]],
    }


def build_summary(outcomes: list[TraceOutcome], output_name: str) -> dict[str, Any]:
    """Assemble the summary dict for a run."""
    return {
        "schema_version": SCHEMA_VERSION,
        "output_name": output_name,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "traces": [
            {
                "trace_id": trace_id(o.params),
                "trace_name": o.params.trace_name,
                "status": o.status,
                "params": params_to_dict(o.params),
                "samples": _trace_samples(o.trace),
                "fit": _fit_block(o.fit),
                "error": o.error,
            }
            for o in outcomes
        ],
    }


def validate_summary(summary: dict[str, Any]) -> list[str]:
    """Validate a summary dict. Returns a list of errors; empty means valid."""
    errors: list[str] = []

    missing = REQUIRED_TOP_FIELDS - set(summary.keys())
    if missing:
        errors.append(f"Missing required top-level fields: {sorted(missing)}")

    if "timestamp" in summary:
        ts = summary["timestamp"]
        if not isinstance(ts, str):
            errors.append("timestamp must be a string")
        else:
            try:
                datetime.fromisoformat(ts)
            except ValueError:
                errors.append("timestamp must be in ISO 8601 format")

    traces = summary.get("traces", [])
    if not isinstance(traces, list):
        errors.append("traces must be a list")
        return errors

    for i, entry in enumerate(traces):
        if not isinstance(entry, dict):
            errors.append(f"traces[{i}] must be a dict")
            continue
        missing = REQUIRED_TRACE_FIELDS - set(entry.keys())
        if missing:
            errors.append(f"traces[{i}] missing fields: {sorted(missing)}")
            continue
        status = entry["status"]
        if status not in VALID_STATUSES:
            errors.append(f"traces[{i}] has unknown status: {status}")
        if status == STATUS_OK and entry["fit"] is None:
            errors.append(f"traces[{i}] is ok but has no fit")
        if status != STATUS_OK and not entry["error"]:
            errors.append(f"traces[{i}] failed without an error message")
        if status == STATUS_ORACLE_FAILED and entry["samples"]:
            errors.append(f"traces[{i}] failed in the oracle but kept samples")

    return errors


def write_summary(
    outcomes: list[TraceOutcome],
    output_name: str,
    output_dir: str | Path,
) -> Path:
    """Write {output_name}_fits.json into output_dir.

    Raises:
        ValueError: If the assembled summary fails validation.
    """
    summary = build_summary(outcomes, output_name)
    errors = validate_summary(summary)
    if errors:
        raise ValueError(
            "Summary validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        )

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f"{output_name}_fits.json"
    with open(path, "w") as f:
        json.dump(summary, f, indent=2, allow_nan=False)
    log.info("Fit summary written to %s", path)
    return path


def load_summary(path: str | Path) -> dict[str, Any]:
    """Load and validate a fit summary.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the loaded summary fails validation.
    """
    path = Path(path)
    with open(path) as f:
        summary = json.load(f)

    errors = validate_summary(summary)
    if errors:
        raise ValueError(
            f"Summary validation failed for {path}:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )
    return summary
