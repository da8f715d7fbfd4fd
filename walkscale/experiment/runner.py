"""Experiment runner: trace -> fit -> plot series, in batch or interactively.

Traces run strictly one after another. The plot accumulator is an immutable
SeriesSet passed from trace to trace; nothing here holds global state.
"""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

from walkscale.analysis.scaling_fit import FitError, fit_power_law, parameter_intervals
from walkscale.config.defaults import DEFAULT_PARAMS
from walkscale.config.experiment import BatchConfig, WalkExperimentParams
from walkscale.experiment.prompt import (
    Echo,
    Reader,
    prompt_output_name,
    prompt_params,
    prompt_yes_no,
    random_seed,
)
from walkscale.reporting.sink import PlotSink
from walkscale.results.outcome import TraceOutcome
from walkscale.results.summary import write_summary
from walkscale.sweep.planner import plan_sweep
from walkscale.sweep.sequence import buckets_for
from walkscale.visualization.scaling import fit_series, trace_series
from walkscale.visualization.series import FitAnnotation, SeriesSet
from walkscale.walk.oracle import OracleError, SimulationOracle
from walkscale.walk.trace import ProgressCallback, build_trace

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchResult:
    """Everything a run produced."""

    outcomes: tuple[TraceOutcome, ...]
    series: SeriesSet
    pages: tuple[Path, ...]
    summary_path: Path | None = None

    @property
    def failed(self) -> list[TraceOutcome]:
        return [o for o in self.outcomes if not o.succeeded]


def console_progress(current: int, total: int) -> None:
    """Progress line rewritten in place: '\\r{current} / {total}'."""
    print(f"\r{current} / {total}", end="", flush=True)
    if current == total:
        print()


def run_trace(
    params: WalkExperimentParams,
    oracle: SimulationOracle,
    progress_callback: Optional[ProgressCallback] = None,
) -> TraceOutcome:
    """Build one trace and fit it.

    Oracle failures discard the trace. Fit failures keep the raw trace so it
    can still be plotted without a fitted curve.
    """
    try:
        trace = build_trace(params, oracle, progress_callback)
    except OracleError as e:
        log.error("Trace '%s' aborted: %s", params.trace_name, e)
        return TraceOutcome(params=params, error=str(e))

    try:
        fit = fit_power_law(trace)
    except FitError as e:
        log.warning("Failed fit for '%s': %s", params.trace_name, e)
        return TraceOutcome(params=params, trace=trace, error=f"Failed fit: {e}")

    return TraceOutcome(params=params, trace=trace, fit=fit)


def add_outcome(series: SeriesSet, outcome: TraceOutcome) -> SeriesSet:
    """Return series extended with whatever the outcome has to show."""
    name = outcome.params.trace_name
    if outcome.trace is None:
        return series.add_annotation(
            FitAnnotation(trace_name=name, note=outcome.error or "")
        )

    line, band = trace_series(outcome.trace, outcome.params)
    series = series.add_line(line).add_band(band)

    fit = outcome.fit
    if fit is None:
        return series.add_annotation(
            FitAnnotation(trace_name=name, note=outcome.error or "")
        )

    fit_line, fit_band = fit_series(fit, outcome.trace)
    return (
        series.add_line(fit_line)
        .add_band(fit_band)
        .add_annotation(FitAnnotation(
            trace_name=name,
            prefactor=fit.prefactor,
            exponent=fit.exponent,
            sumsq=fit.sumsq,
            exponent_interval=parameter_intervals(fit)["exponent"],
        ))
    )


def format_outcome(outcome: TraceOutcome) -> str:
    """User-facing report of one trace."""
    name = outcome.params.trace_name
    if outcome.trace is None:
        return f"Trace '{name}' aborted: {outcome.error}"
    if outcome.fit is None:
        return f"Trace '{name}': {outcome.error}"

    fit = outcome.fit
    low, high = parameter_intervals(fit)["exponent"]
    return "\n".join([
        "Fit successful",
        f"sumsq: {fit.sumsq}",
        f"c0: {fit.c0}",
        f"c1: {fit.c1}",
        f"c = {fit.prefactor:.4f}, alpha = {fit.exponent:.4f} "
        f"(95% CI [{low:.4f}, {high:.4f}])",
    ])


def describe_plan(params: WalkExperimentParams) -> list[str]:
    """One line per bucket: bucket size, total steps and planned walks."""
    buckets = buckets_for(params)
    return [
        f"{bucket:>8d} {total:>10d} {walks:>8d}"
        for bucket, (total, walks) in zip(buckets, plan_sweep(params, buckets))
    ]


def _write_outputs(
    outcomes: list[TraceOutcome],
    series: SeriesSet,
    output_name: str,
    sink: PlotSink,
    summary_dir: str | Path | None,
) -> BatchResult:
    pages = sink.write(series, output_name)
    summary_path = None
    if summary_dir is not None:
        summary_path = write_summary(outcomes, output_name, summary_dir)
    return BatchResult(
        outcomes=tuple(outcomes),
        series=series,
        pages=tuple(pages),
        summary_path=summary_path,
    )


def run_batch(
    config: BatchConfig,
    oracle: SimulationOracle,
    sink: PlotSink,
    summary_dir: str | Path | None = None,
    progress_callback: Optional[ProgressCallback] = None,
    echo: Echo = print,
) -> BatchResult:
    """Run every configured trace, then write the chart pages.

    A failing trace is reported and skipped; the remaining traces still run.

    Args:
        config: Output name and per-trace parameters.
        oracle: Simulation oracle shared by all traces.
        sink: Destination of the accumulated plot series.
        summary_dir: Where to write {output_name}_fits.json; None skips it.
        progress_callback: Optional callback(current_bucket, total_buckets).
        echo: Line printer for user-facing reports.
    """
    series = SeriesSet()
    outcomes: list[TraceOutcome] = []
    total = len(config.walks)

    for i, params in enumerate(config.walks):
        log.info("Trace %d/%d: '%s'", i + 1, total, params.trace_name)
        outcome = run_trace(params, oracle, progress_callback)
        if not outcome.succeeded:
            echo(format_outcome(outcome))
        outcomes.append(outcome)
        series = add_outcome(series, outcome)

    result = _write_outputs(outcomes, series, config.output_name, sink, summary_dir)
    log.info(
        "Batch '%s' done: %d/%d traces fitted",
        config.output_name, total - len(result.failed), total,
    )
    return result


def run_interactive(
    oracle: SimulationOracle,
    sink: PlotSink,
    read: Reader = input,
    echo: Echo = print,
    defaults: WalkExperimentParams | None = None,
    summary_dir: str | Path | None = None,
    progress_callback: Optional[ProgressCallback] = None,
) -> BatchResult:
    """Prompt for traces until the user stops, then write the chart pages.

    Each trace's answers become the defaults for the next one. With no
    defaults given, the session starts from DEFAULT_PARAMS with a fresh
    random seed.
    """
    if defaults is None:
        defaults = replace(DEFAULT_PARAMS, seed=random_seed())

    params = defaults
    series = SeriesSet()
    outcomes: list[TraceOutcome] = []

    while True:
        params = prompt_params(params, read, echo)
        outcome = run_trace(params, oracle, progress_callback)
        echo(format_outcome(outcome))
        outcomes.append(outcome)
        series = add_outcome(series, outcome)
        if not prompt_yes_no(
            "Do you want to generate another trace? (y / n)", read, echo
        ):
            break

    output_name = prompt_output_name(read, echo)
    return _write_outputs(outcomes, series, output_name, sink, summary_dir)
