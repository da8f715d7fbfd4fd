#!/usr/bin/env python3
"""Entry point for random-walk displacement scaling runs.

With --config, runs every trace in a batch config file and writes the chart
pages plus a fit summary. Without it, asks for trace parameters
interactively until told to stop.

Usage:
    python run_scaling.py
    python run_scaling.py --config configs/example_batch.json
    python run_scaling.py --config configs/example_batch.json --dry-run
    python run_scaling.py --config configs/example_batch.json --verbose
"""

import argparse
import logging
import sys
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator

from walkscale.config import ConfigError, load_batch_config, trace_id
from walkscale.experiment import (
    console_progress,
    describe_plan,
    run_batch,
    run_interactive,
)
from walkscale.reporting import DEFAULT_OUTPUT_DIR, HtmlPlotSink
from walkscale.walk import LatticeWalkOracle

log = logging.getLogger(__name__)


@contextmanager
def stage_timer(name: str) -> Generator[None, None, None]:
    """Context manager that prints stage banners with elapsed time."""
    print(f"\n=== {name} ===")
    log.info("Starting: %s", name)
    t0 = time.monotonic()
    yield
    elapsed = time.monotonic() - t0
    print(f"... done in {elapsed:.1f}s")
    log.info("Completed: %s in %.1fs", name, elapsed)


def print_result(result) -> None:
    print(f"\n{'=' * 60}")
    print(f"Traces:  {len(result.outcomes)} ({len(result.failed)} failed)")
    for page in result.pages:
        print(f"  Plot:    {page}")
    if result.summary_path is not None:
        print(f"  Summary: {result.summary_path}")
    print(f"{'=' * 60}")


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Measure how random-walk displacement scales with walk length"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to batch config JSON file (omit for interactive mode)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=str(DEFAULT_OUTPUT_DIR),
        help="Directory for chart pages and the fit summary",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the sweep plan without simulating",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable DEBUG-level logging",
    )
    args = parser.parse_args()

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    oracle = LatticeWalkOracle()
    sink = HtmlPlotSink(args.output_dir)

    if args.config is None:
        if args.dry_run:
            print("Error: --dry-run requires --config", file=sys.stderr)
            sys.exit(2)
        try:
            result = run_interactive(
                oracle, sink,
                summary_dir=args.output_dir,
                progress_callback=console_progress,
            )
        except (EOFError, KeyboardInterrupt):
            print("\nAborted.", file=sys.stderr)
            sys.exit(1)
        print_result(result)
        return

    try:
        config = load_batch_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"Output:  {config.output_name} -> {args.output_dir}")
    for params in config.walks:
        print(
            f"Trace:   {params.trace_name} [{trace_id(params)}] "
            f"{params.walk_type.value}/{params.grid_type.value}, "
            f"{params.sequence_kind.value} start={params.start_value} "
            f"increment={params.increment} buckets={params.step_count}"
        )

    if args.dry_run:
        for params in config.walks:
            print(f"\nSweep plan for '{params.trace_name}':")
            print(f"{'bucket':>8s} {'steps':>10s} {'walks':>8s}")
            for line in describe_plan(params):
                print(line)
        print("\n[dry-run] Config loaded successfully. Exiting.")
        return

    try:
        with stage_timer(f"Batch {config.output_name}"):
            result = run_batch(
                config, oracle, sink,
                summary_dir=args.output_dir,
                progress_callback=console_progress,
            )
    except Exception:
        log.exception("Batch failed")
        sys.exit(1)

    print_result(result)


if __name__ == "__main__":
    main()
