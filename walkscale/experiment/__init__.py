"""Experiment runner: batch and interactive trace runs."""

from walkscale.experiment.prompt import (
    enum_parser,
    prompt_output_name,
    prompt_params,
    prompt_value,
    prompt_yes_no,
    random_seed,
)
from walkscale.experiment.runner import (
    BatchResult,
    add_outcome,
    console_progress,
    describe_plan,
    format_outcome,
    run_batch,
    run_interactive,
    run_trace,
)

__all__ = [
    "enum_parser",
    "prompt_output_name",
    "prompt_params",
    "prompt_value",
    "prompt_yes_no",
    "random_seed",
    "BatchResult",
    "add_outcome",
    "console_progress",
    "describe_plan",
    "format_outcome",
    "run_batch",
    "run_interactive",
    "run_trace",
]
