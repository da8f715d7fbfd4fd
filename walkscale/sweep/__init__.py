"""Sweep planning: bucket sequences and per-bucket walk counts."""

from walkscale.sweep.planner import MIN_WALKS, plan_num_walks, plan_sweep, total_steps_for
from walkscale.sweep.sequence import (
    arithmetic_sequence,
    buckets_for,
    generate_buckets,
    geometric_sequence,
)

__all__ = [
    "MIN_WALKS",
    "plan_num_walks",
    "plan_sweep",
    "total_steps_for",
    "arithmetic_sequence",
    "buckets_for",
    "generate_buckets",
    "geometric_sequence",
]
