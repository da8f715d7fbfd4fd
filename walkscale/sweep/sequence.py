"""Bucket-size sequences for sweeping walk length.

A sweep is either arithmetic (start, start + d, start + 2d, ...) or
geometric (ceil(start * q^i)). The generator never corrects its input:
a non-positive arithmetic sequence is rejected when params are validated,
and a geometric ratio <= 1 legitimately produces a flat or shrinking sweep.
"""

import math

from walkscale.config.experiment import SequenceKind, WalkExperimentParams


def arithmetic_sequence(start: int, step: int, count: int) -> list[int]:
    """Return [start + i * step for i in range(count)]."""
    return [start + i * step for i in range(count)]


def geometric_sequence(start: int, ratio: float, count: int) -> list[int]:
    """Return [ceil(start * ratio**i) for i in range(count)].

    Raises:
        ValueError: If ratio is not strictly positive.
    """
    if ratio <= 0:
        raise ValueError(f"Geometric ratio must be > 0, got {ratio}")
    return [math.ceil(start * ratio**i) for i in range(count)]


def generate_buckets(
    kind: SequenceKind,
    start: int,
    increment: int | float,
    count: int,
) -> list[int]:
    """Generate an ordered list of bucket sizes.

    Args:
        kind: Arithmetic or geometric progression.
        start: First bucket size.
        increment: Common difference (arithmetic) or ratio (geometric).
        count: Number of buckets; values <= 0 give an empty list.

    Returns:
        List of length max(count, 0) in generation order.
    """
    if kind is SequenceKind.GEOMETRIC:
        return geometric_sequence(start, float(increment), count)
    return arithmetic_sequence(start, int(increment), count)


def buckets_for(params: WalkExperimentParams) -> list[int]:
    """Bucket sizes for one trace's configuration."""
    return generate_buckets(
        params.sequence_kind,
        params.start_value,
        params.increment,
        params.step_count,
    )
