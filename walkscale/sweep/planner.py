"""Sample-size planning: how many independent walks to request per bucket.

The error of a mean estimate falls as 1/sqrt(num_walks) while the spread of
the displacement grows with walk length, so the walk count scales with
sqrt(total_steps) to keep relative precision roughly flat across a sweep.
"""

import math

from walkscale.config.experiment import WalkExperimentParams

# Floor on walks per bucket; keeps (num_walks - 1) denominators and
# short-walk estimates well away from degenerate.
MIN_WALKS = 500


def plan_num_walks(total_steps: int, coefficient: float) -> int:
    """Number of walks for a bucket of total_steps steps.

    ceil(max(MIN_WALKS, sqrt(total_steps) * coefficient)). Non-decreasing
    in total_steps and never below MIN_WALKS.
    """
    return int(math.ceil(max(MIN_WALKS, math.sqrt(total_steps) * coefficient)))


def total_steps_for(params: WalkExperimentParams, bucket: int) -> int:
    """Full step budget of one bucket under the trace's sampling strategy."""
    if params.steps_per_sample is None:
        return bucket
    return bucket * params.steps_per_sample


def plan_sweep(
    params: WalkExperimentParams, buckets: list[int]
) -> list[tuple[int, int]]:
    """Pair every bucket's total step count with its planned walk count."""
    plan = []
    for bucket in buckets:
        total = total_steps_for(params, bucket)
        plan.append((total, plan_num_walks(total, params.num_walks_coefficient)))
    return plan
