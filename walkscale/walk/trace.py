"""Trace building: drive the oracle across every bucket of a sweep.

Buckets map to oracle calls through one of two sampling strategies chosen
per trace: direct (a walk of `bucket` steps) or bucketed (`bucket` buckets of
`steps_per_sample` steps each). Calls are independent; the variance of each
sample is that call's own estimate, never accumulated across buckets.
"""

import logging
from typing import Callable, Optional

from walkscale.config.experiment import WalkExperimentParams
from walkscale.sweep.planner import plan_num_walks, total_steps_for
from walkscale.sweep.sequence import buckets_for
from walkscale.walk.oracle import OracleError, SimulationOracle
from walkscale.walk.types import Trace, TraceSample

log = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def sample_bucket(
    oracle: SimulationOracle,
    params: WalkExperimentParams,
    bucket: int,
) -> TraceSample:
    """Measure one bucket with a planned number of walks.

    Raises:
        OracleError: Propagated from the oracle.
    """
    total_steps = total_steps_for(params, bucket)
    num_walks = plan_num_walks(total_steps, params.num_walks_coefficient)

    if params.steps_per_sample is None:
        mean, variance = oracle.run_walks(
            params.seed, params.walk_type, params.grid_type, num_walks, bucket,
        )
    else:
        mean, variance = oracle.run_walks_bucketed(
            params.seed, params.walk_type, params.grid_type, num_walks,
            bucket, params.steps_per_sample,
        )

    return TraceSample(
        num_steps=total_steps,
        num_walks=num_walks,
        mean=float(mean),
        variance=float(variance),
    )


def build_trace(
    params: WalkExperimentParams,
    oracle: SimulationOracle,
    progress_callback: Optional[ProgressCallback] = None,
) -> Trace:
    """Sweep all buckets in generation order and assemble a Trace.

    A failure on any bucket is fatal to the whole trace: the error is
    re-raised and no partial trace is returned.

    Args:
        params: Trace configuration.
        oracle: Simulation oracle to query, one blocking call per bucket.
        progress_callback: Optional callback(current_bucket, total_buckets).

    Returns:
        Trace with one sample per bucket.

    Raises:
        OracleError: If the oracle fails for any bucket.
    """
    buckets = buckets_for(params)
    total = len(buckets)
    samples: list[TraceSample] = []

    log.info(
        "Walking trace '%s': %d buckets, %s/%s, %s",
        params.trace_name, total, params.walk_type.value, params.grid_type.value,
        "bucketed" if params.is_bucketed else "direct",
    )

    for i, bucket in enumerate(buckets):
        try:
            sample = sample_bucket(oracle, params, bucket)
        except OracleError as e:
            raise OracleError(
                f"Trace '{params.trace_name}' failed at bucket {i + 1}/{total} "
                f"({bucket} steps): {e}"
            ) from e

        samples.append(sample)
        log.debug(
            "Bucket %d/%d: steps=%d walks=%d mean=%.4f",
            i + 1, total, sample.num_steps, sample.num_walks, sample.mean,
        )
        if progress_callback is not None:
            progress_callback(i + 1, total)

    return Trace(name=params.trace_name, samples=tuple(samples))
