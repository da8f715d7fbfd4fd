"""Simulation oracle interface and the bundled numpy lattice-walk oracle.

The trace builder only relies on the SimulationOracle protocol: given a
seed, a walk/grid type, a walk count and a step budget, return the mean
end-to-end displacement over independent walks and its population variance.

LatticeWalkOracle is a vectorized implementation of that protocol. Walks
advance together one chunk of steps at a time: headings for a whole chunk
are drawn at once, and no-immediate-return walks are built from relative
turns whose cumulative sum gives the heading sequence.
"""

import logging
from typing import Protocol

import numpy as np

from walkscale.config.experiment import GridType, WalkType
from walkscale.walk.lattice import Lattice, get_lattice

log = logging.getLogger(__name__)

DEFAULT_CHUNK_STEPS = 512


class OracleError(Exception):
    """Raised when the oracle cannot produce an estimate for a bucket."""


class SimulationOracle(Protocol):
    """Capability consumed by the trace builder."""

    def run_walks(
        self,
        seed: int,
        walk_type: WalkType,
        grid_type: GridType,
        num_walks: int,
        num_steps: int,
    ) -> tuple[float, float]:
        ...

    def run_walks_bucketed(
        self,
        seed: int,
        walk_type: WalkType,
        grid_type: GridType,
        num_walks: int,
        num_buckets: int,
        steps_per_bucket: int,
    ) -> tuple[float, float]:
        ...


def simulate_displacements(
    lattice: Lattice,
    walk_type: WalkType,
    num_walks: int,
    num_steps: int,
    chunk_steps: int,
    rng: np.random.Generator,
) -> np.ndarray:
    """Simulate walks from the origin and return their final displacements.

    Args:
        lattice: Lattice geometry.
        walk_type: Simple or no-immediate-return kernel.
        num_walks: Number of independent walks.
        num_steps: Steps per walk.
        chunk_steps: Steps drawn per vectorized chunk (bounds memory to
            num_walks * chunk_steps headings).
        rng: Random generator.

    Returns:
        Float64 array of shape (num_walks,) with Euclidean end-to-end
        distances.
    """
    z = lattice.coordination
    turns = lattice.no_return_turns
    position = np.zeros((num_walks, 2), dtype=np.float64)
    heading: np.ndarray | None = None
    done = 0

    while done < num_steps:
        n = min(chunk_steps, num_steps - done)

        if walk_type is WalkType.SIMPLE:
            headings = rng.integers(0, z, size=(num_walks, n))
        else:
            offsets = turns[rng.integers(0, len(turns), size=(num_walks, n))]
            if heading is None:
                # First step of the walk is unconstrained
                offsets[:, 0] = rng.integers(0, z, size=num_walks)
                base = np.zeros(num_walks, dtype=np.int64)
            else:
                base = heading
            headings = (base[:, None] + np.cumsum(offsets, axis=1)) % z

        step_vectors = lattice.vectors[headings]  # [num_walks, n, 2]
        if lattice.alternating:
            signs = np.where((done + np.arange(n)) % 2 == 0, 1.0, -1.0)
            step_vectors = step_vectors * signs[None, :, None]

        position += step_vectors.sum(axis=1)
        heading = headings[:, -1]
        done += n

    return np.hypot(position[:, 0], position[:, 1])


class LatticeWalkOracle:
    """Monte-Carlo displacement oracle on square, triangular and hexagonal grids.

    Each call seeds its own generator from (seed, steps, walks), so a call
    is reproducible from its arguments and calls for different buckets draw
    from independent streams.
    """

    def __init__(self, chunk_steps: int = DEFAULT_CHUNK_STEPS) -> None:
        if chunk_steps < 1:
            raise ValueError(f"chunk_steps must be >= 1, got {chunk_steps}")
        self.chunk_steps = chunk_steps

    def run_walks(
        self,
        seed: int,
        walk_type: WalkType,
        grid_type: GridType,
        num_walks: int,
        num_steps: int,
    ) -> tuple[float, float]:
        """Mean and population variance of displacement after num_steps."""
        rng = np.random.default_rng([seed % 2**64, num_steps, num_walks])
        return self._estimate(
            walk_type, grid_type, num_walks, num_steps, self.chunk_steps, rng
        )

    def run_walks_bucketed(
        self,
        seed: int,
        walk_type: WalkType,
        grid_type: GridType,
        num_walks: int,
        num_buckets: int,
        steps_per_bucket: int,
    ) -> tuple[float, float]:
        """Same observable for walks of num_buckets * steps_per_bucket steps.

        Steps are generated one bucket of steps_per_bucket at a time.
        """
        if num_buckets < 1 or steps_per_bucket < 1:
            raise OracleError(
                f"num_buckets ({num_buckets}) and steps_per_bucket "
                f"({steps_per_bucket}) must both be >= 1"
            )
        num_steps = num_buckets * steps_per_bucket
        rng = np.random.default_rng(
            [seed % 2**64, num_steps, num_walks, steps_per_bucket]
        )
        return self._estimate(
            walk_type, grid_type, num_walks, num_steps, steps_per_bucket, rng
        )

    def _estimate(
        self,
        walk_type: WalkType,
        grid_type: GridType,
        num_walks: int,
        num_steps: int,
        chunk_steps: int,
        rng: np.random.Generator,
    ) -> tuple[float, float]:
        if num_walks < 2:
            raise OracleError(f"num_walks must be >= 2, got {num_walks}")
        if num_steps < 1:
            raise OracleError(f"num_steps must be >= 1, got {num_steps}")
        try:
            lattice = get_lattice(GridType(grid_type))
            kernel = WalkType(walk_type)
        except (KeyError, ValueError) as e:
            raise OracleError(
                f"Unsupported walk/grid combination: {walk_type!r} on {grid_type!r}"
            ) from e

        try:
            distances = simulate_displacements(
                lattice, kernel, num_walks, num_steps, chunk_steps, rng
            )
        except MemoryError as e:
            raise OracleError(
                f"Out of memory simulating {num_walks} walks of {num_steps} steps"
            ) from e

        mean = float(distances.mean())
        variance = float(distances.var())
        log.debug(
            "Oracle: %s/%s walks=%d steps=%d -> mean=%.4f var=%.4f",
            walk_type, grid_type, num_walks, num_steps, mean, variance,
        )
        return mean, variance
