"""Experiment configuration dataclasses, frozen and slotted for immutability."""

import math
from dataclasses import dataclass
from enum import Enum


class WalkType(str, Enum):
    """Step kernel of the lattice walk."""

    SIMPLE = "simple"
    NO_IMMEDIATE_RETURN = "no_immediate_return"


class GridType(str, Enum):
    """Lattice the walk runs on (support is oracle-dependent)."""

    SQUARE = "square"
    TRIANGULAR = "triangular"
    HEXAGONAL = "hexagonal"


class SequenceKind(str, Enum):
    """Progression used to generate bucket sizes."""

    ARITHMETIC = "arithmetic"
    GEOMETRIC = "geometric"


@dataclass(frozen=True, slots=True)
class WalkExperimentParams:
    """Configuration for one trace (one full sweep over buckets).

    Only the increment selected by sequence_kind is used: arithmetic_step
    for arithmetic sweeps, geometric_ratio for geometric ones. When
    steps_per_sample is set, every bucket is simulated as
    bucket * steps_per_sample steps through the bucketed oracle call.
    """

    seed: int = 42
    walk_type: WalkType = WalkType.SIMPLE
    grid_type: GridType = GridType.SQUARE
    num_walks_coefficient: float = 20.0  # sqrt(total_steps) * coef walks
    sequence_kind: SequenceKind = SequenceKind.ARITHMETIC
    start_value: int = 20
    arithmetic_step: int = 5
    geometric_ratio: float = 1.1
    step_count: int = 100  # number of buckets
    steps_per_sample: int | None = None
    trace_name: str = ""

    def __post_init__(self) -> None:
        """Cross-parameter validation."""
        if self.num_walks_coefficient <= 0:
            raise ValueError(
                f"num_walks_coefficient must be > 0, "
                f"got {self.num_walks_coefficient}"
            )
        if self.step_count < 1:
            raise ValueError(f"step_count must be >= 1, got {self.step_count}")
        if self.start_value < 1:
            raise ValueError(f"start_value must be >= 1, got {self.start_value}")
        if self.steps_per_sample is not None and self.steps_per_sample < 1:
            raise ValueError(
                f"steps_per_sample must be >= 1, got {self.steps_per_sample}"
            )
        if self.sequence_kind is SequenceKind.GEOMETRIC:
            if self.geometric_ratio <= 0:
                raise ValueError(
                    f"geometric_ratio must be > 0, got {self.geometric_ratio}"
                )
            # The sweep is monotone, so the last bucket is the extreme one
            try:
                last = self.start_value * float(self.geometric_ratio) ** (self.step_count - 1)
            except OverflowError:
                last = math.inf
            if not math.isfinite(last):
                raise ValueError(
                    f"geometric_ratio {self.geometric_ratio} over {self.step_count} "
                    f"buckets overflows the last bucket size"
                )
        else:
            last = self.start_value + (self.step_count - 1) * self.arithmetic_step
            if last < 1:
                raise ValueError(
                    f"arithmetic_step ({self.arithmetic_step}) drives the last "
                    f"bucket to {last}; every bucket must be >= 1"
                )

    @property
    def increment(self) -> int | float:
        """Increment of the selected progression."""
        if self.sequence_kind is SequenceKind.GEOMETRIC:
            return self.geometric_ratio
        return self.arithmetic_step

    @property
    def is_bucketed(self) -> bool:
        return self.steps_per_sample is not None


@dataclass(frozen=True, slots=True)
class BatchConfig:
    """Batch run: an output name and an ordered list of traces."""

    output_name: str
    walks: tuple[WalkExperimentParams, ...]

    def __post_init__(self) -> None:
        if not self.output_name.strip():
            raise ValueError("output_name must not be empty")
        if not self.walks:
            raise ValueError("walks must contain at least one trace")
