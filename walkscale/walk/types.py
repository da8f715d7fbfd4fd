"""Trace data structures: measured samples of one sweep."""

from dataclasses import dataclass
from typing import Iterator

import numpy as np


def sample_stderr(variance, num_walks):
    """Standard error of a mean over num_walks walks.

    The oracle reports the population variance of the observable, so the
    sample standard error of the mean is sqrt(variance / (num_walks - 1)).
    Works elementwise on numpy arrays.
    """
    return np.sqrt(np.asarray(variance, dtype=np.float64) / (np.asarray(num_walks) - 1))


@dataclass(frozen=True, slots=True)
class TraceSample:
    """One measured bucket.

    num_steps is the total number of steps simulated per walk (bucket size,
    or bucket * steps_per_sample for bucketed sampling).
    """

    num_steps: int
    num_walks: int
    mean: float
    variance: float

    @property
    def stderr(self) -> float:
        return float(sample_stderr(self.variance, self.num_walks))


@dataclass(frozen=True)
class Trace:
    """Ordered samples of one sweep, one per bucket in bucket order.

    Insertion order is the x-axis order used for fitting and plotting.
    """

    name: str
    samples: tuple[TraceSample, ...]

    def __len__(self) -> int:
        return len(self.samples)

    def __iter__(self) -> Iterator[TraceSample]:
        return iter(self.samples)

    @property
    def steps(self) -> np.ndarray:
        return np.array([s.num_steps for s in self.samples], dtype=np.int64)

    @property
    def num_walks(self) -> np.ndarray:
        return np.array([s.num_walks for s in self.samples], dtype=np.int64)

    @property
    def means(self) -> np.ndarray:
        return np.array([s.mean for s in self.samples], dtype=np.float64)

    @property
    def variances(self) -> np.ndarray:
        return np.array([s.variance for s in self.samples], dtype=np.float64)

    @property
    def stderrs(self) -> np.ndarray:
        if not self.samples:
            return np.zeros(0, dtype=np.float64)
        return sample_stderr(self.variances, self.num_walks)
