"""Displayed-error convention shared by empirical traces and fitted curves.

Every error shown on a chart is one standard error of the mean estimate:

- empirical samples: sqrt(variance / (num_walks - 1)), drawn as
  mean +/- stderr;
- fitted curve: one log-space standard error se around y_hat, drawn as
  [exp(y_hat - se), exp(y_hat + se)].
"""

import numpy as np

from walkscale.analysis.evaluation import FitPrediction
from walkscale.walk.types import Trace, sample_stderr


def empirical_stderr(variance, num_walks):
    """Sample standard error of the mean (elementwise)."""
    return sample_stderr(variance, num_walks)


def empirical_band(trace: Trace) -> tuple[np.ndarray, np.ndarray]:
    """Lower and upper one-stderr envelopes of a trace's means."""
    means = trace.means
    err = trace.stderrs
    return means - err, means + err


def fit_band(predictions: list[FitPrediction]) -> tuple[np.ndarray, np.ndarray]:
    """Lower and upper one-stderr envelopes of a fitted curve."""
    y_hat = np.array([p.log_mean for p in predictions], dtype=np.float64)
    se = np.array([p.predicted_stderr for p in predictions], dtype=np.float64)
    return np.exp(y_hat - se), np.exp(y_hat + se)
