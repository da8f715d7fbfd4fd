"""Evaluate a fitted power law and its pointwise uncertainty.

The fitted log-mean at x = ln(steps) is y_hat = c0 + c1 * x with variance
cov00 + 2 * x * cov01 + x^2 * cov11 (variance of a linear combination of
the fitted parameters). The mean is back-transformed with exp; the
standard error stays in log units so callers map it to a band the same way
they map empirical errors (see uncertainty.fit_band).
"""

from dataclasses import dataclass
from typing import Iterable

import numpy as np

from walkscale.analysis.scaling_fit import FitResult


@dataclass(frozen=True, slots=True)
class FitPrediction:
    """Fitted curve at one step count."""

    steps: int
    predicted_mean: float
    predicted_stderr: float  # one standard error of ln(mean)

    @property
    def log_mean(self) -> float:
        return float(np.log(self.predicted_mean))


def predict_log(fit: FitResult, x: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """Fitted log-mean and its standard error at log-step values x."""
    x = np.asarray(x, dtype=np.float64)
    y_hat = fit.c0 + fit.c1 * x
    with np.errstate(invalid="ignore"):
        var = fit.cov00 + x * (2.0 * fit.cov01 + fit.cov11 * x)
        y_err = np.sqrt(var)
    return y_hat, y_err


def evaluate_fit(fit: FitResult, steps: Iterable[int]) -> list[FitPrediction]:
    """Reconstruct the fitted curve at the given step counts, in order."""
    steps = [int(s) for s in steps]
    y_hat, y_err = predict_log(fit, np.log(np.asarray(steps, dtype=np.float64)))
    return [
        FitPrediction(
            steps=s,
            predicted_mean=float(np.exp(y)),
            predicted_stderr=float(e),
        )
        for s, y, e in zip(steps, y_hat, y_err)
    ]
