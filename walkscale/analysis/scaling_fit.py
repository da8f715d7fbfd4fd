"""Power-law scaling fit by ordinary least squares in log-log space.

Fits mean ~= exp(c0) * steps^c1 by regressing y = ln(mean) on x = ln(steps),
unweighted, under the classical OLS assumption of homoscedastic log-space
residuals. Returns the intercept/slope, their 2x2 covariance, and the
residual sum of squares.

Arithmetic is float64 throughout and NaN/Inf propagate rather than raise:
with exactly two samples the residual variance sumsq / (n - 2) divides by
zero and the covariance entries come out NaN or infinite.
"""

import logging
from dataclasses import dataclass

import numpy as np
from scipy import stats

from walkscale.walk.types import Trace

log = logging.getLogger(__name__)


class FitError(Exception):
    """Raised when a trace cannot be fitted."""


class DegenerateFit(FitError):
    """Fewer than two samples, or no spread in ln(steps)."""


class InvalidObservable(FitError):
    """A sample is outside the domain of the log transform."""


@dataclass(frozen=True, slots=True)
class FitResult:
    """OLS fit of ln(mean) = c0 + c1 * ln(steps)."""

    c0: float
    c1: float
    cov00: float
    cov01: float
    cov11: float
    sumsq: float
    n_samples: int

    @property
    def prefactor(self) -> float:
        return float(np.exp(self.c0))

    @property
    def exponent(self) -> float:
        return self.c1


def linear_fit(x: np.ndarray, y: np.ndarray) -> tuple[float, ...]:
    """Closed-form OLS of y on x.

    Args:
        x: Predictor values, shape [n].
        y: Response values, shape [n].

    Returns:
        Tuple (c0, c1, cov00, cov01, cov11, sumsq).

    Raises:
        DegenerateFit: If n < 2 or all x are identical.
    """
    x = np.asarray(x, dtype=np.float64)
    y = np.asarray(y, dtype=np.float64)
    n = x.shape[0]

    if n < 2:
        raise DegenerateFit(f"Need at least 2 samples to fit, got {n}")
    if np.ptp(x) == 0:
        raise DegenerateFit("All x values are identical; slope is undefined")

    mean_x = x.mean()
    mean_y = y.mean()
    dx = x - mean_x
    dy = y - mean_y
    sxx = np.sum(dx * dx)
    sxy = np.sum(dx * dy)

    c1 = sxy / sxx
    c0 = mean_y - c1 * mean_x

    residuals = y - (c0 + c1 * x)
    sumsq = np.sum(residuals * residuals)

    with np.errstate(divide="ignore", invalid="ignore"):
        s2 = sumsq / np.float64(n - 2)
        cov00 = s2 * (1.0 / n + mean_x * mean_x / sxx)
        cov01 = -s2 * mean_x / sxx
        cov11 = s2 / sxx

    return (
        float(c0), float(c1),
        float(cov00), float(cov01), float(cov11),
        float(sumsq),
    )


def fit_power_law(trace: Trace) -> FitResult:
    """Fit a power law to a trace's (num_steps, mean) samples.

    Raises:
        DegenerateFit: Fewer than 2 samples, or identical step counts.
        InvalidObservable: A sample has mean <= 0 (or NaN) or num_steps <= 0.
    """
    if len(trace) < 2:
        raise DegenerateFit(
            f"Trace '{trace.name}' has {len(trace)} sample(s); need at least 2"
        )

    steps = trace.steps.astype(np.float64)
    means = trace.means

    for i, sample in enumerate(trace):
        if not sample.num_steps > 0:
            raise InvalidObservable(
                f"Trace '{trace.name}' sample {i}: num_steps={sample.num_steps} "
                f"is not positive"
            )
        if not sample.mean > 0:
            raise InvalidObservable(
                f"Trace '{trace.name}' sample {i}: mean={sample.mean} is not "
                f"positive; log-power-law fit is undefined"
            )

    c0, c1, cov00, cov01, cov11, sumsq = linear_fit(np.log(steps), np.log(means))
    log.info(
        "Fit '%s': c0=%.6f c1=%.6f sumsq=%.3e (n=%d)",
        trace.name, c0, c1, sumsq, len(trace),
    )
    return FitResult(
        c0=c0, c1=c1,
        cov00=cov00, cov01=cov01, cov11=cov11,
        sumsq=sumsq,
        n_samples=len(trace),
    )


def parameter_intervals(
    fit: FitResult, confidence: float = 0.95
) -> dict[str, tuple[float, float]]:
    """Student-t confidence intervals for prefactor and exponent.

    Uses n_samples - 2 degrees of freedom. The prefactor interval is the
    exponentiated c0 interval. Intervals are NaN when there are no residual
    degrees of freedom.

    Returns:
        Dict with keys "prefactor" and "exponent", each a (low, high) tuple.
    """
    dof = fit.n_samples - 2
    if dof < 1:
        nan = (float("nan"), float("nan"))
        return {"prefactor": nan, "exponent": nan}

    t_crit = stats.t.ppf((1 + confidence) / 2, df=dof)
    half_c0 = t_crit * np.sqrt(fit.cov00)
    half_c1 = t_crit * np.sqrt(fit.cov11)
    return {
        "prefactor": (
            float(np.exp(fit.c0 - half_c0)),
            float(np.exp(fit.c0 + half_c0)),
        ),
        "exponent": (float(fit.c1 - half_c1), float(fit.c1 + half_c1)),
    }
