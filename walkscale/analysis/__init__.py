"""Scaling analysis: log-log power-law fit and uncertainty propagation."""

from walkscale.analysis.evaluation import FitPrediction, evaluate_fit, predict_log
from walkscale.analysis.scaling_fit import (
    DegenerateFit,
    FitError,
    FitResult,
    InvalidObservable,
    fit_power_law,
    linear_fit,
    parameter_intervals,
)
from walkscale.analysis.uncertainty import empirical_band, empirical_stderr, fit_band

__all__ = [
    "FitPrediction",
    "evaluate_fit",
    "predict_log",
    "DegenerateFit",
    "FitError",
    "FitResult",
    "InvalidObservable",
    "fit_power_law",
    "linear_fit",
    "parameter_intervals",
    "empirical_band",
    "empirical_stderr",
    "fit_band",
]
