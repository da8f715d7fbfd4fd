"""Outcome of one trace+fit cycle."""

from dataclasses import dataclass

from walkscale.analysis.scaling_fit import FitResult
from walkscale.config.experiment import WalkExperimentParams
from walkscale.walk.types import Trace

STATUS_OK = "ok"
STATUS_FIT_FAILED = "fit_failed"
STATUS_ORACLE_FAILED = "oracle_failed"


@dataclass(frozen=True)
class TraceOutcome:
    """Result of running one configured trace.

    Exactly one of three shapes:
    - trace and fit set (success);
    - trace set, fit None, error set (the fit failed; raw data is kept);
    - trace and fit None, error set (the oracle failed; nothing is kept).
    """

    params: WalkExperimentParams
    trace: Trace | None = None
    fit: FitResult | None = None
    error: str | None = None

    @property
    def status(self) -> str:
        if self.trace is None:
            return STATUS_ORACLE_FAILED
        if self.fit is None:
            return STATUS_FIT_FAILED
        return STATUS_OK

    @property
    def succeeded(self) -> bool:
        return self.status == STATUS_OK
