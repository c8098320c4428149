"""Runtime module - driving circuits over input sequences."""

from circuitry.runtime.drive import RunConfig, StepRecord, run, run_recorded

__all__ = [
    "RunConfig",
    "StepRecord",
    "run",
    "run_recorded",
]
