from .combinators import (
    LawReport,
    accum,
    accum_with_echo,
    after,
    after_pure,
    both,
    dup,
    first,
    identity,
    left,
    lift,
    owise,
    right,
    second,
    split,
    then,
    then_pure,
    verify_all,
)
from .kernel import (
    Arrow,
    ArrowChoice,
    Category,
    Circuit,
    CircuitConsumedError,
    CircuitError,
    EngineMismatchError,
    Either,
    Evidence,
    Left,
    Right,
    StepPort,
    Trace,
)
from .runtime import RunConfig, StepRecord, run, run_recorded

__all__ = [
    # Engine
    "Circuit",
    "StepPort",
    "Category",
    "Arrow",
    "ArrowChoice",
    # Either
    "Either",
    "Left",
    "Right",
    # Construction
    "identity",
    "lift",
    "accum",
    "accum_with_echo",
    # Combinators
    "then",
    "after",
    "first",
    "second",
    "both",
    "dup",
    "after_pure",
    "then_pure",
    "left",
    "right",
    "split",
    "owise",
    # Driving
    "run",
    "run_recorded",
    "RunConfig",
    "StepRecord",
    # Errors
    "CircuitError",
    "CircuitConsumedError",
    "EngineMismatchError",
    # Tracing and conformance
    "Trace",
    "Evidence",
    "LawReport",
    "verify_all",
]
