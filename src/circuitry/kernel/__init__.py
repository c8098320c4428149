"""Kernel layer - the combinator algebra and the Circuit engine."""

from circuitry.kernel.category import Arrow, ArrowChoice, Category
from circuitry.kernel.circuit import Circuit
from circuitry.kernel.either import Either, Left, Right
from circuitry.kernel.errors import CircuitConsumedError, CircuitError, EngineMismatchError
from circuitry.kernel.ports import StepPort
from circuitry.kernel.trace import Evidence, Trace

__all__ = [
    # Algebra
    "Category",
    "Arrow",
    "ArrowChoice",
    # Engine
    "Circuit",
    "StepPort",
    # Either
    "Either",
    "Left",
    "Right",
    # Errors
    "CircuitError",
    "CircuitConsumedError",
    "EngineMismatchError",
    # Tracing
    "Evidence",
    "Trace",
]
