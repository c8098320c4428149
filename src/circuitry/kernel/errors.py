"""Error types for circuit ownership and composition."""

from __future__ import annotations

from typing import Any


class CircuitError(Exception):
    """Base class for misuse of the circuit API."""


class CircuitConsumedError(CircuitError):
    """Error raised when a circuit handle is used after it was consumed.

    A handle is consumed by stepping it, by driving it, or by handing it to a
    combinator. The offending handle is preserved for debugging.
    """

    def __init__(self, circuit: Any, message: str | None = None) -> None:
        self.circuit = circuit
        super().__init__(message or "Circuit has already been consumed; use the continuation it returned")

    def __repr__(self) -> str:
        return f"CircuitConsumedError({super().__repr__()}, circuit={self.circuit!r})"


class EngineMismatchError(CircuitError, TypeError):
    """Error raised when circuits from two different engines are combined."""

    def __init__(self, expected: type, actual: type) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"Cannot combine {expected.__name__} with {actual.__name__}")
