"""Port protocols for circuitry - pure abstractions."""

from __future__ import annotations

from typing import Protocol, TypeVar

A = TypeVar("A", contravariant=True)
B = TypeVar("B", covariant=True)


class StepPort(Protocol[A, B]):
    """Anything the driver can step.

    Implementations are single use: ``call`` consumes the receiver and hands
    back the continuation together with the output.
    """

    def call(self, value: A) -> tuple[StepPort[A, B], B]:
        """Step once on ``value``."""
        ...

    def take(self) -> StepPort[A, B]:
        """Move ownership into a fresh handle."""
        ...
