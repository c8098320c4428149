"""Runtime trace infrastructure - separate from circuit state.

Trace captures what the driver did (runs begun, steps taken, errors raised)
for profiling and debugging. It never participates in the values a circuit
threads forward. Tree relationships are reconstructed only on demand via
``as_tree()``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A single recorded driver event."""

    action: str
    id: int = 0
    parent_id: int | None = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)
    duration_ms: float | None = None


class Trace:
    """Collects ``Evidence`` events while circuits are driven.

    Nesting is stack based: the driver pushes a run's event id so that its
    steps, and any run started from inside one of them, attach beneath it.

    A disabled trace costs one check per record and allocates nothing.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0
        self._stack: list[int] = []

    def push(self, event_id: int) -> None:
        """Make ``event_id`` the parent of subsequent events."""
        self._stack.append(event_id)

    def pop(self) -> int | None:
        """Drop the current parent; returns it, or None if the stack is empty."""
        if self._stack:
            return self._stack.pop()
        return None

    def record(
        self,
        action: str,
        info: dict[str, Any] | None = None,
        parent_id: int | None = None,
        duration_ms: float | None = None,
    ) -> int | None:
        """Record an event.

        Args:
            action: What happened (e.g. "run_begin", "step")
            info: Additional context
            parent_id: Explicit parent; defaults to the top of the stack
            duration_ms: Execution duration

        Returns:
            The new event id, or None if tracing is disabled
        """
        if not self.enabled:
            return None

        if parent_id is None and self._stack:
            parent_id = self._stack[-1]

        event_id = self._next_id
        self._next_id += 1
        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                parent_id=parent_id,
                info=info or {},
                duration_ms=duration_ms,
            )
        )
        return event_id

    def get_events(self, action: str | None = None) -> list[Evidence]:
        """Recorded events, optionally only those with the given action."""
        if action is None:
            return list(self._events)
        return [ev for ev in self._events if ev.action == action]

    def as_tree(self) -> dict[int | None, list[int]]:
        """Map each parent id to the ids of its children."""
        tree: dict[int | None, list[int]] = {}
        for ev in self._events:
            tree.setdefault(ev.parent_id, []).append(ev.id)
        return tree

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        self._events.clear()
        self._next_id = 0
        self._stack.clear()
