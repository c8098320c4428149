"""Driver - turns a circuit and an input sequence into a lazy output sequence."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

from circuitry.kernel.ports import StepPort
from circuitry.kernel.trace import Trace

A = TypeVar("A")
B = TypeVar("B")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunConfig:
    """Options for driving a circuit.

    Attributes:
        trace: Trace to record run and step events into, if any.
        label: Name recorded with the run's trace events and log lines.
    """

    trace: Trace | None = None
    label: str = "circuit"


class StepRecord(BaseModel):
    """One step of a recorded run."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    index: int
    input: Any
    output: Any
    duration_ms: float


def run(
    circuit: StepPort[A, B],
    inputs: Iterable[A],
    config: RunConfig | None = None,
) -> Iterator[B]:
    """Drive ``circuit`` over ``inputs``, yielding one output per input.

    Ownership of ``circuit`` is taken immediately, so a consumed circuit is
    rejected here rather than on the first pull. The returned iterator is
    lazy: each pull steps the current circuit once and keeps the
    continuation for the next pull. It ends exactly when ``inputs`` ends.

    Raises:
        CircuitConsumedError: If ``circuit`` was already consumed.
    """
    owned = circuit.take()
    return (output for _, _, output, _ in _drive(owned, inputs, config or RunConfig()))


def run_recorded(
    circuit: StepPort[A, B],
    inputs: Iterable[A],
    config: RunConfig | None = None,
) -> Iterator[StepRecord]:
    """Like ``run``, but yields a ``StepRecord`` per step."""
    owned = circuit.take()
    return (
        StepRecord(index=index, input=value, output=output, duration_ms=duration_ms)
        for index, value, output, duration_ms in _drive(owned, inputs, config or RunConfig())
    )


def _drive(current: StepPort[A, B], inputs: Iterable[A], config: RunConfig) -> Iterator[tuple[int, A, B, float]]:
    trace = config.trace
    run_id: int | None = None
    steps = 0
    exhausted = False

    logger.debug("Driving %s", config.label)
    if trace is not None:
        run_id = trace.record("run_begin", info={"label": config.label})

    try:
        for index, value in enumerate(inputs):
            step_id: int | None = None
            if trace is not None:
                step_id = trace.record("step_begin", info={"index": index}, parent_id=run_id)
                if step_id is not None:
                    trace.push(step_id)

            start_time = time.perf_counter()
            try:
                current, output = current.call(value)
            except Exception as exc:
                if trace is not None:
                    trace.record("step_error", info={"index": index, "error": str(exc)}, parent_id=step_id)
                raise
            finally:
                if trace is not None and step_id is not None:
                    trace.pop()
            duration_ms = (time.perf_counter() - start_time) * 1000

            if trace is not None:
                trace.record("step_end", info={"index": index}, parent_id=step_id, duration_ms=duration_ms)

            steps += 1
            yield index, value, output, duration_ms
        exhausted = True
    finally:
        if trace is not None:
            trace.record("run_end", info={"steps": steps, "exhausted": exhausted}, parent_id=run_id)
        logger.debug("Stopped driving %s after %d steps (inputs exhausted: %s)", config.label, steps, exhausted)
