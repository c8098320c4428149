"""Tests for driving circuits: laziness, termination, records, tracing."""

import itertools
import logging

import pytest

from circuitry import CircuitConsumedError, RunConfig, Trace, lift, run, run_recorded
from fakes import PureArrow, total


def test_run_is_lazy() -> None:
    pulled: list[int] = []

    def source():
        for n in [1, 2, 3]:
            pulled.append(n)
            yield n

    outputs = run(total(), source())
    assert pulled == []
    assert next(outputs) == 1
    assert pulled == [1]


def test_run_over_unbounded_input() -> None:
    outputs = run(total(), itertools.count(1))
    assert list(itertools.islice(outputs, 4)) == [1, 3, 6, 10]


def test_run_ends_with_inputs() -> None:
    assert list(run(total(), [])) == []
    assert list(run(total(), [1, 2])) == [1, 3]


def test_run_takes_ownership_immediately() -> None:
    circuit = total()
    run(circuit, [1])
    assert circuit.consumed
    with pytest.raises(CircuitConsumedError):
        run(circuit, [1])


def test_run_accepts_any_engine() -> None:
    assert list(run(PureArrow(str), [1, 2])) == ["1", "2"]


def test_run_recorded() -> None:
    records = list(run_recorded(total(), [1, 2]))
    assert [record.index for record in records] == [0, 1]
    assert records[1].input == 2
    assert records[1].output == 3
    assert all(record.duration_ms >= 0 for record in records)


def test_trace_records_run_and_steps() -> None:
    trace = Trace()
    outputs = list(run(total(), [1, 2], RunConfig(trace=trace, label="total")))
    assert outputs == [1, 3]

    actions = [event.action for event in trace.get_events()]
    assert actions == ["run_begin", "step_begin", "step_end", "step_begin", "step_end", "run_end"]
    assert trace.as_tree() == {None: [0], 0: [1, 3, 5], 1: [2], 3: [4]}

    run_begin = trace.get_events("run_begin")[0]
    assert run_begin.info == {"label": "total"}
    run_end = trace.get_events("run_end")[0]
    assert run_end.info == {"steps": 2, "exhausted": True}
    assert all(event.duration_ms is not None for event in trace.get_events("step_end"))


def test_nested_run_attaches_to_outer_step() -> None:
    trace = Trace()

    def inner_sum(values: list[int]) -> int:
        return list(run(total(), values, RunConfig(trace=trace, label="inner")))[-1]

    outer = lift(inner_sum)
    assert list(run(outer, [[1, 2]], RunConfig(trace=trace, label="outer"))) == [3]

    outer_begin, inner_begin = trace.get_events("run_begin")
    outer_step = trace.get_events("step_begin")[0]
    assert outer_begin.info["label"] == "outer"
    assert inner_begin.info["label"] == "inner"
    assert inner_begin.parent_id == outer_step.id


def test_trace_records_step_errors() -> None:
    trace = Trace()
    outputs = run(lift(lambda n: 1 // n), [0], RunConfig(trace=trace))
    with pytest.raises(ZeroDivisionError):
        list(outputs)

    error = trace.get_events("step_error")[0]
    assert error.info["index"] == 0
    assert "division" in error.info["error"]
    assert trace.get_events("run_end")[0].info == {"steps": 0, "exhausted": False}


def test_disabled_trace_records_nothing() -> None:
    trace = Trace(enabled=False)
    assert list(run(total(), [1, 2], RunConfig(trace=trace))) == [1, 3]
    assert len(trace) == 0


def test_run_logs_at_debug(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.DEBUG, logger="circuitry.runtime.drive")
    list(run(total(), [1, 2], RunConfig(label="tally")))
    assert "Driving tally" in caplog.text
    assert "after 2 steps" in caplog.text
