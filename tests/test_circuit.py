"""Tests for the Circuit engine and its combinators."""

import pytest

from circuitry import (
    ArrowChoice,
    Circuit,
    CircuitConsumedError,
    EngineMismatchError,
    Left,
    Right,
    accum,
    lift,
    run,
)
from fakes import PureArrow, counter, total


def test_call_returns_continuation_and_output() -> None:
    circuit, output = total().call(5)
    assert output == 5
    circuit, output = circuit.call(2)
    assert output == 7
    assert not circuit.consumed


def test_identity_returns_input() -> None:
    assert list(Circuit.identity().run([1, "a", None])) == [1, "a", None]


def test_then_composes_in_order() -> None:
    circuit = total().then(lift(lambda n: n * 10))
    assert list(circuit.run([1, 2, 3])) == [10, 30, 60]


def test_after_is_then_flipped() -> None:
    circuit = lift(str).after(lift(lambda n: n + 1))
    assert list(circuit.run([1, 2])) == ["2", "3"]


def test_operators() -> None:
    forward = total() >> lift(str)
    backward = lift(str) << total()
    assert list(forward.run([1, 2])) == ["1", "3"]
    assert list(backward.run([1, 2])) == ["1", "3"]


def test_lift_applies_function_every_step() -> None:
    assert list(lift(abs).run([-1, 2, -3])) == [1, 2, 3]


def test_lift_rejects_non_callable() -> None:
    with pytest.raises(TypeError):
        lift(5)


def test_first_passes_second_component_through() -> None:
    assert list(total().first().run([(1, "a"), (2, "b")])) == [(1, "a"), (3, "b")]


def test_second_passes_first_component_through() -> None:
    assert list(total().second().run([("a", 1), ("b", 2)])) == [("a", 1), ("b", 3)]


def test_both_keeps_halves_independent() -> None:
    circuit = total().both(total())
    assert list(circuit.run([(1, 10), (2, 20), (3, 30)])) == [(1, 10), (3, 30), (6, 60)]


def test_dup_feeds_same_input_to_both() -> None:
    circuit = total().dup(lift(lambda n: -n))
    assert list(circuit.run([1, 2])) == [(1, -1), (3, -2)]


def test_dup_does_not_alias_mutable_input() -> None:
    def mark(items: list[str]) -> list[str]:
        items.append("left")
        return items

    cloned = lift(mark).dup(lift(len))
    assert list(cloned.run([[]])) == [(["left"], 0)]

    shared = lift(mark).dup(lift(len), clone=lambda items: items)
    assert list(shared.run([[]])) == [(["left"], 1)]


def test_pure_pre_and_post_composition() -> None:
    assert list(total().after_pure(len).run([[1], [1, 2]])) == [1, 3]
    assert list(total().then_pure(str).run([1, 2])) == ["1", "3"]


def test_left_only_steps_on_left() -> None:
    circuit = total().left()
    outputs = list(circuit.run([Left(1), Right("x"), Left(2)]))
    assert outputs == [Left(1), Right("x"), Left(3)]


def test_right_only_steps_on_right() -> None:
    circuit = total().right()
    outputs = list(circuit.run([Right(1), Left("x"), Right(2)]))
    assert outputs == [Right(1), Left("x"), Right(3)]


def test_split_advances_only_addressed_side() -> None:
    circuit = counter().split(counter())
    inputs = [Left("a"), Right("b"), Right("c"), Left("d"), Right("e")]
    assert list(circuit.run(inputs)) == [
        Left(("a", 1)),
        Right(("b", 1)),
        Right(("c", 2)),
        Left(("d", 2)),
        Right(("e", 3)),
    ]


def test_owise_routes_and_unwraps() -> None:
    circuit = lift(str.upper).owise(lift(lambda n: "#" * n))
    assert list(circuit.run([Left("a"), Right(2), Left("b")])) == ["A", "##", "B"]


def test_choice_rejects_untagged_input() -> None:
    with pytest.raises(TypeError):
        list(total().left().run([1]))


def test_unit_input_circuits_compose() -> None:
    ticks = accum(0, lambda _, n: (n, n + 1))
    circuit = ticks.first().then_pure(lambda pair: pair[0])
    assert list(circuit.run([((), None)] * 3)) == [0, 1, 2]


class TestOwnership:
    def test_stepping_twice_fails(self) -> None:
        circuit = total()
        circuit.call(1)
        assert circuit.consumed
        with pytest.raises(CircuitConsumedError) as excinfo:
            circuit.call(2)
        assert excinfo.value.circuit is circuit

    def test_composing_moves_operands(self) -> None:
        producer = total()
        consumer = lift(str)
        producer.then(consumer)
        assert producer.consumed
        assert consumer.consumed
        with pytest.raises(CircuitConsumedError):
            producer.call(1)

    def test_self_composition_is_rejected(self) -> None:
        circuit = total()
        with pytest.raises(CircuitConsumedError):
            circuit.then(circuit)

    def test_take_moves_into_fresh_handle(self) -> None:
        original = total()
        moved = original.take()
        assert original.consumed
        assert not moved.consumed
        assert list(moved.run([1, 1])) == [1, 2]

    def test_mixing_engines_is_rejected(self) -> None:
        circuit = lift(str)
        with pytest.raises(EngineMismatchError) as excinfo:
            circuit.then(PureArrow(str))
        assert not circuit.consumed
        assert list(circuit.run([1])) == ["1"]
        assert excinfo.value.expected is Circuit
        assert excinfo.value.actual is PureArrow
        assert isinstance(excinfo.value, TypeError)

    def test_consumed_receiver_leaves_operand_untouched(self) -> None:
        spent = total()
        spent.call(1)
        consumer = lift(str)
        with pytest.raises(CircuitConsumedError):
            spent.then(consumer)
        assert not consumer.consumed

    def test_step_errors_propagate(self) -> None:
        outputs = run(lift(lambda n: 1 // n), [1, 0])
        assert next(outputs) == 1
        with pytest.raises(ZeroDivisionError):
            next(outputs)


def test_long_runs_do_not_grow_the_stack() -> None:
    outputs = list(total().run(range(100_000)))
    assert outputs[-1] == sum(range(100_000))


def test_deep_composition() -> None:
    circuit = lift(lambda n: n)
    for _ in range(100):
        circuit = circuit.then(lift(lambda n: n + 1))
    assert list(circuit.run([0, 1])) == [100, 101]


def test_engine_must_provide_call_and_take() -> None:
    class Stepless(ArrowChoice):
        @classmethod
        def identity(cls):
            return cls()

        def then(self, consumer):
            return self

        @classmethod
        def arrow(cls, f):
            return cls()

        def first(self):
            return self

        def left(self):
            return self

    with pytest.raises(TypeError):
        Stepless()
