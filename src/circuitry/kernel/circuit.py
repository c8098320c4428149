"""Circuit - the concrete self-replacing step function engine."""

from __future__ import annotations

import copy
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING, Any, TypeVar

from circuitry.kernel.category import ArrowChoice
from circuitry.kernel.either import Either, Left, Right
from circuitry.kernel.errors import CircuitConsumedError, EngineMismatchError

if TYPE_CHECKING:
    from circuitry.runtime.drive import RunConfig

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
D = TypeVar("D")
S = TypeVar("S")


Step = Callable[[A], tuple["Circuit[A, B]", B]]


class Circuit(ArrowChoice[A, B]):
    """A one-shot transformer from ``A`` to ``B``.

    Calling a circuit consumes it and returns ``(continuation, output)``; the
    continuation is the circuit to use for the next input. All state lives in
    the step closure, and each continuation is only built when its
    predecessor is stepped.

    Combinators take ownership of their operands: once a circuit has been
    stepped, driven, or handed to a combinator, its handle is dead and any
    further use raises ``CircuitConsumedError``.

    Stepping a composite recurses once per nested ``then``, so very deep
    compositions (several hundred layers) can exceed Python's recursion
    limit. The number of steps driven never affects stack depth.
    """

    def __init__(self, step: Step[A, B]) -> None:
        self._step: Step[A, B] | None = step

    def __repr__(self) -> str:
        status = "consumed" if self.consumed else "live"
        return f"<Circuit {status}>"

    @property
    def consumed(self) -> bool:
        return self._step is None

    def _release(self) -> Step[A, B]:
        step = self._step
        if step is None:
            raise CircuitConsumedError(self)
        self._step = None
        return step

    def take(self) -> Circuit[A, B]:
        """Move ownership into a fresh handle, consuming this one."""
        return Circuit(self._release())

    def call(self, value: A) -> tuple[Circuit[A, B], B]:
        """Step once on ``value``, returning the continuation and the output."""
        return self._release()(value)

    def run(self, inputs: Iterable[A], config: RunConfig | None = None) -> Iterator[B]:
        """Drive this circuit over ``inputs``. See ``circuitry.runtime.run``."""
        from circuitry.runtime.drive import run

        return run(self, inputs, config)

    @staticmethod
    def _check_engine(other: Any) -> None:
        if not isinstance(other, Circuit):
            raise EngineMismatchError(Circuit, type(other))

    # Category

    @classmethod
    def identity(cls) -> Circuit[A, A]:
        def step(value: A) -> tuple[Circuit[A, A], A]:
            return cls.identity(), value

        return cls(step)

    def then(self, consumer: Circuit[B, C]) -> Circuit[A, C]:
        self._check_engine(consumer)
        producer = self.take()
        consumer = consumer.take()

        def step(value: A) -> tuple[Circuit[A, C], C]:
            producer_next, middle = producer.call(value)
            consumer_next, output = consumer.call(middle)
            return producer_next.then(consumer_next), output

        return Circuit(step)

    # Arrow

    @classmethod
    def arrow(cls, f: Callable[[A], B]) -> Circuit[A, B]:
        if not callable(f):
            raise TypeError(f"Cannot lift non-callable {type(f).__name__}")

        def step(value: A) -> tuple[Circuit[A, B], B]:
            return cls.arrow(f), f(value)

        return cls(step)

    def first(self) -> Circuit[tuple[A, C], tuple[B, C]]:
        inner = self.take()

        def step(pair: tuple[A, C]) -> tuple[Circuit[tuple[A, C], tuple[B, C]], tuple[B, C]]:
            value, passthrough = pair
            inner_next, output = inner.call(value)
            return inner_next.first(), (output, passthrough)

        return Circuit(step)

    # ArrowChoice

    def left(self) -> Circuit[Either[A, D], Either[B, D]]:
        inner = self.take()

        def step(tagged: Either[A, D]) -> tuple[Circuit[Either[A, D], Either[B, D]], Either[B, D]]:
            if isinstance(tagged, Left):
                inner_next, output = inner.call(tagged.value)
                return inner_next.left(), Left(output)
            if isinstance(tagged, Right):
                # Untaken branch: hand the inner circuit back unstepped.
                return inner.left(), tagged
            raise TypeError(f"Expected Left or Right, got {type(tagged).__name__}")

        return Circuit(step)

    # Stateful primitives

    @classmethod
    def accum(cls, state: S, fn: Callable[[A, S], tuple[B, S]]) -> Circuit[A, B]:
        """Circuit threading ``state`` through ``fn(input, state) -> (output, new_state)``."""

        def step(value: A) -> tuple[Circuit[A, B], B]:
            output, new_state = fn(value, state)
            return cls.accum(new_state, fn), output

        return cls(step)

    @classmethod
    def accum_with_echo(
        cls,
        initial: B,
        combine: Callable[[A, B], B],
        clone: Callable[[B], B] = copy.deepcopy,
    ) -> Circuit[A, B]:
        """Accumulator whose new state is also its output.

        The emitted value is ``clone(new_state)`` so callers cannot mutate
        the retained state through it.
        """

        def echo(value: A, state: B) -> tuple[B, B]:
            new_state = combine(value, state)
            return clone(new_state), new_state

        return cls.accum(initial, echo)

