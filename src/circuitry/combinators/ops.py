"""Combinator primitives as free functions.

Every function here delegates to the capability methods of ``Category``,
``Arrow`` and ``ArrowChoice``, so they work with any engine. Constructors
that have no operand to dispatch on (``identity``, ``lift``, ``accum``,
``accum_with_echo``) build ``Circuit`` unless another ``family`` is given.

All operands are consumed: pass each circuit to exactly one combinator and
keep only the result.
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from typing import Any, TypeVar

from circuitry.kernel.category import Arrow, ArrowChoice, Category
from circuitry.kernel.circuit import Circuit
from circuitry.kernel.either import Either

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
D = TypeVar("D")
S = TypeVar("S")
A0 = TypeVar("A0")
A1 = TypeVar("A1")
B1 = TypeVar("B1")


def identity(family: type[Category[Any, Any]] = Circuit) -> Category[A, A]:
    """Transformer that returns every input unchanged."""
    return family.identity()


def lift(f: Callable[[A], B], family: type[Arrow[Any, Any]] = Circuit) -> Arrow[A, B]:
    """Lift a pure function into a stateless transformer.

    Semantics:
        - Applies ``f`` on every step
        - Never changes behaviour between steps

    Raises:
        TypeError: If ``f`` is not callable.
    """
    return family.arrow(f)


def accum(state: S, fn: Callable[[A, S], tuple[B, S]]) -> Circuit[A, B]:
    """Stateful transformer driven by ``fn(input, state) -> (output, new_state)``.

    This is the only primitive that carries information across steps.
    """
    return Circuit.accum(state, fn)


def accum_with_echo(
    initial: B,
    combine: Callable[[A, B], B],
    clone: Callable[[B], B] = copy.deepcopy,
) -> Circuit[A, B]:
    """Accumulator that emits each new state.

    Semantics:
        - ``new_state = combine(input, state)``
        - Emits ``clone(new_state)``, retains ``new_state``

    Example:
        ``accum_with_echo(0, operator.add)`` is a running total.
    """
    return Circuit.accum_with_echo(initial, combine, clone)


def then(producer: Category[A, B], consumer: Category[B, C]) -> Category[A, C]:
    """Sequential composition (``>>>``): ``producer`` feeds ``consumer``."""
    return producer.then(consumer)


def after(consumer: Category[B, C], producer: Category[A, B]) -> Category[A, C]:
    """Sequential composition read right to left (``<<<``).

    ``after(g, f)`` is ``then(f, g)``.
    """
    return consumer.after(producer)


def first(arrow: Arrow[A, B]) -> Arrow[tuple[A, C], tuple[B, C]]:
    """Apply ``arrow`` to the first half of a pair."""
    return arrow.first()


def second(arrow: Arrow[A, B]) -> Arrow[tuple[C, A], tuple[C, B]]:
    """Apply ``arrow`` to the second half of a pair."""
    return arrow.second()


def both(left_arrow: Arrow[A, B], right_arrow: Arrow[A1, B1]) -> Arrow[tuple[A, A1], tuple[B, B1]]:
    """Run two transformers side by side on the halves of a pair (``***``).

    Semantics:
        - Each half is handled by its own transformer
        - Both transformers advance on every step
        - No state is shared between the halves
    """
    return left_arrow.both(right_arrow)


def dup(
    left_arrow: Arrow[A, B],
    right_arrow: Arrow[A, B1],
    clone: Callable[[A], A] = copy.deepcopy,
) -> Arrow[A, tuple[B, B1]]:
    """Fan one input out to two transformers and pair their outputs (``&&&``).

    Semantics:
        - ``left_arrow`` receives ``clone(input)``, ``right_arrow`` the input
        - Both transformers advance on every step
    """
    return left_arrow.dup(right_arrow, clone)


def left(arrow: ArrowChoice[A, B]) -> ArrowChoice[Either[A, D], Either[B, D]]:
    """Apply ``arrow`` to ``Left`` inputs only.

    Semantics:
        - ``Left(a)`` steps ``arrow`` and yields ``Left(b)``
        - ``Right(d)`` yields ``Right(d)`` and leaves ``arrow`` unstepped
    """
    return arrow.left()


def right(arrow: ArrowChoice[A, B]) -> ArrowChoice[Either[D, A], Either[D, B]]:
    """Apply ``arrow`` to ``Right`` inputs only."""
    return arrow.right()


def split(
    left_arrow: ArrowChoice[A, B],
    right_arrow: ArrowChoice[A1, B1],
) -> ArrowChoice[Either[A, A1], Either[B, B1]]:
    """Route each variant to its own transformer (``+++``).

    Semantics:
        - Exactly one transformer advances per input
        - The other is carried forward untouched
    """
    return left_arrow.split(right_arrow)


def owise(left_arrow: ArrowChoice[A, B], right_arrow: ArrowChoice[C, B]) -> ArrowChoice[Either[A, C], B]:
    """Route by variant and unwrap the shared output type (``|||``)."""
    return left_arrow.owise(right_arrow)


def after_pure(arrow: Arrow[A, B], f: Callable[[A0], A]) -> Arrow[A0, B]:
    """Run the pure function ``f`` before ``arrow`` (``^>>``)."""
    return arrow.after_pure(f)


def then_pure(arrow: Arrow[A, B], f: Callable[[B], C]) -> Arrow[A, C]:
    """Run the pure function ``f`` after ``arrow`` (``>>^``)."""
    return arrow.then_pure(f)
