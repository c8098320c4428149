"""Engine-agnostic conformance checks for the combinator algebra.

Transformers are single use, so every check takes *factories* and builds
fresh instances for each side of a law. Each check drives both sides over
the same inputs and reports the two output sequences:

1. Left identity:   identity >>> t == t
2. Right identity:  t >>> identity == t
3. Associativity:   (a >>> b) >>> c == a >>> (b >>> c)
4. Pure lift:       arrow f over xs == map f xs
5. First:           first (arrow f) == arrow (first f)
6. Split routing:   a +++ b steps a only on Left inputs and b only on Right
7. Owise routing:   a ||| b likewise, with the result unwrapped
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict

from circuitry.kernel.category import ArrowChoice
from circuitry.kernel.either import Either, Left, Right
from circuitry.runtime.drive import run

A = TypeVar("A")
B = TypeVar("B")

Factory = Callable[[], ArrowChoice[Any, Any]]


class LawReport(BaseModel):
    """Outcome of one conformance check."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    law: str
    expected: list[Any]
    actual: list[Any]

    @property
    def holds(self) -> bool:
        return self.expected == self.actual


def _outputs(arrow: ArrowChoice[Any, Any], inputs: Sequence[Any]) -> list[Any]:
    return list(run(arrow, inputs))


def left_identity(family: type[ArrowChoice[Any, Any]], make: Factory, inputs: Sequence[Any]) -> LawReport:
    return LawReport(
        law="left_identity",
        expected=_outputs(make(), inputs),
        actual=_outputs(family.identity().then(make()), inputs),
    )


def right_identity(family: type[ArrowChoice[Any, Any]], make: Factory, inputs: Sequence[Any]) -> LawReport:
    return LawReport(
        law="right_identity",
        expected=_outputs(make(), inputs),
        actual=_outputs(make().then(family.identity()), inputs),
    )


def associativity(make_a: Factory, make_b: Factory, make_c: Factory, inputs: Sequence[Any]) -> LawReport:
    return LawReport(
        law="associativity",
        expected=_outputs(make_a().then(make_b()).then(make_c()), inputs),
        actual=_outputs(make_a().then(make_b().then(make_c())), inputs),
    )


def pure_lift(family: type[ArrowChoice[Any, Any]], f: Callable[[A], B], inputs: Sequence[A]) -> LawReport:
    return LawReport(
        law="pure_lift",
        expected=[f(x) for x in inputs],
        actual=_outputs(family.arrow(f), inputs),
    )


def first_law(family: type[ArrowChoice[Any, Any]], f: Callable[[A], B], pairs: Sequence[tuple[A, Any]]) -> LawReport:
    return LawReport(
        law="first",
        expected=_outputs(family.arrow(lambda pair: (f(pair[0]), pair[1])), pairs),
        actual=_outputs(family.arrow(f).first(), pairs),
    )


def _routed(make_left: Factory, make_right: Factory, tagged: Sequence[Either[Any, Any]]) -> list[Either[Any, Any]]:
    """Expected outputs when each side only ever sees its own variant."""
    left_out = iter(_outputs(make_left(), [t.value for t in tagged if t.is_left]))
    right_out = iter(_outputs(make_right(), [t.value for t in tagged if t.is_right]))
    return [Left(next(left_out)) if t.is_left else Right(next(right_out)) for t in tagged]


def split_routing(make_left: Factory, make_right: Factory, tagged: Sequence[Either[Any, Any]]) -> LawReport:
    return LawReport(
        law="split_routing",
        expected=_routed(make_left, make_right, tagged),
        actual=_outputs(make_left().split(make_right()), tagged),
    )


def owise_routing(make_left: Factory, make_right: Factory, tagged: Sequence[Either[Any, Any]]) -> LawReport:
    return LawReport(
        law="owise_routing",
        expected=[t.merge() for t in _routed(make_left, make_right, tagged)],
        actual=_outputs(make_left().owise(make_right()), tagged),
    )


def verify_all(
    family: type[ArrowChoice[Any, Any]],
    make: Factory,
    inputs: Sequence[Any],
    f: Callable[[Any], Any] = repr,
) -> list[LawReport]:
    """Run every check for ``family``.

    ``make`` must build transformers whose input and output types agree, so
    that three of them can be chained for the associativity check. Tagged
    inputs for the routing checks alternate ``Left``/``Right`` over ``inputs``.
    """
    tagged = [Either.from_pair((index % 2 == 1, value)) for index, value in enumerate(inputs)]
    return [
        left_identity(family, make, inputs),
        right_identity(family, make, inputs),
        associativity(make, make, make, inputs),
        pure_lift(family, f, inputs),
        first_law(family, f, [(value, index) for index, value in enumerate(inputs)]),
        split_routing(make, make, tagged),
        owise_routing(make, make, tagged),
    ]
