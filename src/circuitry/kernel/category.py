"""Capability interfaces for families of stream transformers.

An engine plugs into the combinator algebra by subclassing ``ArrowChoice`` and
providing five primitives: ``identity``, ``then``, ``arrow``, ``first`` and
``left``. Everything else (``after``, ``second``, ``both``, ``dup``,
``after_pure``, ``then_pure``, ``right``, ``split``, ``owise``) is derived
here from those primitives, so every engine gets the same laws.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from circuitry.kernel.either import Either

A = TypeVar("A")
B = TypeVar("B")
C = TypeVar("C")
D = TypeVar("D")
A0 = TypeVar("A0")
A1 = TypeVar("A1")
B1 = TypeVar("B1")


def _identity(value: A) -> A:
    return value


def _swap(pair: tuple[A, B]) -> tuple[B, A]:
    first, second = pair
    return second, first


def _mirror(value: Either[A, B]) -> Either[B, A]:
    return value.mirror()


def _merge(value: Either[A, A]) -> A:
    return value.merge()


class Category(ABC, Generic[A, B]):
    """A family of transformers with identity and sequential composition."""

    @abstractmethod
    def call(self, value: A) -> tuple[Category[A, B], B]:
        """Step once on ``value``, returning the continuation and the output."""

    @abstractmethod
    def take(self) -> Category[A, B]:
        """Move ownership into a fresh handle."""

    @classmethod
    @abstractmethod
    def identity(cls) -> Category[Any, Any]:
        """Transformer that returns its input unchanged on every step."""

    @abstractmethod
    def then(self, consumer: Category[B, C]) -> Category[A, C]:
        """Feed this transformer's output into ``consumer`` (``>>>``)."""

    def after(self, producer: Category[A0, A]) -> Category[A0, B]:
        """Feed ``producer``'s output into this transformer (``<<<``)."""
        return producer.then(self)

    def __rshift__(self, consumer: Category[B, C]) -> Category[A, C]:
        return self.then(consumer)

    def __lshift__(self, producer: Category[A0, A]) -> Category[A0, B]:
        return self.after(producer)


class Arrow(Category[A, B]):
    """Category that can lift pure functions and act on pairs."""

    @classmethod
    @abstractmethod
    def arrow(cls, f: Callable[[A], B]) -> Arrow[A, B]:
        """Lift a pure function into a stateless transformer."""

    @abstractmethod
    def first(self) -> Arrow[tuple[A, C], tuple[B, C]]:
        """Apply to the first component of a pair, pass the second through."""

    def second(self) -> Arrow[tuple[C, A], tuple[C, B]]:
        """Apply to the second component of a pair, pass the first through."""
        return type(self).arrow(_identity).both(self)

    def both(self, other: Arrow[A1, B1]) -> Arrow[tuple[A, A1], tuple[B, B1]]:
        """Run ``self`` on the first half and ``other`` on the second (``***``)."""
        return self.first().then_pure(_swap).then(other.first()).then_pure(_swap)

    def dup(
        self,
        other: Arrow[A, B1],
        clone: Callable[[A], A] = copy.deepcopy,
    ) -> Arrow[A, tuple[B, B1]]:
        """Feed the same input to ``self`` and ``other`` and pair the outputs (``&&&``).

        ``self`` receives ``clone(input)`` and ``other`` the original, so the
        two branches never alias a mutable input.
        """
        return self.both(other).after_pure(lambda value: (clone(value), value))

    def after_pure(self, f: Callable[[A0], A]) -> Arrow[A0, B]:
        """Precompose with a pure function (``^>>``)."""
        return type(self).arrow(f).then(self)

    def then_pure(self, f: Callable[[B], C]) -> Arrow[A, C]:
        """Postcompose with a pure function (``>>^``)."""
        return self.then(type(self).arrow(f))


class ArrowChoice(Arrow[A, B]):
    """Arrow that can route ``Either`` inputs between transformers."""

    @abstractmethod
    def left(self) -> ArrowChoice[Either[A, D], Either[B, D]]:
        """Run on ``Left`` inputs; pass ``Right`` inputs through untouched.

        On a ``Right`` input the wrapped transformer must not be stepped: it
        is carried forward as-is for a later ``Left``.
        """

    def right(self) -> ArrowChoice[Either[D, A], Either[D, B]]:
        """Mirror of ``left``."""
        return type(self).arrow(_identity).split(self)

    def split(self, other: ArrowChoice[A1, B1]) -> ArrowChoice[Either[A, A1], Either[B, B1]]:
        """Route ``Left`` to ``self`` and ``Right`` to ``other`` (``+++``)."""
        return self.left().then_pure(_mirror).then(other.left()).then_pure(_mirror)

    def owise(self, other: ArrowChoice[C, B]) -> ArrowChoice[Either[A, C], B]:
        """Route by variant and unwrap the shared result type (``|||``)."""
        return self.split(other).then_pure(_merge)
