"""Two-variant tagged union used as the routing tag for choice combinators."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Generic, TypeVar

L = TypeVar("L")
R = TypeVar("R")
T = TypeVar("T")


class Either(ABC, Generic[L, R]):
    """Either a ``Left`` or a ``Right`` value, never both and never neither.

    By convention choice combinators treat ``Left`` as "handled by the first
    circuit" and ``Right`` as "handled by the second".
    """

    __slots__ = ()

    @property
    def is_left(self) -> bool:
        return isinstance(self, Left)

    @property
    def is_right(self) -> bool:
        return isinstance(self, Right)

    @abstractmethod
    def mirror(self) -> Either[R, L]:
        """Swap the variants, keeping the held value."""

    @abstractmethod
    def ok(self) -> R | None:
        """Return the right value, or None for a left."""

    @abstractmethod
    def merge(self: Either[T, T]) -> T:
        """Unwrap whichever value is held."""

    @staticmethod
    def from_pair(pair: tuple[bool, T]) -> Either[T, T]:
        """Build from a ``(flag, value)`` pair: True is Right, False is Left."""
        flag, value = pair
        if flag:
            return Right(value)
        return Left(value)

    @staticmethod
    def from_bool(flag: bool) -> Either[None, None]:
        """Tag-only form of ``from_pair``."""
        return Either.from_pair((flag, None))


@dataclass(frozen=True, slots=True)
class Left(Either[L, R]):
    value: L

    def mirror(self) -> Either[R, L]:
        return Right(self.value)

    def ok(self) -> R | None:
        return None

    def merge(self) -> L:
        return self.value


@dataclass(frozen=True, slots=True)
class Right(Either[L, R]):
    value: R

    def mirror(self) -> Either[R, L]:
        return Left(self.value)

    def ok(self) -> R | None:
        return self.value

    def merge(self) -> R:
        return self.value
