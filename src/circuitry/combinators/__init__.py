"""Combinators - construction primitives and composition operators."""

from circuitry.combinators.laws import LawReport, verify_all
from circuitry.combinators.ops import (
    accum,
    accum_with_echo,
    after,
    after_pure,
    both,
    dup,
    first,
    identity,
    left,
    lift,
    owise,
    right,
    second,
    split,
    then,
    then_pure,
)

__all__ = [
    # Construction
    "identity",
    "lift",
    "accum",
    "accum_with_echo",
    # Category
    "then",
    "after",
    # Arrow
    "first",
    "second",
    "both",
    "dup",
    "after_pure",
    "then_pure",
    # ArrowChoice
    "left",
    "right",
    "split",
    "owise",
    # Conformance
    "LawReport",
    "verify_all",
]
