"""
Three-Valued Interval Comparisons

Two intervals may overlap, so an order predicate over them has three
outcomes:

- TRUE: holds for every pair of values x in a, y in b
- FALSE: fails for every pair
- UNKNOWN: holds for some pairs and fails for others

Touching bounds follow the same rule, so [1, 2] < [2, 3] is UNKNOWN
(x = y = 2 fails) while [1, 2] <= [2, 3] is TRUE. Comparisons with an
invalid flint are UNKNOWN.

The Python operators on Flint collapse the outcome to a bool: only TRUE
is True, and != is the negation of ==.
"""

from enum import Enum
from typing import Union

from .core.flint import Flint, Number, as_flint


FlintLike = Union[Flint, Number]


class Truth(Enum):
    """Outcome of an interval comparison."""
    TRUE = "true"
    FALSE = "false"
    UNKNOWN = "unknown"

    def __invert__(self) -> 'Truth':
        if self is Truth.TRUE:
            return Truth.FALSE
        if self is Truth.FALSE:
            return Truth.TRUE
        return Truth.UNKNOWN

    @property
    def certain(self) -> bool:
        return self is not Truth.UNKNOWN


def _decide(certainly: bool, certainly_not: bool) -> Truth:
    if certainly:
        return Truth.TRUE
    if certainly_not:
        return Truth.FALSE
    return Truth.UNKNOWN


def lt(a: FlintLike, b: FlintLike) -> Truth:
    """a < b"""
    a, b = as_flint(a), as_flint(b)
    if not (a.is_valid and b.is_valid):
        return Truth.UNKNOWN
    return _decide(a.hi < b.lo, a.lo >= b.hi)


def le(a: FlintLike, b: FlintLike) -> Truth:
    """a <= b"""
    a, b = as_flint(a), as_flint(b)
    if not (a.is_valid and b.is_valid):
        return Truth.UNKNOWN
    return _decide(a.hi <= b.lo, a.lo > b.hi)


def gt(a: FlintLike, b: FlintLike) -> Truth:
    """a > b"""
    return lt(b, a)


def ge(a: FlintLike, b: FlintLike) -> Truth:
    """a >= b"""
    return le(b, a)


def eq(a: FlintLike, b: FlintLike) -> Truth:
    """
    a == b

    Only two equal point intervals are certainly equal. Disjoint
    intervals are certainly different, any overlap is UNKNOWN.
    """
    a, b = as_flint(a), as_flint(b)
    if not (a.is_valid and b.is_valid):
        return Truth.UNKNOWN
    return _decide(
        a.is_point and b.is_point and a.lo == b.lo,
        a.hi < b.lo or b.hi < a.lo,
    )


def ne(a: FlintLike, b: FlintLike) -> Truth:
    """a != b"""
    return ~eq(a, b)
