"""
Interval Arithmetic Operators

Every operator takes flints (or plain numbers, promoted to point flints)
and returns a new flint whose lower bound is rounded toward -inf and whose
upper bound is rounded toward +inf, so the exact result is always inside.

Invalid operands are absorbing: NAN wins over UNDEFINED, which wins over
any valid operand.
"""

import logging
import numbers
from typing import Union

import numpy as np

from .config import DEFAULT_CONFIG, FlintConfig
from .core.flint import Flint, Number, absorb, as_flint
from .rounding import (
    add_down,
    add_up,
    div_down,
    div_up,
    libm_call,
    mul_down,
    mul_up,
    pow_int_down,
    pow_int_up,
    sub_down,
    sub_up,
    widen_down,
    widen_up,
)


logger = logging.getLogger(__name__)

FlintLike = Union[Flint, Number]


def positive(a: FlintLike) -> Flint:
    """Identity."""
    return as_flint(a)


def negative(a: FlintLike) -> Flint:
    """Negation [-hi, -lo], exact."""
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    return Flint.from_bounds(-a.hi, -a.lo)


def add(a: FlintLike, b: FlintLike) -> Flint:
    """Interval addition [a.lo + b.lo, a.hi + b.hi]."""
    a, b = as_flint(a), as_flint(b)
    bad = absorb(a, b)
    if bad is not None:
        return bad
    return Flint.from_bounds(add_down(a.lo, b.lo), add_up(a.hi, b.hi))


def subtract(a: FlintLike, b: FlintLike) -> Flint:
    """Interval subtraction [a.lo - b.hi, a.hi - b.lo]."""
    a, b = as_flint(a), as_flint(b)
    bad = absorb(a, b)
    if bad is not None:
        return bad
    return Flint.from_bounds(sub_down(a.lo, b.hi), sub_up(a.hi, b.lo))


def multiply_corners(a: FlintLike, b: FlintLike) -> Flint:
    """
    Interval multiplication from all four corner products.

    Reference version of multiply(): the lower bound is the smallest
    down-rounded corner, the upper bound the largest up-rounded corner.
    """
    a, b = as_flint(a), as_flint(b)
    bad = absorb(a, b)
    if bad is not None:
        return bad
    corners = [(x, y) for x in (a.lo, a.hi) for y in (b.lo, b.hi)]
    return Flint.from_bounds(
        min(mul_down(x, y) for x, y in corners),
        max(mul_up(x, y) for x, y in corners),
    )


def multiply(a: FlintLike, b: FlintLike) -> Flint:
    """
    Interval multiplication by sign case analysis.

    Picks the two corner products that bound the result from the signs of
    the operands, so only two rounded products are needed except when
    both operands straddle zero. Gives the same result as
    multiply_corners() for every sign combination.
    """
    a, b = as_flint(a), as_flint(b)
    bad = absorb(a, b)
    if bad is not None:
        return bad
    al, ah, bl, bh = a.lo, a.hi, b.lo, b.hi

    if al >= 0:
        if bl >= 0:
            lo, hi = mul_down(al, bl), mul_up(ah, bh)
        elif bh <= 0:
            lo, hi = mul_down(ah, bl), mul_up(al, bh)
        else:
            lo, hi = mul_down(ah, bl), mul_up(ah, bh)
    elif ah <= 0:
        if bl >= 0:
            lo, hi = mul_down(al, bh), mul_up(ah, bl)
        elif bh <= 0:
            lo, hi = mul_down(ah, bh), mul_up(al, bl)
        else:
            lo, hi = mul_down(al, bh), mul_up(al, bl)
    else:
        if bl >= 0:
            lo, hi = mul_down(al, bh), mul_up(ah, bh)
        elif bh <= 0:
            lo, hi = mul_down(ah, bl), mul_up(al, bl)
        else:
            lo = min(mul_down(al, bh), mul_down(ah, bl))
            hi = max(mul_up(al, bl), mul_up(ah, bh))
    return Flint.from_bounds(lo, hi)


def reciprocal(b: FlintLike) -> Flint:
    """1 / b, UNDEFINED when b contains zero (including as a bound)."""
    b = as_flint(b)
    bad = absorb(b)
    if bad is not None:
        return bad
    if b.lo <= 0 <= b.hi:
        logger.debug("Reciprocal of %s, which contains zero, is undefined", b)
        return Flint.undefined()
    return Flint.from_bounds(div_down(1.0, b.hi), div_up(1.0, b.lo))


def divide(a: FlintLike, b: FlintLike) -> Flint:
    """
    Interval division a * (1 / b).

    A divisor containing zero has two unbounded rays as its quotient set,
    which no single interval represents, so the result is UNDEFINED.

    Otherwise the corners a.lo/b.lo ... a.hi/b.hi are rounded directly
    rather than multiplying by a rounded reciprocal, which would round
    twice and lose exactness on point quotients like 6 / 3.
    """
    a, b = as_flint(a), as_flint(b)
    bad = absorb(a, b)
    if bad is not None:
        return bad
    if b.lo <= 0 <= b.hi:
        logger.debug("Division by %s, which contains zero, is undefined", b)
        return Flint.undefined()
    corners = [(x, y) for x in (a.lo, a.hi) for y in (b.lo, b.hi)]
    return Flint.from_bounds(
        min(div_down(x, y) for x, y in corners),
        max(div_up(x, y) for x, y in corners),
    )


def absolute(a: FlintLike) -> Flint:
    """Absolute value, folding an interval that straddles zero."""
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    if a.lo >= 0:
        return a
    if a.hi <= 0:
        return Flint.from_bounds(-a.hi, -a.lo)
    return Flint.from_bounds(0.0, max(-a.lo, a.hi))


def square(a: FlintLike) -> Flint:
    """x^2, tighter than a * a when a straddles zero."""
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    if a.lo >= 0:
        return Flint.from_bounds(mul_down(a.lo, a.lo), mul_up(a.hi, a.hi))
    if a.hi <= 0:
        return Flint.from_bounds(mul_down(a.hi, a.hi), mul_up(a.lo, a.lo))
    return Flint.from_bounds(0.0, max(mul_up(a.lo, a.lo), mul_up(a.hi, a.hi)))


def _integer_exponent(b: FlintLike, promoted: Flint):
    """
    The exponent as an int if it is an exact integer, else None.

    Ints are taken as given so large ones stay exact. Every other operand
    (float, Fraction, Decimal, flint) is judged by its promoted flint.
    """
    if isinstance(b, (numbers.Integral, np.integer)):
        return int(b)
    if promoted.is_point and promoted.is_finite and promoted.lo.is_integer():
        return int(promoted.lo)
    return None


def _pow_int(a: Flint, n: int, config: FlintConfig) -> Flint:
    if n == 0:
        # pow(x, 0) is 1 for every x, 0 included
        return Flint(1.0)
    if n < 0 and a.lo <= 0 <= a.hi:
        logger.debug("%s to the power %d is undefined", a, n)
        return Flint.undefined()

    if abs(n) <= config.exact_power_limit:
        def down(x):
            return pow_int_down(x, n)

        def up(x):
            return pow_int_up(x, n)
    else:
        def down(x):
            return widen_down(libm_call(np.power, x, float(n)), config.libm_ulps)

        def up(x):
            return widen_up(libm_call(np.power, x, float(n)), config.libm_ulps)

    if n % 2 == 1:
        if n > 0:
            return Flint.from_bounds(down(a.lo), up(a.hi))
        return Flint.from_bounds(down(a.hi), up(a.lo))

    # Even exponents
    if n > 0:
        if a.lo >= 0:
            return Flint.from_bounds(down(a.lo), up(a.hi))
        if a.hi <= 0:
            return Flint.from_bounds(down(a.hi), up(a.lo))
        return Flint.from_bounds(0.0, max(up(a.lo), up(a.hi)))
    if a.lo > 0:
        return Flint.from_bounds(down(a.hi), up(a.lo))
    return Flint.from_bounds(down(a.lo), up(a.hi))


def _pow_real(a: Flint, b: Flint, config: FlintConfig) -> Flint:
    # A negative base has no real power, a zero base no negative power
    if a.hi < 0 or (a.hi <= 0 and b.hi < 0):
        logger.debug("%s to the power %s is undefined", a, b)
        return Flint.undefined()
    # Negative bases only have real powers for integer exponents
    base_lo = max(a.lo, 0.0)
    corners = [
        libm_call(np.power, x, y)
        for x in (base_lo, a.hi)
        for y in (b.lo, b.hi)
    ]
    return Flint.from_bounds(
        max(0.0, widen_down(min(corners), config.libm_ulps)),
        widen_up(max(corners), config.libm_ulps),
    )


def power(a: FlintLike, b: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """
    Interval power a ** b.

    Integer exponents (ints, or floats, Fractions, Decimals and point flints
    holding an integer) are evaluated exactly for
    |n| <= config.exact_power_limit and work for negative bases. Any other
    exponent clips the base to [0, inf). An entirely negative base is
    UNDEFINED, and so is a zero base with an entirely negative exponent.

    Args:
        a: Base
        b: Exponent
        config: Evaluation settings

    Returns:
        Enclosure of {x ** y : x in a, y in b}
    """
    a = as_flint(a)
    promoted = as_flint(b)
    n = _integer_exponent(b, promoted)
    b = promoted
    bad = absorb(a, b)
    if bad is not None:
        return bad
    if n is not None:
        return _pow_int(a, n, config)
    return _pow_real(a, b, config)
