"""
Directed Rounding Primitives

Evaluates the basic binary64 operations rounded toward -inf (for lower
bounds) or toward +inf (for upper bounds) instead of to nearest.

Python floats always round to nearest and expose no rounding mode, so the
direction is a parameter of every call instead of process state:

- the round-to-nearest result is computed first
- its error is recovered exactly (TwoSum for + and -, rational arithmetic
  for *, /, sqrt and integer powers)
- the result moves one ulp outward only when it landed on the wrong side

This gives the correctly rounded directed result, so a bound is never
optimistic and never looser than one ulp.

Overflow saturates outward: an upper bound that overflows is +inf, a lower
bound that overflows positive is the largest finite float.
"""

import math
from enum import Enum
from fractions import Fraction
from typing import Any, Callable, Union

import numpy as np


INF = float('inf')
NAN = float('nan')
MAX_FLOAT = float(np.finfo(np.float64).max)

Rational = Union[int, Fraction]


class Rounding(Enum):
    """Rounding direction for a single bound."""
    DOWN = "down"  # toward -inf, for lower bounds
    UP = "up"      # toward +inf, for upper bounds


def next_down(x: float) -> float:
    """Largest float strictly below x."""
    return float(np.nextafter(x, -np.inf))


def next_up(x: float) -> float:
    """Smallest float strictly above x."""
    return float(np.nextafter(x, np.inf))


def widen_down(x: float, ulps: int) -> float:
    """Move x down by a number of ulps."""
    for _ in range(ulps):
        x = next_down(x)
    return x


def widen_up(x: float, ulps: int) -> float:
    """Move x up by a number of ulps."""
    for _ in range(ulps):
        x = next_up(x)
    return x


def libm_call(fn: Callable[..., Any], *args: float) -> float:
    """
    Evaluate a numpy math function on plain floats.

    Overflow, invalid and divide warnings are silenced for this one call
    only, the results (inf, nan) are handled by the caller.
    """
    with np.errstate(all='ignore'):
        return float(fn(*args))


def _saturate(x: float, mode: Rounding) -> float:
    # x overflowed from finite operands
    if x > 0:
        return MAX_FLOAT if mode is Rounding.DOWN else INF
    return -INF if mode is Rounding.DOWN else -MAX_FLOAT


def _correct(nearest: float, exact: Rational, mode: Rounding) -> float:
    approx = Fraction(nearest)
    if mode is Rounding.DOWN and approx > exact:
        return next_down(nearest)
    if mode is Rounding.UP and approx < exact:
        return next_up(nearest)
    return nearest


def from_fraction(q: Rational, mode: Rounding) -> float:
    """
    Round an exact rational to a float in the given direction.

    Args:
        q: Exact value (int or Fraction)
        mode: Rounding direction

    Returns:
        The nearest float on the requested side of q
    """
    try:
        nearest = float(q)
    except OverflowError:
        nearest = INF if q > 0 else -INF
    if math.isinf(nearest):
        return _saturate(nearest, mode)
    return _correct(nearest, q, mode)


def _add(a: float, b: float, mode: Rounding) -> float:
    s = a + b
    if math.isnan(s):
        return s
    if math.isinf(s):
        if math.isinf(a) or math.isinf(b):
            return s
        return _saturate(s, mode)

    # TwoSum: err is exactly (a + b) - s
    bv = s - a
    av = s - bv
    err = (a - av) + (b - bv)
    if not math.isfinite(err):
        return _correct(s, Fraction(a) + Fraction(b), mode)
    if mode is Rounding.DOWN and err < 0:
        return next_down(s)
    if mode is Rounding.UP and err > 0:
        return next_up(s)
    return s


def _mul(a: float, b: float, mode: Rounding) -> float:
    if math.isnan(a) or math.isnan(b):
        return NAN
    # Bound products treat 0 * inf as 0
    if a == 0 or b == 0:
        return 0.0
    p = a * b
    if math.isinf(a) or math.isinf(b):
        return p
    if math.isinf(p):
        return _saturate(p, mode)
    return _correct(p, Fraction(a) * Fraction(b), mode)


def _div(a: float, b: float, mode: Rounding) -> float:
    if math.isnan(a) or math.isnan(b):
        return NAN
    if b == 0:
        raise ZeroDivisionError("bound division by zero")
    if math.isinf(a) and math.isinf(b):
        # Limit set of x/y over two rays is [0, inf] or [-inf, 0]
        positive = (a > 0) == (b > 0)
        if mode is Rounding.DOWN:
            return 0.0 if positive else -INF
        return INF if positive else 0.0
    q = a / b
    if math.isinf(a) or math.isinf(b):
        return q
    if math.isinf(q):
        return _saturate(q, mode)
    return _correct(q, Fraction(a) / Fraction(b), mode)


def add_down(a: float, b: float) -> float:
    return _add(a, b, Rounding.DOWN)


def add_up(a: float, b: float) -> float:
    return _add(a, b, Rounding.UP)


def sub_down(a: float, b: float) -> float:
    return _add(a, -b, Rounding.DOWN)


def sub_up(a: float, b: float) -> float:
    return _add(a, -b, Rounding.UP)


def mul_down(a: float, b: float) -> float:
    return _mul(a, b, Rounding.DOWN)


def mul_up(a: float, b: float) -> float:
    return _mul(a, b, Rounding.UP)


def div_down(a: float, b: float) -> float:
    return _div(a, b, Rounding.DOWN)


def div_up(a: float, b: float) -> float:
    return _div(a, b, Rounding.UP)


def sqrt_rounded(x: float, mode: Rounding) -> float:
    """
    Square root of a non-negative float rounded in the given direction.

    IEEE sqrt is correctly rounded to nearest, so at most one ulp step is
    needed. Negative input gives nan.
    """
    if math.isnan(x) or x < 0:
        return NAN
    if x == 0 or math.isinf(x):
        return x
    r = float(np.sqrt(x))
    square = Fraction(r) ** 2
    exact = Fraction(x)
    if mode is Rounding.DOWN and square > exact:
        return next_down(r)
    if mode is Rounding.UP and square < exact:
        return next_up(r)
    return r


def sqrt_down(x: float) -> float:
    return sqrt_rounded(x, Rounding.DOWN)


def sqrt_up(x: float) -> float:
    return sqrt_rounded(x, Rounding.UP)


def pow_int_rounded(x: float, n: int, mode: Rounding) -> float:
    """
    Integer power x**n rounded in the given direction.

    Evaluated exactly with rational arithmetic, so the cost grows with |n|.
    Callers bound n (see FlintConfig.exact_power_limit).
    """
    if math.isnan(x):
        return NAN
    if n == 0:
        return 1.0
    if x == 0:
        if n < 0:
            raise ZeroDivisionError("zero to a negative power")
        return 0.0
    if math.isinf(x):
        return x ** n
    return from_fraction(Fraction(x) ** n, mode)


def pow_int_down(x: float, n: int) -> float:
    return pow_int_rounded(x, n, Rounding.DOWN)


def pow_int_up(x: float, n: int) -> float:
    return pow_int_rounded(x, n, Rounding.UP)
