"""
Elementary Functions over Flints

Interval extensions of the numpy math functions. For every x in the input
interval, f(x) lies in the output interval.

- Monotone functions are evaluated at the two bounds
- Non-monotone functions add any interior extremum: the extremum
  positions of sin, cos and the poles of tan are located exactly by
  enclosing x / pi and testing with rational arithmetic
- sqrt is rounded exactly, every other library result is widened by
  config.libm_ulps and clamped to the function's range
- Known exact values (sin(0) = 0, exp(0) = 1, log(1) = 0, ...) are not
  widened

Domains: an input entirely outside the domain is UNDEFINED, an input that
partly overlaps it is clipped to the valid part (sqrt([-1, 4]) = [0, 2]).
"""

import logging
import math
from fractions import Fraction
from typing import Callable, Dict, Optional, Union

import numpy as np

from .arithmetic import divide
from .config import DEFAULT_CONFIG, FlintConfig
from .core.flint import Flint, Number, absorb, as_flint
from .rounding import INF, libm_call, sqrt_down, sqrt_up, widen_down, widen_up


logger = logging.getLogger(__name__)

FlintLike = Union[Flint, Number]
Exact = Optional[Dict[float, float]]

# Neighbouring floats around pi and pi/2
PI_LO = 3.141592653589793
PI_HI = 3.1415926535897936
PI_2_LO = 1.5707963267948966
PI_2_HI = 1.5707963267948968
TWO_PI_LO = 6.283185307179586

PI = Flint.from_bounds(PI_LO, PI_HI)


def _down(fn: Callable, x: float, config: FlintConfig,
          exact: Exact = None, floor: float = -INF) -> float:
    """Library value of fn(x) rounded to a certain lower bound."""
    if exact is not None and x in exact:
        return exact[x]
    return max(floor, widen_down(libm_call(fn, x), config.libm_ulps))


def _up(fn: Callable, x: float, config: FlintConfig,
        exact: Exact = None, ceiling: float = INF) -> float:
    """Library value of fn(x) rounded to a certain upper bound."""
    if exact is not None and x in exact:
        return exact[x]
    return min(ceiling, widen_up(libm_call(fn, x), config.libm_ulps))


def _increasing(fn: Callable, a: Flint, config: FlintConfig, exact: Exact = None,
                floor: float = -INF, ceiling: float = INF) -> Flint:
    return Flint.from_bounds(
        _down(fn, a.lo, config, exact, floor),
        _up(fn, a.hi, config, exact, ceiling),
    )


def _decreasing(fn: Callable, a: Flint, config: FlintConfig, exact: Exact = None,
                floor: float = -INF, ceiling: float = INF) -> Flint:
    return Flint.from_bounds(
        _down(fn, a.hi, config, exact, floor),
        _up(fn, a.lo, config, exact, ceiling),
    )


def _undefined(name: str, a: Flint) -> Flint:
    logger.debug("%s of %s is outside its domain", name, a)
    return Flint.undefined()


def _hits(q: Flint, offset: Fraction, period: int) -> bool:
    """Whether offset + period * k lies in q for some integer k."""
    k = math.ceil((Fraction(q.lo) - offset) / period)
    return offset + period * k <= Fraction(q.hi)


# Roots

def sqrt(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """Square root, clipped to x >= 0. UNDEFINED when a.hi < 0."""
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    if a.hi < 0:
        return _undefined("sqrt", a)
    if a.lo < 0:
        return Flint.from_bounds(0.0, sqrt_up(a.hi))
    return Flint.from_bounds(sqrt_down(a.lo), sqrt_up(a.hi))


def cbrt(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """Cube root."""
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    return _increasing(np.cbrt, a, config, {0.0: 0.0})


def hypot(a: FlintLike, b: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """
    Euclidean norm sqrt(x^2 + y^2).

    Smallest at the magnitudes closest to zero, largest at the farthest.
    """
    a, b = as_flint(a), as_flint(b)
    bad = absorb(a, b)
    if bad is not None:
        return bad

    def magnitudes(f: Flint):
        if f.lo >= 0:
            return f.lo, f.hi
        if f.hi <= 0:
            return -f.hi, -f.lo
        return 0.0, max(-f.lo, f.hi)

    a_min, a_max = magnitudes(a)
    b_min, b_max = magnitudes(b)
    low = libm_call(np.hypot, a_min, b_min)
    if low != 0:
        low = max(widen_down(low, config.libm_ulps), a_min, b_min)
    high = widen_up(libm_call(np.hypot, a_max, b_max), config.libm_ulps)
    return Flint.from_bounds(low, high)


# Exponentials and logarithms

def exp(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    return _increasing(np.exp, a, config, {0.0: 1.0}, floor=0.0)


def exp2(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    return _increasing(np.exp2, a, config, {0.0: 1.0}, floor=0.0)


def expm1(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    return _increasing(np.expm1, a, config, {0.0: 0.0}, floor=-1.0)


def _logarithm(name: str, fn: Callable, a: FlintLike, domain_min: float,
               exact: Dict[float, float], config: FlintConfig) -> Flint:
    """
    A logarithm defined for x > domain_min.

    UNDEFINED when the whole interval is at or below domain_min, lower
    bound -inf when only part of it is.
    """
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    if a.hi <= domain_min:
        return _undefined(name, a)
    if a.lo <= domain_min:
        low = -INF
    else:
        low = _down(fn, a.lo, config, exact)
    return Flint.from_bounds(low, _up(fn, a.hi, config, exact))


def log(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """Natural logarithm."""
    return _logarithm("log", np.log, a, 0.0, {1.0: 0.0}, config)


def log2(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    return _logarithm("log2", np.log2, a, 0.0, {1.0: 0.0}, config)


def log10(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    return _logarithm("log10", np.log10, a, 0.0, {1.0: 0.0}, config)


def log1p(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """log(1 + x), defined for x > -1."""
    return _logarithm("log1p", np.log1p, a, -1.0, {0.0: 0.0}, config)


# Error function

def erf(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    return _increasing(math.erf, a, config, {0.0: 0.0}, floor=-1.0, ceiling=1.0)


def erfc(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    return _decreasing(math.erfc, a, config, {0.0: 1.0}, floor=0.0, ceiling=2.0)


# Trigonometric functions

def sin(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """
    Sine.

    Maxima sit at x / pi = 1/2 + 2k and minima at x / pi = 3/2 + 2k. The
    bounds are the endpoint values, replaced by 1 or -1 when the input
    contains a maximum or a minimum.
    """
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    if not a.is_finite or a.width >= TWO_PI_LO:
        return Flint.from_bounds(-1.0, 1.0)

    exact = {0.0: 0.0}
    low = min(_down(np.sin, a.lo, config, exact, -1.0),
              _down(np.sin, a.hi, config, exact, -1.0))
    high = max(_up(np.sin, a.lo, config, exact, 1.0),
               _up(np.sin, a.hi, config, exact, 1.0))
    q = divide(a, PI)
    if _hits(q, Fraction(1, 2), 2):
        high = 1.0
    if _hits(q, Fraction(3, 2), 2):
        low = -1.0
    return Flint.from_bounds(low, high)


def cos(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """
    Cosine.

    Maxima sit at x / pi = 2k and minima at x / pi = 1 + 2k.
    """
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    if not a.is_finite or a.width >= TWO_PI_LO:
        return Flint.from_bounds(-1.0, 1.0)

    exact = {0.0: 1.0}
    low = min(_down(np.cos, a.lo, config, exact, -1.0),
              _down(np.cos, a.hi, config, exact, -1.0))
    high = max(_up(np.cos, a.lo, config, exact, 1.0),
               _up(np.cos, a.hi, config, exact, 1.0))
    q = divide(a, PI)
    if _hits(q, Fraction(0), 2):
        high = 1.0
    if _hits(q, Fraction(1), 2):
        low = -1.0
    return Flint.from_bounds(low, high)


def tan(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """
    Tangent.

    Increasing between poles at x / pi = 1/2 + k. An input that may hold
    a pole saturates to [-inf, inf].
    """
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    if not a.is_finite or a.width >= PI_LO or _hits(divide(a, PI), Fraction(1, 2), 1):
        return Flint.from_bounds(-INF, INF)
    return _increasing(np.tan, a, config, {0.0: 0.0})


def asin(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """Inverse sine, clipped to [-1, 1]."""
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    if a.hi < -1 or a.lo > 1:
        return _undefined("asin", a)
    exact = {0.0: 0.0}
    low = -PI_2_HI if a.lo < -1 else _down(np.arcsin, a.lo, config, exact, -PI_2_HI)
    high = PI_2_HI if a.hi > 1 else _up(np.arcsin, a.hi, config, exact, PI_2_HI)
    return Flint.from_bounds(low, high)


def acos(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """Inverse cosine, clipped to [-1, 1]. Decreasing."""
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    if a.hi < -1 or a.lo > 1:
        return _undefined("acos", a)
    exact = {1.0: 0.0}
    low = 0.0 if a.hi > 1 else _down(np.arccos, a.hi, config, exact, 0.0)
    high = PI_HI if a.lo < -1 else _up(np.arccos, a.lo, config, exact, PI_HI)
    return Flint.from_bounds(low, high)


def atan(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    return _increasing(np.arctan, a, config, {0.0: 0.0}, floor=-PI_2_HI, ceiling=PI_2_HI)


def atan2(y: FlintLike, x: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """
    Angle of the points (x, y) of a rectangle, in [-pi, pi].

    Away from the branch cut along the negative x axis the angle is
    continuous and its extremes are at the corners. A rectangle with
    points on both sides of the cut gets the hull [-pi, pi].
    """
    y, x = as_flint(y), as_flint(x)
    bad = absorb(y, x)
    if bad is not None:
        return bad
    if x.lo < 0 and y.lo < 0 <= y.hi:
        return Flint.from_bounds(-PI_HI, PI_HI)
    corners = [
        libm_call(np.arctan2, yy, xx)
        for yy in (y.lo, y.hi)
        for xx in (x.lo, x.hi)
    ]
    return Flint.from_bounds(
        max(-PI_HI, widen_down(min(corners), config.libm_ulps)),
        min(PI_HI, widen_up(max(corners), config.libm_ulps)),
    )


# Hyperbolic functions

def sinh(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    return _increasing(np.sinh, a, config, {0.0: 0.0})


def cosh(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """Hyperbolic cosine, minimum 1 at x = 0."""
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    exact = {0.0: 1.0}
    if a.lo >= 0:
        return _increasing(np.cosh, a, config, exact, floor=1.0)
    if a.hi <= 0:
        return _decreasing(np.cosh, a, config, exact, floor=1.0)
    high = max(_up(np.cosh, a.lo, config), _up(np.cosh, a.hi, config))
    return Flint.from_bounds(1.0, high)


def tanh(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    return _increasing(np.tanh, a, config, {0.0: 0.0}, floor=-1.0, ceiling=1.0)


def asinh(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    return _increasing(np.arcsinh, a, config, {0.0: 0.0})


def acosh(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """Inverse hyperbolic cosine, clipped to x >= 1."""
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    if a.hi < 1:
        return _undefined("acosh", a)
    exact = {1.0: 0.0}
    low = 0.0 if a.lo < 1 else _down(np.arccosh, a.lo, config, exact, 0.0)
    return Flint.from_bounds(low, _up(np.arccosh, a.hi, config, exact))


def atanh(a: FlintLike, config: FlintConfig = DEFAULT_CONFIG) -> Flint:
    """Inverse hyperbolic tangent, saturating to -inf / inf at -1 / 1."""
    a = as_flint(a)
    bad = absorb(a)
    if bad is not None:
        return bad
    if a.hi <= -1 or a.lo >= 1:
        return _undefined("atanh", a)
    exact = {0.0: 0.0}
    low = -INF if a.lo <= -1 else _down(np.arctanh, a.lo, config, exact)
    high = INF if a.hi >= 1 else _up(np.arctanh, a.hi, config, exact)
    return Flint.from_bounds(low, high)
