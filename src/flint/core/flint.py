"""
Rounded Floating Point Interval (flint)

A flint is a closed interval [lo, hi] of binary64 numbers that is
guaranteed to contain the exact real result of the computation that
produced it.

- Lower bounds are always rounded toward -inf, upper bounds toward +inf
- Failures are carried in-band by a status tag, never raised, so a flint
  can live inside bulk containers like any plain value
- UNDEFINED (domain error, lo > hi) and NAN (non-finite input) are
  absorbing through every operation

Flints are immutable. Operators are implemented in the arithmetic,
comparison and elementary modules, the methods here delegate to them.
"""

import logging
import math
import numbers
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Dict, Optional, Tuple, Union

import numpy as np

from ..errors import FlintStatusError
from ..rounding import Rounding, from_fraction, sub_up


logger = logging.getLogger(__name__)

Number = Union[int, float, Fraction, Decimal, str, np.number]

# Accepted as arithmetic operands next to a flint
NUMERIC_TYPES = (numbers.Real, Decimal)


class FlintStatus(Enum):
    """Validity tag carried by every flint."""
    VALID = "valid"          # lo <= hi
    UNDEFINED = "undefined"  # Outside a domain, or lo > hi given
    NAN = "nan"              # Contaminated by non-finite input


def _to_bound(x: Any, mode: Rounding) -> float:
    """Convert one bound to a float, rounding inexact values outward."""
    if isinstance(x, (float, np.floating)):
        return float(x)
    if isinstance(x, (bool, np.bool_)):
        return float(x)
    if isinstance(x, (numbers.Integral, np.integer)):
        return from_fraction(int(x), mode)
    if isinstance(x, Decimal):
        if not x.is_finite():
            return float(x)
        return from_fraction(Fraction(x), mode)
    if isinstance(x, numbers.Rational):
        return from_fraction(Fraction(x.numerator, x.denominator), mode)
    if isinstance(x, str):
        try:
            q = Fraction(x.strip())
        except ValueError:
            # 'nan', 'inf' and friends, float() rejects anything else
            return float(x)
        return from_fraction(q, mode)
    if isinstance(x, numbers.Real):
        return float(x)
    raise TypeError(f"Cannot build a flint bound from {type(x).__name__}")


@dataclass(frozen=True, eq=False)
class Flint:
    """
    A rounded floating point interval [lo, hi].

    Flint(x) is the point interval enclosing x, Flint(lo, hi) the interval
    between two bounds. Values that are not exactly representable (decimal
    strings, Fractions, large ints) are enclosed by the nearest floats
    outside them.

    Construction never raises for bad bounds:
    - lo > hi gives an UNDEFINED flint
    - a nan or infinite bound gives a NAN (contaminated) flint

    Invalid flints store nan in both bounds.
    """
    lo: float
    hi: Optional[float] = None
    status: FlintStatus = FlintStatus.VALID

    def __post_init__(self):
        if isinstance(self.lo, Flint) and self.hi is None:
            lo, hi, status = self.lo.lo, self.lo.hi, self.lo.status
        else:
            status = self.status
            lo = _to_bound(self.lo, Rounding.DOWN)
            hi = _to_bound(self.lo if self.hi is None else self.hi, Rounding.UP)
            if status is FlintStatus.VALID:
                if not (math.isfinite(lo) and math.isfinite(hi)):
                    logger.debug("Non-finite bounds [%r, %r], flint is nan", lo, hi)
                    status = FlintStatus.NAN
                elif lo > hi:
                    logger.debug("Bounds out of order [%r, %r], flint is undefined", lo, hi)
                    status = FlintStatus.UNDEFINED

        if status is FlintStatus.VALID:
            # -0.0 + 0.0 is 0.0
            lo, hi = lo + 0.0, hi + 0.0
        else:
            lo = hi = math.nan
        object.__setattr__(self, 'lo', lo)
        object.__setattr__(self, 'hi', hi)
        object.__setattr__(self, 'status', status)

    @classmethod
    def from_bounds(cls, lo: float, hi: float) -> 'Flint':
        """
        Build a flint from already rounded float bounds.

        Used for operation results. Unlike the constructor, infinite bounds
        are kept: an upper bound that overflowed to +inf is still a valid,
        conservative enclosure.
        """
        flint = object.__new__(cls)
        if math.isnan(lo) or math.isnan(hi):
            status = FlintStatus.NAN
            lo = hi = math.nan
        elif lo > hi:
            status = FlintStatus.UNDEFINED
            lo = hi = math.nan
        else:
            status = FlintStatus.VALID
            lo, hi = lo + 0.0, hi + 0.0
        object.__setattr__(flint, 'lo', lo)
        object.__setattr__(flint, 'hi', hi)
        object.__setattr__(flint, 'status', status)
        return flint

    @classmethod
    def undefined(cls) -> 'Flint':
        """Create an UNDEFINED flint (domain error)."""
        return cls(math.nan, math.nan, FlintStatus.UNDEFINED)

    @classmethod
    def nan(cls) -> 'Flint':
        """Create a NAN (contaminated) flint."""
        return cls(math.nan, math.nan, FlintStatus.NAN)

    @classmethod
    def from_canonical(cls, data: Dict[str, Any]) -> 'Flint':
        """Rebuild a flint from its canonical dictionary form."""
        status = FlintStatus(data["status"])
        if status is not FlintStatus.VALID:
            return cls(math.nan, math.nan, status)
        return cls.from_bounds(float.fromhex(data["lo"]), float.fromhex(data["hi"]))

    # Status queries

    @property
    def is_valid(self) -> bool:
        return self.status is FlintStatus.VALID

    @property
    def is_undefined(self) -> bool:
        return self.status is FlintStatus.UNDEFINED

    @property
    def is_nan(self) -> bool:
        return self.status is FlintStatus.NAN

    @property
    def is_point(self) -> bool:
        """Degenerate interval holding a single exact value."""
        return self.is_valid and self.lo == self.hi

    @property
    def is_finite(self) -> bool:
        return self.is_valid and math.isfinite(self.lo) and math.isfinite(self.hi)

    @property
    def is_inf(self) -> bool:
        """Valid with at least one unbounded side."""
        return self.is_valid and (math.isinf(self.lo) or math.isinf(self.hi))

    @property
    def is_nonzero(self) -> bool:
        """Valid and certainly not zero."""
        return self.is_valid and (self.lo > 0 or self.hi < 0)

    # Geometry

    @property
    def interval(self) -> Tuple[float, float]:
        return (self.lo, self.hi)

    @property
    def width(self) -> float:
        """Width hi - lo, rounded up. nan when invalid."""
        if not self.is_valid:
            return math.nan
        return sub_up(self.hi, self.lo)

    @property
    def midpoint(self) -> float:
        """A representative value inside the interval."""
        if not self.is_valid:
            return math.nan
        if math.isinf(self.lo) and math.isinf(self.hi):
            return 0.0
        if math.isinf(self.lo) or math.isinf(self.hi):
            return self.hi if math.isinf(self.lo) else self.lo
        # Halving first avoids overflow, the clamp covers subnormal underflow
        mid = 0.5 * self.lo + 0.5 * self.hi
        return min(max(mid, self.lo), self.hi)

    def contains(self, x: Union[Number, 'Flint']) -> bool:
        """Check whether a number (exactly) or another flint lies inside."""
        if not self.is_valid:
            return False
        if isinstance(x, Flint):
            return x.is_valid and self.lo <= x.lo and x.hi <= self.hi
        if isinstance(x, (Decimal, str)):
            x = Fraction(x)
        return self.lo <= x <= self.hi

    def contains_zero(self) -> bool:
        return self.is_valid and self.lo <= 0 <= self.hi

    def intersect(self, other: 'Flint') -> 'Flint':
        """Intersection of two intervals, UNDEFINED when disjoint."""
        other = as_flint(other)
        bad = absorb(self, other)
        if bad is not None:
            return bad
        return Flint.from_bounds(max(self.lo, other.lo), min(self.hi, other.hi))

    def hull(self, other: 'Flint') -> 'Flint':
        """Convex hull of two intervals."""
        other = as_flint(other)
        bad = absorb(self, other)
        if bad is not None:
            return bad
        return Flint.from_bounds(min(self.lo, other.lo), max(self.hi, other.hi))

    # Representation

    def identical(self, other: 'Flint') -> bool:
        """Bitwise equality of (lo, hi, status), not mathematical equality."""
        if not isinstance(other, Flint):
            return False
        return (
            self.status is other.status
            and self.lo.hex() == other.lo.hex()
            and self.hi.hex() == other.hi.hex()
        )

    def __hash__(self) -> int:
        # Points compare equal to plain numbers, so they hash like them
        if self.is_point:
            return hash(self.lo)
        return hash((self.status, self.lo.hex(), self.hi.hex()))

    def require_valid(self, operation: str = "") -> 'Flint':
        """Return self, or raise FlintStatusError if not VALID."""
        if not self.is_valid:
            raise FlintStatusError(self, operation)
        return self

    def to_canonical(self) -> Dict[str, Any]:
        return {
            "lo": self.lo.hex(),
            "hi": self.hi.hex(),
            "status": self.status.value,
        }

    def __float__(self) -> float:
        return self.require_valid("float()").midpoint

    def __repr__(self) -> str:
        if self.status is FlintStatus.UNDEFINED:
            return "Flint.undefined()"
        if self.status is FlintStatus.NAN:
            return "Flint.nan()"
        if self.lo == self.hi:
            return f"Flint({self.lo!r})"
        return f"Flint({self.lo!r}, {self.hi!r})"

    def __str__(self) -> str:
        if not self.is_valid:
            return self.status.value
        return f"[{self.lo!r}, {self.hi!r}]"

    # Arithmetic

    def __pos__(self) -> 'Flint':
        return _arithmetic.positive(self)

    def __neg__(self) -> 'Flint':
        return _arithmetic.negative(self)

    def __abs__(self) -> 'Flint':
        return _arithmetic.absolute(self)

    def __add__(self, other) -> 'Flint':
        if not _is_operand(other):
            return NotImplemented
        return _arithmetic.add(self, other)

    def __radd__(self, other) -> 'Flint':
        if not _is_operand(other):
            return NotImplemented
        return _arithmetic.add(other, self)

    def __sub__(self, other) -> 'Flint':
        if not _is_operand(other):
            return NotImplemented
        return _arithmetic.subtract(self, other)

    def __rsub__(self, other) -> 'Flint':
        if not _is_operand(other):
            return NotImplemented
        return _arithmetic.subtract(other, self)

    def __mul__(self, other) -> 'Flint':
        if not _is_operand(other):
            return NotImplemented
        return _arithmetic.multiply(self, other)

    def __rmul__(self, other) -> 'Flint':
        if not _is_operand(other):
            return NotImplemented
        return _arithmetic.multiply(other, self)

    def __truediv__(self, other) -> 'Flint':
        if not _is_operand(other):
            return NotImplemented
        return _arithmetic.divide(self, other)

    def __rtruediv__(self, other) -> 'Flint':
        if not _is_operand(other):
            return NotImplemented
        return _arithmetic.divide(other, self)

    def __pow__(self, other) -> 'Flint':
        if not _is_operand(other):
            return NotImplemented
        return _arithmetic.power(self, other)

    def __rpow__(self, other) -> 'Flint':
        if not _is_operand(other):
            return NotImplemented
        return _arithmetic.power(other, self)

    # Comparisons collapse the three-valued result: only a certain TRUE
    # is True, except != which is the negation of ==

    def __lt__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return _comparison.lt(self, other) is _comparison.Truth.TRUE

    def __le__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return _comparison.le(self, other) is _comparison.Truth.TRUE

    def __gt__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return _comparison.gt(self, other) is _comparison.Truth.TRUE

    def __ge__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return _comparison.ge(self, other) is _comparison.Truth.TRUE

    def __eq__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return _comparison.eq(self, other) is _comparison.Truth.TRUE

    def __ne__(self, other) -> bool:
        if not _is_operand(other):
            return NotImplemented
        return _comparison.eq(self, other) is not _comparison.Truth.TRUE

    # Elementary functions, named as numpy looks them up on object arrays

    def square(self) -> 'Flint':
        return _arithmetic.square(self)

    def sqrt(self) -> 'Flint':
        return _elementary.sqrt(self)

    def cbrt(self) -> 'Flint':
        return _elementary.cbrt(self)

    def exp(self) -> 'Flint':
        return _elementary.exp(self)

    def exp2(self) -> 'Flint':
        return _elementary.exp2(self)

    def expm1(self) -> 'Flint':
        return _elementary.expm1(self)

    def log(self) -> 'Flint':
        return _elementary.log(self)

    def log2(self) -> 'Flint':
        return _elementary.log2(self)

    def log10(self) -> 'Flint':
        return _elementary.log10(self)

    def log1p(self) -> 'Flint':
        return _elementary.log1p(self)

    def sin(self) -> 'Flint':
        return _elementary.sin(self)

    def cos(self) -> 'Flint':
        return _elementary.cos(self)

    def tan(self) -> 'Flint':
        return _elementary.tan(self)

    def arcsin(self) -> 'Flint':
        return _elementary.asin(self)

    def arccos(self) -> 'Flint':
        return _elementary.acos(self)

    def arctan(self) -> 'Flint':
        return _elementary.atan(self)

    def sinh(self) -> 'Flint':
        return _elementary.sinh(self)

    def cosh(self) -> 'Flint':
        return _elementary.cosh(self)

    def tanh(self) -> 'Flint':
        return _elementary.tanh(self)

    def arcsinh(self) -> 'Flint':
        return _elementary.asinh(self)

    def arccosh(self) -> 'Flint':
        return _elementary.acosh(self)

    def arctanh(self) -> 'Flint':
        return _elementary.atanh(self)


def _is_operand(x: Any) -> bool:
    return isinstance(x, (Flint,) + NUMERIC_TYPES)


def as_flint(x: Union[Number, Flint]) -> Flint:
    """Return x unchanged if it is a flint, else its point enclosure."""
    if isinstance(x, Flint):
        return x
    if not isinstance(x, NUMERIC_TYPES):
        raise TypeError(
            f"Flint operations need numeric operands, got {type(x).__name__}"
        )
    return Flint(x)


def absorb(*flints: Flint) -> Optional[Flint]:
    """The absorbing result for invalid operands, None if all are valid."""
    statuses = {f.status for f in flints}
    if FlintStatus.NAN in statuses:
        return Flint.nan()
    if FlintStatus.UNDEFINED in statuses:
        return Flint.undefined()
    return None


# Operator modules import Flint, so they are bound once the class exists
from .. import arithmetic as _arithmetic  # noqa: E402
from .. import comparison as _comparison  # noqa: E402
from .. import elementary as _elementary  # noqa: E402
