"""
flint - Rounded Floating Point Intervals

A flint is a closed interval [lo, hi] of binary64 numbers guaranteed to
contain the exact result of the computation that produced it. Use it to
track rigorous error bounds through ordinary floating point code.

Key Features:
- Correct directed rounding of +, -, *, /, sqrt and integer powers
- Interval extensions of the numpy elementary functions
- Three-valued comparisons (TRUE / FALSE / UNKNOWN)
- In-band UNDEFINED / NAN status instead of exceptions, so flints work as
  plain values in object arrays

Example:
    >>> from flint import Flint
    >>> x = Flint("0.1")
    >>> (x + x + x).contains("0.3")
    True
"""

from .core.flint import (
    Flint,
    FlintStatus,
    as_flint,
)
from .core.canonical_json import canonical_dumps, canonical_loads
from .config import FlintConfig, DEFAULT_CONFIG
from .errors import FlintStatusError
from .rounding import Rounding
from .arithmetic import (
    positive,
    negative,
    add,
    subtract,
    multiply,
    multiply_corners,
    divide,
    reciprocal,
    absolute,
    square,
    power,
)
from .comparison import (
    Truth,
    lt,
    le,
    gt,
    ge,
    eq,
    ne,
)
from .elementary import (
    sqrt,
    cbrt,
    hypot,
    exp,
    exp2,
    expm1,
    log,
    log2,
    log10,
    log1p,
    erf,
    erfc,
    sin,
    cos,
    tan,
    asin,
    acos,
    atan,
    atan2,
    sinh,
    cosh,
    tanh,
    asinh,
    acosh,
    atanh,
)

__version__ = "0.3.0"

__all__ = [
    # Value
    "Flint",
    "FlintStatus",
    "as_flint",
    "canonical_dumps",
    "canonical_loads",
    # Configuration / errors
    "FlintConfig",
    "DEFAULT_CONFIG",
    "FlintStatusError",
    "Rounding",
    # Arithmetic
    "positive",
    "negative",
    "add",
    "subtract",
    "multiply",
    "multiply_corners",
    "divide",
    "reciprocal",
    "absolute",
    "square",
    "power",
    # Comparison
    "Truth",
    "lt",
    "le",
    "gt",
    "ge",
    "eq",
    "ne",
    # Elementary functions
    "sqrt",
    "cbrt",
    "hypot",
    "exp",
    "exp2",
    "expm1",
    "log",
    "log2",
    "log10",
    "log1p",
    "erf",
    "erfc",
    "sin",
    "cos",
    "tan",
    "asin",
    "acos",
    "atan",
    "atan2",
    "sinh",
    "cosh",
    "tanh",
    "asinh",
    "acosh",
    "atanh",
]
