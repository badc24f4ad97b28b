"""
Configuration for flint evaluation.

The arithmetic operators are exact-directed and need no tuning. The knobs
here only affect functions that fall back to the platform math library,
whose results are not correctly rounded.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FlintConfig:
    """
    Evaluation settings for elementary functions and powers.

    Attributes:
        libm_ulps: Number of ulps each library result is pushed outward.
            The platform libm is accurate to within one ulp for the
            functions used, two gives a margin.
        exact_power_limit: Largest |n| for which integer powers are
            evaluated with exact rational arithmetic. Larger exponents use
            the library ``pow`` widened by ``libm_ulps``.
    """
    libm_ulps: int = 2
    exact_power_limit: int = 64

    def __post_init__(self):
        if self.libm_ulps < 1:
            raise ValueError(f"libm_ulps must be at least 1, got {self.libm_ulps}")
        if self.exact_power_limit < 0:
            raise ValueError(
                f"exact_power_limit must be non-negative, got {self.exact_power_limit}"
            )


DEFAULT_CONFIG = FlintConfig()
