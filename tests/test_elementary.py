"""
Tests for Elementary Functions
"""

import math
from fractions import Fraction

import numpy as np
import pytest
from flint import (
    Flint,
    FlintConfig,
    acos,
    acosh,
    asin,
    asinh,
    atan,
    atan2,
    atanh,
    cbrt,
    cos,
    cosh,
    erf,
    erfc,
    exp,
    exp2,
    expm1,
    hypot,
    log,
    log1p,
    log2,
    log10,
    sin,
    sinh,
    sqrt,
    tan,
    tanh,
)
from flint.elementary import PI, PI_HI, PI_LO


# (flint function, reference, a range inside the domain)
UNARY_CASES = [
    (sqrt, math.sqrt, (0.5, 9.0)),
    (cbrt, np.cbrt, (-8.0, 27.0)),
    (exp, math.exp, (-3.0, 4.0)),
    (exp2, np.exp2, (-3.0, 4.0)),
    (expm1, math.expm1, (-3.0, 4.0)),
    (log, math.log, (0.25, 8.0)),
    (log2, math.log2, (0.25, 8.0)),
    (log10, math.log10, (0.25, 8.0)),
    (log1p, math.log1p, (-0.5, 8.0)),
    (erf, math.erf, (-2.0, 2.0)),
    (erfc, math.erfc, (-2.0, 2.0)),
    (sin, math.sin, (-2.0, 5.0)),
    (cos, math.cos, (-2.0, 5.0)),
    (tan, math.tan, (-1.4, 1.4)),
    (asin, math.asin, (-0.9, 0.7)),
    (acos, math.acos, (-0.9, 0.7)),
    (atan, math.atan, (-5.0, 3.0)),
    (sinh, math.sinh, (-3.0, 2.0)),
    (cosh, math.cosh, (-3.0, 2.0)),
    (tanh, math.tanh, (-3.0, 2.0)),
    (asinh, math.asinh, (-3.0, 2.0)),
    (acosh, math.acosh, (1.5, 6.0)),
    (atanh, math.atanh, (-0.9, 0.7)),
]


class TestContainment:
    """f(x) lies in f(A) for every x in A."""

    @pytest.mark.parametrize("fn,ref,bounds", UNARY_CASES)
    def test_interval(self, fn, ref, bounds):
        """Test sampled points of the input against the library value."""
        a = Flint(*bounds)
        c = fn(a)
        assert c.is_valid
        for x in np.linspace(bounds[0], bounds[1], 41):
            assert c.contains(float(ref(float(x))))

    @pytest.mark.parametrize("fn,ref,bounds", UNARY_CASES)
    def test_points(self, fn, ref, bounds):
        """Test point inputs."""
        for x in np.linspace(bounds[0], bounds[1], 9):
            x = float(x)
            assert fn(Flint(x)).contains(float(ref(x)))

    @pytest.mark.parametrize("fn,ref,bounds", UNARY_CASES)
    def test_sub_interval_is_contained(self, fn, ref, bounds):
        """Test that a narrower input gives a narrower output."""
        lo, hi = bounds
        inner = Flint(lo + 0.25 * (hi - lo), hi - 0.25 * (hi - lo))
        assert fn(Flint(lo, hi)).contains(fn(inner))

    @pytest.mark.parametrize("fn,ref,bounds", UNARY_CASES)
    def test_absorbing(self, fn, ref, bounds):
        """Test invalid inputs."""
        assert fn(Flint.undefined()).is_undefined
        assert fn(Flint.nan()).is_nan


def exp_enclosure(x, n=60):
    """Rational bounds on exp(x), |x| <= 4, from a truncated Taylor series."""
    total, term = Fraction(0), Fraction(1)
    for k in range(n):
        total += term
        term = term * x / (k + 1)
    # Lagrange remainder, exp(|x|) < 55 for |x| <= 4
    err = abs(term) * 55
    return total - err, total + err


def sin_enclosure(x, n=30):
    """Rational bounds on sin(x) from a truncated Taylor series."""
    total, term = Fraction(0), x
    for k in range(n):
        total += term
        term = -term * x * x / ((2 * k + 2) * (2 * k + 3))
    err = abs(term)
    return total - err, total + err


def cos_enclosure(x, n=30):
    """Rational bounds on cos(x) from a truncated Taylor series."""
    total, term = Fraction(0), Fraction(1)
    for k in range(n):
        total += term
        term = -term * x * x / ((2 * k + 1) * (2 * k + 2))
    err = abs(term)
    return total - err, total + err


class TestExactReference:
    """Bounds enclose the exact value, not just the rounded library value."""

    @pytest.mark.parametrize("fn,enclosure", [
        (exp, exp_enclosure),
        (sin, sin_enclosure),
        (cos, cos_enclosure),
    ])
    def test_series_reference(self, fn, enclosure):
        """Test exp, sin and cos at grid points against rational series bounds."""
        for x in np.linspace(-4.0, 4.0, 57):
            x = float(x)
            low, high = enclosure(Fraction(x))
            c = fn(Flint(x))
            assert Fraction(c.lo) <= low
            assert high <= Fraction(c.hi)

    def test_log_reference(self):
        """Test log by exponentiating its bounds exactly."""
        for x in np.linspace(0.3, 8.0, 41):
            x = float(x)
            c = log(Flint(x))
            assert exp_enclosure(Fraction(c.lo))[1] <= Fraction(x)
            assert Fraction(x) <= exp_enclosure(Fraction(c.hi))[0]

    def test_interval_reference(self):
        """Test exp over intervals against the series bounds of both ends."""
        rng = np.random.RandomState(9)
        for _ in range(50):
            lo, hi = sorted(float(v) for v in rng.uniform(-4.0, 4.0, 2))
            c = exp(Flint(lo, hi))
            assert Fraction(c.lo) <= exp_enclosure(Fraction(lo))[0]
            assert exp_enclosure(Fraction(hi))[1] <= Fraction(c.hi)

    def test_sqrt_exact_reference(self):
        """Test sqrt bounds by squaring them exactly."""
        rng = np.random.RandomState(5)
        for x in rng.uniform(1e-6, 1e6, 500):
            q = Fraction(float(x))
            c = sqrt(Flint(float(x)))
            assert Fraction(c.lo) ** 2 <= q <= Fraction(c.hi) ** 2
            assert c.hi == c.lo or c.hi == np.nextafter(c.lo, np.inf)


class TestExactValues:
    """Known exact values are not widened."""

    def test_zero(self):
        """Test exact values at zero."""
        assert sin(0.0).identical(Flint(0.0))
        assert cos(0.0).identical(Flint(1.0))
        assert tan(0.0).identical(Flint(0.0))
        assert exp(0.0).identical(Flint(1.0))
        assert sinh(0.0).identical(Flint(0.0))
        assert cosh(0.0).identical(Flint(1.0))
        assert atanh(0.0).identical(Flint(0.0))

    def test_one(self):
        """Test exact values at one."""
        assert log(1.0).identical(Flint(0.0))
        assert log2(1.0).identical(Flint(0.0))
        assert acos(1.0).identical(Flint(0.0))
        assert acosh(1.0).identical(Flint(0.0))

    def test_exact_sqrt(self):
        """Test exactly rounded square roots."""
        assert sqrt(Flint(4.0, 9.0)).identical(Flint(2.0, 3.0))
        assert sqrt(Flint(2.0)).hi == np.nextafter(sqrt(Flint(2.0)).lo, np.inf)


class TestRoots:
    """Square root domain handling."""

    def test_clipped(self):
        """Test sqrt of an interval crossing zero."""
        assert sqrt(Flint(-1.0, 4.0)).identical(Flint(0.0, 2.0))

    def test_undefined(self):
        """Test sqrt of a negative interval."""
        assert sqrt(Flint(-4.0, -1.0)).is_undefined

    def test_cbrt_negative(self):
        """Test the cube root of a negative number."""
        c = cbrt(Flint(-8.0))
        assert c.contains(-2.0)
        assert c.width < 1e-14


class TestExponentials:
    """exp, log and their domains."""

    def test_exp_overflow(self):
        """Test exp beyond the float range."""
        c = exp(Flint(1000.0))
        assert c.is_valid
        assert c.hi == math.inf

    def test_exp_never_negative(self):
        """Test the lower clamp of exp."""
        assert exp(Flint(-1000.0)).lo == 0.0

    def test_expm1_floor(self):
        """Test the lower clamp of expm1."""
        assert expm1(Flint(-1000.0)).lo == -1.0

    def test_log_undefined(self):
        """Test logarithms outside their domain."""
        assert log(Flint(-2.0, -1.0)).is_undefined
        assert log(Flint(0.0)).is_undefined
        assert log1p(Flint(-3.0, -1.0)).is_undefined

    def test_log_touching_domain(self):
        """Test log of an interval with a zero bound."""
        c = log(Flint(0.0, 1.0))
        assert c.lo == -math.inf
        assert c.hi == 0.0

    def test_log_clipped(self):
        """Test log of an interval crossing zero."""
        c = log(Flint(-1.0, math.e))
        assert c.lo == -math.inf
        assert c.contains(1.0)

    def test_log1p_clipped(self):
        """Test log1p of an interval crossing -1."""
        assert log1p(Flint(-2.0, 0.0)).lo == -math.inf

    def test_exp_log_inverse(self):
        """Test log(exp(A)) contains A."""
        a = Flint(0.5, 3.0)
        assert log(exp(a)).contains(a)


class TestTrigonometric:
    """Periodic functions and interior extrema."""

    def test_wide_sine(self):
        """Test inputs wider than a period."""
        assert sin(Flint(0.0, 10.0)).identical(Flint(-1.0, 1.0))
        assert cos(Flint(-20.0, -10.0)).identical(Flint(-1.0, 1.0))

    def test_sine_maximum(self):
        """Test an interval around pi / 2."""
        c = sin(Flint(1.5, 1.6))
        assert c.hi == 1.0
        assert c.lo < 1.0

    def test_sine_minimum(self):
        """Test an interval around 3 pi / 2."""
        assert sin(Flint(4.6, 4.8)).lo == -1.0

    def test_cosine_minimum(self):
        """Test an interval around pi."""
        c = cos(Flint(3.0, 3.3))
        assert c.lo == -1.0
        assert c.hi < 0

    def test_cosine_maximum_far_away(self):
        """Test a maximum far from the origin."""
        c = cos(Flint(100.0 * math.pi - 0.1, 100.0 * math.pi + 0.1))
        assert c.hi == 1.0

    def test_no_extremum(self):
        """Test an interval with no extremum."""
        c = sin(Flint(0.1, 0.2))
        assert c.lo < c.hi < 1.0
        assert c.contains(math.sin(0.15))

    def test_tangent_pole(self):
        """Test an interval holding pi / 2."""
        c = tan(Flint(1.0, 2.0))
        assert c.lo == -math.inf
        assert c.hi == math.inf

    def test_tangent_between_poles(self):
        """Test an interval between two poles."""
        c = tan(Flint(-1.0, 1.0))
        assert c.is_finite
        assert c.contains(math.tan(1.0))
        assert c.contains(math.tan(-1.0))

    def test_tangent_next_branch(self):
        """Test an interval in the next branch."""
        c = tan(Flint(2.0, 4.0))
        assert c.is_finite
        assert c.contains(math.tan(3.0))

    def test_pi_enclosure(self):
        """Test the pi enclosure."""
        assert PI.lo == PI_LO
        assert PI.hi == PI_HI
        assert PI_LO < PI_HI

    def test_inverse_clipped(self):
        """Test inverse functions on clipped inputs."""
        assert asin(Flint(-2.0, 2.0)).contains(Flint(-math.pi / 2, math.pi / 2))
        assert acos(Flint(-2.0, 2.0)).lo == 0.0
        assert acos(Flint(-2.0, 2.0)).hi == PI_HI

    def test_inverse_undefined(self):
        """Test inverse functions outside [-1, 1]."""
        assert asin(Flint(1.5, 2.0)).is_undefined
        assert acos(Flint(-3.0, -2.0)).is_undefined

    def test_atan_range(self):
        """Test atan over a huge interval."""
        c = atan(Flint(-1e300, 1e300))
        assert c.contains(Flint(-math.pi / 2, math.pi / 2))
        assert c.hi < 1.6


class TestTwoArgument:
    """atan2 and hypot."""

    def test_atan2_first_quadrant(self):
        """Test atan2 of a point."""
        c = atan2(1.0, 1.0)
        assert c.contains(math.pi / 4)
        assert c.width < 1e-14

    def test_atan2_rectangle(self):
        """Test atan2 over a rectangle."""
        c = atan2(Flint(1.0, 2.0), Flint(1.0, 2.0))
        for y in (1.0, 1.5, 2.0):
            for x in (1.0, 1.5, 2.0):
                assert c.contains(math.atan2(y, x))

    def test_atan2_branch_cut(self):
        """Test a rectangle across the branch cut."""
        c = atan2(Flint(-1.0, 1.0), Flint(-2.0, -1.0))
        assert c.identical(Flint(-PI_HI, PI_HI))

    def test_atan2_upper_half(self):
        """Test a rectangle touching the negative x axis from above."""
        c = atan2(Flint(0.0, 1.0), Flint(-2.0, -1.0))
        assert c.hi == PI_HI
        assert c.contains(math.atan2(1.0, -1.0))

    def test_hypot(self):
        """Test hypot of a point."""
        c = hypot(3.0, 4.0)
        assert c.contains(5.0)
        assert c.width < 1e-14

    def test_hypot_straddling(self):
        """Test hypot of intervals straddling zero."""
        c = hypot(Flint(-1.0, 1.0), Flint(-1.0, 1.0))
        assert c.lo == 0.0
        assert c.contains(math.sqrt(2.0))

    def test_hypot_lower_bound(self):
        """Test the hypot lower bound."""
        c = hypot(Flint(3.0, 4.0), Flint(-1e-300, 1e-300))
        assert c.lo == 3.0

    def test_absorbing(self):
        """Test invalid operands."""
        assert atan2(Flint.undefined(), 1.0).is_undefined
        assert hypot(1.0, Flint.nan()).is_nan


class TestHyperbolic:
    """Hyperbolic functions and their inverses."""

    def test_cosh_minimum(self):
        """Test cosh across zero."""
        c = cosh(Flint(-1.0, 2.0))
        assert c.lo == 1.0
        assert c.contains(math.cosh(2.0))

    def test_cosh_negative(self):
        """Test cosh of a negative interval."""
        c = cosh(Flint(-2.0, -1.0))
        assert c.contains(math.cosh(-1.0))
        assert c.contains(math.cosh(-2.0))

    def test_tanh_saturates(self):
        """Test the tanh clamp."""
        c = tanh(Flint(-1000.0, 1000.0))
        assert c.lo == -1.0
        assert c.hi == 1.0

    def test_acosh(self):
        """Test acosh domain handling."""
        assert acosh(Flint(0.0, 2.0)).lo == 0.0
        assert acosh(Flint(0.0, 0.5)).is_undefined

    def test_atanh(self):
        """Test atanh domain handling."""
        c = atanh(Flint(-1.0, 1.0))
        assert c.lo == -math.inf
        assert c.hi == math.inf
        assert atanh(Flint(1.0, 2.0)).is_undefined
        assert atanh(Flint(-2.0, -1.0)).is_undefined


class TestConfiguration:
    """Library widening is configurable."""

    def test_defaults(self):
        """Test the default settings."""
        config = FlintConfig()
        assert config.libm_ulps == 2
        assert config.exact_power_limit == 64

    def test_validation(self):
        """Test rejected settings."""
        with pytest.raises(ValueError):
            FlintConfig(libm_ulps=0)
        with pytest.raises(ValueError):
            FlintConfig(exact_power_limit=-1)

    def test_wider_contains_narrower(self):
        """Test that more ulps give a wider enclosure."""
        a = Flint(0.3, 0.4)
        narrow = exp(a, config=FlintConfig(libm_ulps=1))
        wide = exp(a, config=FlintConfig(libm_ulps=8))
        assert wide.contains(narrow)
        assert wide.width > narrow.width


class TestMethods:
    """Flint methods delegate to the module functions."""

    @pytest.mark.parametrize("name,fn", [
        ("sqrt", sqrt), ("exp", exp), ("log", log), ("sin", sin),
        ("cos", cos), ("tan", tan), ("arcsin", asin), ("arccos", acos),
        ("arctan", atan), ("sinh", sinh), ("cosh", cosh), ("tanh", tanh),
        ("arcsinh", asinh), ("arctanh", atanh),
    ])
    def test_delegation(self, name, fn):
        """Test each method against its module function."""
        a = Flint(0.25, 0.5)
        assert getattr(a, name)().identical(fn(a))

    def test_numpy_object_array(self):
        """Test a numpy ufunc on an object array."""
        arr = np.array([Flint(0.0), Flint(1.0, 2.0)], dtype=object)
        out = np.exp(arr)
        assert out[0].identical(Flint(1.0))
        assert out[1].contains(math.exp(1.5))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
