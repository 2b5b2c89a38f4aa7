"""
Tests for input validation, eccentricity classification and angle reduction.
"""
import math
import pytest

from kepler_solver.core.errors import ErrorCode
from kepler_solver.physics.domain import (
    EccentricityDomain,
    check_value,
    classify,
    reduce_angle,
)


class TestCheckValue:
    def test_finite_values_pass(self):
        for x in [0.0, -0.0, 1.0, -1e300, 1e-300]:
            assert check_value(x) == ErrorCode.NONE

    def test_nan_and_inf_rejected(self):
        for x in [math.nan, math.inf, -math.inf]:
            assert check_value(x) == ErrorCode.BAD_VALUE


class TestClassify:
    @pytest.mark.parametrize("e, domain", [
        (0.0, EccentricityDomain.CIRCULAR),
        (-0.0, EccentricityDomain.CIRCULAR),
        (1e-11, EccentricityDomain.CIRCULAR),
        (1e-10, EccentricityDomain.CIRCULAR),
        (1e-9, EccentricityDomain.ELLIPTIC),
        (0.5, EccentricityDomain.ELLIPTIC),
        (0.999, EccentricityDomain.ELLIPTIC),
        (1.0, EccentricityDomain.PARABOLIC),
        (1.0 + 1e-11, EccentricityDomain.PARABOLIC),
        (1.0 - 1e-11, EccentricityDomain.PARABOLIC),
        (1.001, EccentricityDomain.HYPERBOLIC),
        (100.0, EccentricityDomain.HYPERBOLIC),
    ])
    def test_bands(self, e, domain):
        got, err = classify(e)
        assert got == domain
        assert err == ErrorCode.NONE

    def test_negative_eccentricity_is_invalid(self):
        for e in [-1e-12, -0.5, -100.0]:
            domain, err = classify(e)
            assert domain == EccentricityDomain.INVALID
            assert err == ErrorCode.BAD_ECCENTRICITY

    def test_non_finite_is_bad_value(self):
        for e in [math.nan, math.inf, -math.inf]:
            domain, err = classify(e)
            assert domain == EccentricityDomain.INVALID
            assert err == ErrorCode.BAD_VALUE

    def test_every_finite_value_gets_exactly_one_domain(self):
        for i in range(-50, 300):
            domain, _err = classify(i * 0.01)
            assert isinstance(domain, EccentricityDomain)


class TestReduceAngle:
    @pytest.mark.parametrize("M", [0.0, 1.0, -1.0, 3.0, -3.0, 4.0, -4.0, 7.0, 100.0, -1234.5, 2 * math.pi, math.pi, -math.pi])
    def test_range_and_idempotence(self, M):
        r = reduce_angle(M)
        assert -math.pi < r <= math.pi
        assert reduce_angle(r) == r

    def test_values_inside_interval_unchanged(self):
        for M in [0.0, 0.5, -0.5, math.pi, -3.1]:
            assert reduce_angle(M) == M

    def test_minus_pi_maps_to_pi(self):
        assert abs(reduce_angle(-math.pi) - math.pi) < 1e-15

    def test_preserves_angle_modulo_two_pi(self):
        for M in [4.0, -4.0, 10.0, 123.456]:
            r = reduce_angle(M)
            assert abs(math.sin(r) - math.sin(M)) < 1e-12
            assert abs(math.cos(r) - math.cos(M)) < 1e-12

    def test_non_finite_passes_through(self):
        assert math.isnan(reduce_angle(math.nan))
        assert reduce_angle(math.inf) == math.inf
