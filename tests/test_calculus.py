"""Tests for derivatives, antiderivatives and function composition."""

from __future__ import annotations

import math

import numpy as np
import pytest

from pychebtools import ChebyshevExpansion, InvalidOrder


# ======================================================================
# Derivatives
# ======================================================================

class TestDeriv:
    """Coefficient-level differentiation."""

    def test_deriv_1234(self, ce_1234):
        np.testing.assert_array_equal(ce_1234.deriv(1).coef(), [14, 12, 24])
        np.testing.assert_array_equal(ce_1234.deriv(2).coef(), [12, 96])
        np.testing.assert_array_equal(ce_1234.deriv(3).coef(), [96])

    @pytest.mark.parametrize("k, expected", [
        (1, [14, 52, 24, 40]),
        (2, [172, 96, 240]),
        (3, [96, 960]),
        (4, [960]),
    ])
    def test_deriv_12345(self, k, expected):
        ce = ChebyshevExpansion([1, 2, 3, 4, 5], -1, 1)
        np.testing.assert_allclose(ce.deriv(k).coef(), expected, rtol=1e-15)

    def test_repeated_matches_higher_order(self):
        ce = ChebyshevExpansion([1, 2, 3, 4, 5], -1, 1)
        np.testing.assert_allclose(ce.deriv(1).deriv(1).coef(), ce.deriv(2).coef())

    def test_constant_derivative_is_zero(self):
        d = ChebyshevExpansion([7.0], 0, 3).deriv(1)
        np.testing.assert_array_equal(d.coef(), [0.0])
        assert d.domain == (0.0, 3.0)

    def test_beyond_degree_stays_zero(self):
        d = ChebyshevExpansion([1.0, 2.0], 0, 1).deriv(5)
        np.testing.assert_array_equal(d.coef(), [0.0])

    def test_domain_scaling(self):
        """d/dx x^2 on [0, 2] is 2x."""
        ce = ChebyshevExpansion.factory(4, lambda x: x * x, 0, 2)
        d = ce.deriv(1)
        for x in [0.0, 0.7, 1.5, 2.0]:
            assert abs(d(x) - 2 * x) < 1e-12

    def test_deriv_sin(self, ce_sin_shifted):
        d = ce_sin_shifted.deriv(1)
        xs = np.linspace(0.5, 7, 31)
        assert np.abs(d(xs) - np.cos(xs)).max() < 1e-10

    @pytest.mark.parametrize("k", [0, -1])
    def test_invalid_order(self, ce_1234, k):
        with pytest.raises(InvalidOrder):
            ce_1234.deriv(k)

    def test_non_int_order(self, ce_1234):
        with pytest.raises(TypeError):
            ce_1234.deriv(1.0)


# ======================================================================
# Antiderivatives
# ======================================================================

class TestIntegrate:
    """Indefinite integration with a zero T_0 coefficient."""

    def test_length_grows(self, ce_1234):
        assert ce_1234.integrate(1).coef().size == 5
        assert ce_1234.integrate(2).coef().size == 6

    def test_constant_term_zero(self, ce_sin_shifted):
        assert ce_sin_shifted.integrate(1).coef()[0] == 0.0

    def test_integrate_constant(self):
        """Integral of 3 on [2, 5] is 9."""
        F = ChebyshevExpansion([3.0], 2, 5).integrate()
        assert abs(F(5.0) - F(2.0) - 9.0) < 1e-14

    def test_integrate_exp(self):
        ce = ChebyshevExpansion.factory(30, math.exp, 0, 2)
        F = ce.integrate()
        expected = math.exp(2) - 1
        assert abs(F(2.0) - F(0.0) - expected) < 1e-12

    def test_integrate_cos_wide_domain(self):
        ce = ChebyshevExpansion.factory(60, math.cos, -4, 13)
        F = ce.integrate()
        expected = math.sin(13) - math.sin(-4)
        assert abs(F(13.0) - F(-4.0) - expected) < 1e-10

    def test_deriv_inverts_integrate(self, ce_sin_shifted):
        back = ce_sin_shifted.integrate(1).deriv(1)
        np.testing.assert_allclose(back.coef(), ce_sin_shifted.coef(), atol=1e-13)

    def test_integrate_deriv_recovers_differences(self, ce_exp):
        """F = integral(f'); F(b) - F(a) == f(b) - f(a)."""
        F = ce_exp.deriv(1).integrate(1)
        for a, b in [(-1.0, 1.0), (-0.3, 0.8)]:
            assert abs((F(b) - F(a)) - (ce_exp(b) - ce_exp(a))) < 1e-12

    def test_invalid_order(self, ce_1234):
        with pytest.raises(InvalidOrder):
            ce_1234.integrate(0)


# ======================================================================
# Composition
# ======================================================================

class TestApply:
    """Refitting a function of the expansion."""

    def test_apply_sin(self):
        ce = ChebyshevExpansion.factory(40, lambda x: x ** 3, -1, 1.2)
        g = ce.apply(np.sin)
        assert g.order == 40
        for x in [-1.0, -0.4, 0.3, 0.9, 1.2]:
            assert abs(g(x) - math.sin(x ** 3)) < 1e-10

    def test_apply_constant(self):
        g = ChebyshevExpansion([2.0], 0, 1).apply(np.exp)
        assert g.order == 0
        assert abs(g.coef()[0] - math.exp(2.0)) < 1e-15

    def test_apply_shape_mismatch(self, ce_exp):
        with pytest.raises(ValueError, match="shape"):
            ce_exp.apply(lambda y: y[:2])

    def test_reciprocal(self):
        ce = ChebyshevExpansion.factory(30, lambda x: 2.0 + x, 0, 1)
        r = ce.reciprocal()
        for x in [0.0, 0.3, 0.77, 1.0]:
            assert abs(r(x) - 1.0 / (2.0 + x)) < 1e-13

    def test_apply_does_not_mutate(self, ce_exp):
        before = ce_exp.coef().copy()
        ce_exp.apply(np.square)
        np.testing.assert_array_equal(ce_exp.coef(), before)
