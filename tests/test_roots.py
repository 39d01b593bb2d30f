"""Tests for companion-matrix roots, approximate roots and monotonic solves."""

from __future__ import annotations

import math

import numpy as np
import pytest

from pychebtools import ChebyshevExpansion, DegenerateRootQuery, InvalidOrder


class TestRealRoots:
    """Eigenvalue-based root finding."""

    def test_linear(self):
        roots = ChebyshevExpansion([0.0, 1.0]).real_roots()
        assert roots.size == 1
        assert roots[0] == 0.0

    def test_trailing_zero_trimmed(self):
        """[-1, 1, 0] is T_1 - T_0, with its root at 1."""
        roots = ChebyshevExpansion([-1.0, 1.0, 0.0]).real_roots()
        assert roots.size == 1
        assert abs(roots[0] - 1.0) < 1e-15

    def test_zero_expansion_warns(self):
        ce = ChebyshevExpansion([0.0, 0.0, 0.0])
        with pytest.warns(DegenerateRootQuery):
            roots = ce.real_roots()
        assert roots.size == 0
        assert ce.coef().size == 3

    def test_constant_warns(self):
        with pytest.warns(DegenerateRootQuery):
            assert ChebyshevExpansion([4.0], 0, 1).real_roots().size == 0

    def test_cos(self):
        ce = ChebyshevExpansion.factory(16, math.cos, 0, 3)
        roots = ce.real_roots()
        assert roots.size == 1
        assert abs(roots[0] - math.pi / 2) < 1e-12

    def test_sin_shifted(self, ce_sin_shifted):
        roots = ce_sin_shifted.real_roots()
        np.testing.assert_allclose(roots, [math.pi, 2 * math.pi], atol=1e-10)

    def test_out_of_domain(self):
        """x^2 - 4 on [-1, 1] has its roots at +-2."""
        ce = ChebyshevExpansion.from_polynomial([-4.0, 0.0, 1.0], -1, 1)
        assert ce.real_roots().size == 0
        np.testing.assert_allclose(ce.real_roots(only_in_domain=False), [-2, 2], atol=1e-12)

    def test_sorted(self):
        ce = ChebyshevExpansion.factory(40, lambda x: math.sin(3 * x), -3, 3)
        roots = ce.real_roots()
        assert np.all(np.diff(roots) > 0)
        np.testing.assert_allclose(roots, np.pi / 3 * np.arange(-2, 3), atol=1e-10)


class TestCompanionMatrix:
    """Shape and degenerate cases of the companion matrix."""

    def test_shape(self, ce_1234):
        assert ce_1234.companion_matrix().shape == (3, 3)

    def test_linear(self):
        A = ChebyshevExpansion([3.0, 2.0]).companion_matrix()
        np.testing.assert_array_equal(A, [[-1.5]])

    def test_eigenvalues_are_roots(self, ce_1234):
        t = np.linalg.eigvals(ce_1234.companion_matrix())
        for r in t:
            assert abs(np.polynomial.chebyshev.chebval(r, [1, 2, 3, 4])) < 1e-12

    def test_constant_raises(self):
        with pytest.raises(InvalidOrder):
            ChebyshevExpansion([1.0, 0.0]).companion_matrix()


class TestRealRootsApprox:
    """Sign-change bracketing with local quadratic fits."""

    def test_sin_shifted(self, ce_sin_shifted):
        roots = ce_sin_shifted.real_roots_approx(100)
        assert len(roots) == 2
        assert all(r is not None for r in roots)
        np.testing.assert_allclose(sorted(roots), [math.pi, 2 * math.pi], atol=1e-3)

    def test_decreasing_order(self, ce_sin_shifted):
        roots = ce_sin_shifted.real_roots_approx(100)
        assert roots[0] > roots[1]

    def test_no_sign_change(self, ce_exp):
        assert ce_exp.real_roots_approx(20) == []

    def test_invalid_M(self, ce_exp):
        with pytest.raises(InvalidOrder):
            ce_exp.real_roots_approx(1)


class TestRealRootsIntervals:
    """Roots over a list of segments."""

    def test_subdivided_sin(self, ce_sin_shifted):
        segments = ce_sin_shifted.subdivide(4, 20)
        roots = ChebyshevExpansion.real_roots_intervals(segments)
        np.testing.assert_allclose(roots, [math.pi, 2 * math.pi], atol=1e-10)

    def test_empty(self):
        assert ChebyshevExpansion.real_roots_intervals([]).size == 0


class TestMonotonic:
    """is_monotonic and monotonic_solvex."""

    def test_cubic_is_monotonic(self):
        """The stationary point of x^3 does not break monotonicity."""
        ce = ChebyshevExpansion.from_polynomial([0, 0, 0, 1], -1, 1)
        assert ce.is_monotonic()

    def test_square_is_not(self):
        ce = ChebyshevExpansion.from_polynomial([0, 0, 1], -1, 1)
        assert not ce.is_monotonic()

    def test_exp_and_constant(self, ce_exp):
        assert ce_exp.is_monotonic()
        assert ChebyshevExpansion([2.0], 0, 1).is_monotonic()

    def test_sin_shifted_is_not(self, ce_sin_shifted):
        assert not ce_sin_shifted.is_monotonic()

    def test_solvex(self):
        ce = ChebyshevExpansion.factory(20, math.exp, 0, 2)
        x = ce.monotonic_solvex(math.exp(1.3))
        assert abs(x - 1.3) < 1e-12

    def test_solvex_decreasing(self):
        ce = ChebyshevExpansion.factory(20, lambda x: -x ** 3, 0.5, 2)
        x = ce.monotonic_solvex(-1.0)
        assert abs(x - 1.0) < 1e-12

    def test_solvex_at_endpoint(self):
        ce = ChebyshevExpansion.factory(20, math.exp, 0, 2)
        assert ce.monotonic_solvex(1.0) == 0.0
        assert ce.monotonic_solvex(math.exp(2)) == 2.0

    def test_solvex_not_bracketed(self, ce_exp):
        with pytest.raises(ValueError, match="bracketed"):
            ce_exp.monotonic_solvex(100.0)


class TestSubdivide:
    """Refitting onto equal sub-intervals."""

    def test_pieces(self, ce_sin_shifted):
        pieces = ce_sin_shifted.subdivide(4, 20)
        assert len(pieces) == 4
        assert pieces[0].xmin == 0.5
        assert pieces[-1].xmax == 7.0
        for a, b in zip(pieces[:-1], pieces[1:]):
            assert a.xmax == b.xmin
        for p in pieces:
            assert p.order == 20
            xs = np.linspace(p.xmin, p.xmax, 9)
            assert np.abs(p(xs) - np.sin(xs)).max() < 1e-10

    def test_invalid(self, ce_exp):
        with pytest.raises(InvalidOrder):
            ce_exp.subdivide(0, 5)
