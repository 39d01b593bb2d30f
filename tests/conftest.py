"""Shared test fixtures for pychebtools tests."""

import math

import pytest

from pychebtools import ChebyshevCollection, ChebyshevExpansion, dyadic_splitting


# ---------------------------------------------------------------------------
# Test functions
# ---------------------------------------------------------------------------

def funky(x):
    """exp(x) * sin(x) * log(x + 1)"""
    return math.exp(x) * math.sin(x) * math.log(x + 1)


def runge(x):
    """1 / (1 + 25 x^2)"""
    return 1.0 / (1.0 + 25.0 * x * x)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def ce_1234():
    """Expansion with coefficients [1, 2, 3, 4] on [-1, 1]."""
    return ChebyshevExpansion([1, 2, 3, 4], -1, 1)


@pytest.fixture
def ce_exp():
    """Order-20 fit of exp(x) on [-1, 1]."""
    return ChebyshevExpansion.factory(20, math.exp, -1, 1)


@pytest.fixture
def ce_sin_shifted():
    """Order-30 fit of sin(x) on [0.5, 7]."""
    return ChebyshevExpansion.factory(30, math.sin, 0.5, 7)


@pytest.fixture(scope="module")
def sin_collection():
    """Piecewise fit of sin(x) on [0, 10]."""
    return ChebyshevCollection(dyadic_splitting(12, math.sin, 0, 10, 6, 1e-13))


@pytest.fixture(scope="module")
def exp_collection():
    """Piecewise fit of exp(x) on [0, 2] (strictly increasing)."""
    return ChebyshevCollection(dyadic_splitting(10, math.exp, 0, 2, 3, 1e-14))
