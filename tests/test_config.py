"""Tests for the eigen-solver thread configuration."""

from __future__ import annotations

import math

import pytest

from pychebtools import ChebyshevExpansion, get_num_threads, set_num_threads
from pychebtools._config import RuntimeConfig


@pytest.fixture(autouse=True)
def _restore_threads():
    yield
    set_num_threads(None)


class TestNumThreads:
    """get_num_threads / set_num_threads."""

    def test_set_and_get(self):
        set_num_threads(2)
        assert get_num_threads() == 2

    def test_default_is_positive(self):
        set_num_threads(None)
        assert get_num_threads() >= 1

    @pytest.mark.parametrize("n", [0, -3, 1.5, True])
    def test_invalid(self, n):
        with pytest.raises(ValueError, match="num_threads"):
            set_num_threads(n)

    def test_invalid_keeps_previous(self):
        set_num_threads(3)
        with pytest.raises(ValueError):
            set_num_threads(0)
        assert get_num_threads() == 3

    def test_roots_single_thread(self):
        """Results do not depend on the thread count."""
        ce = ChebyshevExpansion.factory(24, math.cos, 0, 3)
        set_num_threads(1)
        r1 = ce.real_roots()
        set_num_threads(None)
        r2 = ce.real_roots()
        assert r1.size == r2.size == 1
        assert abs(r1[0] - math.pi / 2) < 1e-12
        assert abs(r1[0] - r2[0]) < 1e-14


class TestRuntimeConfig:
    """The configuration object itself."""

    def test_repr(self):
        assert repr(RuntimeConfig(4)) == "RuntimeConfig(num_threads=4)"

    def test_limits_context(self):
        cfg = RuntimeConfig(1)
        with cfg.limits():
            pass
        with RuntimeConfig().limits():
            pass
