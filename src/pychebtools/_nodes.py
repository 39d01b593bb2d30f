"""Cache of Chebyshev-Lobatto nodes and interpolation matrices.

Building the interpolation matrix costs O(N^2), and adaptive refinement
constructs many expansions of the same order, so both arrays are built once
per order and shared afterwards.  Cached arrays are marked read-only.

References
----------
- Boyd (2013), "Finding the Zeros of a Univariate Equation: Proxy
  Rootfinders, Chebyshev Interpolation, and the Companion Matrix",
  SIAM Review 55(2):375-396, Appendix A.
"""

from __future__ import annotations

import threading
from typing import Dict

import numpy as np

from pychebtools.exceptions import InvalidOrder


def compute_extrema(N: int) -> np.ndarray:
    """Return the N+1 Chebyshev-Lobatto nodes ``cos(k*pi/N)``, k = 0..N.

    Nodes are in **descending** order, from 1 to -1.
    """
    return np.cos(np.pi * np.arange(N + 1) / N)


def compute_interpolation_matrix(N: int) -> np.ndarray:
    """Return the (N+1) x (N+1) matrix mapping node values to coefficients.

    Entries are ``2 / (p_j p_k N) cos(j k pi / N)`` with ``p_0 = p_N = 2``
    and ``p_j = 1`` otherwise.
    """
    j = np.arange(N + 1)
    p = np.ones(N + 1)
    p[0] = p[-1] = 2.0
    L = np.cos(np.pi * np.outer(j, j) / N)
    L *= 2.0 / (N * np.outer(p, p))
    return L


class NodeCache:
    """Per-order store of Lobatto nodes and interpolation matrices.

    Entries are built at most once per order (under a lock) and then read
    without synchronization.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._extrema: Dict[int, np.ndarray] = {}
        self._matrices: Dict[int, np.ndarray] = {}

    @staticmethod
    def _check_order(N: int) -> None:
        if N < 1:
            raise InvalidOrder(f"Lobatto nodes require order N >= 1, got {N}")

    def _get(self, store: Dict[int, np.ndarray], N: int, builder) -> np.ndarray:
        arr = store.get(N)
        if arr is not None:
            return arr
        self._check_order(N)
        with self._lock:
            arr = store.get(N)
            if arr is None:
                arr = builder(N)
                arr.flags.writeable = False
                store[N] = arr
        return arr

    def get_extrema(self, N: int) -> np.ndarray:
        """Lobatto nodes in [-1, 1] for order *N*."""
        return self._get(self._extrema, int(N), compute_extrema)

    def get_interpolation_matrix(self, N: int) -> np.ndarray:
        """Interpolation matrix for order *N*."""
        return self._get(self._matrices, int(N), compute_interpolation_matrix)

    def clear(self) -> None:
        with self._lock:
            self._extrema.clear()
            self._matrices.clear()

    def __contains__(self, N: int) -> bool:
        return N in self._extrema or N in self._matrices

    def __len__(self) -> int:
        return len(set(self._extrema) | set(self._matrices))


_default_cache = NodeCache()


def get_extrema(N: int) -> np.ndarray:
    """Lobatto nodes for order *N* from the process-wide cache."""
    return _default_cache.get_extrema(N)


def get_interpolation_matrix(N: int) -> np.ndarray:
    """Interpolation matrix for order *N* from the process-wide cache."""
    return _default_cache.get_interpolation_matrix(N)
