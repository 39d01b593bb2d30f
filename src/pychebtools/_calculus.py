"""Coefficient-level calculus helpers: derivative, antiderivative, companion
matrix and the local quadratic fit used by approximate root finding.

All functions work on the reference interval [-1, 1]; domain scaling is
applied by the caller.

References
----------
- Mason & Handscomb (2003), "Chebyshev Polynomials", Chapman & Hall,
  Section 2.4.5 (differentiation and integration of series).
- Boyd (2013), "Finding the Zeros of a Univariate Equation: Proxy
  Rootfinders, Chebyshev Interpolation, and the Companion Matrix",
  SIAM Review 55(2):375-396, Appendix A.2.
"""

from __future__ import annotations

from typing import Optional

import numpy as np


def _deriv_coefficients(c: np.ndarray) -> np.ndarray:
    """Coefficients of d/dt of ``sum c_k T_k(t)``; one fewer than *c*.

    Backward recurrence ``d_{k-1} = d_{k+1} + 2 k c_k`` with d_0 halved.
    The derivative of a constant is ``[0.0]``.
    """
    N = len(c) - 1
    if N == 0:
        return np.zeros(1)
    d = np.zeros(N + 2)
    for k in range(N, 0, -1):
        d[k - 1] = d[k + 1] + 2.0 * k * c[k]
    d[0] /= 2.0
    return d[:N]


def _integral_coefficients(c: np.ndarray) -> np.ndarray:
    """Coefficients of an antiderivative of ``sum c_k T_k(t)``.

    Uses ``int T_0 = T_1``, ``int T_1 = T_2 / 4`` and, for k >= 2,
    ``int T_k = T_{k+1} / (2(k+1)) - T_{k-1} / (2(k-1))``.  The constant
    coefficient of the result is left at zero.
    """
    n = len(c)
    out = np.zeros(n + 1)
    out[1] = c[0]
    if n > 1:
        out[2] = c[1] / 4.0
    for k in range(2, n):
        out[k + 1] += c[k] / (2.0 * (k + 1))
        out[k - 1] -= c[k] / (2.0 * (k - 1))
    return out


def _companion_matrix(c: np.ndarray) -> np.ndarray:
    """Chebyshev companion (colleague) matrix of the series *c*.

    *c* must have a nonzero leading coefficient and order N >= 1.  The
    eigenvalues of the N x N result are the roots in [-1, 1] coordinates.
    """
    N = len(c) - 1
    if N == 1:
        return np.array([[-c[0] / c[1]]])
    A = np.zeros((N, N))
    A[0, 1] = 1.0
    for j in range(1, N - 1):
        A[j, j - 1] = 0.5
        A[j, j + 1] = 0.5
    A[N - 1, N - 2] = 0.5
    A[N - 1, :] -= c[:N] / (2.0 * c[N])
    return A


def _trim_trailing_zeros(c: np.ndarray) -> np.ndarray:
    """Drop exactly-zero highest-degree coefficients (keeps at least one)."""
    nz = np.flatnonzero(c)
    if len(nz) == 0:
        return c[:1]
    return c[:nz[-1] + 1]


def _quadratic_bracket_root(xs: np.ndarray, ys: np.ndarray,
                            lo: float, hi: float) -> Optional[float]:
    """Root of the parabola through three points that lies in [lo, hi].

    Parameters
    ----------
    xs, ys : ndarray of shape (3,)
        Sample abscissae and values.
    lo, hi : float
        Bracket (in any order) known to contain a sign change.

    Returns
    -------
    float or None
        The unique root of the fitted quadratic inside the bracket, or
        ``None`` when neither or both roots qualify.
    """
    A = np.column_stack([xs * xs, xs, np.ones(3)])
    try:
        a, b, c = np.linalg.solve(A, ys)
    except np.linalg.LinAlgError:
        return None
    left, right = min(lo, hi), max(lo, hi)
    if a == 0.0:
        if b == 0.0:
            return None
        candidates = [-c / b]
    else:
        disc = b * b - 4.0 * a * c
        if disc < 0.0:
            return None
        sq = np.sqrt(disc)
        candidates = [(-b + sq) / (2.0 * a), (-b - sq) / (2.0 * a)]
    inside = [r for r in candidates if left <= r <= right]
    if len(inside) != 1:
        return None
    return float(inside[0])
