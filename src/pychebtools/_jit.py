"""Numba JIT-compiled kernels for scalar Chebyshev evaluation.

Scalar evaluation is called in tight loops (root polishing, refinement,
collection lookups), where the per-call overhead of NumPy dominates.
"""

import numpy as np
from numba import njit


@njit(cache=True)
def clenshaw_jit(c: np.ndarray, xscaled: float) -> float:
    """Evaluate ``sum c[k] T_k(xscaled)`` by the Clenshaw recurrence.

    Parameters
    ----------
    c : ndarray
        Chebyshev coefficients c_0..c_N.
    xscaled : float
        Point in the reference interval [-1, 1].

    Returns
    -------
    float
        Value of the series.
    """
    N = c.shape[0] - 1
    u_kp1 = 0.0
    u_kp2 = 0.0
    for k in range(N, 0, -1):
        u_k = 2.0 * xscaled * u_kp1 - u_kp2 + c[k]
        u_kp2 = u_kp1
        u_kp1 = u_k
    return c[0] + xscaled * u_kp1 - u_kp2


@njit(cache=True)
def recurrence_jit(c: np.ndarray, xscaled: float, buffer: np.ndarray) -> float:
    """Evaluate the series by filling *buffer* with T_0..T_N(xscaled).

    Uses the forward recurrence ``T_{n+1} = 2 x T_n - T_{n-1}`` and returns
    the dot product of *c* with the basis values.
    """
    n = c.shape[0]
    buffer[0] = 1.0
    if n > 1:
        buffer[1] = xscaled
    for k in range(1, n - 1):
        buffer[k + 1] = 2.0 * xscaled * buffer[k] - buffer[k - 1]
    total = 0.0
    for k in range(n):
        total += c[k] * buffer[k]
    return total
