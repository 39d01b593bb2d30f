"""Adaptive dyadic refinement of Chebyshev expansions.

Builds a partition of ``[xmin, xmax]`` into pieces of a fixed order by
recursive midpoint bisection.  Each piece is accepted once its coefficient
tail is small relative to its leading coefficients, or when the maximum
recursion depth is reached (best effort).
"""

from __future__ import annotations

import time
from typing import Callable, List

import numpy as np

from pychebtools.expansion import ChebyshevExpansion, _check_domain, _check_positive_int


def tail_error_estimate(ce: ChebyshevExpansion, n_tail: int = 3) -> float:
    """Relative size of the trailing coefficients of *ce*.

    Returns ``||c[-M:]|| / ||c[:M]||`` with ``M = min(n_tail, len(c) // 2)``
    (at least 1).  For spectrally converging fits the trailing coefficients
    bound the interpolation error.  An all-zero expansion has error 0.
    """
    c = ce.coef()
    M = max(1, min(n_tail, c.size // 2))
    tail = np.linalg.norm(c[-M:])
    head = np.linalg.norm(c[:M])
    if head == 0.0:
        return 0.0 if tail == 0.0 else np.inf
    return float(tail / head)


def dyadic_splitting(
    N: int,
    func: Callable[[float], float],
    xmin: float,
    xmax: float,
    max_depth: int,
    tol: float,
    n_tail: int = 3,
    method: str = "matrix",
    verbose: bool = False,
) -> List[ChebyshevExpansion]:
    """Approximate *func* on ``[xmin, xmax]`` by a dyadic partition of expansions.

    Starting from a single order-*N* fit on the whole interval, any piece
    whose :func:`tail_error_estimate` exceeds *tol* is bisected at its
    midpoint and both halves are refitted, until every piece meets the
    tolerance or has been split *max_depth* times.  Pieces at the depth
    limit are kept as they are, so the result may be less accurate than
    requested.

    Parameters
    ----------
    N : int
        Order of every piece, N >= 1.
    func : callable
        Scalar function ``func(x) -> float``.
    xmin, xmax : float
        Interval to cover.
    max_depth : int
        Maximum number of bisections of the original interval (0 means a
        single piece).
    tol : float
        Target relative tail size, > 0.
    n_tail : int, optional
        Number of trailing/leading coefficients used by the error
        estimate.  Default is 3.
    method : {'matrix', 'dct'}, optional
        Fitting method passed to :meth:`ChebyshevExpansion.factory`.
    verbose : bool, optional
        If True, print one line per accepted piece.  Default is False.

    Returns
    -------
    list of ChebyshevExpansion
        Contiguous pieces ordered by increasing x.

    Examples
    --------
    >>> import math
    >>> from pychebtools import dyadic_splitting
    >>> pieces = dyadic_splitting(8, math.exp, -1, 1, 3, 1e-14)
    >>> len(pieces)
    8
    """
    N = _check_positive_int(N, "N")
    xmin, xmax = _check_domain(xmin, xmax)
    if isinstance(max_depth, bool) or not isinstance(max_depth, (int, np.integer)) or max_depth < 0:
        raise ValueError(f"max_depth must be an int >= 0, got {max_depth!r}")
    if not tol > 0:
        raise ValueError(f"tol must be > 0, got {tol}")
    n_tail = _check_positive_int(n_tail, "n_tail")

    start = time.time()
    if verbose:
        print(f"Dyadic splitting of [{xmin}, {xmax}] "
              f"(order {N}, max depth {max_depth}, tol {tol:.1e})...")

    def refine(ce: ChebyshevExpansion, depth: int) -> List[ChebyshevExpansion]:
        err = tail_error_estimate(ce, n_tail)
        if err <= tol or depth >= max_depth:
            if verbose:
                flag = "" if err <= tol else "  (depth limit)"
                print(f"  [{ce.xmin:.6g}, {ce.xmax:.6g}] depth {depth}: "
                      f"err {err:.2e}{flag}")
            return [ce]
        xmid = (ce.xmin + ce.xmax) / 2.0
        left = ChebyshevExpansion.factory(N, func, ce.xmin, xmid, method=method)
        right = ChebyshevExpansion.factory(N, func, xmid, ce.xmax, method=method)
        return refine(left, depth + 1) + refine(right, depth + 1)

    pieces = refine(ChebyshevExpansion.factory(N, func, xmin, xmax, method=method), 0)

    if verbose:
        print(f"  {len(pieces)} pieces in {time.time() - start:.3f}s")
    return pieces
