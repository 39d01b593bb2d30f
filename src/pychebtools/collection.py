"""Piecewise Chebyshev expansions over a contiguous partition.

A :class:`ChebyshevCollection` owns an ordered list of
:class:`~pychebtools.expansion.ChebyshevExpansion` pieces whose domains tile
an interval, typically the output of
:func:`~pychebtools.refine.dyadic_splitting`.  Queries are routed to the piece
owning the query point; a shared boundary belongs to the piece on its left.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List, Optional, Sequence

import numpy as np
from scipy.optimize import brentq

from pychebtools._calculus import _trim_trailing_zeros
from pychebtools.exceptions import InvalidCoefficients, InvalidDomain, OutOfDomain
from pychebtools.expansion import ChebyshevExpansion
from pychebtools.refine import dyadic_splitting

# Relative width of the window in which roots near a piece boundary are merged
_ROOT_RTOL = 1e3 * np.finfo(float).eps


class ChebyshevCollection:
    """Ordered, contiguous, non-overlapping sequence of expansions.

    Parameters
    ----------
    expansions : sequence of ChebyshevExpansion
        Pieces ordered by increasing x with
        ``expansions[i].xmax == expansions[i + 1].xmin``.

    Raises
    ------
    InvalidCoefficients
        If *expansions* is empty.
    InvalidDomain
        If consecutive pieces are not contiguous.

    Examples
    --------
    >>> import math
    >>> from pychebtools import ChebyshevCollection, dyadic_splitting
    >>> coll = ChebyshevCollection(dyadic_splitting(12, math.sin, 0, 10, 6, 1e-13))
    >>> abs(coll(2.5) - math.sin(2.5)) < 1e-12
    True
    """

    def __init__(self, expansions: Sequence[ChebyshevExpansion]):
        exps = list(expansions)
        if len(exps) == 0:
            raise InvalidCoefficients("A collection needs at least one expansion")
        for i in range(len(exps) - 1):
            if exps[i].xmax != exps[i + 1].xmin:
                raise InvalidDomain(
                    f"Expansions {i} and {i + 1} are not contiguous: "
                    f"xmax={exps[i].xmax} vs xmin={exps[i + 1].xmin}"
                )
        self._exps = exps
        self._xmins = np.array([e.xmin for e in exps])
        self._xmaxs = np.array([e.xmax for e in exps])
        self._hint = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def expansions(self) -> List[ChebyshevExpansion]:
        return list(self._exps)

    @property
    def xmin(self) -> float:
        return float(self._xmins[0])

    @property
    def xmax(self) -> float:
        return float(self._xmaxs[-1])

    @property
    def hint(self) -> int:
        """Index of the most recently resolved piece."""
        return self._hint

    def __len__(self) -> int:
        return len(self._exps)

    def __iter__(self) -> Iterator[ChebyshevExpansion]:
        return iter(self._exps)

    def __getitem__(self, i: int) -> ChebyshevExpansion:
        return self._exps[i]

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def _owns(self, i: int, x: float) -> bool:
        return (i == 0 or self._xmins[i] < x) and x <= self._xmaxs[i]

    def get_index(self, x: float) -> int:
        """Index of the piece containing *x*.

        The cached hint and its two neighbours are tried first; otherwise a
        binary search over the piece boundaries is done.  The hint is
        updated to the result.

        Raises
        ------
        OutOfDomain
            If *x* is outside ``[xmin, xmax]`` of the collection.
        """
        x = float(x)
        if not (self._xmins[0] <= x <= self._xmaxs[-1]):
            raise OutOfDomain(
                f"x={x} is outside the collection domain [{self.xmin}, {self.xmax}]"
            )
        n = len(self._exps)
        hint = self._hint
        for i in (hint, hint - 1, hint + 1):
            if 0 <= i < n and self._owns(i, x):
                self._hint = i
                return i
        i = int(np.searchsorted(self._xmaxs, x, side="left"))
        self._hint = i
        return i

    def _indices(self, x: np.ndarray) -> np.ndarray:
        if np.any(~((x >= self._xmins[0]) & (x <= self._xmaxs[-1]))):
            raise OutOfDomain(
                f"Some points are outside the collection domain [{self.xmin}, {self.xmax}]"
            )
        return np.searchsorted(self._xmaxs, x, side="left")

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def __call__(self, x):
        """Evaluate at a scalar or an array of points.

        Array queries are routed in one vectorized search and evaluated
        piece by piece.
        """
        if np.ndim(x) == 0:
            return self._exps[self.get_index(x)].y_Clenshaw(float(x))
        x = np.asarray(x, dtype=float)
        flat = x.ravel()
        idx = self._indices(flat)
        out = np.empty(flat.size)
        for i in np.unique(idx):
            mask = idx == i
            out[mask] = self._exps[i].y_Clenshaw(flat[mask])
        return out.reshape(x.shape)

    def integrate(self, xmin: Optional[float] = None,
                  xmax: Optional[float] = None) -> float:
        """Definite integral over ``[xmin, xmax]`` (default: the whole domain).

        Each overlapping piece contributes ``F(b) - F(a)`` of its own
        antiderivative F, so the integration constants cancel.

        Raises
        ------
        OutOfDomain
            If a bound is outside the collection domain.
        """
        a = self.xmin if xmin is None else float(xmin)
        b = self.xmax if xmax is None else float(xmax)
        for bound in (a, b):
            if not (self.xmin <= bound <= self.xmax):
                raise OutOfDomain(
                    f"Integration bound {bound} outside [{self.xmin}, {self.xmax}]"
                )
        if a > b:
            return -self.integrate(b, a)
        total = 0.0
        for e in self._exps:
            lo, hi = max(a, e.xmin), min(b, e.xmax)
            if lo >= hi:
                continue
            F = e.integrate()
            total += F.y_Clenshaw(hi) - F.y_Clenshaw(lo)
        return total

    # ------------------------------------------------------------------
    # Roots and inversion
    # ------------------------------------------------------------------

    def _merged_roots(self, expansions: Iterable[ChebyshevExpansion]) -> np.ndarray:
        """Sorted union of the real roots of *expansions*, one per boundary.

        Each expansion accepts roots up to ``_ROOT_RTOL * (xmax - xmin)``
        outside its own interval and clips them back in, so a root on a
        shared boundary is found even when rounding pushes it out of both
        neighbours.  Roots closer together than the collection tolerance
        are reported once.
        """
        found = []
        for e in expansions:
            tol = _ROOT_RTOL * (e.xmax - e.xmin)
            r = e.real_roots(only_in_domain=False)
            r = r[(r >= e.xmin - tol) & (r <= e.xmax + tol)]
            found.append(np.clip(r, e.xmin, e.xmax))
        if not found:
            return np.array([], dtype=float)
        roots = np.sort(np.concatenate(found))
        if roots.size > 1:
            tol = _ROOT_RTOL * (self.xmax - self.xmin)
            roots = roots[np.concatenate([[True], np.diff(roots) > tol])]
        return roots

    def real_roots(self) -> np.ndarray:
        """Sorted real roots of the piecewise function."""
        return self._merged_roots(self._exps)

    def get_extrema(self) -> np.ndarray:
        """Sorted stationary points: roots of each piece's derivative.

        Pieces of degree below 2 (after dropping zero leading coefficients)
        have no stationary points and are skipped.
        """
        return self._merged_roots(
            e.deriv(1) for e in self._exps
            if _trim_trailing_zeros(e.coef()).size >= 3
        )

    def solve_for_x(self, y: float, a: Optional[float] = None,
                    b: Optional[float] = None) -> float:
        """Solve ``self(x) = y`` for x in ``[a, b]`` with Brent's method.

        Raises
        ------
        ValueError
            If ``self(a) - y`` and ``self(b) - y`` have the same sign.
        """
        a = self.xmin if a is None else float(a)
        b = self.xmax if b is None else float(b)
        fa, fb = self(a) - y, self(b) - y
        if fa == 0.0:
            return a
        if fb == 0.0:
            return b
        if np.sign(fa) == np.sign(fb):
            raise ValueError(f"y={y} is not bracketed on [{a}, {b}]")
        xtol = np.finfo(float).eps * (b - a)
        return float(brentq(lambda x: self(x) - y, a, b, xtol=xtol))

    def make_inverse(self, N: int, max_depth: int = 0, tol: float = 1e-12,
                     n_tail: int = 3) -> "ChebyshevCollection":
        """Build a collection approximating the inverse function x(y).

        For each piece the y-interval between its end values is covered with
        order-*N* expansions (refined by :func:`dyadic_splitting` up to
        *max_depth*), sampled by solving ``piece(x) = y``.  End values are
        taken from the collection itself, so neighbouring inverse pieces
        share boundaries exactly.

        The collection must be strictly monotonic over its whole domain;
        this is not checked, and a non-monotonic input yields pieces that
        do not tile the y-range.
        """
        edges = np.append(self._xmins, self._xmaxs[-1])
        ys = [self(float(x)) for x in edges]
        pieces: List[ChebyshevExpansion] = []
        for i, e in enumerate(self._exps):
            ylo, yhi = min(ys[i], ys[i + 1]), max(ys[i], ys[i + 1])
            pieces.extend(
                dyadic_splitting(N, e.monotonic_solvex, ylo, yhi,
                                 max_depth, tol, n_tail=n_tail)
            )
        pieces.sort(key=lambda p: p.xmin)
        return ChebyshevCollection(pieces)

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"ChebyshevCollection("
            f"pieces={len(self._exps)}, "
            f"domain=[{self.xmin}, {self.xmax}])"
        )

    def __str__(self) -> str:
        orders = sorted({e.order for e in self._exps})
        lines = [
            f"ChebyshevCollection ({len(self._exps)} pieces)",
            f"  Domain:  [{self.xmin}, {self.xmax}]",
            f"  Orders:  {orders}",
        ]
        return "\n".join(lines)
