"""One-dimensional Chebyshev expansions on a bounded interval.

A :class:`ChebyshevExpansion` stores the coefficients c_0..c_N of the
truncated series

.. math::

    f(x) \\approx \\sum_{n=0}^{N} c_n T_n(x'), \\qquad
    x' = \\frac{2x - (x_{max} + x_{min})}{x_{max} - x_{min}}

and implements arithmetic, calculus, evaluation and root finding directly on
the coefficient vector.  Interpolants are fitted at the Chebyshev-Lobatto
nodes ``cos(k pi / N)``.

References
----------
- Boyd (2013), "Finding the Zeros of a Univariate Equation: Proxy
  Rootfinders, Chebyshev Interpolation, and the Companion Matrix",
  SIAM Review 55(2):375-396
- Mason & Handscomb (2003), "Chebyshev Polynomials", Chapman & Hall
- Trefethen (2013), "Approximation Theory and Approximation Practice",
  SIAM, Chapters 3 and 18
"""

from __future__ import annotations

import math
import warnings
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np
from numpy.polynomial.chebyshev import chebval2d
from scipy.fft import dct
from scipy.optimize import brentq

from pychebtools._algebra import (
    _check_compatible,
    _chebyshev_product,
    _is_scalar,
    _padded_sum,
)
from pychebtools._calculus import (
    _companion_matrix,
    _deriv_coefficients,
    _integral_coefficients,
    _quadratic_bracket_root,
    _trim_trailing_zeros,
)
from pychebtools._config import config
from pychebtools._jit import clenshaw_jit, recurrence_jit
from pychebtools._nodes import get_extrema, get_interpolation_matrix
from pychebtools.exceptions import (
    DegenerateRootQuery,
    InvalidCoefficients,
    InvalidDomain,
    InvalidOrder,
)

_FIT_METHODS = ("matrix", "dct")


def _check_domain(xmin: float, xmax: float) -> Tuple[float, float]:
    xmin, xmax = float(xmin), float(xmax)
    if not (math.isfinite(xmin) and math.isfinite(xmax)) or not xmin < xmax:
        raise InvalidDomain(
            f"Domain bounds must satisfy xmin < xmax, got [{xmin}, {xmax}]"
        )
    return xmin, xmax


def _check_positive_int(value, name: str, minimum: int = 1) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    if value < minimum:
        raise InvalidOrder(f"{name} must be >= {minimum}, got {value}")
    return int(value)


class ChebyshevExpansion:
    """Truncated Chebyshev series on the interval ``[xmin, xmax]``.

    Expansions behave as values: ``+``, ``-``, ``*`` (by a scalar or another
    expansion on the same domain), unary ``-`` and the calculus methods return
    new objects.  The operators are shorthands for the named methods
    (:meth:`add`, :meth:`subtract`, :meth:`multiply`, :meth:`scale`,
    :meth:`negate`).  Only the ``*_inplace`` methods and ``+=``, ``-=``,
    ``*=``, ``/=`` modify ``self``; they are not safe to call concurrently
    on the same instance.

    Parameters
    ----------
    coefficients : sequence of float
        Chebyshev coefficients c_0..c_N (copied).  Must not be empty.
    xmin, xmax : float, optional
        Interval of the expansion.  Default is [-1, 1].

    Raises
    ------
    InvalidCoefficients
        If *coefficients* is empty or not one-dimensional.
    InvalidDomain
        If ``xmin >= xmax``.

    Examples
    --------
    >>> import math
    >>> from pychebtools import ChebyshevExpansion
    >>> ce = ChebyshevExpansion.factory(20, math.exp, 0, 1)
    >>> round(ce(0.5), 12) == round(math.exp(0.5), 12)
    True
    >>> ChebyshevExpansion([0.0, 1.0]).real_roots()
    array([0.])
    """

    def __init__(self, coefficients: Sequence[float], xmin: float = -1.0,
                 xmax: float = 1.0):
        c = np.array(coefficients, dtype=float)
        if c.ndim != 1 or c.size == 0:
            raise InvalidCoefficients(
                f"Coefficients must be a non-empty 1-D sequence, got shape {c.shape}"
            )
        self._xmin, self._xmax = _check_domain(xmin, xmax)
        self._c = c
        self._recurrence_buffer = np.empty(c.size)

    def _resize(self) -> None:
        if self._recurrence_buffer.size != self._c.size:
            self._recurrence_buffer = np.empty(self._c.size)

    def _new(self, c: np.ndarray) -> "ChebyshevExpansion":
        return ChebyshevExpansion(c, self._xmin, self._xmax)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def xmin(self) -> float:
        return self._xmin

    @property
    def xmax(self) -> float:
        return self._xmax

    @property
    def domain(self) -> Tuple[float, float]:
        return (self._xmin, self._xmax)

    @property
    def order(self) -> int:
        """Order N of the expansion (number of coefficients minus one)."""
        return self._c.size - 1

    def coef(self) -> np.ndarray:
        """Return a read-only view of the coefficient vector."""
        view = self._c.view()
        view.flags.writeable = False
        return view

    def copy(self) -> "ChebyshevExpansion":
        return self._new(self._c)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def factory(cls, N: int, func: Callable[[float], float], xmin: float,
                xmax: float, method: str = "matrix") -> "ChebyshevExpansion":
        """Interpolate *func* at the N+1 Chebyshev-Lobatto nodes of ``[xmin, xmax]``.

        Parameters
        ----------
        N : int
            Order of the expansion (N+1 coefficients), N >= 1.
        func : callable
            Scalar function ``func(x) -> float``.
        xmin, xmax : float
            Interval of the fit.
        method : {'matrix', 'dct'}, optional
            ``'matrix'`` applies the cached O(N^2) interpolation matrix;
            ``'dct'`` uses a type-I discrete cosine transform in
            O(N log N).  Both give the same coefficients to ~1e-14.

        Returns
        -------
        ChebyshevExpansion

        Raises
        ------
        InvalidOrder
            If ``N < 1``.
        InvalidDomain
            If ``xmin >= xmax``.
        """
        N = _check_positive_int(N, "N")
        xmin, xmax = _check_domain(xmin, xmax)
        if method not in _FIT_METHODS:
            raise ValueError(f"method must be one of {_FIT_METHODS}, got {method!r}")
        nodes = get_extrema(N)
        x = ((xmax - xmin) * nodes + (xmax + xmin)) / 2.0
        values = np.array([func(float(xk)) for xk in x], dtype=float)
        return cls.from_values(values, xmin, xmax, method=method)

    @classmethod
    def from_values(cls, values: Sequence[float], xmin: float, xmax: float,
                    method: str = "matrix") -> "ChebyshevExpansion":
        """Build an expansion from function values at the Lobatto nodes.

        ``values[k]`` must be the function value at the k-th node
        ``cos(k pi / N)`` mapped into ``[xmin, xmax]`` (descending order),
        with ``N = len(values) - 1``.

        Raises
        ------
        InvalidOrder
            If fewer than two values are given.
        ValueError
            If *values* contains NaN or Inf, or *method* is unknown.
        """
        f = np.asarray(values, dtype=float)
        if f.ndim != 1 or f.size < 2:
            raise InvalidOrder(
                f"Need at least 2 node values (order >= 1), got shape {f.shape}"
            )
        if not np.all(np.isfinite(f)):
            raise ValueError("Node values contain NaN or Inf")
        N = f.size - 1
        if method == "matrix":
            c = get_interpolation_matrix(N) @ f
        elif method == "dct":
            # DCT-I: y_j = f_0 + (-1)^j f_N + 2 sum_k f_k cos(pi j k / N)
            c = dct(f, type=1) / N
            c[0] /= 2.0
            c[-1] /= 2.0
        else:
            raise ValueError(f"method must be one of {_FIT_METHODS}, got {method!r}")
        return cls(c, xmin, xmax)

    @classmethod
    def from_powxn(cls, n: int, xmin: float, xmax: float) -> "ChebyshevExpansion":
        """Exact Chebyshev expansion of the monomial ``x**n`` on ``[xmin, xmax]``.

        With ``x = m + h t`` (t in [-1, 1]) the monomial expands binomially,
        and each ``t**k`` uses the identity

        .. math::

            t^k = 2^{1-k} \\sum_{j=0}^{\\lfloor k/2 \\rfloor}
                  \\binom{k}{j} T_{k-2j}(t)

        with the T_0 term halved.
        """
        n = _check_positive_int(n, "n", minimum=0)
        xmin, xmax = _check_domain(xmin, xmax)
        m, h = (xmax + xmin) / 2.0, (xmax - xmin) / 2.0
        c = np.zeros(n + 1)
        for k in range(n + 1):
            weight = math.comb(n, k) * m ** (n - k) * h ** k
            if weight == 0.0:
                continue
            scale = 2.0 ** (1 - k)
            for j in range(k // 2 + 1):
                term = math.comb(k, j) * scale
                if k - 2 * j == 0:
                    term /= 2.0
                c[k - 2 * j] += weight * term
        return cls(c, xmin, xmax)

    @classmethod
    def from_polynomial(cls, coeffs: Sequence[float], xmin: float,
                        xmax: float) -> "ChebyshevExpansion":
        """Convert ``sum coeffs[i] * x**i`` to a Chebyshev expansion on ``[xmin, xmax]``."""
        s = cls([0.0], xmin, xmax)
        for i, ci in enumerate(np.asarray(coeffs, dtype=float)):
            s += float(ci) * cls.from_powxn(i, xmin, xmax)
        return s

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def get_nodes_n11(self) -> np.ndarray:
        """Chebyshev-Lobatto nodes in [-1, 1] for this expansion's order."""
        return get_extrema(self.order)

    def get_nodes_realworld(self) -> np.ndarray:
        """Chebyshev-Lobatto nodes mapped into ``[xmin, xmax]``."""
        nodes = self.get_nodes_n11()
        return ((self._xmax - self._xmin) * nodes + (self._xmax + self._xmin)) / 2.0

    def get_node_function_values(self) -> np.ndarray:
        """Values of the expansion at its own Lobatto nodes."""
        return self.y_Clenshaw_xscaled(self.get_nodes_n11())

    # ------------------------------------------------------------------
    # Evaluation
    # ------------------------------------------------------------------

    def _xscale(self, x):
        return (2.0 * x - (self._xmax + self._xmin)) / (self._xmax - self._xmin)

    def y_recurrence(self, x):
        """Evaluate with the forward three-term recurrence.

        Accepts a scalar or an array.  Less stable than :meth:`y_Clenshaw`
        for high orders.  Points outside ``[xmin, xmax]`` are extrapolated
        without any accuracy guarantee.
        """
        if np.ndim(x) == 0:
            return float(recurrence_jit(self._c, self._xscale(float(x)),
                                        self._recurrence_buffer))
        return self.y_recurrence_xscaled(self._xscale(np.asarray(x, dtype=float)))

    def y_recurrence_xscaled(self, xscaled) -> np.ndarray:
        """Vectorized recurrence evaluation at points already scaled to [-1, 1]."""
        xs = np.asarray(xscaled, dtype=float)
        flat = xs.ravel()
        N = self.order
        A = np.empty((flat.size, N + 1))
        A[:, 0] = 1.0
        if N >= 1:
            A[:, 1] = flat
        for n in range(1, N):
            A[:, n + 1] = 2.0 * flat * A[:, n] - A[:, n - 1]
        return (A @ self._c).reshape(xs.shape)

    def y_Clenshaw(self, x):
        """Evaluate with the Clenshaw backward recurrence (scalar or array)."""
        if np.ndim(x) == 0:
            return float(clenshaw_jit(self._c, self._xscale(float(x))))
        return self.y_Clenshaw_xscaled(self._xscale(np.asarray(x, dtype=float)))

    def y_Clenshaw_xscaled(self, xscaled) -> np.ndarray:
        """Vectorized Clenshaw evaluation at points already scaled to [-1, 1]."""
        xs = np.asarray(xscaled, dtype=float)
        c = self._c
        u_kp1 = np.zeros_like(xs)
        u_kp2 = np.zeros_like(xs)
        for k in range(self.order, 0, -1):
            u_k = 2.0 * xs * u_kp1 - u_kp2 + c[k]
            u_kp2 = u_kp1
            u_kp1 = u_k
        return c[0] + xs * u_kp1 - u_kp2

    def y(self, x):
        """Evaluate the expansion at a scalar or array of points (Clenshaw)."""
        return self.y_Clenshaw(x)

    def __call__(self, x):
        return self.y_Clenshaw(x)

    # ------------------------------------------------------------------
    # Calculus
    # ------------------------------------------------------------------

    def deriv(self, k: int = 1) -> "ChebyshevExpansion":
        """Return the k-th derivative.

        Each differentiation removes one coefficient; the derivative of a
        constant is the zero expansion ``[0.0]``.

        Raises
        ------
        InvalidOrder
            If ``k < 1``.
        """
        k = _check_positive_int(k, "Derivative order")
        scale = 2.0 / (self._xmax - self._xmin)
        c = self._c
        for _ in range(k):
            c = _deriv_coefficients(c) * scale
        return self._new(c)

    def integrate(self, k: int = 1) -> "ChebyshevExpansion":
        """Return the k-th antiderivative.

        Each integration adds one coefficient.  The constant of
        integration is fixed by setting the T_0 coefficient of the result
        to zero, so the antiderivative is *not* zero at ``xmin`` in general;
        definite integrals are obtained as ``F(b) - F(a)``.

        Raises
        ------
        InvalidOrder
            If ``k < 1``.
        """
        k = _check_positive_int(k, "Integral order")
        scale = (self._xmax - self._xmin) / 2.0
        c = self._c
        for _ in range(k):
            c = _integral_coefficients(c) * scale
        return self._new(c)

    def apply(self, func: Callable[[np.ndarray], np.ndarray]) -> "ChebyshevExpansion":
        """Compose a function with the expansion: ``x -> func(self(x))``.

        *func* receives the array of node values and must return an array
        of the same shape (e.g. ``numpy.sin``).  The result is refitted at
        the same order, so its accuracy is limited by that order.
        """
        if self.order == 0:
            value = np.asarray(func(self._c.copy()), dtype=float)
            return self._new(value.reshape(1))
        values = np.asarray(func(self.get_node_function_values()), dtype=float)
        if values.shape != (self.order + 1,):
            raise ValueError(
                f"func must return an array of shape {(self.order + 1,)}, "
                f"got {values.shape}"
            )
        return ChebyshevExpansion.from_values(values, self._xmin, self._xmax)

    def reciprocal(self) -> "ChebyshevExpansion":
        """Expansion of ``1 / self`` at the same order (via :meth:`apply`)."""
        return self.apply(lambda y: 1.0 / y)

    # ------------------------------------------------------------------
    # Roots
    # ------------------------------------------------------------------

    def companion_matrix(self) -> np.ndarray:
        """Chebyshev companion matrix (Boyd 2013, Appendix A.2).

        Exactly-zero leading coefficients are dropped first, so the matrix
        is ``d x d`` where d is the effective degree.

        Raises
        ------
        InvalidOrder
            If the effective degree is 0 (a constant has no companion matrix).
        """
        c = _trim_trailing_zeros(self._c)
        if c.size < 2:
            raise InvalidOrder("A constant expansion has no companion matrix")
        return _companion_matrix(c)

    def real_roots(self, only_in_domain: bool = True) -> np.ndarray:
        """Real roots from the eigenvalues of the companion matrix.

        An eigenvalue is accepted when its imaginary part is below
        ``10 * eps``.  The eigen-decomposition costs O(N^3) and becomes
        less reliable as the order grows; multiple roots may be reported
        as complex pairs and dropped.

        Parameters
        ----------
        only_in_domain : bool, optional
            If True (default), discard roots outside ``[xmin, xmax]``.

        Returns
        -------
        ndarray
            Sorted real roots.  Empty for a constant expansion, in which
            case a :class:`DegenerateRootQuery` warning is emitted.
        """
        c = _trim_trailing_zeros(self._c)
        if c.size < 2:
            warnings.warn(
                "Root query on a constant expansion; returning no roots.",
                DegenerateRootQuery,
                stacklevel=2,
            )
            return np.array([], dtype=float)

        with config.limits():
            eigvals = np.linalg.eigvals(_companion_matrix(c))

        eps = np.finfo(float).eps
        t = eigvals.real[np.abs(eigvals.imag) < 10 * eps]
        x = ((self._xmax - self._xmin) * t + (self._xmax + self._xmin)) / 2.0
        if only_in_domain:
            x = x[(x >= self._xmin) & (x <= self._xmax)]
        return np.sort(x)

    def real_roots_approx(self, M: int) -> List[Optional[float]]:
        """Approximate roots from sign changes on M+1 Chebyshev-spaced samples.

        For each sign change between consecutive samples a parabola is fitted
        through the bracketing pair and one neighbouring sample, and its root
        inside the bracket is returned.  When neither or both roots of the
        parabola lie in the bracket, the entry is ``None`` (no reliable root).
        Roots between samples of equal sign are missed.

        Parameters
        ----------
        M : int
            Number of sample intervals, M >= 2.

        Returns
        -------
        list of float or None
            One entry per sign change, in order of decreasing x.
        """
        M = _check_positive_int(M, "M", minimum=2)
        t = np.cos(np.pi * np.arange(M + 1) / M)
        y = self.y_Clenshaw_xscaled(t)
        roots: List[Optional[float]] = []
        for i in range(M):
            if np.signbit(y[i]) == np.signbit(y[i + 1]):
                continue
            i0 = i - 1 if i >= 1 else i
            r = _quadratic_bracket_root(t[i0:i0 + 3], y[i0:i0 + 3], t[i], t[i + 1])
            if r is None:
                roots.append(None)
            else:
                roots.append(((self._xmax - self._xmin) * r + (self._xmax + self._xmin)) / 2.0)
        return roots

    @staticmethod
    def real_roots_intervals(segments: Sequence["ChebyshevExpansion"],
                             only_in_domain: bool = True) -> np.ndarray:
        """Concatenate :meth:`real_roots` over a sequence of expansions."""
        roots = [seg.real_roots(only_in_domain) for seg in segments]
        if not roots:
            return np.array([], dtype=float)
        return np.concatenate(roots)

    def is_monotonic(self) -> bool:
        """True if the first derivative does not change sign in the domain.

        The in-domain real roots of the derivative split the domain into
        sub-intervals; the expansion is monotonic when the derivative has
        the same sign on all of them.  Roots of even multiplicity (e.g. the
        stationary point of x**3 at 0) therefore do not count.
        """
        d = self.deriv(1)
        if _trim_trailing_zeros(d._c).size < 2:
            return True
        roots = d.real_roots(only_in_domain=True)
        edges = np.concatenate([[self._xmin], roots, [self._xmax]])
        signs = np.sign(d.y_Clenshaw(0.5 * (edges[:-1] + edges[1:])))
        signs = signs[signs != 0]
        return bool(np.all(signs > 0) or np.all(signs < 0))

    def monotonic_solvex(self, y: float, boundsytol: float = 1e-12) -> float:
        """Solve ``self(x) = y`` for x on a monotonic expansion.

        Endpoints are returned directly when ``|self(end) - y|`` is within
        ``boundsytol * max(1, |y|)``; otherwise the root is bracketed by the
        domain and found with :func:`scipy.optimize.brentq`.

        Raises
        ------
        ValueError
            If *y* is not bracketed by the values at the domain ends.
        """
        fa = self.y_Clenshaw(self._xmin) - y
        fb = self.y_Clenshaw(self._xmax) - y
        ytol = boundsytol * max(1.0, abs(y))
        if abs(fa) <= ytol:
            return self._xmin
        if abs(fb) <= ytol:
            return self._xmax
        if np.sign(fa) == np.sign(fb):
            raise ValueError(
                f"y={y} is not bracketed on [{self._xmin}, {self._xmax}]"
            )
        xtol = np.finfo(float).eps * (self._xmax - self._xmin)
        return float(brentq(lambda x: self.y_Clenshaw(x) - y,
                            self._xmin, self._xmax, xtol=xtol))

    def subdivide(self, n_intervals: int, N: int) -> List["ChebyshevExpansion"]:
        """Refit this expansion on *n_intervals* equal sub-intervals at order *N*."""
        n_intervals = _check_positive_int(n_intervals, "n_intervals")
        edges = np.linspace(self._xmin, self._xmax, n_intervals + 1)
        edges[-1] = self._xmax
        return [
            ChebyshevExpansion.factory(N, self.y_Clenshaw, edges[i], edges[i + 1])
            for i in range(n_intervals)
        ]

    # ------------------------------------------------------------------
    # Arithmetic
    # ------------------------------------------------------------------

    def _combinable(self, other) -> bool:
        return isinstance(other, ChebyshevExpansion) or _is_scalar(other)

    def _require(self, other, allow_expansion: bool = True) -> None:
        if _is_scalar(other):
            return
        if allow_expansion and isinstance(other, ChebyshevExpansion):
            _check_compatible(self, other)
            return
        kind = "an expansion or a scalar" if allow_expansion else "a scalar"
        raise TypeError(f"Operand must be {kind}, got {type(other).__name__}")

    def add(self, other) -> "ChebyshevExpansion":
        """Return ``self + other``.

        *other* is an expansion on the same domain (the shorter coefficient
        vector is padded with zeros) or a scalar (added to c_0).

        Raises
        ------
        InvalidDomain
            If *other* is an expansion on a different domain.
        TypeError
            If *other* is neither an expansion nor a scalar.
        """
        self._require(other)
        if _is_scalar(other):
            c = self._c.copy()
            c[0] += float(other)
            return self._new(c)
        return self._new(_padded_sum(self._c, other._c))

    def subtract(self, other) -> "ChebyshevExpansion":
        """Return ``self - other``; see :meth:`add`."""
        self._require(other)
        if _is_scalar(other):
            return self.add(-float(other))
        return self._new(_padded_sum(self._c, other._c, sign=-1.0))

    def multiply(self, other) -> "ChebyshevExpansion":
        """Return ``self * other``.

        A scalar scales every coefficient.  The product of two expansions
        has ``len(a) + len(b) - 1`` coefficients and does not depend on
        operand order, bit for bit.
        """
        self._require(other)
        if _is_scalar(other):
            return self.scale(other)
        return self._new(_chebyshev_product(self._c, other._c))

    def scale(self, k: float) -> "ChebyshevExpansion":
        self._require(k, allow_expansion=False)
        return self._new(self._c * float(k))

    def negate(self) -> "ChebyshevExpansion":
        return self.scale(-1.0)

    def add_inplace(self, other) -> "ChebyshevExpansion":
        """In-place :meth:`add`; the coefficient vector grows if needed."""
        self._require(other)
        if _is_scalar(other):
            self._c = self._c.copy()
            self._c[0] += float(other)
        else:
            self._c = _padded_sum(self._c, other._c)
        self._resize()
        return self

    def subtract_inplace(self, other) -> "ChebyshevExpansion":
        """In-place :meth:`subtract`."""
        self._require(other)
        if _is_scalar(other):
            return self.add_inplace(-float(other))
        self._c = _padded_sum(self._c, other._c, sign=-1.0)
        self._resize()
        return self

    def scale_inplace(self, k: float) -> "ChebyshevExpansion":
        self._require(k, allow_expansion=False)
        self._c = self._c * float(k)
        return self

    def __add__(self, other):
        if not self._combinable(other):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other):
        if not self._combinable(other):
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.negate().add(other)

    def __mul__(self, other):
        if not self._combinable(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        if not _is_scalar(other):
            return NotImplemented
        return self.scale(other)

    def __truediv__(self, scalar):
        if not _is_scalar(scalar):
            return NotImplemented
        return self.scale(1.0 / float(scalar))

    def __neg__(self):
        return self.negate()

    def __iadd__(self, other):
        if not self._combinable(other):
            return NotImplemented
        return self.add_inplace(other)

    def __isub__(self, other):
        if not self._combinable(other):
            return NotImplemented
        return self.subtract_inplace(other)

    def __imul__(self, scalar):
        if not _is_scalar(scalar):
            return NotImplemented
        return self.scale_inplace(scalar)

    def __itruediv__(self, scalar):
        if not _is_scalar(scalar):
            return NotImplemented
        return self.scale_inplace(1.0 / float(scalar))

    def _times_x_coefficients(self) -> np.ndarray:
        # t T_0 = T_1 and t T_n = (T_{n+1} + T_{n-1}) / 2 for n >= 1
        c = self._c
        N = self.order
        d = np.zeros(N + 2)
        d[1] += c[0]
        d[2:] += 0.5 * c[1:]
        d[:N] += 0.5 * c[1:]
        # x = m + h t on [xmin, xmax]
        m, h = (self._xmax + self._xmin) / 2.0, (self._xmax - self._xmin) / 2.0
        d *= h
        d[:N + 1] += m * c
        return d

    def times_x(self) -> "ChebyshevExpansion":
        """Return ``x * self`` in O(N), one order higher."""
        return self._new(self._times_x_coefficients())

    def times_x_inplace(self) -> "ChebyshevExpansion":
        """Multiply ``self`` by x in place and return it."""
        self._c = self._times_x_coefficients()
        self._resize()
        return self

    # ------------------------------------------------------------------
    # Printing
    # ------------------------------------------------------------------

    def __repr__(self) -> str:
        return (
            f"ChebyshevExpansion("
            f"order={self.order}, "
            f"domain=[{self._xmin}, {self._xmax}])"
        )

    def __str__(self) -> str:
        max_display = 6
        if self._c.size > max_display:
            coef_str = (
                "[" + ", ".join(f"{v:.6g}" for v in self._c[:max_display])
                + ", ...]"
            )
        else:
            coef_str = "[" + ", ".join(f"{v:.6g}" for v in self._c) + "]"
        lines = [
            f"ChebyshevExpansion (order {self.order})",
            f"  Domain:       [{self._xmin}, {self._xmax}]",
            f"  Coefficients: {coef_str}",
            f"  Tail |c_N|:   {abs(self._c[-1]):.2e}",
        ]
        return "\n".join(lines)


def clenshaw_2d(a, x: float, y: float) -> float:
    """Evaluate ``sum a[i, j] T_i(x) T_j(y)`` on the reference square [-1, 1]^2.

    Convenience wrapper for tensor-product coefficient arrays; the library
    does not otherwise model multivariate expansions.
    """
    a = np.asarray(a, dtype=float)
    if a.ndim != 2 or a.size == 0:
        raise InvalidCoefficients(
            f"Expected a non-empty 2-D coefficient array, got shape {a.shape}"
        )
    return float(chebval2d(x, y, a))
