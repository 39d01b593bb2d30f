"""Shared helpers for Chebyshev arithmetic operators."""

from __future__ import annotations

import numpy as np

from pychebtools.exceptions import InvalidDomain


def _is_scalar(value) -> bool:
    """Return True if *value* is a real numeric scalar (int, float, or numpy scalar)."""
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float, np.integer, np.floating))


def _check_compatible(a, b) -> None:
    """Validate that two expansions can be combined coefficient-wise.

    Both operands must be the same type and live on the same domain;
    coefficient counts may differ.
    """
    if type(a) is not type(b):
        raise TypeError(
            f"Cannot combine {type(a).__name__} with {type(b).__name__}; "
            f"operands must be the same type."
        )
    if a.domain != b.domain:
        raise InvalidDomain(
            f"Domain mismatch: {a.domain} vs {b.domain}"
        )


def _padded_sum(c1: np.ndarray, c2: np.ndarray, sign: float = 1.0) -> np.ndarray:
    """Return ``c1 + sign * c2`` after padding the shorter with trailing zeros."""
    n = max(len(c1), len(c2))
    out = np.zeros(n)
    out[:len(c1)] += c1
    out[:len(c2)] += sign * c2
    return out


def _chebyshev_product(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    """Multiply two Chebyshev series using ``T_m T_n = (T_{m+n} + T_{|m-n|}) / 2``.

    The operands are put in a canonical order first (longer first, then
    lexicographic), so ``product(a, b)`` and ``product(b, a)`` run the same
    floating-point operations and agree bit for bit.
    """
    if (len(a), tuple(a)) < (len(b), tuple(b)):
        a, b = b, a
    outer = np.outer(a, b).ravel()
    m, n = np.indices((len(a), len(b)))
    size = len(a) + len(b) - 1
    upper = np.bincount((m + n).ravel(), weights=outer, minlength=size)
    lower = np.bincount(np.abs(m - n).ravel(), weights=outer, minlength=size)
    return 0.5 * (upper + lower)
