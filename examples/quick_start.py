"""Quick start example: fit a function piecewise, then integrate, find roots and invert."""

import math

from pychebtools import ChebyshevCollection, ChebyshevExpansion, dyadic_splitting


def f(x):
    """A smooth oscillating function: exp(-x/5) * sin(x)."""
    return math.exp(-x / 5) * math.sin(x)


# Single expansion
ce = ChebyshevExpansion.factory(40, f, 0, 10)
x = 2.3
print(f"Exact:  {f(x):.12f}")
print(f"Approx: {ce(x):.12f}")
print(f"Error:  {abs(ce(x) - f(x)):.2e}")
print(f"Roots:  {ce.real_roots()}")

# Adaptive piecewise fit
coll = ChebyshevCollection(dyadic_splitting(12, f, 0, 10, 8, 1e-13, verbose=True))
print(f"\n{coll}")
print(f"Integral on [0, 10]: {coll.integrate():.12f}")
print(f"Extrema:             {coll.get_extrema()}")

# Inverse of a monotonic function
exp_coll = ChebyshevCollection(dyadic_splitting(10, math.exp, 0, 2, 3, 1e-14))
inv = exp_coll.make_inverse(12, max_depth=4, tol=1e-12)
print(f"\nlog(3) exact:   {math.log(3):.12f}")
print(f"log(3) inverse: {inv(3.0):.12f}")
