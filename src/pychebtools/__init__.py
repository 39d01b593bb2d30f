"""pychebtools: Chebyshev expansions of one-variable functions.

Provides the :class:`ChebyshevExpansion` class for building truncated
Chebyshev series by interpolation at the Chebyshev-Lobatto nodes and for
doing arithmetic, calculus, evaluation and root finding on the coefficients,
the :func:`dyadic_splitting` driver for adaptive piecewise refinement, and
the :class:`ChebyshevCollection` class for evaluating, integrating,
root-finding and inverting a piecewise partition.

Example
-------
>>> import math
>>> from pychebtools import ChebyshevExpansion
>>> ce = ChebyshevExpansion.factory(16, math.cos, 0, 3)
>>> [round(r, 10) for r in ce.real_roots()]
[1.5707963268]
"""

from pychebtools._config import get_num_threads, set_num_threads
from pychebtools._nodes import NodeCache, get_extrema, get_interpolation_matrix
from pychebtools._version import __version__
from pychebtools.collection import ChebyshevCollection
from pychebtools.exceptions import (
    ChebToolsError,
    DegenerateRootQuery,
    InvalidCoefficients,
    InvalidDomain,
    InvalidOrder,
    OutOfDomain,
)
from pychebtools.expansion import ChebyshevExpansion, clenshaw_2d
from pychebtools.refine import dyadic_splitting, tail_error_estimate

__all__ = [
    "ChebyshevExpansion",
    "ChebyshevCollection",
    "dyadic_splitting",
    "tail_error_estimate",
    "clenshaw_2d",
    "NodeCache",
    "get_extrema",
    "get_interpolation_matrix",
    "get_num_threads",
    "set_num_threads",
    "ChebToolsError",
    "InvalidDomain",
    "InvalidCoefficients",
    "InvalidOrder",
    "OutOfDomain",
    "DegenerateRootQuery",
    "__version__",
]
