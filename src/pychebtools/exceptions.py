"""Exception and warning types raised by pychebtools."""

from __future__ import annotations


class ChebToolsError(Exception):
    """Base class for all pychebtools errors."""


class InvalidDomain(ChebToolsError, ValueError):
    """Raised when an interval does not satisfy ``xmin < xmax``, or when
    two expansions defined on different intervals are combined."""


class InvalidCoefficients(ChebToolsError, ValueError):
    """Raised when a coefficient vector is empty or not one-dimensional."""


class InvalidOrder(ChebToolsError, ValueError):
    """Raised when an expansion, derivative or integral order is below the
    minimum the operation supports."""


class OutOfDomain(ChebToolsError, ValueError):
    """Raised when a collection is queried outside its overall interval."""


class DegenerateRootQuery(UserWarning):
    """Emitted when roots are requested of a constant (order-0) expansion.

    The query returns an empty root set instead of failing.
    """
