"""Runtime configuration for the dense eigen-solver used by root finding.

The companion-matrix eigenvalue problem is solved by LAPACK through NumPy,
which may run on a BLAS thread pool.  The size of that pool is process-wide
state; :class:`RuntimeConfig` holds the value requested by the user and
applies it around each eigen-decomposition with :mod:`threadpoolctl`.
"""

from __future__ import annotations

import contextlib

from threadpoolctl import threadpool_info, threadpool_limits


class RuntimeConfig:
    """Process-wide settings for the linear-algebra backend.

    Parameters
    ----------
    num_threads : int or None, optional
        Number of BLAS threads used for eigen-decompositions.  ``None``
        (default) leaves the platform default untouched.
    """

    def __init__(self, num_threads: int | None = None):
        self._num_threads: int | None = None
        self.num_threads = num_threads

    @property
    def num_threads(self) -> int | None:
        return self._num_threads

    @num_threads.setter
    def num_threads(self, value: int | None) -> None:
        if value is not None:
            if isinstance(value, bool) or int(value) != value or value < 1:
                raise ValueError(f"num_threads must be an int >= 1 or None, got {value!r}")
            value = int(value)
        self._num_threads = value

    def effective_num_threads(self) -> int:
        """Return the configured thread count, or the current BLAS pool size."""
        if self._num_threads is not None:
            return self._num_threads
        blas = [info["num_threads"] for info in threadpool_info()
                if info.get("user_api") == "blas"]
        return max(blas) if blas else 1

    def limits(self):
        """Context manager applying the configured thread count to BLAS."""
        if self._num_threads is None:
            return contextlib.nullcontext()
        return threadpool_limits(limits=self._num_threads, user_api="blas")

    def __repr__(self) -> str:
        return f"RuntimeConfig(num_threads={self._num_threads})"


config = RuntimeConfig()


def get_num_threads() -> int:
    """Return the number of threads used by the eigen-solver."""
    return config.effective_num_threads()


def set_num_threads(n: int | None) -> None:
    """Set the number of threads used by the eigen-solver.

    Passing ``None`` restores the platform default.  Only latency is
    affected, never results.
    """
    config.num_threads = n
