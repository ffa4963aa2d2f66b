"""Context-local configuration for parallel matrix kernels."""

from __future__ import annotations

import contextlib
import os
from contextvars import ContextVar

import numpy as np

__all__ = [
    "get_n_jobs",
    "resolve_n_jobs",
    "set_n_jobs",
    "use_n_jobs",
]

_active_n_jobs: ContextVar[int] = ContextVar("flatmat_n_jobs", default=-1)


def set_n_jobs(n_jobs):
    """Set the default worker count for concurrent kernels.

    Parameters
    ----------
    n_jobs : int
        ``-1`` to use every available CPU, or a positive number of workers.
    """
    _active_n_jobs.set(_validate_n_jobs(n_jobs))


def get_n_jobs():
    """Return the configured default worker count.

    Returns
    -------
    int
        ``-1`` (all CPUs) or a positive worker count.
    """
    return _active_n_jobs.get()


@contextlib.contextmanager
def use_n_jobs(n_jobs):
    """Context manager that temporarily changes the default worker count.

    The previous value is restored when the context exits, even if an
    exception is raised. Worker threads started through
    :func:`~flatmat.core.parallel.parallel_map` inherit the value set here.

    Parameters
    ----------
    n_jobs : int
        ``-1`` to use every available CPU, or a positive number of workers.
    """
    token = _active_n_jobs.set(_validate_n_jobs(n_jobs))
    try:
        yield
    finally:
        _active_n_jobs.reset(token)


def resolve_n_jobs(n_jobs=None):
    """Turn a worker-count request into a concrete positive number.

    Parameters
    ----------
    n_jobs : int or None
        Requested worker count. ``None`` falls back to the configured
        default, ``-1`` expands to the CPU count.

    Returns
    -------
    int
        Number of workers to start, at least 1.
    """
    n_jobs = get_n_jobs() if n_jobs is None else _validate_n_jobs(n_jobs)
    if n_jobs == -1:
        return os.cpu_count() or 1
    return n_jobs


def _validate_n_jobs(n_jobs):
    """Validate a worker count.

    Parameters
    ----------
    n_jobs : int
        Candidate worker count.

    Returns
    -------
    int
        The worker count as a plain ``int``.
    """
    if isinstance(n_jobs, bool) or not isinstance(n_jobs, int | np.integer):
        raise TypeError(f"n_jobs must be an integer, got {type(n_jobs).__name__}.")
    n_jobs = int(n_jobs)
    if n_jobs == 0 or n_jobs < -1:
        raise ValueError(f"n_jobs={n_jobs} is not valid. Must be -1 or a positive integer.")
    return n_jobs
