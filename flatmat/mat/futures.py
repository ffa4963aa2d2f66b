"""Run matrix operations in the background and collect their results later.

Each helper submits one synchronous operation to a shared thread pool and
returns a :class:`concurrent.futures.Future`; ``future.result()`` blocks until
the operation finishes and re-raises its error, if any.
"""

from __future__ import annotations

import contextvars
import threading
from concurrent.futures import Future, ThreadPoolExecutor

__all__ = ["dot_async", "mul_async", "shutdown", "submit", "transpose_async"]

_EXECUTOR: ThreadPoolExecutor | None = None
_LOCK = threading.Lock()


def _executor() -> ThreadPoolExecutor:
    global _EXECUTOR
    with _LOCK:
        if _EXECUTOR is None:
            _EXECUTOR = ThreadPoolExecutor(thread_name_prefix="flatmat-async")
        return _EXECUTOR


def submit(func, *args) -> Future:
    """Run ``func(*args)`` on the background pool.

    The caller's ``ContextVar`` values are visible to ``func``.
    """
    ctx = contextvars.copy_context()
    return _executor().submit(ctx.run, func, *args)


def _times(m, n):
    return m.copy().mul(n)


def transpose_async(m) -> Future:
    """Submit ``m.transpose()``."""
    return submit(m.transpose)


def mul_async(m, n) -> Future:
    """Submit an element-wise product of ``m`` and ``n`` into a new matrix."""
    return submit(_times, m, n)


def dot_async(m, n) -> Future:
    """Submit ``m.dot(n)``."""
    return submit(m.dot, n)


def shutdown(wait=True):
    """Stop the background pool. A later submission starts a new one."""
    global _EXECUTOR
    with _LOCK:
        executor, _EXECUTOR = _EXECUTOR, None
    if executor is not None:
        executor.shutdown(wait=wait)
