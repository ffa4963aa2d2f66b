"""Thread-pool execution utilities for row-partitioned kernels."""

from __future__ import annotations

import contextvars
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed

from flatmat.core.config import resolve_n_jobs

log = logging.getLogger("flatmat.core.parallel")

__all__ = ["parallel_map", "row_stripes"]


def parallel_map(func, args_list, n_jobs=1):
    """Execute ``func(*args)`` for each args in ``args_list``, optionally in parallel.

    Threads are used rather than processes: the kernels run here are NumPy
    loops that release the GIL and write into a buffer shared with the caller,
    which a subprocess could not do.

    ``ContextVar`` values (e.g. the worker count set by
    :func:`~flatmat.core.config.use_n_jobs`) are propagated to each worker
    thread via :func:`contextvars.copy_context`.

    Parameters
    ----------
    func : callable
        Function to call for each set of arguments.
    args_list : list of tuples
        Arguments for each call.
    n_jobs : int or None
        1 = sequential (default), -1 = all cores, >1 = that many workers,
        None = the configured default.

    Returns
    -------
    list
        Results in the same order as args_list. The call returns only after
        every task has finished; the first task error is re-raised.
    """
    max_workers = resolve_n_jobs(n_jobs)
    if max_workers == 1 or len(args_list) <= 1:
        return [func(*args) for args in args_list]

    max_workers = min(max_workers, len(args_list))
    log.debug("Dispatching %d tasks to %d worker threads", len(args_list), max_workers)
    results = [None] * len(args_list)

    # Each task gets its own snapshot so Context.run() is never called
    # concurrently on the same object.
    contexts = [contextvars.copy_context() for _ in args_list]

    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="flatmat") as executor:
        future_to_idx = {
            executor.submit(ctx.run, func, *args): i
            for i, (ctx, args) in enumerate(zip(contexts, args_list, strict=True))
        }
        for future in as_completed(future_to_idx):
            idx = future_to_idx[future]
            results[idx] = future.result()
    return results


def row_stripes(n_rows, n_workers):
    """Split ``range(n_rows)`` into contiguous, near-equal stripes.

    Parameters
    ----------
    n_rows : int
        Number of rows to partition.
    n_workers : int
        Desired number of stripes. Capped at ``n_rows``.

    Returns
    -------
    list of tuple of int
        ``(start, stop)`` half-open bounds, in row order, covering every row
        exactly once. Earlier stripes receive the remainder rows.
    """
    if n_rows <= 0:
        return []
    n_stripes = max(1, min(n_workers, n_rows))
    base, extra = divmod(n_rows, n_stripes)
    stripes = []
    start = 0
    for i in range(n_stripes):
        stop = start + base + (1 if i < extra else 0)
        stripes.append((start, stop))
        start = stop
    return stripes
