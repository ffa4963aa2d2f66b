"""Ordered numeric kernels shared by the matrix and vector containers."""

import numpy as np

__all__ = [
    "fold",
    "matmul_stripe",
    "population_std",
]


def fold(values, reducer, identity):
    """Reduce ``values`` strictly left to right, starting from ``identity``.

    ``ufunc.accumulate`` evaluates each partial result from the previous one,
    so the order of floating-point operations is fixed, unlike ``np.sum``
    which uses pairwise summation.

    Parameters
    ----------
    values : ndarray
        One-dimensional float64 array.
    reducer : numpy.ufunc
        Binary ufunc combining the accumulator and the next element, e.g.
        ``np.add`` or ``np.multiply``.
    identity : float
        Starting accumulator.

    Returns
    -------
    float
        The folded value; ``identity`` when ``values`` is empty.
    """
    if values.size == 0:
        return float(identity)
    seeded = np.concatenate((np.array([identity], dtype=np.float64), values))
    return float(reducer.accumulate(seeded)[-1])


def population_std(values):
    """Population standard deviation of a non-empty 1-D array.

    Parameters
    ----------
    values : ndarray
        One-dimensional float64 array with at least one element.

    Returns
    -------
    float
        Square root of the mean squared deviation from the mean.
    """
    n = values.size
    mean = fold(values, np.add, 0.0) / n
    deviations = values - mean
    return float(np.sqrt(fold(deviations * deviations, np.add, 0.0) / n))


def matmul_stripe(a, b, out, start, stop):
    """Accumulate rows ``[start, stop)`` of ``a @ b`` into ``out``.

    For every ``(i, j)`` in the stripe the result is
    ``((0.0 + a[i, 0] * b[0, j]) + a[i, 1] * b[1, j]) + ...``, i.e. the inner
    index runs in ascending order from a zero accumulator. Stripes write to
    disjoint rows of ``out``, so they may run concurrently.

    Parameters
    ----------
    a : ndarray of shape (n, k)
        Left operand.
    b : ndarray of shape (k, m)
        Right operand.
    out : ndarray of shape (n, m)
        Zero-initialised destination.
    start, stop : int
        Half-open row range of ``a`` (and ``out``) handled by this call.
    """
    a_rows = a[start:stop]
    out_rows = out[start:stop]
    for k in range(a.shape[1]):
        out_rows += a_rows[:, k, np.newaxis] * b[k]
