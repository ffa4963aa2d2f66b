"""Functions acting on one-dimensional float64 vectors.

Vectors are plain 1-D ``numpy`` arrays. Functions that modify a vector do so
in place when given a float64 ndarray and return it; any other sequence is
first converted to a new array, which is what gets modified and returned.
Functions that change the length (``pop``, ``push``, ``cut`` ...) always
return a new array.
"""

from __future__ import annotations

import builtins
import numbers
import operator

import numpy as np

from flatmat.core.kernels import fold
from flatmat.errors import (
    DivisionByZeroError,
    EmptyInputError,
    IndexOutOfRangeError,
    InvalidDimensionError,
    ShapeMismatchError,
    TypeMismatchError,
)

__all__ = [
    "add",
    "all",
    "any",
    "as_vector",
    "avg",
    "cut",
    "div",
    "dot",
    "equal",
    "foreach",
    "inc",
    "mul",
    "norm",
    "ones",
    "pop",
    "prod",
    "push",
    "set_all",
    "shift",
    "sub",
    "sum",
    "unshift",
    "zeros",
]


def as_vector(v):
    """Return ``v`` as a 1-D float64 array, reusing it when it already is one."""
    if isinstance(v, np.ndarray) and v.dtype == np.float64 and v.ndim == 1:
        return v
    if isinstance(v, str | bytes):
        raise TypeMismatchError(f"Expected a sequence of floats, got {type(v).__name__}.")
    try:
        arr = np.asarray(v, dtype=np.float64)
    except (TypeError, ValueError) as err:
        raise TypeMismatchError("Expected a sequence of floats.") from err
    if arr.ndim != 1:
        raise TypeMismatchError(f"Expected a 1-D sequence, got {arr.ndim} dimensions.")
    return arr


def _length(n):
    n = operator.index(n)
    if n < 0:
        raise InvalidDimensionError(f"Vector length must not be negative, got {n}.")
    return n


def zeros(n):
    """Return a vector of ``n`` zeros."""
    return np.zeros(_length(n), dtype=np.float64)


def ones(n):
    """Return a vector of ``n`` ones."""
    return np.ones(_length(n), dtype=np.float64)


def inc(n):
    """Return ``[0.0, 1.0, ..., n - 1]``."""
    return np.arange(_length(n), dtype=np.float64)


def pop(v):
    """Remove the last element.

    Returns
    -------
    tuple of (float, ndarray)
        The removed element and the shortened vector.
    """
    v = as_vector(v)
    if v.size == 0:
        raise EmptyInputError("Cannot pop from an empty vector.")
    return float(v[-1]), v[:-1].copy()


def shift(v):
    """Remove the first element.

    Returns
    -------
    tuple of (float, ndarray)
        The removed element and the shortened vector.
    """
    v = as_vector(v)
    if v.size == 0:
        raise EmptyInputError("Cannot shift from an empty vector.")
    return float(v[0]), v[1:].copy()


def push(v, x):
    """Return a new vector with ``x`` appended."""
    return np.append(as_vector(v), float(x))


def unshift(v, x):
    """Return a new vector with ``x`` prepended."""
    return np.insert(as_vector(v), 0, float(x))


def cut(v, i, j=None):
    """Drop elements from a vector.

    ``cut(v, i)`` keeps the first ``i`` elements. ``cut(v, i, j)`` removes the
    half-open range ``[i, j)``.

    Raises
    ------
    IndexOutOfRangeError
        If ``i`` is not in ``[0, len(v))``, or, with two indices, ``j > len(v)``
        or ``j <= i``.
    """
    v = as_vector(v)
    i = operator.index(i)
    if not 0 <= i < v.size:
        raise IndexOutOfRangeError(f"Index {i} is outside of bounds [0, {v.size}).")
    if j is None:
        return v[:i].copy()
    j = operator.index(j)
    if j > v.size or j <= i:
        raise IndexOutOfRangeError(f"End index {j} must satisfy {i} < end <= {v.size}.")
    return np.concatenate((v[:i], v[j:]))


def equal(v, w):
    """Whether two vectors have the same length and elements (NaN equals NaN)."""
    v, w = as_vector(v), as_vector(w)
    if v.size != w.size:
        return False
    return bool(np.array_equal(v, w, equal_nan=True))


def set_all(v, value):
    """Set every element to ``value``."""
    v = as_vector(v)
    v.fill(float(value))
    return v


def foreach(v, func):
    """Replace every element ``x`` with ``func(x)``."""
    v = as_vector(v)
    v[:] = np.fromiter((func(x) for x in v.tolist()), dtype=np.float64, count=v.size)
    return v


def all(v, predicate):
    """Whether ``predicate`` holds for every element; True for an empty vector."""
    return builtins.all(predicate(x) for x in as_vector(v).tolist())


def any(v, predicate):
    """Whether ``predicate`` holds for some element; False for an empty vector."""
    return builtins.any(predicate(x) for x in as_vector(v).tolist())


def sum(v):
    """Left-to-right sum of the elements."""
    return fold(as_vector(v), np.add, 0.0)


def prod(v):
    """Left-to-right product of the elements."""
    return fold(as_vector(v), np.multiply, 1.0)


def avg(v):
    """Arithmetic mean of the elements."""
    v = as_vector(v)
    if v.size == 0:
        raise EmptyInputError("Cannot average an empty vector.")
    return fold(v, np.add, 0.0) / v.size


def dot(v, w):
    """Inner product of two equally long vectors."""
    v, w = as_vector(v), as_vector(w)
    if v.size != w.size:
        raise ShapeMismatchError(f"Vectors have lengths {v.size} and {w.size}. They must match.")
    return fold(v * w, np.add, 0.0)


def norm(v):
    """Euclidean norm, the square root of the sum of squares."""
    v = as_vector(v)
    return float(np.sqrt(fold(v * v, np.add, 0.0)))


def _operand(v, rhs, name):
    if isinstance(rhs, numbers.Real):
        return float(rhs)
    w = as_vector(rhs)
    if w.size != v.size:
        raise ShapeMismatchError(f"In {name}, vectors have lengths {v.size} and {w.size}. They must match.")
    return w


def _binary(ufunc, v, rhs, name):
    v = as_vector(v)
    operand = _operand(v, rhs, name)
    if ufunc is np.divide and np.any(np.asarray(operand) == 0.0):
        raise DivisionByZeroError(f"In {name}, one or more elements of the divisor are 0.0.")
    ufunc(v, operand, out=v)
    return v


def add(v, rhs):
    """Add a scalar or an equally long vector element-wise."""
    return _binary(np.add, v, rhs, "add")


def sub(v, rhs):
    """Subtract a scalar or an equally long vector element-wise."""
    return _binary(np.subtract, v, rhs, "sub")


def mul(v, rhs):
    """Multiply by a scalar or an equally long vector element-wise."""
    return _binary(np.multiply, v, rhs, "mul")


def div(v, rhs):
    """Divide by a scalar or an equally long vector element-wise.

    Raises
    ------
    DivisionByZeroError
        If the divisor is, or contains, 0.0. Checked before writing.
    """
    return _binary(np.divide, v, rhs, "div")
