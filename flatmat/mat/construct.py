"""Constructors for :class:`~flatmat.mat.matrix.Matrix`."""

from __future__ import annotations

import numbers
from collections.abc import Sequence

import numpy as np

from flatmat.core.dataframe import frame_to_array
from flatmat.errors import InvalidDimensionError, JaggedInputError, TypeMismatchError
from flatmat.mat.matrix import Matrix, _check_dims

__all__ = [
    "from_2d",
    "from_flat",
    "from_frame",
    "identity",
    "inc",
    "ones",
    "rand",
    "zeros",
]


def zeros(rows, cols):
    """Return a ``rows x cols`` matrix of zeros."""
    return Matrix(rows, cols)


def ones(rows, cols):
    """Return a ``rows x cols`` matrix of ones."""
    return Matrix(rows, cols).ones()


def inc(rows, cols):
    """Return a ``rows x cols`` matrix holding ``0.0, 1.0, 2.0, ...`` in row-major order."""
    return Matrix(rows, cols).inc()


def rand(rows, cols, *bounds, random_state=None):
    """Return a ``rows x cols`` matrix of uniform random values.

    See :meth:`Matrix.rand` for the meaning of ``bounds``.
    """
    return Matrix(rows, cols).rand(*bounds, random_state=random_state)


def identity(n):
    """Return the ``n x n`` identity matrix.

    Raises
    ------
    InvalidDimensionError
        If ``n`` is not positive.
    """
    n, _ = _check_dims(n, n)
    vals = np.zeros(n * n, dtype=np.float64)
    vals[:: n + 1] = 1.0
    return Matrix._from_buffer(vals, n, n)


def _float_row(row, label):
    if isinstance(row, str | bytes) or not isinstance(row, Sequence | np.ndarray):
        raise TypeMismatchError(f"Expected {label} to be a sequence of floats, got {type(row).__name__}.")
    if not all(isinstance(x, numbers.Real) for x in row):
        raise TypeMismatchError(f"Every element of {label} must be a real number.")
    return np.asarray(row, dtype=np.float64).reshape(-1)


def from_flat(values):
    """Build a ``1 x n`` matrix from a flat sequence of ``n`` floats.

    Raises
    ------
    InvalidDimensionError
        If ``values`` is empty.
    """
    if isinstance(values, np.ndarray) and values.ndim != 1:
        raise TypeMismatchError(f"Expected a 1-D sequence, got an array with {values.ndim} dimensions.")
    vals = _float_row(values, "values")
    if vals.size == 0:
        raise InvalidDimensionError("Cannot build a matrix from an empty sequence.")
    return Matrix._from_buffer(vals.copy(), 1, vals.size)


def from_2d(rows):
    """Build a matrix from a sequence of equally long rows.

    Parameters
    ----------
    rows : sequence of sequence of float
        Row-of-rows input, e.g. a list of lists or a 2-D ndarray.

    Raises
    ------
    InvalidDimensionError
        If there are no rows or the rows are empty.
    JaggedInputError
        If any row differs in length from the first.
    """
    if isinstance(rows, np.ndarray):
        if rows.ndim != 2:
            raise TypeMismatchError(f"Expected a 2-D array, got {rows.ndim} dimensions.")
        rows = list(rows)
    if isinstance(rows, str | bytes) or not isinstance(rows, Sequence):
        raise TypeMismatchError(f"Expected a sequence of rows, got {type(rows).__name__}.")
    if len(rows) == 0:
        raise InvalidDimensionError("Cannot build a matrix from an empty sequence of rows.")

    converted = [_float_row(row, f"row {i}") for i, row in enumerate(rows)]
    width = converted[0].size
    for i, row in enumerate(converted):
        if row.size != width:
            raise JaggedInputError(f"Row {i} has {row.size} elements but row 0 has {width}.")
    if width == 0:
        raise InvalidDimensionError("Cannot build a matrix from empty rows.")

    vals = np.concatenate(converted)
    return Matrix._from_buffer(vals, len(converted), width)


def from_frame(df):
    """Build a matrix from a DataFrame with numeric columns.

    Parameters
    ----------
    df : DataFrame
        Any object implementing the Arrow PyCapsule Interface
        (``__arrow_c_stream__``), including polars, pandas and pyarrow tables.

    Raises
    ------
    InvalidDimensionError
        If the frame has no rows or no columns.
    TypeError
        If a column is not numeric.
    """
    values = frame_to_array(df)
    n_rows, n_cols = values.shape
    if n_rows == 0 or n_cols == 0:
        raise InvalidDimensionError(f"Cannot build a matrix from a {n_rows}x{n_cols} frame.")
    return Matrix._from_buffer(values.reshape(-1).copy(), n_rows, n_cols)
