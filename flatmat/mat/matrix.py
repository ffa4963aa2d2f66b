"""Dense two-dimensional float64 matrix backed by a flat row-major buffer."""

from __future__ import annotations

import logging
import numbers
import operator
from collections.abc import Mapping
from enum import IntEnum

import numpy as np

from flatmat.core.config import resolve_n_jobs
from flatmat.core.format import format_matrix
from flatmat.core.kernels import fold, matmul_stripe, population_std
from flatmat.core.parallel import parallel_map, row_stripes
from flatmat.errors import (
    DivisionByZeroError,
    IndexOutOfRangeError,
    InvalidAxisError,
    InvalidDimensionError,
    InvalidRangeError,
    ShapeMismatchError,
    TypeMismatchError,
)

log = logging.getLogger("flatmat.mat.matrix")

__all__ = ["Axis", "Matrix"]


class Axis(IntEnum):
    """Axis selector for reductions."""

    ROW = 0
    COLUMN = 1


def _check_dims(rows, cols):
    """Validate a ``(rows, cols)`` pair and return it as plain ints."""
    rows = operator.index(rows)
    cols = operator.index(cols)
    if rows <= 0:
        raise InvalidDimensionError(f"Number of rows must be greater than 0, got {rows}.")
    if cols <= 0:
        raise InvalidDimensionError(f"Number of columns must be greater than 0, got {cols}.")
    return rows, cols


class Matrix:
    """Two-dimensional array of float64 values.

    Values live in one contiguous buffer in row-major order: the element at
    ``(i, j)`` is stored at flat position ``i * cols + j``. Every matrix owns
    its buffer exclusively; constructors, :meth:`copy`, :meth:`transpose` and
    :meth:`dot` always allocate fresh storage.

    Methods documented as *in place* mutate the matrix and return ``self`` so
    calls can be chained. All of their precondition checks run before the
    first write, so a failing call leaves the matrix untouched.

    Parameters
    ----------
    rows : int
        Number of rows, at least 1.
    cols : int
        Number of columns, at least 1.

    Examples
    --------
    >>> m = Matrix(2, 3).inc()
    >>> m.to_2d()
    [[0.0, 1.0, 2.0], [3.0, 4.0, 5.0]]
    >>> m.add([10.0, 20.0, 30.0]).sum(Axis.ROW, -1)
    72.0
    """

    __slots__ = ("_cols", "_rows", "_vals")

    def __init__(self, rows: int, cols: int):
        self._rows, self._cols = _check_dims(rows, cols)
        self._vals = np.zeros(self._rows * self._cols, dtype=np.float64)

    @classmethod
    def _from_buffer(cls, vals: np.ndarray, rows: int, cols: int) -> Matrix:
        """Wrap an already validated flat float64 buffer without copying it."""
        m = cls.__new__(cls)
        m._rows = rows
        m._cols = cols
        m._vals = vals
        return m

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    @property
    def rows(self) -> int:
        """Number of rows."""
        return self._rows

    @property
    def cols(self) -> int:
        """Number of columns."""
        return self._cols

    @property
    def shape(self) -> tuple[int, int]:
        """``(rows, cols)``."""
        return self._rows, self._cols

    @property
    def size(self) -> int:
        """Total number of elements."""
        return self._rows * self._cols

    def dims(self) -> tuple[int, int]:
        """Return ``(rows, cols)``."""
        return self._rows, self._cols

    def _grid(self) -> np.ndarray:
        """2-D view of the buffer. Never handed out."""
        return self._vals.reshape(self._rows, self._cols)

    def reshape(self, rows: int, cols: int) -> Matrix:
        """Change the logical shape in place, keeping values and their order.

        Raises
        ------
        InvalidDimensionError
            If either dimension is not positive.
        ShapeMismatchError
            If ``rows * cols`` differs from the current element count.
        """
        rows, cols = _check_dims(rows, cols)
        if rows * cols != self.size:
            raise ShapeMismatchError(
                f"Cannot reshape {self._rows}x{self._cols} ({self.size} elements) "
                f"into {rows}x{cols} ({rows * cols} elements)."
            )
        self._rows, self._cols = rows, cols
        return self

    def flat(self) -> np.ndarray:
        """Return a copy of the row-major buffer as a 1-D array."""
        return self._vals.copy()

    def to_2d(self) -> list[list[float]]:
        """Return the values as a list of row lists."""
        return self._grid().tolist()

    def to_numpy(self) -> np.ndarray:
        """Return the values as a fresh 2-D array."""
        return self._grid().copy()

    def copy(self) -> Matrix:
        """Return an independent matrix with the same shape and values."""
        return Matrix._from_buffer(self._vals.copy(), self._rows, self._cols)

    def _check_row(self, i, name="row"):
        i = operator.index(i)
        if not 0 <= i < self._rows:
            raise IndexOutOfRangeError(f"Requested {name} {i} is outside of bounds [0, {self._rows}).")
        return i

    def _check_col(self, j, name="column"):
        j = operator.index(j)
        if not 0 <= j < self._cols:
            raise IndexOutOfRangeError(f"Requested {name} {j} is outside of bounds [0, {self._cols}).")
        return j

    def at(self, i: int, j: int) -> float:
        """Return the value at row ``i`` and column ``j``.

        Raises
        ------
        IndexOutOfRangeError
            If ``i`` is not in ``[0, rows)`` or ``j`` is not in ``[0, cols)``.
        """
        i = self._check_row(i)
        j = self._check_col(j)
        return float(self._vals[i * self._cols + j])

    def __getitem__(self, key):
        i, j = key
        return self.at(i, j)

    def row(self, i: int) -> Matrix:
        """Return row ``i`` as a new ``1 x cols`` matrix."""
        i = self._check_row(i)
        start = i * self._cols
        return Matrix._from_buffer(self._vals[start : start + self._cols].copy(), 1, self._cols)

    def col(self, j: int) -> Matrix:
        """Return column ``j`` as a new ``rows x 1`` matrix."""
        j = self._check_col(j)
        return Matrix._from_buffer(self._vals[j :: self._cols].copy(), self._rows, 1)

    def equals(self, other) -> bool:
        """Whether ``other`` is a matrix with the same shape and values.

        NaN compares equal to NaN, so every matrix equals itself and its
        copies.
        """
        if not isinstance(other, Matrix):
            return False
        if self.shape != other.shape:
            return False
        return bool(np.array_equal(self._vals, other._vals, equal_nan=True))

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, cols={self._cols})"

    def __str__(self) -> str:
        return format_matrix(self)

    # ------------------------------------------------------------------
    # Fills
    # ------------------------------------------------------------------

    def ones(self) -> Matrix:
        """Set every element to 1.0 in place."""
        self._vals.fill(1.0)
        return self

    def reset(self) -> Matrix:
        """Set every element to 0.0 in place."""
        self._vals.fill(0.0)
        return self

    def inc(self) -> Matrix:
        """Fill in place with 0.0, 1.0, 2.0, ... in row-major order."""
        self._vals[:] = np.arange(self.size, dtype=np.float64)
        return self

    def set_all(self, value: float) -> Matrix:
        """Set every element to ``value`` in place."""
        self._vals.fill(float(value))
        return self

    def rand(self, *bounds: float, random_state=None) -> Matrix:
        """Fill in place with uniformly distributed random values.

        Parameters
        ----------
        *bounds : float
            No bounds draws from ``[0, 1)``. One bound ``hi`` draws from
            ``[0, hi)``, or ``(hi, 0]`` when ``hi`` is negative. Two bounds
            ``lo, hi`` draw from ``[lo, hi)``.
        random_state : int, Generator or None
            Seed or generator passed to :func:`numpy.random.default_rng`.

        Raises
        ------
        InvalidRangeError
            If two bounds are given and ``lo >= hi``.
        """
        if len(bounds) > 2:
            raise TypeError(f"rand expected at most 2 bounds, got {len(bounds)}.")
        if len(bounds) == 2:
            lo, hi = float(bounds[0]), float(bounds[1])
            if not lo < hi:
                raise InvalidRangeError(f"Lower bound {lo} must be strictly less than upper bound {hi}.")
        elif len(bounds) == 1:
            lo, hi = 0.0, float(bounds[0])
        else:
            lo, hi = 0.0, 1.0

        rng = np.random.default_rng(random_state)
        draws = rng.random(self.size)
        self._vals[:] = draws * (hi - lo) + lo
        return self

    # ------------------------------------------------------------------
    # Element-wise engine
    # ------------------------------------------------------------------

    def map(self, func) -> Matrix:
        """Replace every element ``x`` with ``func(x)`` in place.

        All new values are computed before any is written, so an exception
        raised by ``func`` leaves the matrix unchanged.
        """
        self._vals[:] = np.fromiter((func(x) for x in self._vals.tolist()), dtype=np.float64, count=self.size)
        return self

    def apply(self, func) -> Matrix:
        """Return a new matrix with ``func`` applied to every element."""
        return self.copy().map(func)

    def filter(self, predicate) -> Matrix | None:
        """Collect the elements satisfying ``predicate`` into a ``1 x k`` matrix.

        Elements keep their row-major order. Returns ``None`` when nothing
        matches, because a matrix cannot have zero columns.
        """
        kept = [x for x in self._vals.tolist() if predicate(x)]
        if not kept:
            return None
        return Matrix._from_buffer(np.array(kept, dtype=np.float64), 1, len(kept))

    def all(self, predicate) -> bool:
        """Whether ``predicate`` holds for every element."""
        return all(predicate(x) for x in self._vals.tolist())

    def any(self, predicate) -> bool:
        """Whether ``predicate`` holds for at least one element."""
        return any(predicate(x) for x in self._vals.tolist())

    # ------------------------------------------------------------------
    # Arithmetic and broadcast dispatch
    # ------------------------------------------------------------------

    def _operand(self, rhs, name):
        """Normalise a right-hand side into something that broadcasts over the grid.

        Returns a float for scalars, a ``(cols,)`` array for vectors and a
        ``(rows, cols)`` array for matrices.
        """
        if isinstance(rhs, Matrix):
            if rhs.shape != self.shape:
                raise ShapeMismatchError(
                    f"In {name}, the left matrix is {self._rows}x{self._cols} but the right matrix "
                    f"is {rhs._rows}x{rhs._cols}. They must match."
                )
            return rhs._grid()
        if isinstance(rhs, numbers.Real):
            return float(rhs)
        if isinstance(rhs, str | bytes | Mapping) or not isinstance(rhs, np.ndarray | list | tuple):
            raise TypeMismatchError(
                f"In {name}, expected a scalar, a 1-D vector or a matrix, got {type(rhs).__name__}."
            )
        try:
            arr = np.asarray(rhs, dtype=np.float64)
        except (TypeError, ValueError) as err:
            raise TypeMismatchError(f"In {name}, the right-hand side is not a numeric vector or matrix.") from err

        if arr.ndim == 0:
            return float(arr)
        if arr.ndim == 1:
            if arr.shape[0] != self._cols:
                raise ShapeMismatchError(
                    f"In {name}, the vector has {arr.shape[0]} elements but the matrix has "
                    f"{self._cols} columns. They must match."
                )
            return arr
        if arr.ndim == 2:
            if arr.shape != self.shape:
                raise ShapeMismatchError(
                    f"In {name}, the left matrix is {self._rows}x{self._cols} but the right-hand side "
                    f"is {arr.shape[0]}x{arr.shape[1]}. They must match."
                )
            return arr
        raise TypeMismatchError(f"In {name}, expected at most 2 dimensions, got {arr.ndim}.")

    def _binary(self, ufunc, rhs, name):
        operand = self._operand(rhs, name)
        if ufunc is np.divide and np.any(np.asarray(operand) == 0.0):
            raise DivisionByZeroError(f"In {name}, one or more elements of the divisor are 0.0.")
        grid = self._grid()
        ufunc(grid, operand, out=grid)
        return self

    def add(self, rhs) -> Matrix:
        """Add a scalar, a row-broadcast vector or a same-shape matrix in place."""
        return self._binary(np.add, rhs, "add")

    def sub(self, rhs) -> Matrix:
        """Subtract a scalar, a row-broadcast vector or a same-shape matrix in place."""
        return self._binary(np.subtract, rhs, "sub")

    def mul(self, rhs) -> Matrix:
        """Multiply element-wise by a scalar, a row-broadcast vector or a same-shape matrix in place."""
        return self._binary(np.multiply, rhs, "mul")

    def div(self, rhs) -> Matrix:
        """Divide element-wise by a scalar, a row-broadcast vector or a same-shape matrix in place.

        Raises
        ------
        DivisionByZeroError
            If any divisor element equals 0.0. Checked before writing.
        """
        return self._binary(np.divide, rhs, "div")

    def scale(self, factor: float) -> Matrix:
        """Multiply every element by the scalar ``factor`` in place."""
        if not isinstance(factor, numbers.Real):
            raise TypeMismatchError(f"In scale, expected a scalar, got {type(factor).__name__}.")
        return self.mul(factor)

    def __add__(self, rhs):
        return self.copy().add(rhs)

    def __sub__(self, rhs):
        return self.copy().sub(rhs)

    def __mul__(self, rhs):
        return self.copy().mul(rhs)

    def __truediv__(self, rhs):
        return self.copy().div(rhs)

    def __iadd__(self, rhs):
        return self.add(rhs)

    def __isub__(self, rhs):
        return self.sub(rhs)

    def __imul__(self, rhs):
        return self.mul(rhs)

    def __itruediv__(self, rhs):
        return self.div(rhs)

    def __matmul__(self, rhs):
        return self.dot(rhs)

    # ------------------------------------------------------------------
    # Reductions
    # ------------------------------------------------------------------

    def _select(self, axis, index, name):
        """Return the elements a reduction runs over, as a 1-D view."""
        if axis is None and index is None:
            return self._vals
        if axis is None or index is None:
            raise TypeError(f"{name} takes either no arguments or both axis and index.")
        if isinstance(axis, bool) or not isinstance(axis, int | np.integer) or axis not in (Axis.ROW, Axis.COLUMN):
            raise InvalidAxisError(f"In {name}, axis must be 0 (row) or 1 (column), got {axis!r}.")

        extent = self._rows if axis == Axis.ROW else self._cols
        requested = operator.index(index)
        normalised = requested + extent if requested < 0 else requested
        if not 0 <= normalised < extent:
            label = "row" if axis == Axis.ROW else "column"
            raise IndexOutOfRangeError(
                f"In {name}, the {label} {requested} is outside of bounds [{-extent}, {extent})."
            )
        if axis == Axis.ROW:
            start = normalised * self._cols
            return self._vals[start : start + self._cols]
        return self._vals[normalised :: self._cols]

    def sum(self, axis=None, index=None) -> float:
        """Sum of all elements, or of one row (``axis=0``) or column (``axis=1``).

        Parameters
        ----------
        axis : {0, 1}, optional
            0 selects a row, 1 selects a column.
        index : int, optional
            Which row or column. Negative values count from the end.

        Raises
        ------
        InvalidAxisError
            If ``axis`` is not 0 or 1.
        IndexOutOfRangeError
            If ``index`` is outside ``[-extent, extent)``.
        """
        return fold(self._select(axis, index, "sum"), np.add, 0.0)

    def prod(self, axis=None, index=None) -> float:
        """Product of all elements, or of one row or column. See :meth:`sum`."""
        return fold(self._select(axis, index, "prod"), np.multiply, 1.0)

    def avg(self, axis=None, index=None) -> float:
        """Arithmetic mean of all elements, or of one row or column. See :meth:`sum`."""
        values = self._select(axis, index, "avg")
        return fold(values, np.add, 0.0) / values.size

    def std(self, axis=None, index=None) -> float:
        """Population standard deviation of all elements, or of one row or column. See :meth:`sum`."""
        return population_std(self._select(axis, index, "std"))

    # ------------------------------------------------------------------
    # Linear algebra
    # ------------------------------------------------------------------

    def transpose(self) -> Matrix:
        """Return a new ``cols x rows`` matrix with ``result[j, i] == self[i, j]``."""
        vals = np.ascontiguousarray(self._grid().T).reshape(-1)
        return Matrix._from_buffer(vals, self._cols, self._rows)

    @property
    def T(self) -> Matrix:
        """Transpose, see :meth:`transpose`."""
        return self.transpose()

    def _check_dot(self, rhs, name):
        if not isinstance(rhs, Matrix):
            raise TypeMismatchError(f"In {name}, expected a Matrix, got {type(rhs).__name__}.")
        if self._cols != rhs._rows:
            raise ShapeMismatchError(
                f"In {name}, the number of columns of the first matrix is {self._cols}, which is not "
                f"equal to the number of rows of the second matrix, {rhs._rows}."
            )

    def dot(self, rhs: Matrix) -> Matrix:
        """Matrix product ``self @ rhs`` as a new ``rows x rhs.cols`` matrix.

        Each entry is accumulated as ``sum_k self[i, k] * rhs[k, j]`` with
        ``k`` ascending from a 0.0 accumulator.

        Raises
        ------
        ShapeMismatchError
            If ``self.cols != rhs.rows``.
        """
        self._check_dot(rhs, "dot")
        out = np.zeros((self._rows, rhs._cols), dtype=np.float64)
        matmul_stripe(self._grid(), rhs._grid(), out, 0, self._rows)
        return Matrix._from_buffer(out.reshape(-1), self._rows, rhs._cols)

    def dot_concurrent(self, rhs: Matrix, n_jobs=None) -> Matrix:
        """Matrix product computed by worker threads over row stripes.

        Same contract as :meth:`dot`. The rows of ``self`` are split into
        contiguous stripes, each handled by one worker writing to its own rows
        of a pre-allocated result; the call returns once all workers are done.
        The accumulation order of every entry is the one :meth:`dot` uses, so
        the result is bit-identical.

        Parameters
        ----------
        rhs : Matrix
            Right operand with ``rhs.rows == self.cols``.
        n_jobs : int, optional
            Worker count, ``-1`` for all CPUs. Defaults to the value set with
            :func:`~flatmat.core.config.set_n_jobs`.
        """
        self._check_dot(rhs, "dot_concurrent")
        out = np.zeros((self._rows, rhs._cols), dtype=np.float64)
        a, b = self._grid(), rhs._grid()
        stripes = row_stripes(self._rows, resolve_n_jobs(n_jobs))
        log.debug("dot_concurrent %dx%d @ %dx%d over %d stripes", *self.shape, *rhs.shape, len(stripes))
        parallel_map(
            matmul_stripe,
            [(a, b, out, start, stop) for start, stop in stripes],
            n_jobs=len(stripes),
        )
        return Matrix._from_buffer(out.reshape(-1), self._rows, rhs._cols)

    # ------------------------------------------------------------------
    # Structural mutation
    # ------------------------------------------------------------------

    @staticmethod
    def _as_line(values, name):
        if isinstance(values, Matrix):
            if 1 not in values.shape:
                raise ShapeMismatchError(f"In {name}, expected a single row or column, got {values.shape}.")
            return values.flat()
        if isinstance(values, str | bytes):
            raise TypeMismatchError(f"In {name}, expected a sequence of floats, got {type(values).__name__}.")
        try:
            arr = np.asarray(values, dtype=np.float64)
        except (TypeError, ValueError) as err:
            raise TypeMismatchError(f"In {name}, expected a sequence of floats.") from err
        if arr.ndim != 1:
            raise ShapeMismatchError(f"In {name}, expected a 1-D sequence, got {arr.ndim} dimensions.")
        return arr

    def append_row(self, values) -> Matrix:
        """Append ``values`` as a new bottom row in place.

        Raises
        ------
        ShapeMismatchError
            If ``len(values) != cols``.
        """
        line = self._as_line(values, "append_row")
        if line.shape[0] != self._cols:
            raise ShapeMismatchError(
                f"In append_row, the row has {line.shape[0]} elements but the matrix has {self._cols} columns."
            )
        self._vals = np.concatenate((self._vals, line))
        self._rows += 1
        return self

    def append_col(self, values) -> Matrix:
        """Append ``values`` as a new rightmost column in place.

        Raises
        ------
        ShapeMismatchError
            If ``len(values) != rows``.
        """
        line = self._as_line(values, "append_col")
        if line.shape[0] != self._rows:
            raise ShapeMismatchError(
                f"In append_col, the column has {line.shape[0]} elements but the matrix has {self._rows} rows."
            )
        grid = np.empty((self._rows, self._cols + 1), dtype=np.float64)
        grid[:, : self._cols] = self._grid()
        grid[:, self._cols] = line
        self._vals = grid.reshape(-1)
        self._cols += 1
        return self

    def concat(self, rhs: Matrix) -> Matrix:
        """Append the columns of ``rhs`` to the right of this matrix in place.

        Raises
        ------
        ShapeMismatchError
            If the row counts differ.
        """
        if not isinstance(rhs, Matrix):
            raise TypeMismatchError(f"In concat, expected a Matrix, got {type(rhs).__name__}.")
        if rhs._rows != self._rows:
            raise ShapeMismatchError(
                f"In concat, the first matrix has {self._rows} rows but the second has {rhs._rows}."
            )
        grid = np.hstack((self._grid(), rhs._grid()))
        self._vals = grid.reshape(-1)
        self._cols += rhs._cols
        return self

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def to_csv(self, dest) -> None:
        """Write the matrix as CSV. See :func:`flatmat.mat.csvio.write_csv`."""
        from flatmat.mat.csvio import write_csv

        write_csv(self, dest)

    def to_frame(self, columns=None):
        """Return the values as a polars DataFrame, one column per matrix column.

        Parameters
        ----------
        columns : list of str, optional
            Column names. Defaults to ``column_0 ... column_{cols-1}``.
        """
        from flatmat.core.dataframe import array_to_frame

        if columns is not None:
            columns = list(columns)
            if len(columns) != self._cols:
                raise ShapeMismatchError(f"Expected {self._cols} column names, got {len(columns)}.")
            if len(set(columns)) != len(columns):
                raise ValueError("Column names must be unique.")
        return array_to_frame(self.to_numpy(), columns)
