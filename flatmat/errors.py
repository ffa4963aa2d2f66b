"""Exception types raised by flatmat.

Every error derives from :class:`FlatmatError` and from the builtin exception
that best describes it, so callers can catch either the library-specific type
or the familiar builtin.
"""

__all__ = [
    "DivisionByZeroError",
    "EmptyInputError",
    "FlatmatError",
    "IndexOutOfRangeError",
    "InvalidAxisError",
    "InvalidDimensionError",
    "InvalidRangeError",
    "JaggedInputError",
    "MatrixIOError",
    "ParseError",
    "ShapeMismatchError",
    "TypeMismatchError",
]


class FlatmatError(Exception):
    """Base class for all flatmat errors."""


class InvalidDimensionError(FlatmatError, ValueError):
    """Raised when a row or column count is not strictly positive."""


class ShapeMismatchError(FlatmatError, ValueError):
    """Raised when operand shapes are incompatible for an operation."""


class JaggedInputError(FlatmatError, ValueError):
    """Raised when nested input rows do not all have the same length."""


class IndexOutOfRangeError(FlatmatError, IndexError):
    """Raised when a row, column or slice index falls outside its interval."""


class InvalidAxisError(FlatmatError, ValueError):
    """Raised when an axis selector is neither 0 (row) nor 1 (column)."""


class InvalidRangeError(FlatmatError, ValueError):
    """Raised when random bounds do not satisfy ``lo < hi``."""


class DivisionByZeroError(FlatmatError, ZeroDivisionError):
    """Raised when a divisor is, or contains, ``0.0``."""


class EmptyInputError(FlatmatError, IndexError):
    """Raised when an operation needs at least one element but got none."""


class TypeMismatchError(FlatmatError, TypeError):
    """Raised when an operand is not one of the accepted forms."""


class ParseError(FlatmatError, ValueError):
    """Raised when a CSV field cannot be parsed as a float."""


class MatrixIOError(FlatmatError, OSError):
    """Raised when reading or writing a matrix file fails."""
