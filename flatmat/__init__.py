"""Dense one- and two-dimensional float64 arrays with ordered reductions."""

from flatmat import vec
from flatmat.core.config import get_n_jobs, resolve_n_jobs, set_n_jobs, use_n_jobs
from flatmat.core.format import format_matrix
from flatmat.errors import (
    DivisionByZeroError,
    EmptyInputError,
    FlatmatError,
    IndexOutOfRangeError,
    InvalidAxisError,
    InvalidDimensionError,
    InvalidRangeError,
    JaggedInputError,
    MatrixIOError,
    ParseError,
    ShapeMismatchError,
    TypeMismatchError,
)
from flatmat.mat import (
    Axis,
    Matrix,
    from_2d,
    from_csv,
    from_flat,
    from_frame,
    identity,
    inc,
    ones,
    rand,
    read_csv,
    write_csv,
    zeros,
)

__all__ = [
    "Axis",
    "DivisionByZeroError",
    "EmptyInputError",
    "FlatmatError",
    "IndexOutOfRangeError",
    "InvalidAxisError",
    "InvalidDimensionError",
    "InvalidRangeError",
    "JaggedInputError",
    "Matrix",
    "MatrixIOError",
    "ParseError",
    "ShapeMismatchError",
    "TypeMismatchError",
    "format_matrix",
    "from_2d",
    "from_csv",
    "from_flat",
    "from_frame",
    "get_n_jobs",
    "identity",
    "inc",
    "ones",
    "rand",
    "read_csv",
    "resolve_n_jobs",
    "set_n_jobs",
    "use_n_jobs",
    "vec",
    "write_csv",
    "zeros",
]

__version__ = "0.1.0"
