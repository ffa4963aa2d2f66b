"""The two-dimensional matrix container."""

from flatmat.mat.construct import from_2d, from_flat, from_frame, identity, inc, ones, rand, zeros
from flatmat.mat.csvio import from_csv, read_csv, write_csv
from flatmat.mat.matrix import Axis, Matrix

__all__ = [
    "Axis",
    "Matrix",
    "from_2d",
    "from_csv",
    "from_flat",
    "from_frame",
    "identity",
    "inc",
    "ones",
    "rand",
    "read_csv",
    "write_csv",
    "zeros",
]
