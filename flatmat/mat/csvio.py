"""CSV reading and writing for matrices.

Records are newline separated and fields comma separated. The first record
fixes the column count and every later record must match it. Values are
written in scientific notation with 14 fractional digits and no newline after
the last record.
"""

from __future__ import annotations

import contextlib
import csv
import logging
import os

import numpy as np

from flatmat.errors import EmptyInputError, JaggedInputError, MatrixIOError, ParseError
from flatmat.mat.matrix import Matrix

log = logging.getLogger("flatmat.mat.csvio")

__all__ = ["CSV_FLOAT_FORMAT", "from_csv", "read_csv", "write_csv"]

CSV_FLOAT_FORMAT = ".14e"


def _describe(source):
    return os.fspath(source) if isinstance(source, str | os.PathLike) else type(source).__name__


@contextlib.contextmanager
def _open(target, mode):
    """Yield a text stream for a path or pass an open stream through untouched."""
    if isinstance(target, str | os.PathLike):
        try:
            handle = open(target, mode, newline="", encoding="utf-8")  # noqa: SIM115
        except OSError as err:
            raise MatrixIOError(f"Cannot open {os.fspath(target)}: {err}") from err
        with handle:
            yield handle
    else:
        yield target


def _parse_field(text, field, line, name):
    """Parse one field as a plain float literal, without padding or digit separators."""
    if "_" in text or text != text.strip():
        raise ParseError(f"Item {field} in line {line} of {name} is {text!r}, which is not a float.")
    try:
        return float(text)
    except ValueError as err:
        raise ParseError(f"Item {field} in line {line} of {name} is {text!r}, which is not a float.") from err


def read_csv(source):
    """Read a matrix from CSV, one record at a time.

    Blank lines are skipped. Line numbers in error messages count every
    physical line, blank ones included.

    Parameters
    ----------
    source : str, path-like or text stream
        File name or an open text stream positioned at the first record.

    Returns
    -------
    Matrix
        Matrix with one row per record.

    Raises
    ------
    MatrixIOError
        If the source cannot be opened, read or decoded as UTF-8.
    ParseError
        If a field is not a floating-point literal or a record is malformed.
    JaggedInputError
        If a record's field count differs from the first record's.
    EmptyInputError
        If the source holds no records.
    """
    name = _describe(source)
    values = []
    n_cols = None
    first_line = None
    n_rows = 0
    with _open(source, "r") as stream:
        reader = csv.reader(stream)
        try:
            for record in reader:
                if not record:
                    continue
                line = reader.line_num
                if n_cols is None:
                    n_cols, first_line = len(record), line
                elif len(record) != n_cols:
                    raise JaggedInputError(
                        f"Line {line} in {name} has {len(record)} entries but line {first_line} has {n_cols}."
                    )
                values.extend(_parse_field(text, field, line, name) for field, text in enumerate(record))
                n_rows += 1
        except UnicodeDecodeError as err:
            raise MatrixIOError(f"Cannot decode {name} as UTF-8: {err}") from err
        except csv.Error as err:
            raise ParseError(f"Malformed record near line {reader.line_num} of {name}: {err}") from err
        except OSError as err:
            raise MatrixIOError(f"Cannot read from {name}: {err}") from err

    if n_rows == 0 or not n_cols:
        raise EmptyInputError(f"{name} contains no records.")
    log.debug("Read %dx%d matrix from %s", n_rows, n_cols, name)
    return Matrix._from_buffer(np.array(values, dtype=np.float64), n_rows, n_cols)


from_csv = read_csv


def write_csv(matrix, dest):
    """Write a matrix as CSV.

    The whole document is formatted before anything is written.

    Parameters
    ----------
    matrix : Matrix
        Matrix to write.
    dest : str, path-like or text stream
        File name (created or truncated) or an open writable text stream.

    Raises
    ------
    MatrixIOError
        If the destination cannot be opened or written.
    """
    grid = matrix.to_numpy()
    text = "\n".join(",".join(format(x, CSV_FLOAT_FORMAT) for x in row) for row in grid.tolist())
    name = _describe(dest)
    with _open(dest, "w") as stream:
        try:
            stream.write(text)
        except OSError as err:
            raise MatrixIOError(f"Cannot write to {name}: {err}") from err
    log.debug("Wrote %dx%d matrix to %s", matrix.rows, matrix.cols, name)
