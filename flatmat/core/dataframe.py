"""DataFrame interoperability for matrices via polars."""

import narwhals as nw
import numpy as np
import polars as pl

__all__ = ["array_to_frame", "frame_to_array"]


def frame_to_array(df) -> np.ndarray:
    """Extract the numeric contents of a DataFrame as a 2-D float64 array.

    Parameters
    ----------
    df : DataFrame
        Polars DataFrame, or any object implementing the Arrow PyCapsule
        Interface (``__arrow_c_stream__``) such as pandas (2.0+) frames and
        pyarrow tables. Every column must be numeric. Nulls become NaN.

    Returns
    -------
    ndarray of shape (n_rows, n_columns)
        Fresh row-major float64 array.

    Raises
    ------
    TypeError
        If ``df`` is not Arrow-compatible or a column is not numeric.
    """
    if isinstance(df, pl.DataFrame):
        frame = df
    elif hasattr(df, "__arrow_c_stream__"):
        frame = nw.from_arrow(df, backend=pl).to_native()
    else:
        raise TypeError(f"Expected a DataFrame implementing '__arrow_c_stream__', got {type(df).__name__}.")

    non_numeric = [name for name, dtype in frame.schema.items() if not dtype.is_numeric()]
    if non_numeric:
        raise TypeError(f"Columns must be numeric, found non-numeric columns: {non_numeric}")
    if frame.width == 0:
        return np.empty((frame.height, 0), dtype=np.float64)
    values = frame.select(pl.all().cast(pl.Float64)).to_numpy()
    return np.ascontiguousarray(values, dtype=np.float64)


def array_to_frame(values: np.ndarray, columns=None) -> pl.DataFrame:
    """Build a polars DataFrame from a 2-D array, one column per array column.

    Parameters
    ----------
    values : ndarray of shape (n_rows, n_columns)
        Values to wrap.
    columns : list of str, optional
        Column names. Defaults to ``column_0 ... column_{n-1}``.

    Returns
    -------
    pl.DataFrame
        DataFrame with Float64 columns.
    """
    if columns is None:
        columns = [f"column_{j}" for j in range(values.shape[1])]
    return pl.DataFrame({name: values[:, j] for j, name in enumerate(columns)})
