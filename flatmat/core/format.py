"""Text rendering of matrices."""

import numpy as np
from prettytable import PrettyTable, TableStyle

__all__ = ["ELLIPSIS", "format_matrix", "format_value"]

ELLIPSIS = "..."


def _make_table(headers, rows):
    """Create a PrettyTable with SINGLE_BORDER style, index left, values right."""
    t = PrettyTable()
    t.set_style(TableStyle.SINGLE_BORDER)
    t.field_names = headers
    for row in rows:
        t.add_row(row)
    for h in headers:
        t.align[h] = "r"
    t.align[headers[0]] = "l"
    return str(t)


def format_value(val, fmt=".4f", na_str="NaN"):
    """Format a numeric value, returning na_str for None/NaN."""
    if val is None or (isinstance(val, float) and np.isnan(val)):
        return na_str
    return f"{val:{fmt}}"


def _visible(extent, limit):
    """Indices to show along one axis, with ``None`` marking the elided gap."""
    if extent <= limit:
        return list(range(extent))
    head = (limit + 1) // 2
    tail = limit - head
    return [*range(head), None, *range(extent - tail, extent)]


def format_matrix(matrix, fmt=".4f", max_rows=20, max_cols=10):
    """Render a matrix as a bordered table.

    Parameters
    ----------
    matrix : Matrix
        Matrix to render.
    fmt : str, default ".4f"
        Format specification applied to every value.
    max_rows, max_cols : int
        Larger matrices are shown as their leading and trailing rows/columns
        with ``...`` in between.

    Returns
    -------
    str
        The rendered table.
    """
    values = matrix.to_numpy()
    n_rows, n_cols = values.shape
    row_idx = _visible(n_rows, max_rows)
    col_idx = _visible(n_cols, max_cols)

    headers = [""]
    for j in col_idx:
        headers.append(ELLIPSIS if j is None else str(j))

    rows = []
    for i in row_idx:
        if i is None:
            rows.append([ELLIPSIS] * len(headers))
            continue
        line = [str(i)]
        for j in col_idx:
            line.append(ELLIPSIS if j is None else format_value(float(values[i, j]), fmt))
        rows.append(line)
    return _make_table(headers, rows)
