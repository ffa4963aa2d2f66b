"""Tests for matrix storage, shape bookkeeping and element access."""

import numpy as np
import pytest

from flatmat import (
    IndexOutOfRangeError,
    InvalidDimensionError,
    Matrix,
    ShapeMismatchError,
    from_2d,
    inc,
)


def test_new_is_zeroed():
    m = Matrix(3, 5)
    assert m.dims() == (3, 5)
    assert m.shape == (3, 5)
    assert m.rows == 3
    assert m.cols == 5
    assert m.size == 15
    np.testing.assert_array_equal(m.flat(), np.zeros(15))


@pytest.mark.parametrize(("rows", "cols"), [(0, 1), (1, 0), (-1, 3), (3, -2), (0, 0)])
def test_new_rejects_non_positive(rows, cols):
    with pytest.raises(InvalidDimensionError):
        Matrix(rows, cols)


def test_new_rejects_float_dims():
    with pytest.raises(TypeError):
        Matrix(2.0, 3)


def test_at_row_major(inc_3x4):
    for i in range(3):
        for j in range(4):
            assert inc_3x4.at(i, j) == i * 4 + j
            assert inc_3x4[i, j] == i * 4 + j


@pytest.mark.parametrize(("i", "j"), [(3, 0), (0, 4), (-1, 0), (0, -1)])
def test_at_out_of_range(inc_3x4, i, j):
    with pytest.raises(IndexOutOfRangeError):
        inc_3x4.at(i, j)


def test_out_of_range_is_an_index_error(inc_3x4):
    with pytest.raises(IndexError):
        inc_3x4.at(10, 0)


def test_reshape_preserves_flat_order(inc_3x4):
    before = inc_3x4.flat()
    result = inc_3x4.reshape(6, 2)
    assert result is inc_3x4
    assert inc_3x4.dims() == (6, 2)
    np.testing.assert_array_equal(inc_3x4.flat(), before)
    assert inc_3x4.at(5, 1) == 11.0


def test_reshape_element_count_mismatch(inc_3x4):
    with pytest.raises(ShapeMismatchError):
        inc_3x4.reshape(5, 2)
    assert inc_3x4.dims() == (3, 4)


def test_reshape_non_positive(inc_3x4):
    with pytest.raises(InvalidDimensionError):
        inc_3x4.reshape(-3, -4)


def test_flat_is_a_copy(inc_3x4):
    vals = inc_3x4.flat()
    vals[0] = 99.0
    assert inc_3x4.at(0, 0) == 0.0


def test_to_2d(inc_3x4):
    rows = inc_3x4.to_2d()
    assert rows == [[0.0, 1.0, 2.0, 3.0], [4.0, 5.0, 6.0, 7.0], [8.0, 9.0, 10.0, 11.0]]
    rows[0][0] = -1.0
    assert inc_3x4.at(0, 0) == 0.0


def test_to_numpy_is_a_copy(inc_3x4):
    arr = inc_3x4.to_numpy()
    assert arr.shape == (3, 4)
    arr[:] = 0.0
    assert inc_3x4.sum() == 66.0


def test_copy_independence(inc_3x4):
    dup = inc_3x4.copy()
    assert dup.equals(inc_3x4)
    dup.set_all(5.0).reshape(4, 3)
    assert inc_3x4.dims() == (3, 4)
    assert inc_3x4.at(2, 3) == 11.0


def test_row_and_col(inc_3x4):
    row = inc_3x4.row(1)
    col = inc_3x4.col(2)
    assert row.dims() == (1, 4)
    assert col.dims() == (3, 1)
    assert row.to_2d() == [[4.0, 5.0, 6.0, 7.0]]
    assert col.to_2d() == [[2.0], [6.0], [10.0]]
    row.set_all(0.0)
    assert inc_3x4.at(1, 0) == 4.0


def test_row_col_out_of_range(inc_3x4):
    with pytest.raises(IndexOutOfRangeError):
        inc_3x4.row(3)
    with pytest.raises(IndexOutOfRangeError):
        inc_3x4.col(-1)


class TestEquals:
    def test_reflexive(self, inc_3x4):
        assert inc_3x4.equals(inc_3x4)
        assert inc_3x4 == inc_3x4

    def test_reflexive_with_nan(self):
        m = from_2d([[float("nan"), 1.0]])
        assert m.equals(m)
        assert m.equals(m.copy())

    def test_different_shape(self, inc_3x4):
        assert not inc_3x4.equals(inc(4, 3))

    def test_different_values(self, inc_3x4):
        other = inc_3x4.copy().add(1.0)
        assert not inc_3x4.equals(other)
        assert inc_3x4 != other

    def test_non_matrix(self, inc_3x4):
        assert not inc_3x4.equals([[0.0]])
        assert inc_3x4 != "matrix"

    def test_unhashable(self, inc_3x4):
        with pytest.raises(TypeError):
            hash(inc_3x4)
