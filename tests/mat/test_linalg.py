"""Tests for transpose and the matrix products."""

import numpy as np
import pytest

from flatmat import (
    ShapeMismatchError,
    TypeMismatchError,
    from_2d,
    identity,
    inc,
    ones,
    rand,
    use_n_jobs,
)


def test_transpose_scenario(inc_3x4):
    t = inc_3x4.transpose()
    assert t.dims() == (4, 3)
    assert t.at(0, 2) == 8.0
    assert t.at(3, 1) == 7.0


def test_transpose_elements(inc_3x4):
    t = inc_3x4.T
    for i in range(3):
        for j in range(4):
            assert t.at(j, i) == inc_3x4.at(i, j)


def test_transpose_is_new_storage(inc_3x4):
    t = inc_3x4.transpose()
    t.set_all(0.0)
    assert inc_3x4.at(2, 3) == 11.0


@pytest.mark.parametrize(("rows", "cols"), [(1, 1), (1, 5), (5, 1), (3, 7)])
def test_transpose_involution(rows, cols):
    m = rand(rows, cols, random_state=rows * cols)
    back = m.transpose().transpose()
    assert back.dims() == m.dims()
    assert back.equals(m)


def test_dot_scenario():
    a = inc(10, 4)
    b = inc(4, 10)
    result = a.dot(b)
    assert result.dims() == (10, 10)
    assert result.at(0, 0) == 140.0
    np.testing.assert_array_equal(result.to_numpy(), a.to_numpy() @ b.to_numpy())


def test_dot_small():
    a = from_2d([[1.0, 0.0], [0.0, 1.0]])
    b = from_2d([[4.0, 1.0], [2.0, 2.0]])
    assert a.dot(b).equals(b)


def test_dot_non_square():
    a = inc(5, 6)
    b = ones(6, 10)
    result = a.dot(b)
    assert result.dims() == (5, 10)
    for i in range(5):
        assert result.at(i, 0) == a.sum(0, i)


def test_identity_left_and_right():
    a = rand(4, 6, -5.0, 5.0, random_state=11)
    assert identity(4).dot(a).equals(a)
    assert a.dot(identity(6)).equals(a)


def test_dot_shape_mismatch(inc_3x4):
    with pytest.raises(ShapeMismatchError):
        inc_3x4.dot(inc(3, 4))
    with pytest.raises(ShapeMismatchError):
        inc_3x4.dot_concurrent(inc(3, 4))


def test_dot_rejects_non_matrix(inc_3x4):
    with pytest.raises(TypeMismatchError):
        inc_3x4.dot([[1.0]] * 4)


def test_dot_leaves_operands_untouched():
    a, b = inc(3, 2), inc(2, 3)
    a.dot(b)
    assert a.equals(inc(3, 2))
    assert b.equals(inc(2, 3))


@pytest.mark.parametrize("n_jobs", [1, 2, 3, 8, -1])
def test_dot_concurrent_matches_dot_integers(n_jobs):
    a = inc(10, 4)
    b = inc(4, 10)
    assert a.dot_concurrent(b, n_jobs=n_jobs).equals(a.dot(b))


@pytest.mark.parametrize(("rows", "inner", "cols"), [(1, 1, 1), (7, 3, 5), (33, 17, 9), (2, 40, 2)])
def test_dot_concurrent_bit_identical(rows, inner, cols):
    a = rand(rows, inner, -1.0, 1.0, random_state=rows)
    b = rand(inner, cols, -1.0, 1.0, random_state=cols)
    seq = a.dot(b).flat()
    par = a.dot_concurrent(b, n_jobs=4).flat()
    assert seq.tobytes() == par.tobytes()


def test_dot_concurrent_uses_configured_workers():
    a = rand(9, 4, random_state=5)
    b = rand(4, 3, random_state=6)
    with use_n_jobs(3):
        assert a.dot_concurrent(b).equals(a.dot(b))


def test_dot_concurrent_is_deterministic():
    a = rand(16, 16, random_state=21)
    b = rand(16, 16, random_state=22)
    first = a.dot_concurrent(b, n_jobs=4)
    for _ in range(5):
        assert a.dot_concurrent(b, n_jobs=4).equals(first)


@pytest.mark.slow
def test_dot_concurrent_large():
    a = rand(400, 300, random_state=1)
    b = rand(300, 200, random_state=2)
    assert a.dot_concurrent(b, n_jobs=-1).equals(a.dot(b))
    np.testing.assert_allclose(a.dot(b).to_numpy(), a.to_numpy() @ b.to_numpy(), rtol=1e-10)
