"""Tests for matrix constructors and fills."""

import numpy as np
import pytest

from flatmat import (
    InvalidDimensionError,
    InvalidRangeError,
    JaggedInputError,
    Matrix,
    TypeMismatchError,
    from_2d,
    from_flat,
    identity,
    inc,
    ones,
    rand,
    zeros,
)


def test_from_flat():
    m = from_flat([1.0, 2.0, 3.0])
    assert m.dims() == (1, 3)
    assert m.to_2d() == [[1.0, 2.0, 3.0]]


def test_from_flat_copies_array():
    source = np.array([1.0, 2.0])
    m = from_flat(source)
    source[0] = 50.0
    assert m.at(0, 0) == 1.0


def test_from_flat_empty():
    with pytest.raises(InvalidDimensionError):
        from_flat([])


def test_from_flat_rejects_nested():
    with pytest.raises(TypeMismatchError):
        from_flat(np.zeros((2, 2)))


def test_from_2d():
    m = from_2d([[1, 2], [3, 4], [5, 6]])
    assert m.dims() == (3, 2)
    np.testing.assert_array_equal(m.flat(), [1.0, 2.0, 3.0, 4.0, 5.0, 6.0])


def test_from_2d_ndarray():
    m = from_2d(np.arange(6.0).reshape(2, 3))
    assert m.equals(inc(2, 3))


def test_from_2d_jagged():
    with pytest.raises(JaggedInputError):
        from_2d([[1.0, 2.0], [3.0]])


@pytest.mark.parametrize("rows", [[], [[]], [[], []]])
def test_from_2d_empty(rows):
    with pytest.raises(InvalidDimensionError):
        from_2d(rows)


@pytest.mark.parametrize("rows", ["ab", [["a", "b"]], [1.0, 2.0], 5])
def test_from_2d_bad_types(rows):
    with pytest.raises(TypeMismatchError):
        from_2d(rows)


@pytest.mark.parametrize("n", [1, 2, 5])
def test_identity(n):
    m = identity(n)
    assert m.dims() == (n, n)
    for i in range(n):
        for j in range(n):
            assert m.at(i, j) == (1.0 if i == j else 0.0)


def test_identity_invalid():
    with pytest.raises(InvalidDimensionError):
        identity(0)


def test_ones_fill():
    m = ones(4, 3)
    assert m.all(lambda x: x == 1.0)


def test_zeros_and_reset():
    m = inc(3, 3)
    assert m.reset() is m
    assert m.equals(zeros(3, 3))


def test_inc_fill():
    r, c = 4, 7
    m = inc(r, c)
    for i in range(r):
        for j in range(c):
            assert m.at(i, j) == i * c + j


def test_set_all():
    m = Matrix(2, 2)
    assert m.set_all(-2.5) is m
    assert m.to_2d() == [[-2.5, -2.5], [-2.5, -2.5]]


class TestRand:
    def test_unit_interval(self):
        m = rand(20, 20, random_state=0)
        assert m.all(lambda x: 0.0 <= x < 1.0)

    def test_positive_upper(self):
        m = rand(20, 20, 5.0, random_state=1)
        assert m.all(lambda x: 0.0 <= x < 5.0)
        assert m.any(lambda x: x > 1.0)

    def test_negative_upper(self):
        m = rand(20, 20, -3.0, random_state=2)
        assert m.all(lambda x: -3.0 < x <= 0.0)

    def test_two_bounds(self):
        m = rand(20, 20, 10.0, 12.0, random_state=3)
        assert m.all(lambda x: 10.0 <= x < 12.0)

    @pytest.mark.parametrize(("lo", "hi"), [(2.0, 2.0), (3.0, 1.0)])
    def test_invalid_range(self, lo, hi):
        m = inc(2, 2)
        with pytest.raises(InvalidRangeError):
            m.rand(lo, hi)
        assert m.equals(inc(2, 2))

    def test_too_many_bounds(self):
        with pytest.raises(TypeError):
            Matrix(2, 2).rand(0.0, 1.0, 2.0)

    def test_seed_is_reproducible(self):
        assert rand(3, 3, random_state=42).equals(rand(3, 3, random_state=42))

    def test_generator_accepted(self):
        rng = np.random.default_rng(7)
        m = Matrix(2, 2).rand(random_state=rng)
        assert m.all(lambda x: 0.0 <= x < 1.0)
