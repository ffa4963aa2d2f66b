"""Shared test configuration and fixtures for flatmat."""

from __future__ import annotations

import os

import pytest

from flatmat import Matrix, from_2d, inc, ones

_ENV_FULL = "FLATMAT_RUN_FULL_TESTS"


def pytest_collection_modifyitems(items):
    """Skip slow tests unless the full-test environment variable is set."""
    if os.environ.get(_ENV_FULL):
        return

    skip_marker = pytest.mark.skip(
        reason=(f"Skipped to keep the default CI test run fast. Set {_ENV_FULL}=1 to execute the full test battery.")
    )
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_marker)


@pytest.fixture
def inc_3x4():
    return inc(3, 4)


@pytest.fixture
def ones_12x17():
    return ones(12, 17)


@pytest.fixture
def small():
    return from_2d([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])


@pytest.fixture
def zeros_2x3():
    return Matrix(2, 3)
