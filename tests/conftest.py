from __future__ import annotations

import pytest

from pytabulate import factories
from pytabulate.tabulated import (
    ArrayTabulatedFunction,
    LinkedListTabulatedFunction,
)


@pytest.fixture(autouse=True)
def default_factory():
    """
    Fixture restoring the process-wide default factory after each test, so a
    test that swaps it cannot leak the change into the next one.
    """
    previous = factories.get_default_factory()
    yield previous
    factories.set_default_factory(previous)


@pytest.fixture(
    params=[ArrayTabulatedFunction, LinkedListTabulatedFunction],
    ids=["array", "linked_list"],
)
def table_type(request):
    """Each tabulated function backend in turn."""
    return request.param


@pytest.fixture
def squares(table_type):
    """The parabola sampled at x = 1, 2, 3."""
    return table_type([(1.0, 1.0), (2.0, 4.0), (3.0, 9.0)])
