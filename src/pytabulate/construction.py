"""
Building tabulated functions.

Provides construction helpers that leave the backend choice to a factory (the
process default unless one is passed) or to a backend descriptor, and
:func:`tabulate`, which samples an analytic function on an even grid.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

import numpy as np

from pytabulate.exceptions import (
    ConstructionError,
    InvalidArgumentError,
    TabulationError,
    UnsupportedBackendError,
)
from pytabulate.factories import (
    BackendDescriptor,
    TabulatedFunctionFactory,
    get_default_factory,
    resolve_factory,
)
from pytabulate.functions.core import Function
from pytabulate.point import PointLike
from pytabulate.tabulated import TabulatedFunction, uniform_grid
from pytabulate.typing.aliases import FloatArray

log = logging.getLogger(__name__)


def _construct(descriptor: BackendDescriptor, name: str, *args: Any) -> TabulatedFunction:
    """Build through the ``name`` constructor of the backend ``descriptor`` refers to."""
    factory = resolve_factory(descriptor)
    try:
        return getattr(factory, name)(*args)  # type: ignore[no-any-return]
    except (ConstructionError, UnsupportedBackendError):
        raise
    except (TabulationError, TypeError) as exc:
        msg = f"Could not build a tabulated function with {descriptor!r}: {exc}"
        raise ConstructionError(msg) from exc


def _build(
    backend: BackendDescriptor | None,
    factory: TabulatedFunctionFactory | None,
    name: str,
    *args: Any,
) -> TabulatedFunction:
    if backend is not None and factory is not None:
        msg = "Pass either a backend or a factory, not both"
        raise InvalidArgumentError(msg)
    if backend is not None:
        return _construct(backend, name, *args)
    return getattr(factory or get_default_factory(), name)(*args)  # type: ignore[no-any-return]


def create_from_grid(
    left: float,
    right: float,
    count: int,
    *,
    backend: BackendDescriptor | None = None,
    factory: TabulatedFunctionFactory | None = None,
) -> TabulatedFunction:
    """
    Tabulated function on an even grid of ``count`` points with all values zero.

    Args:
        left: Left domain border
        right: Right domain border
        count: Number of points
        backend: Backend to build, see :func:`~pytabulate.factories.resolve_factory`
        factory: Factory to build with; the default factory when neither this
            nor ``backend`` is given

    Returns:
        TabulatedFunction: The new function.

    Raises:
        InvalidArgumentError: If the arguments are invalid and no backend was named.
        UnsupportedBackendError: If ``backend`` names no tabulated function backend.
        ConstructionError: If the named backend cannot build the function.
    """
    return _build(backend, factory, "from_grid", left, right, count)


def create_from_values(
    left: float,
    right: float,
    values: Sequence[float] | FloatArray,
    *,
    backend: BackendDescriptor | None = None,
    factory: TabulatedFunctionFactory | None = None,
) -> TabulatedFunction:
    """
    Tabulated function on an even grid over ``[left, right]`` through ``values``.

    See :func:`create_from_grid` for ``backend``, ``factory`` and the errors raised.
    """
    return _build(backend, factory, "from_values", left, right, values)


def create_from_points(
    points: Iterable[PointLike],
    *,
    backend: BackendDescriptor | None = None,
    factory: TabulatedFunctionFactory | None = None,
) -> TabulatedFunction:
    """
    Tabulated function through explicit points, strictly increasing in x.

    See :func:`create_from_grid` for ``backend``, ``factory`` and the errors raised.
    """
    return _build(backend, factory, "from_points", points)


def tabulate(
    function: Function,
    left: float,
    right: float,
    count: int,
    *,
    backend: BackendDescriptor | None = None,
    factory: TabulatedFunctionFactory | None = None,
) -> TabulatedFunction:
    """
    Sample ``function`` at ``count`` evenly spaced abscissas over ``[left, right]``.

    Args:
        function: Function to sample
        left: First abscissa, inside the function's domain
        right: Last abscissa, inside the function's domain
        count: Number of samples, at least two
        backend: Backend to build, see :func:`~pytabulate.factories.resolve_factory`
        factory: Factory to build with; the default factory when neither this
            nor ``backend`` is given

    Returns:
        TabulatedFunction: The sampled function.

    Raises:
        InvalidArgumentError: If ``[left, right]`` leaves the function's domain,
            is empty, or ``count < 2``.

    Examples:
        >>> from pytabulate.functions import Sin
        >>> f = tabulate(Sin(), 0.0, 3.0, 4, backend="linked_list")
        >>> [round(point.y, 4) for point in f]
        [0.0, 0.8415, 0.9093, 0.1411]
    """
    if left < function.domain_left() or right > function.domain_right():
        msg = (
            f"Tabulation interval [{left}, {right}] exceeds the domain "
            f"[{function.domain_left()}, {function.domain_right()}]"
        )
        raise InvalidArgumentError(msg)
    xs = uniform_grid(left, right, count)
    values = np.array([function.value_at(x) for x in xs.tolist()], dtype=np.float64)
    log.debug("Tabulated %r at %d points over [%s, %s]", function, count, left, right)
    return create_from_values(left, right, values, backend=backend, factory=factory)


__all__ = (
    "create_from_grid",
    "create_from_points",
    "create_from_values",
    "tabulate",
)
