"""
Tabulated function factories.

A factory decides which backend the generic construction helpers produce.
Factories are looked up by :class:`Backend` tag in ``registered_factories``; the
process keeps one default factory that is used whenever a caller names none.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator, Sequence
from contextlib import contextmanager
from enum import Enum
from typing import Any, TypeAlias

from pytabulate.exceptions import (
    ConstructionError,
    InvalidArgumentError,
    UnsupportedBackendError,
)
from pytabulate.point import PointLike
from pytabulate.tabulated import (
    ArrayTabulatedFunction,
    LinkedListTabulatedFunction,
    TabulatedFunction,
    registered_backends,
)
from pytabulate.typing.aliases import FloatArray

log = logging.getLogger(__name__)


class Backend(str, Enum):
    """
    Tags naming the available storage backends.
    """

    ARRAY = "array"
    LINKED_LIST = "linked_list"


class TabulatedFunctionFactory(ABC):
    """
    Capability set for building tabulated functions without naming a backend.
    """

    @abstractmethod
    def from_grid(self, left: float, right: float, count: int) -> TabulatedFunction:
        """Function on an even grid of ``count`` points with all values zero."""

    @abstractmethod
    def from_values(
        self, left: float, right: float, values: Sequence[float] | FloatArray
    ) -> TabulatedFunction:
        """Function on an even grid with one point per value."""

    @abstractmethod
    def from_points(self, points: Iterable[PointLike]) -> TabulatedFunction:
        """Function through explicit points."""


class TypeFactory(TabulatedFunctionFactory):
    """
    Factory producing instances of one :class:`TabulatedFunction` subclass.

    Parameters:
        table_type: The backend class to instantiate
    """

    def __init__(self, table_type: type[TabulatedFunction]) -> None:
        if not (
            isinstance(table_type, type) and issubclass(table_type, TabulatedFunction)
        ):
            msg = f"{table_type!r} is not a TabulatedFunction implementation"
            raise UnsupportedBackendError(msg)
        self.table_type = table_type

    def _constructor(self, name: str) -> Callable[..., Any]:
        constructor = getattr(self.table_type, name, None)
        if not callable(constructor):
            msg = f"{self.table_type.__name__} has no usable {name} constructor"
            raise ConstructionError(msg)
        return constructor

    def from_grid(self, left: float, right: float, count: int) -> TabulatedFunction:
        return self._constructor("from_grid")(left, right, count)  # type: ignore[no-any-return]

    def from_values(
        self, left: float, right: float, values: Sequence[float] | FloatArray
    ) -> TabulatedFunction:
        return self._constructor("from_values")(left, right, values)  # type: ignore[no-any-return]

    def from_points(self, points: Iterable[PointLike]) -> TabulatedFunction:
        return self._constructor("from_points")(points)  # type: ignore[no-any-return]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.table_type.__name__})"


class ArrayTabulatedFunctionFactory(TypeFactory):
    """Factory producing :class:`ArrayTabulatedFunction` instances."""

    def __init__(self) -> None:
        super().__init__(ArrayTabulatedFunction)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class LinkedListTabulatedFunctionFactory(TypeFactory):
    """Factory producing :class:`LinkedListTabulatedFunction` instances."""

    def __init__(self) -> None:
        super().__init__(LinkedListTabulatedFunction)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


registered_factories: dict[str, TabulatedFunctionFactory] = {
    Backend.ARRAY.value: ArrayTabulatedFunctionFactory(),
    Backend.LINKED_LIST.value: LinkedListTabulatedFunctionFactory(),
}

BackendDescriptor: TypeAlias = (
    Backend | str | TabulatedFunctionFactory | type[TabulatedFunction]
)


def backend_of(table: TabulatedFunction) -> Backend | None:
    """Tag of the backend storing ``table``, or ``None`` for unregistered backends."""
    for name, table_type in registered_backends.items():
        if type(table) is table_type:
            return Backend(name)
    return None


def resolve_factory(descriptor: BackendDescriptor) -> TabulatedFunctionFactory:
    """
    Find the factory a backend descriptor refers to.

    Args:
        descriptor: A :class:`Backend` tag or its string value, a factory, or a
            :class:`TabulatedFunction` subclass.

    Returns:
        TabulatedFunctionFactory: The matching factory.

    Raises:
        UnsupportedBackendError: If the descriptor names no tabulated function backend.
    """
    if isinstance(descriptor, TabulatedFunctionFactory):
        return descriptor
    if isinstance(descriptor, str):
        tag = descriptor.value if isinstance(descriptor, Backend) else descriptor
        try:
            return registered_factories[tag]
        except KeyError:
            msg = (
                f"Unknown backend '{tag}' does not match any of the expected backends: "
                f"{', '.join(repr(name) for name in registered_factories)}"
            )
            raise UnsupportedBackendError(msg) from None
    if isinstance(descriptor, type):
        for name, table_type in registered_backends.items():
            if descriptor is table_type:
                return registered_factories[name]
        return TypeFactory(descriptor)
    msg = f"{descriptor!r} does not describe a tabulated function backend"
    raise UnsupportedBackendError(msg)


_default_factory: TabulatedFunctionFactory = registered_factories[Backend.ARRAY.value]


def get_default_factory() -> TabulatedFunctionFactory:
    """The factory used when a caller names neither a factory nor a backend."""
    return _default_factory


def set_default_factory(factory: TabulatedFunctionFactory) -> TabulatedFunctionFactory:
    """
    Replace the process-wide default factory.

    The swap is a plain assignment without locking: concurrent writers race and
    the last one wins. Callers that need isolation should pass ``factory=``
    explicitly to the construction helpers instead.

    Args:
        factory: The new default

    Returns:
        TabulatedFunctionFactory: The previous default.

    Raises:
        InvalidArgumentError: If ``factory`` is ``None``.
    """
    global _default_factory  # noqa: PLW0603
    if factory is None:
        msg = "Default factory must not be None"
        raise InvalidArgumentError(msg)
    previous = _default_factory
    _default_factory = factory
    log.debug("Default tabulated function factory: %r -> %r", previous, factory)
    return previous


@contextmanager
def use_factory(
    factory: TabulatedFunctionFactory,
) -> Iterator[TabulatedFunctionFactory]:
    """
    Temporarily replace the default factory.

    Examples:
        >>> from pytabulate.factories import LinkedListTabulatedFunctionFactory, use_factory
        >>> from pytabulate.construction import create_from_grid
        >>> with use_factory(LinkedListTabulatedFunctionFactory()):
        ...     type(create_from_grid(0.0, 1.0, 3)).__name__
        'LinkedListTabulatedFunction'
    """
    previous = set_default_factory(factory)
    try:
        yield factory
    finally:
        set_default_factory(previous)


__all__ = (
    "ArrayTabulatedFunctionFactory",
    "Backend",
    "BackendDescriptor",
    "LinkedListTabulatedFunctionFactory",
    "TabulatedFunctionFactory",
    "TypeFactory",
    "backend_of",
    "get_default_factory",
    "registered_factories",
    "resolve_factory",
    "set_default_factory",
    "use_factory",
)
