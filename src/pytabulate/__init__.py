"""
Copyright (c) 2025 Giordon Stark. All rights reserved.

pytabulate: tabulated functions with interchangeable array and linked-list storage
"""

from __future__ import annotations

from pytabulate._version import version as __version__
from pytabulate.construction import (
    create_from_grid,
    create_from_points,
    create_from_values,
    tabulate,
)
from pytabulate.exceptions import (
    ConstructionError,
    DuplicateAbscissaError,
    EmptyStateError,
    FormatError,
    IndexOutOfRangeError,
    InvalidArgumentError,
    OrderingViolationError,
    TabulationError,
    TooFewPointsError,
    UnsupportedBackendError,
)
from pytabulate.factories import (
    ArrayTabulatedFunctionFactory,
    Backend,
    LinkedListTabulatedFunctionFactory,
    TabulatedFunctionFactory,
    get_default_factory,
    set_default_factory,
    use_factory,
)
from pytabulate.functions import Function
from pytabulate.point import Point
from pytabulate.serialization import (
    TableData,
    from_bytes,
    from_dict,
    from_text,
    read_binary,
    read_text,
    to_bytes,
    to_dict,
    to_text,
    write_binary,
    write_text,
)
from pytabulate.tabulated import (
    ArrayTabulatedFunction,
    LinkedListTabulatedFunction,
    TabulatedFunction,
)

__all__ = [
    "ArrayTabulatedFunction",
    "ArrayTabulatedFunctionFactory",
    "Backend",
    "ConstructionError",
    "DuplicateAbscissaError",
    "EmptyStateError",
    "FormatError",
    "Function",
    "IndexOutOfRangeError",
    "InvalidArgumentError",
    "LinkedListTabulatedFunction",
    "LinkedListTabulatedFunctionFactory",
    "OrderingViolationError",
    "Point",
    "TableData",
    "TabulatedFunction",
    "TabulatedFunctionFactory",
    "TabulationError",
    "TooFewPointsError",
    "UnsupportedBackendError",
    "__version__",
    "create_from_grid",
    "create_from_points",
    "create_from_values",
    "from_bytes",
    "from_dict",
    "from_text",
    "get_default_factory",
    "read_binary",
    "read_text",
    "set_default_factory",
    "tabulate",
    "to_bytes",
    "to_dict",
    "to_text",
    "use_factory",
    "write_binary",
    "write_text",
]
