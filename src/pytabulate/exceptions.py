"""
Exception classes for pytabulate.

Custom exception hierarchy for better error handling and debugging.
"""

from __future__ import annotations

from typing import Any

from pydantic import (
    ValidationError,
    ValidationInfo,
    WrapValidator,
)
from pydantic_core import ErrorDetails, InitErrorDetails, PydanticCustomError


class TabulationError(Exception):
    """
    Base exception class for all pytabulate-related errors.

    This serves as the root exception that all other pytabulate exceptions inherit from,
    allowing users to catch all pytabulate-specific errors with a single except clause.
    """


class InvalidArgumentError(TabulationError, ValueError):
    """
    Exception raised when a tabulated function cannot be built from the given arguments.

    This typically occurs when:
    - The left bound is not below the right bound
    - Fewer than two points or values are supplied
    - A point is missing (``None``)
    - The supplied points are not strictly increasing in x
    """


class IndexOutOfRangeError(TabulationError, IndexError):
    """
    Raised when a positional accessor is called with an index outside ``[0, count)``.
    """


class OrderingViolationError(TabulationError):
    """
    Raised when editing a point would break the strictly increasing order of abscissas
    relative to one of its immediate neighbours.
    """


class DuplicateAbscissaError(TabulationError):
    """
    Raised when a point is added whose x coincides (within tolerance) with an existing point.
    """


class TooFewPointsError(TabulationError):
    """
    Raised when deleting a point would take a tabulated function below its backend's floor.
    """


class EmptyStateError(TabulationError):
    """
    Raised when the domain of a tabulated function holding no points is queried.
    """


class UnsupportedBackendError(TabulationError):
    """
    Raised when a backend descriptor does not name a tabulated function implementation.
    """


class ConstructionError(TabulationError):
    """
    Raised when a backend has no usable constructor for the requested arguments,
    or when that constructor fails.
    """


class FormatError(TabulationError, ValueError):
    """
    Raised when a serialized tabulated function is truncated or malformed.
    """


def custom_error_msg(custom_messages: dict[str, str]) -> Any:
    r"""
    Customize an error message for pydantic validation errors.

    See https://github.com/pydantic/pydantic/discussions/8468.

    Example:

    >>> from typing import Annotated
    >>> from pydantic import BaseModel
    >>> Coordinate = Annotated[
    ...     float,
    ...     custom_error_msg({"float_parsing": "Coordinate must be a number, got {input}."}),
    ... ]
    >>> class Model(BaseModel):
    ...     x: Coordinate
    >>> Model(x="abc")  # doctest: +IGNORE_EXCEPTION_DETAIL
    Traceback (most recent call last):
    ...
    pydantic_core._pydantic_core.ValidationError: 1 validation error for Model
    x
      Coordinate must be a number, got abc. ...
    """

    def _validator(v: Any, next_: Any, ctx: ValidationInfo) -> Any:
        try:
            return next_(v, ctx)
        except ValidationError as exc:
            new_errors: list[InitErrorDetails | ErrorDetails] = []
            for error in exc.errors():
                error["loc"] = error["loc"][1:]  # to skip current location
                custom_message = custom_messages.get(error["type"])

                if custom_message:
                    err_ctx = error.get("ctx", {}).copy()

                    # Add input and ValidationInfo data to context
                    err_ctx["input"] = error["input"]
                    if ctx.data:
                        err_ctx.update(ctx.data)

                    new_error = InitErrorDetails(
                        type=PydanticCustomError(
                            error["type"], custom_message, err_ctx
                        ),
                        loc=error["loc"],
                        input=error["input"],
                    )

                    new_errors.append(new_error)
                else:
                    new_errors.append(error)

            raise ValidationError.from_exception_data(
                title=exc.title,
                line_errors=new_errors,  # type: ignore[arg-type]
            ) from None

    return WrapValidator(_validator)
