"""Fallible construction results.

Shape constructors never hand back a partially valid object. The
``create``-style class methods return a ``Construction`` that either
holds the value or carries the ``InvalidGeometryError`` describing why
no value was produced.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from geo_query.core.exceptions import ValidationError

T = TypeVar("T")


class InvalidGeometryError(ValueError, ValidationError):
    """Raised when a shape or building block is given invalid input.

    Attributes:
        model: Name of the model class that failed validation.
        field_name: The field that violated the invariant.
        value: The invalid value.
    """

    default_code = "GEOMETRY_INVALID"

    def __init__(self, model: str, field_name: str, value: object, message: str) -> None:
        self.model = model
        self.field_name = field_name
        self.value = value
        formatted = f"{model}.{field_name}={value!r}: {message}"
        ValidationError.__init__(self, formatted)


@dataclass(frozen=True, slots=True)
class Construction(Generic[T]):
    """Outcome of a fallible constructor.

    Exactly one of ``value`` and ``error`` is set. A failed construction
    is falsy, so callers can write ``if result := GeoPoint.create(...)``.

    Attributes:
        value: The constructed value, or ``None`` on failure.
        error: Why construction failed, or ``None`` on success.
    """

    value: T | None = None
    error: InvalidGeometryError | None = None

    @classmethod
    def success(cls, value: T) -> Construction[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: InvalidGeometryError) -> Construction[T]:
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reason(self) -> str:
        """Failure message, empty on success."""
        return "" if self.error is None else self.error.message

    def __bool__(self) -> bool:
        return self.ok

    def unwrap(self) -> T:
        """Return the value, raising the carried error on failure.

        Raises:
            InvalidGeometryError: If construction failed.
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


def attempt(factory: Callable[..., T], *args: object, **kwargs: object) -> Construction[T]:
    """Call ``factory`` and capture an ``InvalidGeometryError`` as a failure.

    Any other exception propagates unchanged.
    """
    try:
        return Construction.success(factory(*args, **kwargs))
    except InvalidGeometryError as exc:
        return Construction.failure(exc)
