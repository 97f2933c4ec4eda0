"""Result type returned by every use case.

Use cases never raise to their callers. Expected failures come back as
``Result.fail`` with a message and an ``ErrorKind`` the presentation
layer maps to an HTTP status.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar

from wms.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ValidationError,
)

T = TypeVar("T")
U = TypeVar("U")


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BUSINESS_RULE = "business_rule"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    INFRASTRUCTURE = "infrastructure"


def error_kind_for(exc: BaseException) -> ErrorKind:
    """Classify an exception by type."""
    if isinstance(exc, ValidationError):
        return ErrorKind.VALIDATION
    if isinstance(exc, EntityNotFoundError):
        return ErrorKind.NOT_FOUND
    if isinstance(exc, ConflictError):
        return ErrorKind.CONFLICT
    if isinstance(exc, BusinessRuleViolation):
        return ErrorKind.BUSINESS_RULE
    return ErrorKind.INFRASTRUCTURE


class ResultError(RuntimeError):
    """Raised when reading the value of a failed result."""


@dataclass(frozen=True)
class Result(Generic[T]):
    """Success carrying a value, or failure carrying a message and kind."""

    is_success: bool
    value: Optional[T] = None
    error: Optional[str] = None
    error_kind: Optional[ErrorKind] = None

    def __post_init__(self) -> None:
        if self.is_success and self.error:
            msg = "A result cannot be successful and contain an error"
            raise ValueError(msg)
        if not self.is_success and not self.error:
            msg = "A failing result needs to contain an error message"
            raise ValueError(msg)

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @classmethod
    def ok(cls, value: Optional[T] = None) -> Result[T]:
        return cls(is_success=True, value=value)

    @classmethod
    def fail(
        cls,
        error: str,
        kind: ErrorKind = ErrorKind.VALIDATION,
    ) -> Result[Any]:
        return cls(is_success=False, error=error, error_kind=kind)

    @classmethod
    def from_exception(cls, exc: BaseException, prefix: str) -> Result[Any]:
        """Wrap an unexpected exception as ``"<prefix>: <message>"``."""
        message = exc.message if isinstance(exc, DomainException) else str(exc)
        return cls.fail(f"{prefix}: {message}", error_kind_for(exc))

    @classmethod
    def combine(cls, results: Iterable[Result[Any]]) -> Result[None]:
        """First failure wins; otherwise an empty success."""
        for result in results:
            if result.is_failure:
                return cls.fail(result.error, result.error_kind)  # type: ignore[arg-type]
        return cls.ok()

    def get_value(self) -> T:
        if self.is_failure:
            msg = f"Cannot get the value of a failed result: {self.error}"
            raise ResultError(msg)
        return self.value  # type: ignore[return-value]

    def get_value_or(self, default: T) -> T:
        return self.value if self.is_success and self.value is not None else default

    def map(self, mapper: Callable[[T], U]) -> Result[U]:
        if self.is_failure:
            return Result.fail(self.error, self.error_kind)  # type: ignore[arg-type]
        try:
            return Result.ok(mapper(self.get_value()))
        except Exception as e:
            return Result.fail(f"Mapping failed: {e}", error_kind_for(e))

    def flat_map(self, mapper: Callable[[T], Result[U]]) -> Result[U]:
        if self.is_failure:
            return Result.fail(self.error, self.error_kind)  # type: ignore[arg-type]
        try:
            return mapper(self.get_value())
        except Exception as e:
            return Result.fail(f"Flat mapping failed: {e}", error_kind_for(e))
