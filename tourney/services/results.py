"""Result type returned by every store-facing operation."""
from __future__ import annotations

from typing import Generic, Optional, TypeVar

T = TypeVar("T")

# Error codes
NOT_FOUND = "not_found"
CONFLICT = "conflict"
INVALID = "invalid"
STORAGE = "storage"
DATABASE = "database"


class StoreError:
    """Structured failure: a machine-readable code and a human-readable message."""

    __slots__ = ("code", "message")

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"StoreError({self.code!r}, {self.message!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, StoreError) and (self.code, self.message) == (other.code, other.message)


class ResultError(Exception):
    """Raised by Result.unwrap() on a failed result."""

    def __init__(self, error: StoreError):
        super().__init__(f"{error.code}: {error.message}")
        self.error = error


class Result(Generic[T]):
    """Either a value or a StoreError."""

    __slots__ = ("value", "error")

    def __init__(self, value: Optional[T] = None, error: Optional[StoreError] = None):
        self.value = value
        self.error = error

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, code: str, message: str) -> "Result[T]":
        return cls(error=StoreError(code, message))

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise ResultError(self.error)
        return self.value

    def __repr__(self) -> str:
        if self.ok:
            return f"Result.success({self.value!r})"
        return f"Result.failure({self.error.code!r}, {self.error.message!r})"
