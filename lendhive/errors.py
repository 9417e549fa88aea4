from __future__ import annotations
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class ErrorKind(Enum):
    VALIDATION = auto()
    UNAVAILABLE = auto()
    QUOTA_EXCEEDED = auto()
    NOT_FOUND = auto()


class ValidationError(ValueError):
    """Bad input or a broken domain invariant at construction/mutation time."""


class LendingError(Exception):
    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a registry operation: either a value or an error kind.

    Expected failures (no copies left, quota reached, unknown ids) are
    reported this way instead of being raised.
    """

    value: Optional[T] = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "Result[T]":
        return cls(error=kind, message=message)

    @property
    def ok(self) -> bool:
        return self.error is None

    def map(self, fn: Callable[[T], U]) -> "Result[U]":
        if not self.ok:
            return Result(error=self.error, message=self.message)
        return Result(value=fn(self.value))

    def unwrap(self) -> T:
        if self.error is not None:
            raise LendingError(self.error, self.message)
        return self.value
