# app/core/result.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of a persistence operation.

    ``status`` is True on success. Failures carry a message and, when the
    failure came from the database, the exception that caused it.
    """

    status: bool
    value: T | None = None
    message: str | None = None
    exception: BaseException | None = None

    @classmethod
    def success(cls, value: T | None = None, message: str | None = None) -> "Result[T]":
        return cls(True, value, message)

    @classmethod
    def failure(cls, message: str, exception: BaseException | None = None) -> "Result[T]":
        return cls(False, None, message, exception)

    def __bool__(self) -> bool:
        return self.status
