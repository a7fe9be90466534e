"""Success/failure values returned by every façade operation."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    @property
    def is_ok(self) -> bool:
        return True

    def map(self, fn: Callable[[T], U]) -> Ok[U]:
        return Ok(fn(self.value))


@dataclass(frozen=True)
class Err:
    """A failed operation; *message* is meant for humans."""

    message: str

    @property
    def is_ok(self) -> bool:
        return False

    def map(self, fn: Callable[[T], U]) -> Err:
        return self


Result = Union[Ok[T], Err]
