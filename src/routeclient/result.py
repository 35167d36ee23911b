from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from .errors import ClientError

T = TypeVar("T", covariant=True)
E = TypeVar("E", bound=ClientError, covariant=True)
U = TypeVar("U")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    def is_success(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def map(self, fn: Callable[[T], U]) -> Success[U]:
        return Success(fn(self.value))


@dataclass(frozen=True)
class Failure(Generic[E]):
    error: E

    def is_success(self) -> bool:
        return False

    def unwrap(self) -> object:
        raise self.error

    def map(self, fn: Callable[[object], object]) -> Failure[E]:
        return self


Result = Success[T] | Failure[E]
