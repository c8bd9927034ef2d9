"""Two-variant result wrapper used at every builder/parser boundary.

Callers branch on the variant instead of catching exceptions:

    result = parse_rate_response(request, response, shipment)
    if result.is_success():
        rates = result.value.data
    else:
        print(result.failure)

``map_success``/``map_failure`` transform one side and pass the other
through untouched, so pipeline stages chain without nested conditionals.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, NoReturn, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")


class UnwrapError(Exception):
    """Raised when unwrapping the wrong variant."""


@dataclass(frozen=True)
class Success(Generic[T]):
    """A successful result carrying ``value``."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def map_success(self, fn: Callable[[T], U]) -> "Success[U]":
        return Success(fn(self.value))

    def map_failure(self, fn: Callable[[Any], Any]) -> "Success[T]":
        return self

    def bind(self, fn: Callable[[T], "Result[U, Any]"]) -> "Result[U, Any]":
        return fn(self.value)

    def value_or(self, default: Any) -> T:
        return self.value

    def unwrap(self) -> T:
        return self.value

    @property
    def failure(self) -> NoReturn:
        raise UnwrapError("Success has no failure value")


@dataclass(frozen=True)
class Failure(Generic[E]):
    """A failed result carrying ``failure``."""

    failure: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def map_success(self, fn: Callable[[Any], Any]) -> "Failure[E]":
        return self

    def map_failure(self, fn: Callable[[E], U]) -> "Failure[U]":
        return Failure(fn(self.failure))

    def bind(self, fn: Callable[[Any], Any]) -> "Failure[E]":
        return self

    def value_or(self, default: U) -> U:
        return default

    def unwrap(self) -> NoReturn:
        raise UnwrapError(f"Called unwrap on Failure: {self.failure}")

    @property
    def value(self) -> NoReturn:
        raise UnwrapError(f"Failure has no success value: {self.failure}")


Result = Union[Success[T], Failure[E]]
