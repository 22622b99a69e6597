"""Result[T, E] — Ok and Err variants for range checks that must not raise."""

from __future__ import annotations

import dataclasses
from typing import Generic, NoReturn, TypeVar

T = TypeVar("T")
E = TypeVar("E", bound=Exception)


@dataclasses.dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def unwrap(self) -> T:
        return self.value


@dataclasses.dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed check; :meth:`unwrap` raises the wrapped error."""

    error: E

    def unwrap(self) -> NoReturn:
        raise self.error


type Result[T, E] = Ok[T] | Err[E]

__all__ = ["Err", "Ok", "Result"]
