"""Success/failure values returned by every client operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, NoReturn, TypeVar, Union

from unkey.exceptions import UnkeyError

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying the parsed response."""

    value: T

    @property
    def is_ok(self) -> Literal[True]:
        return True

    @property
    def is_err(self) -> Literal[False]:
        return False

    def unwrap(self) -> T:
        """Return the contained value."""
        return self.value

    def unwrap_or(self, default: U) -> T | U:
        del default
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying the typed error."""

    error: UnkeyError

    @property
    def is_ok(self) -> Literal[False]:
        return False

    @property
    def is_err(self) -> Literal[True]:
        return True

    def unwrap(self) -> NoReturn:
        """Raise the contained error."""
        raise self.error

    def unwrap_or(self, default: U) -> U:
        return default


Result = Union[Ok[T], Err]
