"""Two-state outcome container returned by every fallible operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from .errors import ContractViolationError, Error

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful outcome holding ``value``."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def ok(self) -> T:
        return self.value

    def err(self) -> None:
        return None

    def unwrap(self) -> T:
        return self.value

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Err:
    """Failed outcome holding an ``Error``."""

    error: Error

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def ok(self) -> None:
        return None

    def err(self) -> Error:
        return self.error

    def unwrap(self) -> NoReturn:
        """Unwrapping an error is a caller bug; check ``is_ok()`` first."""
        raise ContractViolationError(f"attempt to get ok value from err: {self.error.detail}")

    def __bool__(self) -> bool:
        return False


Result = Union[Ok[T], Err]


def error(detail: str) -> Err:
    """Shorthand for ``Err(Error(detail))``."""
    return Err(Error(detail))
