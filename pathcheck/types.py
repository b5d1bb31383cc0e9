"""
Type definitions for pathcheck.

Provides the Outcome sum type (Ok/Err) and the error merge used when
combining failing branches.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Success result containing a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """
    Error result containing an error value.

    When the error is a collection of errors it must not be empty.
    """

    error: E

    def __post_init__(self) -> None:
        if isinstance(self.error, (list, tuple)) and len(self.error) == 0:
            raise ValueError("Err requires a non-empty error collection")

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


# Type aliases
Outcome = Union[Ok[T], Err[E]]
ErrorMerge = Callable[[E, E], E]


def concat(left: Any, right: Any) -> tuple[Any, ...]:
    """
    Default error merge: order-preserving concatenation.

    Associative, so folding three or more failures gives the same result
    regardless of grouping.
    """
    return (*left, *right)
