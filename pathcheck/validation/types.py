"""
Type definitions for pathcheck validation.

Provides the path-tagged error hierarchy and the Validation alias.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeAlias

from ..state import StateEffect
from ..types import Err, Ok

PropertyPath: TypeAlias = tuple[str, ...]
EMPTY_PATH: PropertyPath = ()


@dataclass(frozen=True, slots=True)
class ValidationError:
    """
    A single failed check, located by the path of the offending value.

    Subclass to define new kinds; the kind tag is the class name.
    """

    property_path: PropertyPath

    @property
    def kind(self) -> str:
        return type(self).__name__


@dataclass(frozen=True, slots=True)
class CannotBeEmpty(ValidationError):
    """Value is missing, None, or an empty string/collection."""


@dataclass(frozen=True, slots=True)
class InvalidValue(ValidationError):
    """Value rejected by a pydantic type check."""

    type: str = "value_error"
    message: str = ""


# Type aliases
ValidationErrors: TypeAlias = tuple[ValidationError, ...]
Validation: TypeAlias = StateEffect[PropertyPath, ValidationErrors, Any]
ValidationResult: TypeAlias = Ok[Any] | Err[ValidationErrors]
