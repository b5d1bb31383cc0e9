"""
Pathcheck Validation - path-aware validation with fail-fast and fail-slow composition.

Usage:
    from pathcheck.validation import validation, zip_validations, evaluate

    def required(data, name):
        @validation
        async def check(scope):
            return scope.nn(data.get(name), name=name)

        return check

    person = zip_validations(
        required(data, "name"),
        required(data, "phone"),
        transform=Person,
    )
    result = await evaluate(person)  # Ok(Person) or Err((CannotBeEmpty(("phone",)),))
"""

from ..state import just
from ..types import Err, Ok
from .core import (
    InconsistentFailure,
    ValidationFailed,
    evaluate,
    evaluate_sync,
    first_valid,
    first_valid_of,
    fold,
    or_raise,
    sequence,
    zip_validations,
)
from .mapper import ValidatingMapper
from .models import errors_from_pydantic
from .scope import ValidationScope, failed_with, validation
from .types import (
    EMPTY_PATH,
    CannotBeEmpty,
    InvalidValue,
    PropertyPath,
    Validation,
    ValidationError,
    ValidationErrors,
    ValidationResult,
)

__all__ = [
    # Result types
    "Ok",
    "Err",
    # Errors
    "PropertyPath",
    "EMPTY_PATH",
    "ValidationError",
    "ValidationErrors",
    "CannotBeEmpty",
    "InvalidValue",
    "ValidationFailed",
    "InconsistentFailure",
    # Core
    "Validation",
    "ValidationResult",
    "ValidationScope",
    "validation",
    "just",
    "failed_with",
    # Evaluation
    "evaluate",
    "evaluate_sync",
    "fold",
    "or_raise",
    # Combinators
    "zip_validations",
    "sequence",
    "first_valid",
    "first_valid_of",
    # Mapping
    "ValidatingMapper",
    "errors_from_pydantic",
]
