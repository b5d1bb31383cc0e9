"""
Evaluation and combinators for Validations.

Provides evaluate(), first_valid(), zip_validations() and friends.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Sequence, TypeVar

from ..effect import Effect, EffectScope
from ..state import StateEffect, sequence_state, zip_state
from ..types import Err, concat
from .types import (
    EMPTY_PATH,
    PropertyPath,
    Validation,
    ValidationErrors,
    ValidationResult,
)

T = TypeVar("T")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class ValidationFailed(ValueError):
    """Raised by `or_raise` when a validation fails."""

    def __init__(self, errors: ValidationErrors):
        self.errors = errors
        details = "; ".join(
            f"{e.kind} at {'.'.join(e.property_path) or '<root>'}" for e in errors
        )
        super().__init__(f"Validation failed: {details}")


class InconsistentFailure(RuntimeError):
    """Every alternative failed, yet none reported an error."""


async def evaluate(validation: Validation) -> ValidationResult:
    """
    Run a validation from the empty path.

    Returns:
        Ok(value) if validation passes
        Err((error, ...)) with every path-tagged error, in order
    """
    return await validation.eval_state(EMPTY_PATH).evaluate()


def evaluate_sync(validation: Validation) -> ValidationResult:
    """`evaluate` for synchronous callers (starts its own event loop)."""
    return asyncio.run(evaluate(validation))


async def fold(
    validation: Validation,
    recover: Callable[[ValidationErrors], R],
    transform: Callable[[Any], R],
) -> R:
    return await validation.eval_state(EMPTY_PATH).fold(recover, transform)


async def or_raise(
    validation: Validation,
    exc: Callable[[ValidationErrors], Exception] = ValidationFailed,
) -> Any:
    """
    Evaluate, returning the value or raising.

    Raises:
        ValidationFailed: (or `exc(errors)`) If the validation fails
    """
    return await validation.eval_state(EMPTY_PATH).or_raise(exc)


def first_valid(alternatives: Sequence[Validation]) -> Validation:
    """
    Try alternatives in order, keeping the first that succeeds.

    Later alternatives are never evaluated once one succeeds, and the path
    left by the successful alternative is kept. If all fail, the errors of
    every attempt are returned together, in attempt order.
    """
    attempts = tuple(alternatives)
    if not attempts:
        raise ValueError("first_valid requires at least one alternative")

    def run_state(path: PropertyPath) -> Effect[ValidationErrors, tuple[PropertyPath, Any]]:
        async def block(scope: EffectScope[ValidationErrors]) -> tuple[PropertyPath, Any]:
            errors: ValidationErrors = ()
            for index, attempt in enumerate(attempts):
                outcome = await attempt.run_state(path).evaluate()
                if not isinstance(outcome, Err):
                    logger.debug("alternative %d of %d succeeded", index + 1, len(attempts))
                    return outcome.value
                errors = concat(errors, outcome.error)

            if not errors:
                raise InconsistentFailure(
                    f"all {len(attempts)} alternatives failed without reporting an error"
                )
            scope.shift(errors)

        return Effect(block)

    return StateEffect(run_state)


def first_valid_of(
    alternatives: Sequence[T], mapper: Callable[[T], Validation]
) -> Validation:
    """
    Map each alternative to a Validation, then `first_valid`.

    Usage:
        contact = first_valid_of(["email", "phone"], lambda k: required(person, k))
    """
    return first_valid([mapper(a) for a in alternatives])


def zip_validations(
    *validations: Validation, transform: Callable[..., R] = lambda *values: values
) -> Validation:
    """
    Run independent validations, accumulating all of their errors.

    Each runs from the same input path; the combined result is anchored at
    that input path no matter how deep the members descended.

    Usage:
        person = zip_validations(name, address, phone, transform=Person)
    """
    return zip_state(validations, transform, concat)


def sequence(validations: Sequence[Validation]) -> Validation:
    """Like `zip_validations`, producing the list of values."""
    return sequence_state(validations, concat)
