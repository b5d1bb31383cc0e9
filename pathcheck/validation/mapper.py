import logging
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from ..types import Err
from .core import ValidationFailed, evaluate, or_raise
from .types import Validation, ValidationResult

"""
ValidatingMapper - turns an input into a validated output.

Subclasses describe the mapping once, as a Validation, in `definition`.
Execution always starts from the empty path, so every reported error is
located relative to the mapper's input.
"""

_InT = TypeVar("_InT")
_OutT = TypeVar("_OutT")

logger = logging.getLogger(__name__)


class ValidatingMapper(ABC, Generic[_InT, _OutT]):
    """
    Base class for input -> output mappings that validate as they go.

    Example:
        class PersonMapper(ValidatingMapper[dict, Person]):
            def definition(self, data: dict) -> Validation:
                return zip_validations(
                    required(data, "name"),
                    required(data, "phone"),
                    transform=Person,
                )

        result = await PersonMapper().execute({"name": "Ann"})
    """

    @abstractmethod
    def definition(self, data: _InT) -> Validation:
        """Build (but do not run) the Validation for `data`."""

    async def execute(self, data: _InT) -> ValidationResult:
        """Evaluate the definition, returning Ok(output) or Err(errors)."""
        result = await evaluate(self.definition(data))
        if isinstance(result, Err):
            logger.debug(
                "%s rejected input with %d error(s)",
                type(self).__name__,
                len(result.error),
            )
        return result

    async def execute_or_raise(self, data: _InT) -> _OutT:
        """
        Evaluate the definition, returning the output.

        Raises:
            ValidationFailed: If any check fails
        """
        return await or_raise(self.definition(data), ValidationFailed)

