"""
Pydantic interop for pathcheck validation.

Converts pydantic's flat error list into path-tagged InvalidValue errors.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .types import InvalidValue, PropertyPath, ValidationErrors


@lru_cache(maxsize=256)
def _adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def validate_python(type_: Any, value: Any) -> Any:
    """
    Validate `value` against `type_` with pydantic.

    Raises:
        pydantic.ValidationError: If validation fails
    """
    try:
        adapter = _adapter(type_)
    except TypeError:
        # unhashable type expressions
        adapter = TypeAdapter(type_)
    return adapter.validate_python(value)


def errors_from_pydantic(
    exc: PydanticValidationError, path: PropertyPath
) -> ValidationErrors:
    """
    Map each pydantic error to an InvalidValue under `path`.

    The pydantic `loc` is appended to `path`, with integer indices rendered
    as strings so segments stay uniform.
    """
    return tuple(
        InvalidValue(
            property_path=(*path, *(str(loc) for loc in error["loc"])),
            type=error["type"],
            message=error["msg"],
        )
        for error in exc.errors()
    )
