"""
ValidationScope: the receiver handed to `validation` blocks.

Specializes StateEffectScope with the property path as state and a
non-empty tuple of ValidationErrors as the failure value.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Iterable, Mapping, NoReturn, TypeVar

from pydantic import ValidationError as PydanticValidationError

from ..combine import call_transform
from ..effect import _ShiftSignal
from ..state import StateEffectScope, state_effect
from .models import errors_from_pydantic, validate_python
from .types import (
    CannotBeEmpty,
    PropertyPath,
    Validation,
    ValidationError,
    ValidationErrors,
)

T = TypeVar("T")
R = TypeVar("R")

ErrorFactory = Callable[[PropertyPath], ValidationError]


class ValidationScope(StateEffectScope[PropertyPath, ValidationErrors]):
    """
    Path-aware accessors and leaf checks.

    Named access (`field`, `attr`, `key`, or any check given `name=`) appends
    to `state`, so a later `fail` is tagged with the full path of the value
    being checked.
    """

    # Named access

    def field(self, name: str | int, value: T) -> T:
        """Descend into `name` and return `value`."""
        self.state = (*self.state, str(name))
        return value

    def attr(self, obj: Any, name: str) -> Any:
        """Descend into attribute `name` of `obj`."""
        return self.field(name, getattr(obj, name))

    def key(self, mapping: Mapping[str, Any], name: str) -> Any:
        """Descend into `mapping[name]`; a missing key reads as None."""
        return self.field(name, mapping.get(name))

    def each(
        self,
        values: Iterable[T],
        block: Callable[[ValidationScope, T], Awaitable[R]],
        *,
        name: str | None = None,
    ) -> list[Validation]:
        """
        One child Validation per element, each rooted at `path + (index,)`.

        Children start from a snapshot of the current path, so they can be
        combined (`sequence`, `zip_validations`) without sharing state.

        Usage:
            items = scope.each(order["items"], check_item, name="items")
            checked = await scope.bind(sequence(items))
        """
        if name is not None:
            values = self.field(name, values)
        snapshot = self.state

        def child(index: int, item: T) -> Validation:
            async def check(scope: ValidationScope) -> R:
                scope.state = (*snapshot, str(index))
                return await block(scope, item)

            return validation(check)

        return [child(index, item) for index, item in enumerate(values)]

    # Failing

    def fail(self, *errors: ErrorFactory) -> NoReturn:
        """
        Short-circuit with one error per factory, tagged with the current path.

        With no factories, fails with CannotBeEmpty.
        """
        factories = errors or (CannotBeEmpty,)
        self.shift(tuple(factory(self.state) for factory in factories))

    # Leaf checks

    def nn(
        self,
        value: T | None,
        error: ErrorFactory = CannotBeEmpty,
        *,
        name: str | None = None,
    ) -> T:
        """Return `value` unless it is None."""
        if name is not None:
            value = self.field(name, value)
        if value is None:
            self.fail(error)
        return value

    def cast(self, value: Any, type_: type[T], error: ErrorFactory) -> T:
        """Return `value` if it is a `type_`; a bool is never accepted as an int."""
        if not isinstance(value, type_) or (
            isinstance(value, bool)
            and issubclass(type_, int)
            and not issubclass(type_, bool)
        ):
            self.fail(error)
        return value

    async def catch(
        self, f: Callable[[], T | Awaitable[T]], error: ErrorFactory
    ) -> T:
        """Run `f`; an exception it raises, or a None result, becomes `error`."""
        try:
            result = await call_transform(f)
        except _ShiftSignal:
            raise
        except Exception:
            self.fail(error)
        if result is None:
            self.fail(error)
        return result

    async def catch_with_exception(
        self,
        f: Callable[[], T | Awaitable[T]],
        error: Callable[[PropertyPath, Exception], ValidationError],
    ) -> T:
        """Like `catch`, but the factory also receives the exception."""
        try:
            return await call_transform(f)
        except _ShiftSignal:
            raise
        except Exception as exc:
            self.fail(lambda path: error(path, exc))

    def not_empty(
        self,
        values: Iterable[T] | None,
        error: ErrorFactory = CannotBeEmpty,
        *,
        name: str | None = None,
    ) -> list[T]:
        """Return the elements as a list, failing if there are none."""
        if name is not None:
            values = self.field(name, values)
        items = list(values) if values is not None else []
        if not items:
            self.fail(error)
        return items

    def nn_or_empty(
        self,
        value: str | None,
        error: ErrorFactory = CannotBeEmpty,
        *,
        name: str | None = None,
    ) -> str:
        """Return `value` unless it is None or ""."""
        if name is not None:
            value = self.field(name, value)
        if not value:
            self.fail(error)
        return value

    def null_or_not_empty(
        self,
        value: str | None,
        error: ErrorFactory = CannotBeEmpty,
        *,
        name: str | None = None,
    ) -> str | None:
        """None passes through; an empty string fails."""
        if name is not None:
            value = self.field(name, value)
        if value is None:
            return None
        return self.nn_or_empty(value, error)

    def parse(self, type_: Any, value: Any, *, name: str | None = None) -> Any:
        """
        Validate and coerce `value` with pydantic.

        Every pydantic error becomes an InvalidValue located under the
        current path.
        """
        if name is not None:
            value = self.field(name, value)
        try:
            return validate_python(type_, value)
        except PydanticValidationError as exc:
            self.shift(errors_from_pydantic(exc, self.state))


def validation(block: Callable[[ValidationScope], Awaitable[T]]) -> Validation:
    """
    Build a Validation from an async block. Usable as a decorator.

    Usage:
        def check_person(person: dict) -> Validation:
            @validation
            async def check(scope):
                name = scope.nn_or_empty(person.get("name"), name="name")
                return Person(name=name)

            return check
    """
    return state_effect(block, ValidationScope)


def failed_with(child: Validation, error: ErrorFactory) -> Validation:
    """Run `child` for its own errors; if it succeeds, fail with `error`."""

    async def check(scope: ValidationScope) -> NoReturn:
        await scope.bind(child)
        scope.fail(error)

    return validation(check)
