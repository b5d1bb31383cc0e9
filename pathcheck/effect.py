"""
Deferred, short-circuiting computations.

An Effect wraps an async block. Nothing runs until `evaluate()` is awaited
(or the Effect is bound from inside another Effect's block). Inside the
block, `scope.shift(error)` aborts the rest of the block and the Effect
evaluates to `Err(error)`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, NoReturn, TypeVar

from .types import E, Err, Ok, Outcome

A = TypeVar("A")
B = TypeVar("B")
R = TypeVar("R")


class _ShiftSignal(Exception):
    """Internal signal for short-circuit propagation."""

    def __init__(self, scope: EffectScope[Any], error: Any):
        super().__init__(error)
        self.scope = scope
        self.error = error


class EffectScope(Generic[E]):
    """
    Receiver handed to an Effect's block.

    A signal raised by `shift` is tagged with the scope that raised it, so
    it is only caught by the `evaluate` call that owns this scope.
    """

    __slots__ = ()

    def shift(self, error: E) -> NoReturn:
        """Abort the enclosing block with `error`."""
        raise _ShiftSignal(self, error)

    def ensure(self, condition: bool, error: Callable[[], E]) -> None:
        """Shift with `error()` unless `condition` holds."""
        if not condition:
            self.shift(error())

    async def bind(self, effect: Effect[E, A]) -> A:
        """Evaluate a child Effect, returning its value or short-circuiting."""
        if not isinstance(effect, Effect):
            raise TypeError(f"Cannot bind {type(effect).__name__}, expected Effect")
        return self.bind_outcome(await effect.evaluate())

    def bind_outcome(self, outcome: Outcome[A, E]) -> A:
        """Unwrap an already computed Outcome the same way `bind` does."""
        if isinstance(outcome, Err):
            self.shift(outcome.error)
        return outcome.value


@dataclass(frozen=True, slots=True)
class Effect(Generic[E, A]):
    """
    Immutable, unevaluated computation.

    Re-evaluating re-runs the block; results are never memoized.
    """

    block: Callable[[EffectScope[E]], Awaitable[A]]

    async def evaluate(self) -> Outcome[A, E]:
        """
        Run the block once.

        Returns:
            Ok(value) if the block returned normally
            Err(error) if the block (or a bound child) shifted
        """
        scope: EffectScope[E] = EffectScope()
        try:
            value = await self.block(scope)
        except _ShiftSignal as signal:
            if signal.scope is not scope:
                raise
            return Err(signal.error)
        return Ok(value)

    def map(self, f: Callable[[A], B]) -> Effect[E, B]:
        """Transform the success value, leaving failures untouched."""

        async def mapped(scope: EffectScope[E]) -> B:
            return f(await scope.bind(self))

        return Effect(mapped)

    async def fold(
        self,
        recover: Callable[[E], R],
        transform: Callable[[A], R],
    ) -> R:
        """Evaluate and collapse both cases into a single value."""
        outcome = await self.evaluate()
        if isinstance(outcome, Err):
            return recover(outcome.error)
        return transform(outcome.value)

    async def or_raise(self, exc: Callable[[E], Exception]) -> A:
        """Evaluate, raising `exc(error)` on failure."""
        outcome = await self.evaluate()
        if isinstance(outcome, Err):
            raise exc(outcome.error)
        return outcome.value

    @staticmethod
    def succeed(value: A) -> Effect[Any, A]:
        async def block(_scope: EffectScope[Any]) -> A:
            return value

        return Effect(block)

    @staticmethod
    def fail(error: E) -> Effect[E, Any]:
        async def block(scope: EffectScope[E]) -> Any:
            scope.shift(error)

        return Effect(block)


def effect(block: Callable[[EffectScope[E]], Awaitable[A]]) -> Effect[E, A]:
    """
    Build an Effect from an async block. Usable as a decorator.

    Usage:
        @effect
        async def parsed(scope):
            raw = await scope.bind(fetch_raw)
            if not raw:
                scope.shift(("empty",))
            return raw.strip()

        outcome = await parsed.evaluate()
    """
    return Effect(block)
