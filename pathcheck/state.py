"""
Effects that additionally thread an explicit state value.

A StateEffect is run with an input state and yields an Effect of
`(new_state, value)`. Sequential binds inside a `state_effect` block carry
the state forward; `peek` and the parallel combinators never do.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, NoReturn, Sequence, TypeVar

from .combine import call_transform, zip_effects
from .effect import A, B, Effect, EffectScope
from .types import E, ErrorMerge, concat

S = TypeVar("S")
R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class StateEffect(Generic[S, E, A]):
    """Immutable, unevaluated computation parameterized by an input state."""

    run_state: Callable[[S], Effect[E, tuple[S, A]]]

    def eval_state(self, initial: S) -> Effect[E, A]:
        """Run from `initial`, keeping only the value."""
        return self.run_state(initial).map(lambda pair: pair[1])

    def map(self, f: Callable[[A], B]) -> StateEffect[S, E, B]:
        def run_state(state: S) -> Effect[E, tuple[S, B]]:
            return self.run_state(state).map(lambda pair: (pair[0], f(pair[1])))

        return StateEffect(run_state)


class StateEffectScope(Generic[S, E]):
    """
    Receiver handed to a `state_effect` block.

    Holds the mutable current-state cell of one sequential chain. The cell
    is never shared with concurrently running branches.
    """

    def __init__(self, state: S, effect_scope: EffectScope[E]):
        self.state = state
        self._effect_scope = effect_scope

    def shift(self, error: E) -> NoReturn:
        self._effect_scope.shift(error)

    async def bind(self, child: StateEffect[S, E, A] | Effect[E, A]) -> A:
        """
        Run a child against the current state.

        On success the current state becomes the child's updated state. A
        plain Effect is bound without touching the state. On failure the
        state is left as it was and the enclosing block short-circuits.
        """
        if isinstance(child, Effect):
            return await self._effect_scope.bind(child)
        if not isinstance(child, StateEffect):
            raise TypeError(
                f"Cannot bind {type(child).__name__}, expected StateEffect or Effect"
            )
        state, value = await self._effect_scope.bind(child.run_state(self.state))
        self.state = state
        return value

    async def peek(self, child: StateEffect[S, E, A]) -> A:
        """Like `bind`, but the current state is never replaced."""
        if not isinstance(child, StateEffect):
            raise TypeError(f"Cannot peek {type(child).__name__}, expected StateEffect")
        _, value = await self._effect_scope.bind(child.run_state(self.state))
        return value


ScopeT = TypeVar("ScopeT", bound=StateEffectScope)


def state_effect(
    block: Callable[[ScopeT], Awaitable[A]],
    scope_type: Callable[[Any, EffectScope[Any]], ScopeT] = StateEffectScope,
) -> StateEffect[Any, Any, A]:
    """
    Build a StateEffect from an async block.

    The block receives a scope seeded with the input state; whatever state
    the scope holds when the block returns becomes the output state.
    """

    def run_state(state: Any) -> Effect[Any, tuple[Any, A]]:
        async def run(effect_scope: EffectScope[Any]) -> tuple[Any, A]:
            scope = scope_type(state, effect_scope)
            result = await block(scope)
            return scope.state, result

        return Effect(run)

    return StateEffect(run_state)


def just(value: A) -> StateEffect[Any, Any, A]:
    """Lift a plain value; the input state passes through untouched."""
    return StateEffect(lambda state: Effect.succeed((state, value)))


def zip_state(
    effects: Sequence[StateEffect[S, E, Any]],
    transform: Callable[..., R],
    merge: ErrorMerge[E] = concat,
) -> StateEffect[S, E, R]:
    """
    Combine N StateEffects with fail-slow semantics.

    Each member runs against its own copy of the input state. Their
    updated states are discarded: there is no canonical way to reconcile N
    divergent states, so the result is always paired with the original
    input state.
    """
    members = tuple(effects)
    if not members:
        raise ValueError("zip_state requires at least one state effect")

    def run_state(state: S) -> Effect[E, tuple[S, R]]:
        branches = [m.run_state(copy.copy(state)) for m in members]

        async def combine(*pairs: tuple[S, Any]) -> tuple[S, R]:
            return state, await call_transform(transform, *(a for _, a in pairs))

        return zip_effects(branches, combine, merge)

    return StateEffect(run_state)


def sequence_state(
    effects: Sequence[StateEffect[S, E, Any]], merge: ErrorMerge[E] = concat
) -> StateEffect[S, E, list[Any]]:
    """Turn N StateEffects into one StateEffect of the list of their values."""
    return zip_state(effects, lambda *values: list(values), merge)
