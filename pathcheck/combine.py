"""
N-ary fail-slow combination of Effects.

All members are evaluated (concurrently by default), every outcome is
collected, and only then are the outcomes inspected. Unlike the usual
"cancel the group on first error" pattern, a failing member never cancels
its siblings: failures are values, so the task group only tears down on
parent cancellation or an unexpected exception.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from functools import reduce
from typing import Any, Callable, Sequence, TypeVar

from .context import is_sequential
from .effect import Effect, EffectScope
from .types import E, Err, ErrorMerge, Ok, Outcome, concat

R = TypeVar("R")

logger = logging.getLogger(__name__)


def combine_outcomes(
    outcomes: Sequence[Outcome[Any, E]], merge: ErrorMerge[E] = concat
) -> Ok[list[Any]] | Err[E]:
    """
    Join completed outcomes.

    Returns:
        Ok([values...]) if every outcome succeeded, in input order
        Err(merged) folding every failure with `merge`, first failure first
    """
    failures = [o.error for o in outcomes if isinstance(o, Err)]
    if failures:
        return Err(reduce(merge, failures))
    return Ok([o.value for o in outcomes])


async def call_transform(transform: Callable[..., Any], *args: Any) -> Any:
    """Apply a plain or coroutine transform."""
    result = transform(*args)
    if inspect.isawaitable(result):
        result = await result
    return result


async def join_all(effects: Sequence[Effect[E, Any]]) -> list[Outcome[Any, E]]:
    """
    Evaluate every effect and wait for all of them, preserving order.

    An exception escaping a branch (a bug, or a shift aimed at an enclosing
    scope) is re-raised as is, never wrapped in an ExceptionGroup. When
    several branches raise, the one earliest in list order wins.
    """
    if is_sequential():
        return [await e.evaluate() for e in effects]

    tasks: list[asyncio.Task[Outcome[Any, E]]] = []
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(e.evaluate()) for e in effects]
    except BaseExceptionGroup:
        for task in tasks:
            if task.done() and not task.cancelled() and task.exception() is not None:
                raise task.exception() from None
        raise
    return [t.result() for t in tasks]


def zip_effects(
    effects: Sequence[Effect[E, Any]],
    transform: Callable[..., R],
    merge: ErrorMerge[E] = concat,
) -> Effect[E, R]:
    """
    Combine N effects with fail-slow semantics.

    Args:
        effects: Non-empty sequence of effects sharing an error type
        transform: Called with the N success values in argument order
        merge: Associative merge for failures (defaults to concatenation)

    Returns:
        A new, unevaluated Effect

    Usage:
        both = zip_effects([parse_name, parse_age], lambda n, a: (n, a))
        outcome = await both.evaluate()
    """
    members = tuple(effects)
    if not members:
        raise ValueError("zip_effects requires at least one effect")

    if len(members) == 1:
        (only,) = members

        async def single(scope: EffectScope[E]) -> R:
            return await call_transform(transform, await scope.bind(only))

        return Effect(single)

    async def block(scope: EffectScope[E]) -> R:
        outcomes = await join_all(members)
        joined = combine_outcomes(outcomes, merge)
        if isinstance(joined, Err):
            logger.debug(
                "combined %d branches, %d failed",
                len(members),
                sum(1 for o in outcomes if isinstance(o, Err)),
            )
        values = scope.bind_outcome(joined)
        return await call_transform(transform, *values)

    return Effect(block)


def sequence_effects(
    effects: Sequence[Effect[E, Any]], merge: ErrorMerge[E] = concat
) -> Effect[E, list[Any]]:
    """Combine N effects into one Effect of the list of their values."""
    return zip_effects(effects, lambda *values: list(values), merge)
