"""
Reflect combinators
===================

Wait for every item and report how each one ended. Never fails.
"""

from __future__ import annotations

import typing
from collections.abc import Callable
from dataclasses import dataclass

from .._helpers import Pending, Value, classify, empty_like, entries, finish, once
from .._types import Key, Keyed, Reject, ReflectState, Resolve, Worker
from ..factory import new_deferred


@dataclass(frozen=True, slots=True)
class Reflection[T]:
    """
    Outcome of one reflected item.

    state:
    - "fulfilled":   pending item succeeded, value is its result
    - "rejected":    pending item failed, value is its failure
    - "not-promise": item was an immediate value, value is the item itself
    """

    state: ReflectState
    value: T


# ============================================================================
# Generic combinator (factory injection)
# ============================================================================


def reflectM[D](
    items: Keyed[typing.Any],
    *,
    factory: Callable[[Worker[typing.Any, typing.Any]], D],
) -> D:
    """Generic reflect combinator."""

    def worker(resolve: Resolve[typing.Any], reject: Reject[typing.Any]) -> None:
        _ = reject  # never fails
        acc = empty_like(items)
        pending = 1

        def record(key: Key, state: ReflectState, value: typing.Any) -> None:
            nonlocal pending
            acc[key] = Reflection(state, value)
            pending -= 1
            if not pending:
                resolve(finish(acc))

        def watch(key: Key, source: typing.Any) -> None:
            source.then(
                *once(
                    lambda value: record(key, "fulfilled", value),
                    lambda error: record(key, "rejected", error),
                    name="reflect",
                )
            )

        for key, item in entries(items):
            pending += 1
            match classify(item):
                case Pending(source):
                    watch(key, source)
                case Value(value):
                    record(key, "not-promise", value)

        pending -= 1
        if not pending:
            resolve(finish(acc))

    return factory(worker)


# ============================================================================
# Sugar
# ============================================================================


def reflect(items: Keyed[typing.Any]) -> typing.Any:
    """Wait for all, resolve with a Reflection per key."""
    return reflectM(items, factory=new_deferred)


__all__ = ("Reflection", "reflect", "reflectM")
