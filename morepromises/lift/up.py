"""
Подъем значений в deferred result.

Functions turning plain values, kungfu Results, asyncio futures and
kungfu lazy computations into deferred results built by the active factory.
"""

from __future__ import annotations

import asyncio
import typing

from kungfu import LazyCoroResult, Result

from .._types import Reject, Resolve
from ..deferred import FutureSource, carried_outcome, dispatch
from ..factory import new_deferred


def resolved[T](value: T) -> typing.Any:
    """
    Deferred result already succeeded with value.

    Example:
        from morepromises import lift as L

        user = L.up.resolved(User(id=42))
        result = await user  # Ok(User(id=42))
    """
    return new_deferred(lambda resolve, _reject: resolve(value))


def rejected[E](error: E) -> typing.Any:
    """
    Deferred result already failed with error. Dual of resolved().

    NOTE: error is any object; it is not raised and need not be an exception.
    """
    return new_deferred(lambda _resolve, reject: reject(error))


def from_result[T, E](result: Result[T, E]) -> typing.Any:
    """
    Settle a deferred result from an already-computed kungfu Result.

    Example:
        L.up.from_result(Ok(1))        # succeeds with 1
        L.up.from_result(Error("bad")) # fails with "bad"
    """

    def worker(resolve: Resolve[T], reject: Reject[E]) -> None:
        dispatch(result, resolve, reject)

    return new_deferred(worker)


def from_future(future: asyncio.Future[typing.Any]) -> typing.Any:
    """
    Adopt an asyncio future or task.

    Its result becomes the success value; a raised exception (or
    CancelledError on cancellation) becomes the failure value.
    """
    source = FutureSource(future)
    return new_deferred(lambda resolve, reject: source.then(resolve, reject))


def from_lazy[T, E](lazy: LazyCoroResult[T, E]) -> typing.Any:
    """
    Start a kungfu LazyCoroResult now and expose it as a deferred result.

    **When to use:** Mixing kungfu lazy pipelines (retry, fallback...)
    with eager aggregation like all_of/settle.

    NOTE: Scheduling makes the computation eager: it runs once, right away,
          whether or not anybody awaits the deferred.
    """
    source = FutureSource(asyncio.ensure_future(lazy()), outcome=carried_outcome)
    return new_deferred(lambda resolve, reject: source.then(resolve, reject))


__all__ = (
    "from_future",
    "from_lazy",
    "from_result",
    "rejected",
    "resolved",
)
