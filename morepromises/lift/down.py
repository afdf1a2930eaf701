"""
Опускание deferred result в значение.

Waiting on any item (deferred, future, thenable or plain value) and getting
back a kungfu Result, a raw value, or a lazy computation.
"""

from __future__ import annotations

import asyncio
import typing

from kungfu import Error, LazyCoroResult, Ok, Result

from .._helpers import Pending, Value, classify


async def to_result(item: object) -> Result[typing.Any, typing.Any]:
    """
    Wait for item and return its outcome as a Result.

    Plain values come back as Ok(value) without suspending.

    Example:
        result = await L.down.to_result(all_of([a, b]))
        # Ok([...]) or Error(first_failure)
    """
    match classify(item):
        case Value(value):
            return Ok(value)
        case Pending(source):
            outcome: asyncio.Future[Result[typing.Any, typing.Any]] = (
                asyncio.get_running_loop().create_future()
            )

            def settle(result: Result[typing.Any, typing.Any]) -> None:
                if not outcome.done():
                    outcome.set_result(result)

            source.then(lambda v: settle(Ok(v)), lambda e: settle(Error(e)))
            return await outcome


async def unsafe(item: object) -> typing.Any:
    """
    Wait and unwrap, raises on failure.

    NOTE: Raises through kungfu's Result.unwrap(). Use only when you're
          certain of success or want failures as exceptions.
    """
    result = await to_result(item)
    return result.unwrap()


async def or_else[T](item: object, default: T) -> typing.Any:
    """Wait and return the value, or default on failure."""
    result = await to_result(item)
    match result:
        case Ok(v):
            return v
        case Error(_):
            return default


def to_lazy(item: object) -> LazyCoroResult[typing.Any, typing.Any]:
    """
    View item as a kungfu LazyCoroResult.

    The item itself is already running (deferreds are eager); the lazy
    wrapper only defers the waiting, so it can be retried, mapped, etc.
    without starting anything twice.
    """

    async def run() -> Result[typing.Any, typing.Any]:
        return await to_result(item)

    return LazyCoroResult(run)


__all__ = (
    "or_else",
    "to_lazy",
    "to_result",
    "unsafe",
)
