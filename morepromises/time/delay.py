"""Delay combinators

Resolve after a pause, optionally chained after another deferred result."""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Callable

from .._helpers import Pending, Value, classify
from .._types import Reject, Resolve, Worker
from ..factory import new_deferred

_NO_SOURCE: typing.Final = object()


def _check_seconds(seconds: object) -> float:
    if isinstance(seconds, bool) or not isinstance(seconds, (int, float)):
        raise TypeError(f"delay expects seconds as a number, got {type(seconds).__name__}")
    return seconds


# Generic combinator (factory injection)
def delayM[D](
    source: object = _NO_SOURCE,
    /,
    *,
    seconds: float,
    factory: Callable[[Worker[typing.Any, typing.Any]], D],
) -> D:
    """
    Generic delay combinator.

    Without a source: resolve with None after at least `seconds`.
    With a source: wait `seconds` after it succeeds, then resolve with its
    value. A failure passes through immediately, without the pause.
    """
    seconds = _check_seconds(seconds)

    def worker(resolve: Resolve[typing.Any], reject: Reject[typing.Any]) -> None:
        loop = asyncio.get_running_loop()

        def trigger(value: typing.Any) -> None:
            loop.call_later(seconds, resolve, value)

        if source is _NO_SOURCE:
            trigger(None)
            return

        match classify(source):
            case Pending(pending):
                pending.then(trigger, reject)
            case Value(value):
                trigger(value)

    return factory(worker)


# Sugar
@typing.overload
def delay(seconds: float, /) -> typing.Any: ...


@typing.overload
def delay(source: object, seconds: float, /) -> typing.Any: ...


def delay(source: object, seconds: float | None = None, /) -> typing.Any:
    """
    Pause, then resolve.

    Example:
        await delay(0.5)                 # Ok(None) after 0.5s
        await delay(fetch_user(42), 0.5) # Ok(user), 0.5s after it arrived
    """
    if seconds is None:
        return delayM(seconds=typing.cast(float, source), factory=new_deferred)
    return delayM(source, seconds=seconds, factory=new_deferred)


__all__ = ("delay", "delayM")
