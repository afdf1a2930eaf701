"""Timeout combinators

Race a deferred result against a timer."""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Callable

import structlog

from .._errors import TimeoutError
from .._helpers import Pending, SettleGuard, Value, classify
from .._types import Reject, Resolve, Worker
from ..factory import new_deferred

log = structlog.get_logger(__name__)

# Generic combinator (factory injection)
def timeoutM[D](
    source: object,
    *,
    seconds: float,
    error: object = None,
    factory: Callable[[Worker[typing.Any, typing.Any]], D],
) -> D:
    """
    Generic timeout combinator.

    Mirror source if it settles before the timer; otherwise reject with
    `error` (default: TimeoutError(seconds), built once, here). Whichever
    side loses is ignored.
    """
    failure = TimeoutError(seconds) if error is None else error

    def worker(resolve: Resolve[typing.Any], reject: Reject[typing.Any]) -> None:
        guard = SettleGuard("timeout")
        loop = asyncio.get_running_loop()

        def expire() -> None:
            if not guard.settled:
                log.debug("timeout_expired", seconds=seconds)
            guard.wrap(reject)(failure)

        timer = loop.call_later(seconds, expire)

        def won(settle: Resolve[typing.Any]) -> Callable[[typing.Any], None]:
            def settled(value: typing.Any) -> None:
                if not guard.settled:
                    timer.cancel()
                guard.wrap(settle)(value)

            return settled

        match classify(source):
            case Pending(pending):
                pending.then(won(resolve), won(reject))
            case Value(value):
                won(resolve)(value)

    return factory(worker)

# Sugar
def timeout(
    source: object,
    seconds: float,
    error: object = None,
) -> typing.Any:
    """
    Fail if source takes longer than `seconds`.

    The source keeps running after a timeout; only the waiting stops.
    Durations are seconds, so the default failure reads
    "Timeout after {seconds} seconds" (not milliseconds).

    Example:
        result = await timeout(fetch_user(42), 0.2)
        # Ok(user) or Error(TimeoutError(0.2))
    """
    return timeoutM(source, seconds=seconds, error=error, factory=new_deferred)

__all__ = ("timeout", "timeoutM")
