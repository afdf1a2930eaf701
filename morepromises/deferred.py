"""Deferred results

Deferred - eager, settle-once handle over an asyncio future.

The future always carries a kungfu Result, so failure values are arbitrary
objects (strings, dicts, exceptions) and travel through unchanged."""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Callable

from kungfu import Error, Ok, Result

from ._types import Worker


@typing.runtime_checkable
class Thenable[T, E](typing.Protocol):
    """Anything that can register success/failure continuations."""

    def then(
        self,
        on_ok: Callable[[T], object],
        on_err: Callable[[E], object],
        /,
    ) -> object: ...


def dispatch[T, E](
    result: Result[T, E],
    on_ok: Callable[[T], object],
    on_err: Callable[[E], object] | None,
) -> None:
    """Route a settled Result to the matching continuation."""
    match result:
        case Ok(value):
            on_ok(value)
        case Error(error):
            if on_err is not None:
                on_err(error)


def future_outcome(future: asyncio.Future[typing.Any]) -> Result[typing.Any, typing.Any]:
    """
    Read a done future as a Result.

    Cancellation and raised exceptions become Error with the exception
    object as the failure value.
    """
    if future.cancelled():
        return Error(asyncio.CancelledError())
    exc = future.exception()
    if exc is not None:
        return Error(exc)
    return Ok(future.result())


def carried_outcome(future: asyncio.Future[typing.Any]) -> Result[typing.Any, typing.Any]:
    """Like future_outcome, but unwraps a Result the future resolved with."""
    match future_outcome(future):
        case Ok(Ok() | Error() as carried):
            return carried
        case other:
            return other


class FutureSource[T, E]:
    """Thenable view over an asyncio future (or task)."""

    __slots__ = ("_future", "_outcome")

    def __init__(
        self,
        future: asyncio.Future[typing.Any],
        /,
        *,
        outcome: Callable[[asyncio.Future[typing.Any]], Result[T, E]] = future_outcome,
    ) -> None:
        self._future = future
        self._outcome = outcome

    def then(
        self,
        on_ok: Callable[[T], object],
        on_err: Callable[[E], object],
        /,
    ) -> None:
        self._future.add_done_callback(lambda f: dispatch(self._outcome(f), on_ok, on_err))


class SettledSource[T, E]:
    """Thenable over an already-known Result. Continuations run on the next loop tick."""

    __slots__ = ("_result",)

    def __init__(self, result: Result[T, E], /) -> None:
        self._result = result

    def then(
        self,
        on_ok: Callable[[T], object],
        on_err: Callable[[E], object],
        /,
    ) -> None:
        asyncio.get_running_loop().call_soon(dispatch, self._result, on_ok, on_err)


class Deferred[T, E]:
    """
    Deferred result: settles exactly once with a value or a failure.

    Construction runs the worker synchronously with a settle pair.
    Settling a second time is a no-op. Exceptions raised by the worker
    are not caught.

    Continuations registered with then() always run through the event
    loop's callback queue, never inline.

    Example:
        d = Deferred(lambda resolve, reject: resolve(42))
        result = await d  # Ok(42)
    """

    __slots__ = ("_future",)

    def __init__(self, worker: Worker[T, E], /) -> None:
        self._future: asyncio.Future[Result[T, E]] = asyncio.get_running_loop().create_future()
        worker(self._resolve, self._reject)

    def _resolve(self, value: T) -> None:
        if not self._future.done():
            self._future.set_result(Ok(value))

    def _reject(self, error: E) -> None:
        if not self._future.done():
            self._future.set_result(Error(error))

    def done(self) -> bool:
        return self._future.done()

    def outcome(self) -> Result[T, E] | None:
        """Settled Result, or None while pending."""
        if not self._future.done():
            return None
        return self._future.result()

    def add_done_callback(self, fn: Callable[[Result[T, E]], object], /) -> None:
        self._future.add_done_callback(lambda f: fn(f.result()))

    def then(
        self,
        on_ok: Callable[[T], object],
        on_err: Callable[[E], object] | None = None,
        /,
    ) -> None:
        """Register continuations for success and (optionally) failure."""
        self.add_done_callback(lambda result: dispatch(result, on_ok, on_err))

    def __await__(self) -> typing.Generator[typing.Any, None, Result[T, E]]:
        # shield: a cancelled awaiter must not cancel the shared future
        return asyncio.shield(self._future).__await__()

    def __repr__(self) -> str:
        outcome = self.outcome()
        return f"Deferred({'<pending>' if outcome is None else repr(outcome)})"


__all__ = (
    "Deferred",
    "FutureSource",
    "SettledSource",
    "Thenable",
    "carried_outcome",
    "dispatch",
    "future_outcome",
)
