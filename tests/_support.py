"""Deferreds with scripted timing, shared by the test modules."""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Callable

import pytest
from kungfu import Error, Ok, Result

from morepromises import Deferred


def later(value: object, seconds: float) -> Deferred[typing.Any, typing.Any]:
    """Succeeds with value after `seconds`."""
    loop = asyncio.get_running_loop()
    return Deferred(lambda resolve, _reject: loop.call_later(seconds, resolve, value))


def later_fail(error: object, seconds: float) -> Deferred[typing.Any, typing.Any]:
    """Fails with error after `seconds`."""
    loop = asyncio.get_running_loop()
    return Deferred(lambda _resolve, reject: loop.call_later(seconds, reject, error))


def never() -> Deferred[typing.Any, typing.Any]:
    """Never settles."""
    return Deferred(lambda _resolve, _reject: None)


class Misbehaving:
    """Thenable that fires its continuations more than once, synchronously."""

    def __init__(self, *calls: tuple[str, object]) -> None:
        self.calls = calls

    def then(
        self,
        on_ok: Callable[[object], object],
        on_err: Callable[[object], object],
    ) -> None:
        for kind, value in self.calls:
            (on_ok if kind == "ok" else on_err)(value)


class Stopwatch:
    """Elapsed loop time since construction."""

    def __init__(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._start = self._loop.time()

    @property
    def elapsed(self) -> float:
        return self._loop.time() - self._start


def ok(result: Result[typing.Any, typing.Any] | None) -> typing.Any:
    """Success value of result, failing the test otherwise."""
    match result:
        case Ok(value):
            return value
        case _:
            pytest.fail(f"expected Ok, got {result!r}")


def err(result: Result[typing.Any, typing.Any] | None) -> typing.Any:
    """Failure value of result, failing the test otherwise."""
    match result:
        case Error(error):
            return error
        case _:
            pytest.fail(f"expected Error, got {result!r}")
