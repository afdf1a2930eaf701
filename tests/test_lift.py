"""Tests for lift helpers between deferreds and kungfu values."""

from __future__ import annotations

import asyncio

import pytest
from kungfu import Error, LazyCoroResult, Ok, Result

from morepromises import Deferred, all_of, lift as L

from tests._support import err, later, ok


class TestUp:
    """Values into deferreds."""

    async def test_resolved_and_rejected(self) -> None:
        """resolved/rejected build settled deferreds."""
        assert ok(await L.up.resolved(1)) == 1
        assert err(await L.up.rejected("nope")) == "nope"

    async def test_from_result(self) -> None:
        """Ok and Error map onto success and failure."""
        assert ok(await L.up.from_result(Ok("a"))) == "a"
        assert err(await L.up.from_result(Error("b"))) == "b"

    async def test_from_future(self) -> None:
        """Task result and exceptions become value and failure."""

        async def good() -> int:
            return 1

        async def bad() -> int:
            raise LookupError("missing")

        assert ok(await L.up.from_future(asyncio.create_task(good()))) == 1
        failure = err(await L.up.from_future(asyncio.create_task(bad())))
        assert isinstance(failure, LookupError)

    async def test_from_lazy_runs_once(self) -> None:
        """A LazyCoroResult is started exactly once."""
        runs: list[int] = []

        async def run() -> Result[str, str]:
            runs.append(1)
            return Ok("lazy")

        d = L.up.from_lazy(LazyCoroResult(run))
        assert isinstance(d, Deferred)
        assert ok(await d) == "lazy"
        assert ok(await d) == "lazy"
        assert runs == [1]


class TestDown:
    """Deferreds back into values."""

    async def test_to_result_plain_value(self) -> None:
        """Plain values are Ok without waiting."""
        assert ok(await L.down.to_result(5)) == 5

    async def test_to_result_deferred(self) -> None:
        """Pending items are awaited."""
        assert ok(await L.down.to_result(later("x", 0.005))) == "x"

    async def test_unsafe(self) -> None:
        """unsafe returns the value, raises on failure."""
        assert await L.down.unsafe(L.up.resolved(3)) == 3
        with pytest.raises(Exception):
            await L.down.unsafe(L.up.rejected(ValueError("bad")))

    async def test_or_else(self) -> None:
        """or_else substitutes a default for failures."""
        assert await L.down.or_else(L.up.rejected("x"), 7) == 7
        assert await L.down.or_else(L.up.resolved(1), 7) == 1

    async def test_to_lazy(self) -> None:
        """to_lazy exposes an aggregate as a kungfu LazyCoroResult."""
        lazy = L.down.to_lazy(all_of([L.up.resolved(1), 2]))
        assert isinstance(lazy, LazyCoroResult)
        assert ok(await lazy()) == [1, 2]
