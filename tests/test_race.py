"""Tests for race: first settlement wins."""

from __future__ import annotations

import asyncio

import pytest

from morepromises import race

from tests._support import Misbehaving, Stopwatch, err, later, later_fail, never, ok


class TestRace:
    """Outcome mirrors the first item to settle."""

    async def test_fast_failure_beats_slow_success(self) -> None:
        """Failures race like successes."""
        d = race([later_fail("fast", 0.005), later("slow", 0.015)])
        assert err(await d) == "fast"

    async def test_fast_success_beats_slow_failure(self) -> None:
        """Position in the list does not matter."""
        d = race({"a": later_fail("slow", 0.03), "b": later("fast", 0.005)})
        assert ok(await d) == "fast"

    async def test_immediate_value_wins_at_once(self) -> None:
        """An immediate value settles the race during traversal."""
        d = race(["immediate", later("pending", 0.01)])
        assert d.done()
        assert ok(await d) == "immediate"

    async def test_immediate_value_after_pending_item(self) -> None:
        """Pending items never beat an immediate one, wherever it sits."""
        d = race([later("pending", 0.0), "immediate"])
        assert ok(await d) == "immediate"

    async def test_first_immediate_in_traversal_order(self) -> None:
        """Among immediate values the first one wins."""
        assert ok(await race(["a", "b"])) == "a"
        assert ok(await race({"y": 2, "x": 1})) == 2

    @pytest.mark.parametrize("items", [[], {}])
    async def test_empty_input_resolves_with_none(self, items: object) -> None:
        """Empty input resolves with None right away."""
        d = race(items)
        assert d.done()
        assert ok(await d) is None

    async def test_does_not_wait_for_losers(self) -> None:
        """Output settles as soon as the winner does."""
        watch = Stopwatch()
        assert ok(await race([never(), later("win", 0.01)])) == "win"
        assert watch.elapsed < 0.5


class TestRaceGuard:
    """Later firings never alter a delivered outcome."""

    async def test_second_firing_is_inert(self) -> None:
        """An item firing success then failure counts once."""
        d = race([Misbehaving(("ok", 1), ("err", "late"))])
        assert ok(await d) == 1

    async def test_losers_settling_later(self) -> None:
        """Losing items complete without changing the result."""
        d = race([later(1, 0.005), later_fail("x", 0.01), later(3, 0.015)])
        assert ok(await d) == 1
        await asyncio.sleep(0.03)
        assert ok(d.outcome()) == 1
