"""
Race combinators
================

Комбинаторы для гонки: побеждает первый завершившийся.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from .._helpers import Pending, SettleGuard, Value, classify, entries
from .._types import Keyed, Reject, Resolve, Worker
from ..factory import new_deferred


# ============================================================================
# Generic combinator (factory injection)
# ============================================================================


def raceM[D](
    items: Keyed[typing.Any],
    *,
    factory: Callable[[Worker[typing.Any, typing.Any]], D],
) -> D:
    """
    Generic race combinator.

    Mirror the first item to settle, success or failure. Losers keep
    running and their continuations still fire, but change nothing.

    NOTE: Immediate values settle during traversal, so the first immediate
          value (in traversal order) beats every pending item.
          Empty input resolves with None right away.
    """

    def worker(resolve: Resolve[typing.Any], reject: Reject[typing.Any]) -> None:
        guard = SettleGuard("race")
        succeed = guard.wrap(resolve)
        fail = guard.wrap(reject)
        seen = False

        for _key, item in entries(items):
            seen = True
            match classify(item):
                case Pending(source):
                    source.then(succeed, fail)
                case Value(value):
                    succeed(value)

        if not seen:
            succeed(None)

    return factory(worker)


# ============================================================================
# Sugar
# ============================================================================


def race(items: Keyed[typing.Any]) -> typing.Any:
    """Return first settled outcome (value or failure)."""
    return raceM(items, factory=new_deferred)


__all__ = ("race", "raceM")
