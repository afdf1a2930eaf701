"""
Settle combinators
==================

Wait for every item, collect failures instead of failing fast.

Комбинаторы settle: ждём все, собираем ошибки.
"""

from __future__ import annotations

import typing
from collections.abc import Callable
from dataclasses import dataclass

from .._helpers import Pending, SettleGuard, Value, classify, condense, empty_like, entries, finish, once
from .._types import Key, Keyed, Reject, Resolve, Worker
from ..factory import new_deferred


@dataclass(frozen=True, slots=True)
class SettlePolicy:
    """
    Configuration for settle.

    sparse=False: rejection list keeps original indices, slots that did not
                  fail hold None.
    sparse=True:  rejection list holds only the failures, in original order.

    With sparse=False the rejection list always has len(items) entries,
    trailing non-failed slots included.

    Only lists are affected; dicts never have gaps to condense.
    """

    sparse: bool = False


# ============================================================================
# Generic combinator (factory injection)
# ============================================================================


def settleM[D](
    items: Keyed[typing.Any],
    *,
    factory: Callable[[Worker[typing.Any, typing.Any]], D],
    policy: SettlePolicy = SettlePolicy(),
) -> D:
    """
    Generic settle combinator.

    Never settles before every pending item has completed. Resolves with
    all values when nothing failed, otherwise rejects with the failures
    keyed like items.
    """

    def worker(resolve: Resolve[typing.Any], reject: Reject[typing.Any]) -> None:
        results = empty_like(items)
        rejections = empty_like(items)
        guard = SettleGuard("settle")
        failed = False
        pending = 1

        def complete_one() -> None:
            nonlocal pending
            pending -= 1
            if pending:
                return
            if failed:
                guard.wrap(reject)(condense(rejections) if policy.sparse else finish(rejections))
            else:
                guard.wrap(resolve)(finish(results))

        def watch(key: Key, source: typing.Any) -> None:
            def on_ok(value: typing.Any) -> None:
                results[key] = value
                complete_one()

            def on_err(error: typing.Any) -> None:
                nonlocal failed
                failed = True
                rejections[key] = error
                complete_one()

            source.then(*once(on_ok, on_err, name="settle"))

        for key, item in entries(items):
            match classify(item):
                case Pending(source):
                    pending += 1
                    watch(key, source)
                case Value(value):
                    results[key] = value

        complete_one()

    return factory(worker)


# ============================================================================
# Sugar
# ============================================================================


def settle(
    items: Keyed[typing.Any],
    *,
    policy: SettlePolicy = SettlePolicy(),
) -> typing.Any:
    """Wait for all; reject with every failure if any item failed."""
    return settleM(items, factory=new_deferred, policy=policy)


__all__ = ("SettlePolicy", "settle", "settleM")
