"""
All-of combinators
==================

Fail-fast aggregation with key-preserving results.

Комбинатор all_of: ждём все, падаем на первой ошибке.
"""

from __future__ import annotations

import typing
from collections.abc import Callable

from .._helpers import Pending, SettleGuard, Value, classify, empty_like, entries, finish, once
from .._types import Key, Keyed, Reject, Resolve, Worker
from ..factory import new_deferred


# ============================================================================
# Generic combinator (factory injection)
# ============================================================================


def all_ofM[D](
    items: Keyed[typing.Any],
    *,
    factory: Callable[[Worker[typing.Any, typing.Any]], D],
) -> D:
    """
    Generic all_of combinator.

    Resolve with a list/dict (same shape and keys as items) once every
    pending item succeeds. Reject with the first failure in completion
    order; later completions are observed but change nothing.
    """

    def worker(resolve: Resolve[typing.Any], reject: Reject[typing.Any]) -> None:
        acc = empty_like(items)
        guard = SettleGuard("all_of")
        succeed = guard.wrap(resolve)
        fail = guard.wrap(reject)
        pending = 1

        def complete_one() -> None:
            nonlocal pending
            pending -= 1
            if not pending:
                succeed(finish(acc))

        def watch(key: Key, source: typing.Any) -> None:
            def on_ok(value: typing.Any) -> None:
                if guard.settled:
                    return
                acc[key] = value
                complete_one()

            source.then(*once(on_ok, fail, name="all_of"))

        for key, item in entries(items):
            match classify(item):
                case Pending(source):
                    pending += 1
                    watch(key, source)
                case Value(value):
                    acc[key] = value

        complete_one()

    return factory(worker)


# ============================================================================
# Sugar
# ============================================================================


def all_of(items: Keyed[typing.Any]) -> typing.Any:
    """Wait for all, fail fast on the first failure."""
    return all_ofM(items, factory=new_deferred)


__all__ = ("all_of", "all_ofM")
