"""Internal helpers for combinators.

Keyed traversal, item classification and the settlement guard shared by
every aggregation combinator. Not part of the public API, but usable when
writing custom combinators."""

from __future__ import annotations

import asyncio
import typing
from collections.abc import Callable, Iterator, Mapping, Sequence
from dataclasses import dataclass

import structlog
from kungfu import Error, LazyCoroResult, Ok

from ._types import Key, Keyed
from .deferred import Deferred, FutureSource, SettledSource, Thenable, carried_outcome

log = structlog.get_logger(__name__)


class _Absent:
    __slots__ = ()

    def __repr__(self) -> str:
        return "ABSENT"


# Marks a sequence slot that was never written
ABSENT: typing.Final = _Absent()

# Accumulator = list pre-filled with ABSENT, or dict
type Accumulator = list[typing.Any] | dict[str, typing.Any]


# Keyed traversal
def _is_sequence(items: object) -> bool:
    return isinstance(items, Sequence) and not isinstance(items, (str, bytes, bytearray))


def entries[T](items: Keyed[T]) -> Iterator[tuple[Key, T]]:
    """
    Yield (key, item) once per entry.

    Sequences in index order, mappings in their own iteration order.
    """
    if isinstance(items, Mapping):
        yield from items.items()
    elif _is_sequence(items):
        yield from enumerate(items)
    else:
        raise TypeError(f"expected a sequence or a mapping, got {type(items).__name__}")


def empty_like(items: Keyed[typing.Any]) -> Accumulator:
    """New accumulator with the same shape as items."""
    if isinstance(items, Mapping):
        return {}
    if _is_sequence(items):
        return [ABSENT] * len(items)
    raise TypeError(f"expected a sequence or a mapping, got {type(items).__name__}")


def condense(acc: Accumulator) -> Accumulator:
    """Drop ABSENT slots from a list, keeping order. Dicts pass through."""
    if isinstance(acc, dict):
        return acc
    return [x for x in acc if x is not ABSENT]


def finish(acc: Accumulator) -> Accumulator:
    """Expose ABSENT slots as None."""
    if isinstance(acc, dict):
        return acc
    return [None if x is ABSENT else x for x in acc]


# Item classification
@dataclass(frozen=True, slots=True)
class Value[T]:
    """Immediate item: settles at traversal time."""

    value: T


@dataclass(frozen=True, slots=True)
class Pending[T, E]:
    """Item with continuations: settles later."""

    source: Thenable[T, E]


def classify(item: object) -> Value[typing.Any] | Pending[typing.Any, typing.Any]:
    """
    Decide once whether an item is pending or immediate.

    Pending: Deferred, kungfu Result (already settled), kungfu
    LazyCoroResult (scheduled as a task), asyncio futures and tasks,
    anything with a callable then() method.
    A non-callable `then` attribute (a data field) keeps the item immediate.
    Everything else is an immediate value.

    NOTE: kungfu types are checked before Thenable because their then()
          is monadic bind, not continuation registration.
    """
    match item:
        case Deferred():
            return Pending(item)
        case Ok() | Error():
            return Pending(SettledSource(item))
        case LazyCoroResult():
            task = asyncio.ensure_future(item())
            return Pending(FutureSource(task, outcome=carried_outcome))
        case _ if asyncio.isfuture(item):
            return Pending(FutureSource(item))
        case _ if callable(getattr(item, "then", None)):
            return Pending(typing.cast(Thenable[typing.Any, typing.Any], item))
        case _:
            return Value(item)


# Settlement guard
class SettleGuard:
    """
    Exactly-once gate.

    Every callable produced by wrap() shares one flag: only the first call
    to any of them goes through, later calls are dropped.
    """

    __slots__ = ("settled", "_name")

    def __init__(self, name: str) -> None:
        self.settled = False
        self._name = name

    def wrap[V](self, settle: Callable[[V], object]) -> Callable[[V], None]:
        def guarded(value: V) -> None:
            if self.settled:
                log.debug("settlement_suppressed", combinator=self._name)
                return
            self.settled = True
            settle(value)

        return guarded


def once[T, E](
    on_ok: Callable[[T], object],
    on_err: Callable[[E], object],
    *,
    name: str,
) -> tuple[Callable[[T], None], Callable[[E], None]]:
    """Guard a continuation pair so a misbehaving item fires it once."""
    guard = SettleGuard(name)
    return guard.wrap(on_ok), guard.wrap(on_err)


__all__ = (
    # Traversal
    "ABSENT",
    "Accumulator",
    "condense",
    "empty_like",
    "entries",
    "finish",
    # Classification
    "Pending",
    "Value",
    "classify",
    # Guards
    "SettleGuard",
    "once",
)
