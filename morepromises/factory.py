"""
Factory indirection
===================

Every combinator builds its output deferred through new_deferred(), which
delegates to the factory held in one process-wide cell. Swapping the
factory changes the deferred implementation for every combinator built
afterwards.

Each combinator also has a generic *M form taking factory= explicitly,
for callers that prefer injection over the shared cell.

NOTE: Swapping while other operations are mid-flight is the caller's
      responsibility. Outputs already built keep their implementation;
      internals created later pick up the new one.
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Iterator
from contextlib import contextmanager

import structlog

from ._types import Worker
from .deferred import Deferred, Thenable

log = structlog.get_logger(__name__)

# DeferredFactory = constructor of deferred results from a worker
type DeferredFactory = Callable[[Worker[typing.Any, typing.Any]], Thenable[typing.Any, typing.Any]]


class FactoryCell:
    """Holds the active deferred factory."""

    __slots__ = ("_factory",)

    def __init__(self, factory: DeferredFactory = Deferred) -> None:
        self._factory = factory

    def get(self) -> DeferredFactory:
        return self._factory

    def set(self, factory: DeferredFactory) -> DeferredFactory:
        """Install factory, returning the one it replaced."""
        if not callable(factory):
            raise TypeError(f"deferred factory must be callable, got {type(factory).__name__}")
        previous, self._factory = self._factory, factory
        log.debug(
            "deferred_factory_swapped",
            previous=getattr(previous, "__qualname__", repr(previous)),
            current=getattr(factory, "__qualname__", repr(factory)),
        )
        return previous


_cell = FactoryCell()


def new_deferred[T, E](worker: Worker[T, E]) -> typing.Any:
    """
    Construct a deferred result through the active factory.

    The worker is not validated and exceptions it raises are not caught.

    Example:
        d = new_deferred(lambda resolve, reject: resolve("ready"))
    """
    return _cell.get()(worker)


def get_factory() -> DeferredFactory:
    return _cell.get()


def set_factory(factory: DeferredFactory) -> DeferredFactory:
    """Swap the process-wide factory. Returns the previous one."""
    return _cell.set(factory)


def reset_factory() -> None:
    """Restore the default Deferred factory."""
    _cell.set(Deferred)


@contextmanager
def use_factory(factory: DeferredFactory) -> Iterator[DeferredFactory]:
    """
    Swap the factory for the duration of a with-block.

    Example:
        with use_factory(TracingDeferred):
            d = all_of([a, b])  # built by TracingDeferred
    """
    previous = _cell.set(factory)
    try:
        yield factory
    finally:
        _cell.set(previous)


__all__ = (
    "DeferredFactory",
    "FactoryCell",
    "get_factory",
    "new_deferred",
    "reset_factory",
    "set_factory",
    "use_factory",
)
