"""Tests for the swappable deferred factory."""

from __future__ import annotations

import typing

import pytest

from morepromises import (
    Deferred,
    all_of,
    all_ofM,
    callbackify,
    delay,
    get_factory,
    lift,
    new_deferred,
    promisify,
    race,
    reflect,
    reset_factory,
    set_factory,
    settle,
    timeout,
    use_factory,
)

from tests._support import ok


class TracingDeferred(Deferred[typing.Any, typing.Any]):
    """Deferred subclass marking where outputs came from."""


class CountingFactory:
    def __init__(self) -> None:
        self.calls = 0

    def __call__(self, worker: typing.Any) -> TracingDeferred:
        self.calls += 1
        return TracingDeferred(worker)


class TestFactoryCell:
    """get/set/reset/use_factory."""

    def test_default_is_deferred(self) -> None:
        """The default factory is the Deferred class."""
        assert get_factory() is Deferred

    def test_set_returns_previous(self) -> None:
        """set_factory returns the factory it replaced."""
        factory = CountingFactory()
        assert set_factory(factory) is Deferred
        assert get_factory() is factory
        reset_factory()
        assert get_factory() is Deferred

    def test_set_rejects_non_callable(self) -> None:
        """A non-callable factory is refused."""
        with pytest.raises(TypeError, match="callable"):
            set_factory(42)  # type: ignore[arg-type]
        assert get_factory() is Deferred

    def test_use_factory_restores_on_error(self) -> None:
        """use_factory restores the previous factory even when the block raises."""
        factory = CountingFactory()
        with pytest.raises(RuntimeError):
            with use_factory(factory):
                assert get_factory() is factory
                raise RuntimeError
        assert get_factory() is Deferred


class TestInjection:
    """Every combinator builds its output through the active factory."""

    async def test_new_deferred_uses_active_factory(self) -> None:
        """new_deferred delegates to the installed factory."""
        factory = CountingFactory()
        with use_factory(factory):
            d = new_deferred(lambda resolve, _reject: resolve(1))
        assert isinstance(d, TracingDeferred)
        assert factory.calls == 1
        assert ok(await d) == 1

    async def test_swap_applies_to_all_combinators(self) -> None:
        """A single swap reaches every combinator and bridge."""
        factory = CountingFactory()
        with use_factory(factory):
            outputs = [
                all_of([1]),
                settle([1]),
                race([1]),
                reflect([1]),
                delay(0),
                timeout(1, 1.0),
                callbackify(1, lambda _f, _v: None),
                promisify(lambda cb: cb(None, 1))(),
                lift.up.resolved(1),
            ]
        assert factory.calls == len(outputs)
        assert all(isinstance(d, TracingDeferred) for d in outputs)
        for d in outputs:
            await d

    async def test_outputs_after_reset_use_default(self) -> None:
        """Outputs built after a reset are plain Deferreds again."""
        with use_factory(CountingFactory()):
            pass
        d = all_of([1])
        assert type(d) is Deferred

    async def test_explicit_factory_overrides_cell(self) -> None:
        """Generic *M forms use the factory they are given."""
        factory = CountingFactory()
        d = all_ofM([1, 2], factory=factory)
        assert isinstance(d, TracingDeferred)
        assert get_factory() is Deferred
        assert ok(await d) == [1, 2]

    async def test_worker_exception_not_caught(self) -> None:
        """Exceptions from the worker escape new_deferred."""

        def worker(_resolve: typing.Any, _reject: typing.Any) -> None:
            raise ValueError("worker blew up")

        with pytest.raises(ValueError, match="worker blew up"):
            new_deferred(worker)
