"""Deferred results reported through a legacy callback."""

from __future__ import annotations

import typing
from collections.abc import Callable

from .._helpers import Pending, Value, classify
from .._types import Reject, Resolve
from ..factory import new_deferred


def callbackify(
    source: object,
    callback: Callable[[object, object], object],
) -> typing.Any:
    """
    Report source's outcome as callback(failure, value).

    Success calls callback(None, value), failure calls callback(failure, None).
    Returns a deferred mirroring source, settled before callback runs.
    """

    def worker(resolve: Resolve[typing.Any], reject: Reject[typing.Any]) -> None:
        def on_ok(value: typing.Any) -> None:
            resolve(value)
            callback(None, value)

        def on_err(error: typing.Any) -> None:
            reject(error)
            callback(error, None)

        match classify(source):
            case Pending(pending):
                pending.then(on_ok, on_err)
            case Value(value):
                on_ok(value)

    return new_deferred(worker)


__all__ = ("callbackify",)
