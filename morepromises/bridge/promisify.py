"""
Callback-style functions lifted into deferred results.

Legacy convention: the last positional argument is a callback invoked as
callback(failure, value); a falsy failure means success.
"""

from __future__ import annotations

import inspect
import types
import typing
from collections.abc import Callable
from functools import wraps

import structlog

from .._types import Reject, Resolve
from ..factory import new_deferred

log = structlog.get_logger(__name__)

# Suffix for bridged siblings: read -> read_async
SUFFIX: typing.Final = "_async"


def promisify(
    fn: Callable[..., object],
    context: object | None = None,
) -> Callable[..., typing.Any]:
    """
    Wrap fn(*args, callback) into a function returning a deferred result.

    **When to use:** Calling old callback-based APIs from code that composes
    deferreds with all_of/settle/race.

    Example:
        def read(path, callback):
            callback(None, f"contents of {path}")

        read_async = promisify(read)
        result = await read_async("a.txt")  # Ok("contents of a.txt")

    NOTE: `context`, when given, is bound as fn's first (self) argument.
          Exceptions fn raises synchronously are not caught.
    """
    target = fn if context is None else types.MethodType(fn, context)

    @wraps(fn)
    def bridged(*args: typing.Any, **kwargs: typing.Any) -> typing.Any:
        def worker(resolve: Resolve[typing.Any], reject: Reject[typing.Any]) -> None:
            def callback(failure: object = None, value: object = None) -> None:
                if failure:
                    reject(failure)
                else:
                    resolve(value)

            target(*args, callback, **kwargs)

        return new_deferred(worker)

    return bridged


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def promisify_all[O](obj: O) -> O:
    """
    Add a promisified `<name>_async` sibling for each own routine of obj.

    Skipped:
    - names already ending in `_async`
    - names whose `<name>_async` sibling is already defined on obj
    - properties and other data descriptors
    - non-routines and dunder names

    Only obj's own attributes are visited (vars(obj)), never inherited ones.
    Mutates and returns obj; running it twice changes nothing.
    """
    own = vars(obj)
    for name, raw in list(own.items()):
        if _is_dunder(name) or name.endswith(SUFFIX):
            continue
        if f"{name}{SUFFIX}" in own:
            continue
        if inspect.isdatadescriptor(raw):
            continue
        member = getattr(obj, name)
        if not inspect.isroutine(member):
            continue
        bridged = promisify(member)
        if isinstance(raw, (staticmethod, classmethod)):
            # member is already bound; instances must not bind it again
            bridged = staticmethod(bridged)
        setattr(obj, f"{name}{SUFFIX}", bridged)
        log.debug("method_promisified", name=name, bridged=f"{name}{SUFFIX}")
    return obj


__all__ = ("SUFFIX", "promisify", "promisify_all")
