"""
Combinators over deferred results.

Richer aggregation than asyncio.gather: fail-fast all_of, failure-collecting
settle, race, never-failing reflect, plus delay, timeout and bridges to
callback-style code.

Architecture:
- Deferred: eager, settle-once result backed by an asyncio future holding
  a kungfu Result (failure values are arbitrary objects)
- Every combinator builds its output through new_deferred(), the single
  swappable factory (set_factory / use_factory)
- Generic combinators (*M functions) take factory= explicitly
- Sugar functions (no suffix) use the active factory
- Items are keyed collections: list -> list, dict -> dict
"""

# Core types
from ._types import Key, Keyed, NoError, Reject, ReflectState, Resolve, Worker
from .deferred import Deferred, Thenable

# Factory indirection
from .factory import (
    DeferredFactory,
    FactoryCell,
    get_factory,
    new_deferred,
    reset_factory,
    set_factory,
    use_factory,
)

# Internal helpers (for custom combinators)
from . import _helpers

# Lift helpers
from . import lift

# Aggregation
from .concurrency import (
    Reflection,
    SettlePolicy,
    # Sugar
    all_of,
    race,
    reflect,
    settle,
    # Generic
    all_ofM,
    raceM,
    reflectM,
    settleM,
)

# Time operations
from .time import (
    # Sugar
    delay,
    timeout,
    # Generic
    delayM,
    timeoutM,
)

# Callback bridges
from .bridge import callbackify, promisify, promisify_all

# Errors
from ._errors import TimeoutError

__all__ = (
    # Types
    "Deferred",
    "Key",
    "Keyed",
    "NoError",
    "Reject",
    "ReflectState",
    "Resolve",
    "Thenable",
    "Worker",
    # Factory
    "DeferredFactory",
    "FactoryCell",
    "get_factory",
    "new_deferred",
    "reset_factory",
    "set_factory",
    "use_factory",
    # Internal helpers (for custom combinators)
    "_helpers",
    # Lift module
    "lift",
    # Aggregation
    "Reflection",
    "SettlePolicy",
    "all_of",
    "race",
    "reflect",
    "settle",
    "all_ofM",
    "raceM",
    "reflectM",
    "settleM",
    # Time
    "delay",
    "timeout",
    "delayM",
    "timeoutM",
    # Bridges
    "callbackify",
    "promisify",
    "promisify_all",
    # Errors
    "TimeoutError",
)
