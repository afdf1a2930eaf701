"""
Core type definitions for morepromises.

Типы и алиасы используемые по всей библиотеке.
"""

from __future__ import annotations

import typing
from collections.abc import Callable, Mapping, Sequence
from typing import Literal

# ============================================================================
# Settle pair
# ============================================================================

# Resolve = marks a deferred result as succeeded with a value
type Resolve[T] = Callable[[T], None]

# Reject = marks a deferred result as failed with an arbitrary failure value
type Reject[E] = Callable[[E], None]

# Worker = receives the settle pair and eventually calls one of them
type Worker[T, E] = Callable[[Resolve[T], Reject[E]], None]

# ============================================================================
# Collections
# ============================================================================

# Keyed = ordered sequence (index is the key) or string-keyed mapping
type Keyed[T] = Sequence[T] | Mapping[str, T]

# Key = position in a sequence or name in a mapping
type Key = int | str

# ============================================================================
# Misc
# ============================================================================

# NoError = failure channel of a computation that never fails
type NoError = typing.Never

# ReflectState = outcome tag of a reflected item
type ReflectState = Literal["fulfilled", "rejected", "not-promise"]

__all__ = (
    # Settle pair
    "Resolve",
    "Reject",
    "Worker",
    # Collections
    "Keyed",
    "Key",
    # Misc
    "NoError",
    "ReflectState",
)
