"""
Lift helpers with semantic namespaces.

Supports two import styles:
    from morepromises import lift as L   # Recommended
    from morepromises import lift        # Explicit

Architecture:
- L.up.*    - подъем значений в deferred result
- L.down.*  - опускание deferred result в значение / Result

Examples:
    from morepromises import lift as L

    user = L.up.resolved(User(id=42))
    error = L.up.rejected(NotFoundError())
    task = L.up.from_future(asyncio.create_task(fetch()))
    lazy = L.up.from_lazy(fetch_user(42))  # kungfu LazyCoroResult

    result = await L.down.to_result(user)  # Ok(User(id=42))
    value = await L.down.unsafe(user)
    lcr = L.down.to_lazy(user)             # back to kungfu
"""

from __future__ import annotations

from . import down as down_ns
from . import up as up_ns

# Most common functions in root
from .down import or_else, to_lazy, to_result, unsafe
from .up import from_future, from_lazy, from_result, rejected, resolved

up = up_ns
down = down_ns

__all__ = (
    # Namespaces
    "up",
    "down",
    # Up
    "resolved",
    "rejected",
    "from_result",
    "from_future",
    "from_lazy",
    # Down
    "to_result",
    "unsafe",
    "or_else",
    "to_lazy",
)
