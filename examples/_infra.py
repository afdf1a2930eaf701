from __future__ import annotations

import asyncio
import sys
from collections.abc import Callable, Coroutine
from dataclasses import dataclass, field
from pathlib import Path

from kungfu import Error, Ok, Result

_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))


@dataclass(frozen=True, slots=True)
class Failure(Exception):
    message: str
    transient: bool = False

    def __str__(self) -> str:  # pragma: no cover (examples only)
        return self.message


@dataclass(frozen=True, slots=True)
class User:
    id: int
    name: str


def _empty_users() -> dict[int, User]:
    return {}


@dataclass(slots=True)
class FakeBackend:
    name: str
    delay_seconds: float = 0.0
    broken: bool = False

    async def fetch_user(self, user_id: int) -> Result[User, Failure]:
        await asyncio.sleep(self.delay_seconds)
        if self.broken:
            return Error(Failure(f"{self.name}: unavailable", transient=True))
        return Ok(User(id=user_id, name=f"user:{user_id}@{self.name}"))


@dataclass(slots=True)
class LegacyStore:
    """Callback-style API: every method ends with callback(failure, value)."""

    users: dict[int, User] = field(default_factory=_empty_users)
    delay_seconds: float = 0.0

    def get_user(self, user_id: int, callback: Callable[..., None]) -> None:
        def fire() -> None:
            user = self.users.get(user_id)
            if user is None:
                callback(Failure("store: miss"))
            else:
                callback(None, user)

        asyncio.get_running_loop().call_later(self.delay_seconds, fire)

    def put_user(self, user: User, callback: Callable[..., None]) -> None:
        self.users[user.id] = user
        callback(None, None)


def banner(title: str) -> None:  # pragma: no cover (examples only)
    print(f"\n== {title} ==")


def run(main: Callable[[], Coroutine[object, object, None]]) -> None:  # pragma: no cover (examples only)
    asyncio.run(main())
