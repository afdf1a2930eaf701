from __future__ import annotations

from _infra import FakeBackend, Failure, User, banner, run

from kungfu import Error, LazyCoroResult, Ok
from morepromises import SettlePolicy, all_of, lift as L, race, reflect, settle, timeout


def fetch(backend: FakeBackend, user_id: int) -> LazyCoroResult[User, Failure]:
    return LazyCoroResult(lambda: backend.fetch_user(user_id))


async def main() -> None:
    banner("01_quickstart: all_of + settle + race + reflect + timeout")

    replicas = [
        FakeBackend(name="replica-a", delay_seconds=0.03),
        FakeBackend(name="replica-b", delay_seconds=0.01),
        FakeBackend(name="replica-c", delay_seconds=0.02, broken=True),
    ]

    # Lazy items are started as soon as a combinator sees them
    match await all_of({"user": fetch(replicas[0], 1), "limit": 10}):
        case Ok(found):
            print(f"all_of: {found}")
        case Error(err):
            print(f"all_of failed: {err}")

    match await settle([fetch(r, 2) for r in replicas], policy=SettlePolicy(sparse=True)):
        case Ok(users):
            print(f"settle: {[u.name for u in users]}")
        case Error(failures):
            print(f"settle failures: {[str(f) for f in failures]}")

    match await race([fetch(r, 3) for r in replicas]):
        case Ok(user):
            print(f"race winner: {user.name}")
        case Error(err):
            print(f"race lost: {err}")

    reflections = await L.down.unsafe(reflect([*(fetch(r, 4) for r in replicas), "cached"]))
    for r in reflections:
        print(f"reflect: {r.state:<12} {r.value}")

    slow = FakeBackend(name="slow", delay_seconds=0.5)
    match await timeout(fetch(slow, 5), 0.05):
        case Ok(user):
            print(f"in time: {user.name}")
        case Error(err):
            print(f"timeout: {err}")


if __name__ == "__main__":
    run(main)
