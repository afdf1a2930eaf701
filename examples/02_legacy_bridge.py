from __future__ import annotations

from _infra import LegacyStore, User, banner, run

from kungfu import Error, Ok
from morepromises import callbackify, delay, promisify_all


async def main() -> None:
    banner("02_legacy_bridge: promisify_all + delay + callbackify")

    # Bridged siblings land on the class, so every instance gets them
    store = promisify_all(LegacyStore)(delay_seconds=0.01)

    await store.put_user_async(User(id=7, name="seven"))  # type: ignore[attr-defined]

    match await delay(store.get_user_async(7), 0.02):  # type: ignore[attr-defined]
        case Ok(user):
            print(f"found after pause: {user.name}")
        case Error(err):
            print(f"lookup failed: {err}")

    def report(failure: object, value: object) -> None:
        print(f"legacy callback got failure={failure!s} value={value!r}")

    await callbackify(store.get_user_async(404), report)  # type: ignore[attr-defined]


if __name__ == "__main__":
    run(main)
