from __future__ import annotations

class TimeoutError(Exception):
    """Deferred result did not settle in time."""

    seconds: float

    def __init__(self, seconds: float) -> None:
        self.seconds = seconds
        super().__init__(f"Timeout after {seconds} seconds")

__all__ = ("TimeoutError",)
