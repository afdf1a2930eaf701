from .delay import delay, delayM
from .timeout import timeout, timeoutM

__all__ = (
    # Delay
    "delay",
    "delayM",
    # Timeout
    "timeout",
    "timeoutM",
)
