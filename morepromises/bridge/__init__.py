from .callbackify import callbackify
from .promisify import SUFFIX, promisify, promisify_all

__all__ = (
    "SUFFIX",
    "callbackify",
    "promisify",
    "promisify_all",
)
