from .all_of import all_of, all_ofM
from .race import race, raceM
from .reflect import Reflection, reflect, reflectM
from .settle import SettlePolicy, settle, settleM

__all__ = (
    # Policies / records
    "Reflection",
    "SettlePolicy",
    # All
    "all_of",
    "all_ofM",
    # Race
    "race",
    "raceM",
    # Reflect
    "reflect",
    "reflectM",
    # Settle
    "settle",
    "settleM",
)
