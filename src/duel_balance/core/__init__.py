"""Core value objects shared by the simulation and balancing layers."""

from duel_balance.core.archetype import Archetype, ArchetypeMeta
from duel_balance.core.config import (
    DEFAULT_CONFIG,
    BalancerConfig,
    LifestealMode,
    TurnLimitPolicy,
)
from duel_balance.core.rng import SeededRNG, derive_seed
from duel_balance.core.stats import (
    ANALYZABLE_STATS,
    DEFAULT_STATS,
    MULTIPLIER_STATS,
    PERCENTAGE_STATS,
    StatKey,
    StatProfile,
)

__all__ = [
    # stats
    "StatKey",
    "StatProfile",
    "DEFAULT_STATS",
    "ANALYZABLE_STATS",
    "PERCENTAGE_STATS",
    "MULTIPLIER_STATS",
    # archetype
    "Archetype",
    "ArchetypeMeta",
    # config
    "BalancerConfig",
    "DEFAULT_CONFIG",
    "LifestealMode",
    "TurnLimitPolicy",
    # rng
    "SeededRNG",
    "derive_seed",
]
