"""Combat mechanics shared by the expected-value formulas and the turn engine."""

from .critical import average_damage_multiplier, multiplied_damage
from .hitchance import (
    BASE_HIT_CHANCE,
    effective_hit_chance,
    hit_chance,
    outcome_weights,
)
from .mitigation import (
    MAX_ARMOR_MITIGATION,
    MIN_DAMAGE,
    armor_mitigation,
    mitigate,
)

__all__ = [
    # hitchance
    "BASE_HIT_CHANCE",
    "hit_chance",
    "effective_hit_chance",
    "outcome_weights",
    # critical
    "average_damage_multiplier",
    "multiplied_damage",
    # mitigation
    "MAX_ARMOR_MITIGATION",
    "MIN_DAMAGE",
    "armor_mitigation",
    "mitigate",
]
