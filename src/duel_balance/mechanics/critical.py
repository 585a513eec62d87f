"""Critical hit and fumble multipliers."""

from __future__ import annotations

import math

from .hitchance import outcome_weights


def average_damage_multiplier(
    crit_chance: float,
    crit_mult: float,
    fail_chance: float,
    fail_mult: float,
) -> float:
    """Expected damage multiplier of a swing.

    ``p_crit * crit_mult + p_fail * fail_mult + p_normal * 1``
    """
    p_crit, p_fail, p_normal = outcome_weights(crit_chance, fail_chance)
    return p_crit * crit_mult + p_fail * fail_mult + p_normal * 1.0


def multiplied_damage(base_damage: float, multiplier: float) -> float:
    """Damage of a critical or fumbled swing (floored)."""
    return float(math.floor(base_damage * multiplier))
