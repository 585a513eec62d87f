"""Accuracy vs evasion contest.

Hit chance on a 0-100 scale:
    txc + modifier + BASE_HIT_CHANCE - evasion

where the modifier is the crit accuracy bonus for critical swings and the
negative fumble malus for fumbles.
"""

from __future__ import annotations

BASE_HIT_CHANCE = 50.0


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def hit_chance(txc: float, evasion: float, modifier: float = 0.0, floor: float = 1.0) -> float:
    """Chance (0-100) that a single swing lands.

    The turn engine clamps to ``[1, 100]`` so every swing can land; the
    expected-value formulas pass ``floor=0``.
    """
    return _clamp(txc + modifier + BASE_HIT_CHANCE - evasion, floor, 100.0)


def outcome_weights(crit_chance: float, fail_chance: float) -> tuple[float, float, float]:
    """Return ``(p_crit, p_fail, p_normal)`` from 0-100 chances."""
    p_crit = crit_chance / 100
    p_fail = fail_chance / 100
    p_normal = max(0.0, 1 - p_crit - p_fail)
    return p_crit, p_fail, p_normal


def effective_hit_chance(
    txc: float,
    evasion: float,
    crit_chance: float,
    crit_txc_bonus: float,
    fail_chance: float,
    fail_txc_malus: float,
) -> float:
    """Expected hit chance (0-100) weighting crit, fumble and normal swings."""
    normal = hit_chance(txc, evasion, floor=0.0)
    crit = hit_chance(txc, evasion, crit_txc_bonus, floor=0.0)
    fail = hit_chance(txc, evasion, -fail_txc_malus, floor=0.0)

    p_crit, p_fail, p_normal = outcome_weights(crit_chance, fail_chance)
    return p_crit * crit + p_fail * fail + p_normal * normal
