"""Armor and resistance mitigation.

Pipeline for incoming damage:
    1. Effective armor = max(0, armor - armor_pen)
    2. Effective resistance = clamp(resistance - pen_percent, 0, 100) / 100
    3. Armor reduction (diminishing returns, capped at 90%)
    4. Apply armor then resistance (flat-first) or resistance then armor
    5. Minimum damage of 1 whenever raw damage is positive
"""

from __future__ import annotations

MAX_ARMOR_MITIGATION = 0.90
MIN_DAMAGE = 1.0


def armor_mitigation(armor: float, k: float, damage: float) -> float:
    """Fraction of *damage* absorbed by *armor*.

    ``armor / (armor + k * damage)``, 0 for non-positive armor or damage,
    capped at 0.90.
    """
    if armor <= 0 or damage <= 0:
        return 0.0
    return min(MAX_ARMOR_MITIGATION, armor / (armor + k * damage))


def mitigate(
    raw_damage: float,
    armor: float,
    resistance: float,
    armor_pen: float,
    pen_percent: float,
    flat_first: bool,
    k: float,
) -> float:
    """Damage remaining after armor and resistance.

    Order matters only through the damage the armor law sees: with
    ``flat_first`` the armor reduction is computed against the raw damage,
    otherwise against the damage already reduced by resistance.
    """
    if raw_damage <= 0:
        return 0.0

    eff_armor = max(0.0, armor - armor_pen)
    eff_res = max(0.0, min(1.0, max(0.0, resistance - pen_percent) / 100))

    damage = raw_damage
    if flat_first:
        damage *= 1 - armor_mitigation(eff_armor, k, damage)
        damage *= 1 - eff_res
    else:
        damage *= 1 - eff_res
        damage *= 1 - armor_mitigation(eff_armor, k, damage)

    return max(MIN_DAMAGE, damage)
