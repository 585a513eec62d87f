"""Expected-value combat formulas.

Pure functions over ``StatProfile``s.  Every function that depends on a
tunable constant takes the ``BalancerConfig`` explicitly.
"""

from __future__ import annotations

import math

from duel_balance.core.config import DEFAULT_CONFIG, BalancerConfig
from duel_balance.core.stats import StatProfile
from duel_balance.mechanics.critical import average_damage_multiplier
from duel_balance.mechanics.hitchance import effective_hit_chance
from duel_balance.mechanics.mitigation import armor_mitigation, mitigate

REFERENCE_DAMAGE = 100.0


def expected_damage_per_hit(attacker: StatProfile) -> float:
    """Base damage scaled by the crit/fumble-blended multiplier."""
    mult = average_damage_multiplier(
        attacker.crit_chance,
        attacker.crit_mult,
        attacker.fail_chance,
        attacker.fail_mult,
    )
    return attacker.damage * mult


def expected_hits_per_turn(attacker: StatProfile, defender: StatProfile) -> float:
    """Probability (0-1) that the attacker's single swing lands."""
    chance = effective_hit_chance(
        attacker.txc,
        defender.evasion,
        attacker.crit_chance,
        attacker.crit_txc_bonus,
        attacker.fail_chance,
        attacker.fail_txc_malus,
    )
    return chance / 100


def effective_damage_per_turn(
    attacker: StatProfile,
    defender: StatProfile,
    config: BalancerConfig | None = None,
) -> float:
    """Expected HP the defender loses per turn (EDPT), never negative.

    expected damage per hit x expected hits, mitigated by the defender's
    armor and resistance, minus the defender's regeneration.
    """
    config = config or DEFAULT_CONFIG

    raw = expected_damage_per_hit(attacker) * expected_hits_per_turn(attacker, defender)
    mitigated = mitigate(
        raw,
        armor=defender.armor,
        resistance=defender.resistance,
        armor_pen=attacker.armor_pen,
        pen_percent=attacker.pen_percent,
        flat_first=defender.config_flat_first,
        k=config.armor_k,
    )
    return max(0.0, mitigated - defender.regen)


def effective_hp_reference(
    defender: StatProfile,
    config: BalancerConfig | None = None,
) -> float:
    """HP-equivalent against a 100-damage reference hit.

    Diagnostic only.  Returns ``math.inf`` when combined mitigation
    reaches 100%.
    """
    config = config or DEFAULT_CONFIG

    armor_pct = armor_mitigation(defender.armor, config.armor_k, REFERENCE_DAMAGE)
    resist_pct = defender.resistance / 100
    total = 1 - (1 - armor_pct) * (1 - resist_pct)

    if total >= 1:
        return math.inf
    return defender.hp / (1 - total)


def estimate_ttk(
    attacker: StatProfile,
    defender: StatProfile,
    config: BalancerConfig | None = None,
) -> float:
    """Turns until the faster-killing side wins, ignoring sustain.

    ``math.inf`` if neither side can deal damage.
    """
    config = config or DEFAULT_CONFIG

    edpt_att = effective_damage_per_turn(attacker, defender, config)
    edpt_def = effective_damage_per_turn(defender, attacker, config)

    estimates = []
    if edpt_att > 0:
        estimates.append(defender.hp / edpt_att)
    if edpt_def > 0:
        estimates.append(attacker.hp / edpt_def)

    if not estimates:
        return math.inf
    return min(estimates)
