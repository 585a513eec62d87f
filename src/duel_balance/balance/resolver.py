"""Deterministic expected-value duel resolver.

Both sides deal their EDPT to each other simultaneously every turn, so
the resolver has no first-player bias and a mirror matchup is always a
draw.
"""

from __future__ import annotations

from duel_balance.balance.formulas import effective_damage_per_turn, estimate_ttk
from duel_balance.balance.models import DeterministicOutcome, FinalHP, OutcomeKind
from duel_balance.core.config import DEFAULT_CONFIG, BalancerConfig, LifestealMode
from duel_balance.core.stats import StatProfile


def _lifesteal_heal(
    damage: float,
    hp_before: float,
    lifesteal: float,
    mode: LifestealMode,
) -> float:
    if lifesteal <= 0:
        return 0.0
    basis = damage if mode == LifestealMode.ON_HIT else min(damage, max(0.0, hp_before))
    return basis * lifesteal / 100


def simulate_expected_ttk(
    attacker: StatProfile,
    defender: StatProfile,
    config: BalancerConfig | None = None,
    turn_limit: int | None = None,
) -> DeterministicOutcome:
    """Run the expected-value state machine until a side dies or time runs out.

    Per turn: simultaneous damage, lifesteal, regeneration (both capped at
    max HP), then the termination checks.  When *turn_limit* is omitted it
    is derived from :func:`estimate_ttk` through the configured
    ``TurnLimitPolicy``.
    """
    config = config or DEFAULT_CONFIG
    if turn_limit is None:
        turn_limit = config.turn_limit_policy.limit(estimate_ttk(attacker, defender, config))

    hp_att = attacker.hp
    hp_def = defender.hp

    edpt_att = effective_damage_per_turn(attacker, defender, config)
    edpt_def = effective_damage_per_turn(defender, attacker, config)

    turns = 0
    while turns < turn_limit:
        turns += 1

        heal_att = _lifesteal_heal(edpt_att, hp_def, attacker.lifesteal, config.lifesteal_mode)
        heal_def = _lifesteal_heal(edpt_def, hp_att, defender.lifesteal, config.lifesteal_mode)

        hp_def -= edpt_att
        hp_att -= edpt_def

        if heal_att > 0:
            hp_att = min(attacker.hp, hp_att + heal_att)
        if heal_def > 0:
            hp_def = min(defender.hp, hp_def + heal_def)

        hp_att = min(attacker.hp, hp_att + attacker.regen)
        hp_def = min(defender.hp, hp_def + defender.regen)

        if hp_att <= 0 and hp_def <= 0:
            return DeterministicOutcome(
                result=OutcomeKind.DRAW,
                turns=turns,
                final_hp=FinalHP(attacker=0.0, defender=0.0),
            )
        if hp_def <= 0:
            return DeterministicOutcome(
                result=OutcomeKind.ATTACKER,
                turns=turns,
                final_hp=FinalHP(attacker=max(0.0, hp_att), defender=0.0),
            )
        if hp_att <= 0:
            return DeterministicOutcome(
                result=OutcomeKind.DEFENDER,
                turns=turns,
                final_hp=FinalHP(attacker=0.0, defender=max(0.0, hp_def)),
            )

    return DeterministicOutcome(
        result=OutcomeKind.TIMEOUT,
        turns=turns,
        final_hp=FinalHP(attacker=max(0.0, hp_att), defender=max(0.0, hp_def)),
    )


def predict_win_probability(
    attacker: StatProfile,
    defender: StatProfile,
    config: BalancerConfig | None = None,
) -> float:
    """Map the deterministic outcome to an attacker win estimate.

    1.0 / 0.0 / 0.5 for attacker win / defender win / draw.  On timeout the
    attacker's share of the remaining HP is returned as a soft estimate;
    this is not a true probability.
    """
    outcome = simulate_expected_ttk(attacker, defender, config)

    if outcome.result == OutcomeKind.ATTACKER:
        return 1.0
    if outcome.result == OutcomeKind.DEFENDER:
        return 0.0
    if outcome.result == OutcomeKind.DRAW:
        return 0.5

    total = outcome.final_hp.attacker + outcome.final_hp.defender
    if total <= 0:
        return 0.5
    return outcome.final_hp.attacker / total
