"""Stat Weight Index (SWI): sensitivity of time-to-kill to single stats.

SWI = ((TTK_base - TTK_perturbed) / TTK_base) / delta

A positive SWI means raising the stat shortens the fight the attacker
wins (or, for a losing attacker, the fight the defender wins).  Stats
are perturbed one at a time; no cross terms are considered.
"""

from __future__ import annotations

from duel_balance.balance.models import (
    BidirectionalSensitivity,
    Perspective,
    SensitivityResult,
)
from duel_balance.balance.resolver import simulate_expected_ttk
from duel_balance.core.config import DEFAULT_CONFIG, BalancerConfig
from duel_balance.core.stats import ANALYZABLE_STATS, StatKey, StatProfile


def compute_swi(
    attacker: StatProfile,
    defender: StatProfile,
    stat: StatKey,
    delta: float | None = None,
    config: BalancerConfig | None = None,
    perspective: Perspective = Perspective.ATTACKER,
) -> SensitivityResult | None:
    """SWI of one stat on one side, or ``None`` when TTK is undefined.

    TTK is undefined when either the baseline or the perturbed duel ends
    in a draw or a timeout.
    """
    config = config or DEFAULT_CONFIG
    delta = config.swi_delta if delta is None else delta

    baseline = simulate_expected_ttk(attacker, defender, config)
    if not baseline.decided:
        return None

    if perspective == Perspective.ATTACKER:
        attacker = attacker.scaled(stat, 1 + delta)
    else:
        defender = defender.scaled(stat, 1 + delta)

    perturbed = simulate_expected_ttk(attacker, defender, config)
    if not perturbed.decided:
        return None

    change = (baseline.turns - perturbed.turns) / baseline.turns
    return SensitivityResult(
        stat=stat,
        value=change / delta,
        percent_change=delta * 100,
        ttk_baseline=baseline.turns,
        ttk_perturbed=perturbed.turns,
    )


def compute_all_swi(
    attacker: StatProfile,
    defender: StatProfile,
    delta: float | None = None,
    config: BalancerConfig | None = None,
    perspective: Perspective = Perspective.ATTACKER,
) -> list[SensitivityResult]:
    """SWI for every analyzable stat, most impactful (by magnitude) first."""
    results = []
    for stat in ANALYZABLE_STATS:
        swi = compute_swi(attacker, defender, stat, delta, config, perspective)
        if swi is not None:
            results.append(swi)

    results.sort(key=lambda r: abs(r.value), reverse=True)
    return results


def compute_bidirectional_swi(
    attacker: StatProfile,
    defender: StatProfile,
    config: BalancerConfig | None = None,
) -> BidirectionalSensitivity:
    return BidirectionalSensitivity(
        attacker=compute_all_swi(attacker, defender, config=config, perspective=Perspective.ATTACKER),
        defender=compute_all_swi(attacker, defender, config=config, perspective=Perspective.DEFENDER),
    )


def format_swi(swi: float, delta_percent: float = 1.0) -> str:
    """Human-readable description of an SWI value."""
    change = abs(swi * delta_percent * 100)
    if swi > 0:
        return f"{change:.1f}% TTK reduction per {delta_percent:g}% stat increase"
    if swi < 0:
        return f"{change:.1f}% TTK increase per {delta_percent:g}% stat increase"
    return "No significant impact"
