"""TTK batch driver: templates x budgets x trial counts.

Builds every ordered template pair at every supported budget, plays the
requested number of duels through the turn engine and summarises fight
length and win rates.  ``validate_ttk`` checks a result against a
designer-set ``TTKTarget``.
"""

from __future__ import annotations

import logging
from typing import Mapping

import numpy as np

from duel_balance.archetypes.builder import calculate_stat_values
from duel_balance.archetypes.models import (
    ArchetypeTemplate,
    ExpectedWinner,
    RoundStats,
    TTKResult,
    TTKTarget,
    TTKValidation,
)
from duel_balance.core.config import DEFAULT_CONFIG, BalancerConfig
from duel_balance.core.rng import SeededRNG
from duel_balance.core.stats import StatProfile
from duel_balance.sim.engine import DuelEngine
from duel_balance.sim.telemetry import SIDE_A, SIDE_B

logger = logging.getLogger(__name__)

DRAW_BAND = 0.1
"""Win rates within 0.5 +/- this are treated as an even split."""


def run_matchup(
    a_id: str,
    b_id: str,
    stats_a: StatProfile,
    stats_b: StatProfile,
    budget: float,
    simulations: int,
    seed: int,
    config: BalancerConfig | None = None,
) -> TTKResult:
    """Play *simulations* duels of A vs B and summarise them."""
    config = config or DEFAULT_CONFIG
    engine = DuelEngine(
        SeededRNG(seed),
        max_turns=config.turn_limit_policy.max_turns,
        armor_k=config.armor_k,
        lifesteal_mode=config.lifesteal_mode,
    )

    wins_a = wins_b = draws = 0
    rounds: list[int] = []
    for _ in range(simulations):
        duel = engine.resolve(stats_a, stats_b)
        if duel.winner == SIDE_A:
            wins_a += 1
        elif duel.winner == SIDE_B:
            wins_b += 1
        else:
            draws += 1
        rounds.append(duel.turns)

    if rounds:
        arr = np.asarray(rounds, dtype=float)
        round_stats = RoundStats(
            avg=float(arr.mean()),
            median=float(np.median(arr)),
            std_dev=float(arr.std()),
            min=int(arr.min()),
            max=int(arr.max()),
        )
    else:
        round_stats = RoundStats(avg=0.0, median=0.0, std_dev=0.0, min=0, max=0)

    return TTKResult(
        archetype_a=a_id,
        archetype_b=b_id,
        budget=budget,
        simulations=simulations,
        wins_a=wins_a,
        wins_b=wins_b,
        draws=draws,
        win_rate_a=wins_a / simulations if simulations else 0.0,
        win_rate_b=wins_b / simulations if simulations else 0.0,
        rounds=round_stats,
        seed=seed,
    )


def run_ttk_batch(
    templates: list[ArchetypeTemplate],
    budgets: list[float],
    trial_counts: list[int],
    seed: int = 42,
    config: BalancerConfig | None = None,
    weights: Mapping[str, float] | None = None,
) -> list[TTKResult]:
    """Every ordered template pair x budget x trial count, in that nesting.

    Budgets a template does not support are skipped for that pairing.
    Each result is seeded by forking *seed* on its position in the flat
    cross-product.
    """
    config = config or DEFAULT_CONFIG
    results: list[TTKResult] = []

    base_rng = SeededRNG(seed)
    index = 0
    for budget in budgets:
        profiles = {
            t.id: calculate_stat_values(t.allocation, budget, weights)
            for t in templates
            if t.min_budget <= budget <= t.max_budget
        }
        for a in templates:
            for b in templates:
                for n in trial_counts:
                    cell_index = index
                    index += 1
                    if a.id not in profiles or b.id not in profiles:
                        logger.debug("Skipping %s vs %s @ %g: budget unsupported", a.id, b.id, budget)
                        continue
                    results.append(
                        run_matchup(
                            a.id, b.id, profiles[a.id], profiles[b.id],
                            budget, n, base_rng.fork(f"ttk:{cell_index}").seed, config,
                        )
                    )

    logger.info("TTK batch complete: %d results", len(results))
    return results


def validate_ttk(result: TTKResult, target: TTKTarget) -> TTKValidation:
    """Compare a batch result against its target fight length and winner."""
    warnings: list[str] = []
    errors: list[str] = []

    avg = result.rounds.avg
    deviation = avg - target.target_rounds
    deviation_pct = deviation / target.target_rounds * 100 if target.target_rounds else 0.0

    rounds_valid = True
    if avg < target.min_rounds:
        rounds_valid = False
        errors.append(f"Rounds too low: {avg:.1f} < {target.min_rounds:g}")
    elif avg > target.max_rounds:
        rounds_valid = False
        errors.append(f"Rounds too high: {avg:.1f} > {target.max_rounds:g}")
    elif abs(deviation) > target.tolerance:
        warnings.append(f"Rounds deviation: {deviation:.1f} (Tolerance: +/-{target.tolerance:g})")

    winner_mismatch = False
    if target.expected_winner != ExpectedWinner.EITHER:
        actual = "A" if result.win_rate_a > result.win_rate_b else "B"
        is_draw = abs(result.win_rate_a - 0.5) < DRAW_BAND

        if target.expected_winner == ExpectedWinner.A and (actual != "A" or is_draw):
            winner_mismatch = True
            got = "Draw" if is_draw else "B"
            errors.append(f"Wrong winner: Expected A, got {got} ({result.win_rate_b * 100:.0f}%)")
        elif target.expected_winner == ExpectedWinner.B and (actual != "B" or is_draw):
            winner_mismatch = True
            got = "Draw" if is_draw else "A"
            errors.append(f"Wrong winner: Expected B, got {got} ({result.win_rate_a * 100:.0f}%)")

    return TTKValidation(
        result=result,
        target=target,
        is_valid=rounds_valid and not winner_mismatch,
        rounds_deviation=deviation,
        rounds_deviation_percent=deviation_pct,
        winner_mismatch=winner_mismatch,
        warnings=warnings,
        errors=errors,
    )


def validate_all(results: list[TTKResult], targets: list[TTKTarget]) -> list[TTKValidation]:
    """Validate every result that has a matching target; others are skipped."""
    by_key = {(t.archetype_a, t.archetype_b, t.budget): t for t in targets}
    validations = []
    for result in results:
        target = by_key.get((result.archetype_a, result.archetype_b, result.budget))
        if target is not None:
            validations.append(validate_ttk(result, target))
    return validations
