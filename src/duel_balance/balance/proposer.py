"""Stat-adjustment proposals from a completed matrix.

Archetypes whose average non-mirror win rate leaves the target band are
nerfed (too strong) or buffed (too weak) on the stats with the highest
positive average SWI.  Each proposal moves a stat by at most the
configured per-iteration fraction.
"""

from __future__ import annotations

import logging
from collections import defaultdict

from duel_balance.balance.models import MatrixRunResult, StatAdjustment, TuningConfig
from duel_balance.core.archetype import Archetype
from duel_balance.core.stats import StatKey

logger = logging.getLogger(__name__)

DEFAULT_TUNING = TuningConfig()


def average_win_rates(matrix: MatrixRunResult) -> dict[str, float]:
    """Mean non-mirror win rate per archetype, from both row and column side."""
    rates: dict[str, list[float]] = defaultdict(list)
    for cell in matrix.matrix:
        if cell.is_mirror:
            continue
        rates[cell.row].append(cell.win_rate_row)
        rates[cell.col].append(1 - cell.win_rate_row)
    return {aid: sum(values) / len(values) for aid, values in rates.items()}


def _ranked_swi(matrix: MatrixRunResult, archetype_id: str) -> list[tuple[StatKey, float]]:
    """Positive average SWI over the archetype's row cells, highest first."""
    sums: dict[StatKey, float] = defaultdict(float)
    counts: dict[StatKey, int] = defaultdict(int)
    for cell in matrix.matrix:
        if cell.row != archetype_id or cell.is_mirror:
            continue
        for stat, value in cell.swi.items():
            sums[stat] += value
            counts[stat] += 1

    averages = [(stat, sums[stat] / counts[stat]) for stat in sums]
    positive = [(stat, swi) for stat, swi in averages if swi > 0]
    positive.sort(key=lambda item: item[1], reverse=True)
    return positive


def _propose_for(
    archetype: Archetype,
    avg_win_rate: float,
    matrix: MatrixRunResult,
    tuning: TuningConfig,
) -> list[StatAdjustment]:
    if avg_win_rate > tuning.win_rate_target_max:
        nerf = True
        deviation = avg_win_rate - tuning.win_rate_target_max
        target = tuning.win_rate_target_max
    elif avg_win_rate < tuning.win_rate_target_min:
        nerf = False
        deviation = tuning.win_rate_target_min - avg_win_rate
        target = tuning.win_rate_target_min
    else:
        return []

    adjustments = []
    for stat, swi in _ranked_swi(matrix, archetype.id)[: tuning.stats_per_archetype]:
        current = archetype.stats.get(stat)
        pct = min(deviation * swi * 0.5, tuning.max_adjustment_per_iteration)
        sign = -1 if nerf else 1
        verb = "Nerfing" if nerf else "Buffing"
        adjustments.append(
            StatAdjustment(
                archetype_id=archetype.id,
                stat=stat,
                current_value=current,
                proposed_value=current * (1 + sign * pct),
                change_percent=sign * pct * 100,
                reason=(
                    f"Win rate {avg_win_rate * 100:.1f}% (target: {target * 100:.1f}%). "
                    f"{verb} high-impact stat (SWI: {swi:.2f})"
                ),
            )
        )
    return adjustments


def propose_adjustments(
    matrix: MatrixRunResult,
    archetypes: list[Archetype],
    tuning: TuningConfig | None = None,
) -> list[StatAdjustment]:
    """Nerf/buff proposals for every archetype outside the target band."""
    tuning = tuning or DEFAULT_TUNING
    by_id = {a.id: a for a in archetypes}

    adjustments: list[StatAdjustment] = []
    for archetype_id, avg in average_win_rates(matrix).items():
        archetype = by_id.get(archetype_id)
        if archetype is None:
            logger.warning("Matrix archetype %s not in roster, skipping", archetype_id)
            continue
        adjustments.extend(_propose_for(archetype, avg, matrix, tuning))

    logger.info("Proposed %d stat adjustments", len(adjustments))
    return adjustments


def apply_adjustments(
    archetypes: list[Archetype],
    adjustments: list[StatAdjustment],
) -> list[Archetype]:
    """Return a new roster with *adjustments* applied; inputs are untouched."""
    updates: dict[str, dict[StatKey, float]] = defaultdict(dict)
    for adj in adjustments:
        updates[adj.archetype_id][adj.stat] = adj.proposed_value

    result = []
    for archetype in archetypes:
        changes = updates.get(archetype.id)
        if changes:
            archetype = archetype.with_stats(archetype.stats.with_stats(changes))
        result.append(archetype)
    return result


def is_target_achieved(balance_score: float, tuning: TuningConfig | None = None) -> bool:
    """Balance score within the band's half-width around 0.5."""
    tuning = tuning or DEFAULT_TUNING
    return balance_score <= tuning.win_rate_target_max - 0.5
