"""Turn percentage templates into concrete stat profiles.

    value = (percent / 100 * budget) / weight(stat)

Example with budget 50 and weights ``{hp: 1.0, damage: 3.5}``::

    hp 70%     -> (0.70 * 50) / 1.0 = 35
    damage 30% -> (0.30 * 50) / 3.5 = 4.29 -> 4
"""

from __future__ import annotations

import logging
import math
from typing import Mapping

from duel_balance.archetypes.catalog import NORMALIZED_WEIGHTS
from duel_balance.archetypes.models import ArchetypeTemplate, ArchetypeValidationError
from duel_balance.core.archetype import Archetype, ArchetypeMeta
from duel_balance.core.stats import (
    DEFAULT_STATS,
    MULTIPLIER_STATS,
    PERCENTAGE_STATS,
    StatKey,
    StatProfile,
)

logger = logging.getLogger(__name__)

ALLOCATION_TOLERANCE = 0.1


def _round_to(value: float, decimals: int) -> float:
    # Half-up, not banker's rounding
    scale = 10 ** decimals
    return math.floor(value * scale + 0.5) / scale


def round_stat(stat: StatKey, value: float) -> float:
    """Percentages to 1 decimal, multipliers to 2, everything else to integers."""
    if stat in PERCENTAGE_STATS:
        return _round_to(value, 1)
    if stat in MULTIPLIER_STATS:
        return _round_to(value, 2)
    return _round_to(value, 0)


def allocation_errors(allocation: Mapping[StatKey, float]) -> list[str]:
    errors = []
    for stat, pct in allocation.items():
        name = StatKey(stat).value
        if pct < 0:
            errors.append(f"{name} has negative allocation: {pct}%")
        if pct > 100:
            errors.append(f"{name} allocation exceeds 100%: {pct}%")

    total = sum(allocation.values())
    if abs(total - 100) > ALLOCATION_TOLERANCE:
        errors.append(f"Allocation sum is {total:g}%, expected 100% (+/-{ALLOCATION_TOLERANCE}%)")
    return errors


def validate_allocation(allocation: Mapping[StatKey, float]) -> None:
    """Raise ``ArchetypeValidationError`` listing every allocation problem."""
    errors = allocation_errors(allocation)
    if errors:
        raise ArchetypeValidationError(f"Invalid stat allocation: {', '.join(errors)}")


def calculate_stat_values(
    allocation: Mapping[StatKey, float],
    budget: float,
    weights: Mapping[str, float] | None = None,
) -> StatProfile:
    """Spend *budget* according to *allocation*, starting from default stats."""
    weights = NORMALIZED_WEIGHTS if weights is None else weights
    updates: dict[StatKey, float] = {}

    for stat, pct in allocation.items():
        stat = StatKey(stat)
        weight = weights.get(stat, weights.get(stat.value))
        if not weight:
            if pct > 0:
                logger.warning("No weight defined for stat %s, skipping", stat.value)
            continue
        points = pct / 100 * budget
        updates[stat] = round_stat(stat, points / weight)

    return DEFAULT_STATS.with_stats(updates)


def build_archetype(
    template: ArchetypeTemplate,
    budget: float,
    weights: Mapping[str, float] | None = None,
) -> Archetype:
    """Build a concrete archetype from *template* at *budget* points.

    Raises ``ArchetypeValidationError`` if *budget* is outside the
    template's range or its allocation is invalid.
    """
    if budget < template.min_budget or budget > template.max_budget:
        raise ArchetypeValidationError(
            f"Budget {budget:g} outside template bounds "
            f"[{template.min_budget:g}, {template.max_budget:g}]"
        )
    validate_allocation(template.allocation)

    return Archetype(
        id=template.id,
        name=template.name,
        role=template.category,
        description=template.description,
        stats=calculate_stat_values(template.allocation, budget, weights),
        meta=ArchetypeMeta(created_by="builder"),
    )


def build_roster(
    templates: list[ArchetypeTemplate],
    budget: float,
    weights: Mapping[str, float] | None = None,
) -> list[Archetype]:
    """Build every template that supports *budget*; others are skipped."""
    roster = []
    for template in templates:
        if not template.min_budget <= budget <= template.max_budget:
            logger.info("Template %s does not support budget %g, skipping", template.id, budget)
            continue
        roster.append(build_archetype(template, budget, weights))
    return roster
