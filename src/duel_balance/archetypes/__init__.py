"""Archetype templates, the budget builder and the TTK batch driver."""

from duel_balance.archetypes.batch import (
    run_matchup,
    run_ttk_batch,
    validate_all,
    validate_ttk,
)
from duel_balance.archetypes.builder import (
    allocation_errors,
    build_archetype,
    build_roster,
    calculate_stat_values,
    round_stat,
    validate_allocation,
)
from duel_balance.archetypes.catalog import (
    BUDGET_TIERS,
    DEFAULT_TEMPLATES,
    DEFAULT_TTK_TARGETS,
    NORMALIZED_WEIGHTS,
    get_template,
)
from duel_balance.archetypes.models import (
    ArchetypeTemplate,
    ArchetypeValidationError,
    BudgetTier,
    ExpectedWinner,
    RoundStats,
    TTKResult,
    TTKTarget,
    TTKValidation,
)
from duel_balance.archetypes.report import generate_csv, generate_narrative

__all__ = [
    # models
    "ArchetypeTemplate",
    "ArchetypeValidationError",
    "BudgetTier",
    "ExpectedWinner",
    "RoundStats",
    "TTKResult",
    "TTKTarget",
    "TTKValidation",
    # catalog
    "BUDGET_TIERS",
    "DEFAULT_TEMPLATES",
    "DEFAULT_TTK_TARGETS",
    "NORMALIZED_WEIGHTS",
    "get_template",
    # builder
    "allocation_errors",
    "build_archetype",
    "build_roster",
    "calculate_stat_values",
    "round_stat",
    "validate_allocation",
    # batch
    "run_matchup",
    "run_ttk_batch",
    "validate_all",
    "validate_ttk",
    # report
    "generate_csv",
    "generate_narrative",
]
