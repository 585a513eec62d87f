"""Pydantic models for archetype templates and TTK batch results."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from duel_balance.core.stats import StatKey


class ArchetypeValidationError(ValueError):
    """Raised when a template allocation or requested budget is invalid."""


class ArchetypeTemplate(BaseModel):
    """Percentage allocation of a point budget across stats."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    """tank / dps / assassin / bruiser / support / hybrid"""
    description: str = ""
    allocation: dict[StatKey, float]
    """Stat -> percent of budget.  Must sum to 100."""
    min_budget: float = 20
    max_budget: float = 100
    tags: list[str] = Field(default_factory=list)


class BudgetTier(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    points: float
    description: str = ""


class ExpectedWinner(str, Enum):
    A = "A"
    B = "B"
    EITHER = "either"


class TTKTarget(BaseModel):
    """Desired fight length (and optionally winner) for one pairing."""

    model_config = ConfigDict(frozen=True)

    archetype_a: str
    archetype_b: str
    budget: float
    min_rounds: float
    target_rounds: float
    max_rounds: float
    tolerance: float = 1.0
    expected_winner: ExpectedWinner = ExpectedWinner.EITHER


class RoundStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    avg: float
    median: float
    std_dev: float
    min: int
    max: int


class TTKResult(BaseModel):
    """Aggregate of repeated duels between two templates at one budget."""

    model_config = ConfigDict(frozen=True)

    archetype_a: str
    archetype_b: str
    budget: float
    simulations: int
    wins_a: int
    wins_b: int
    draws: int
    win_rate_a: float
    win_rate_b: float
    rounds: RoundStats
    seed: int = 0


class TTKValidation(BaseModel):
    model_config = ConfigDict(frozen=True)

    result: TTKResult
    target: TTKTarget
    is_valid: bool
    rounds_deviation: float
    rounds_deviation_percent: float
    winner_mismatch: bool
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
