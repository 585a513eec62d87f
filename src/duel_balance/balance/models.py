"""Pydantic v2 models for balance analysis output.

These models define the structured output of the balancing pipeline:
deterministic outcomes, sensitivity results, per-cell matchup aggregates,
full matrix runs and auto-balance sessions. All are serializable to/from
JSON via ``model_dump(mode="json")`` / ``model_validate``.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

from duel_balance.core.config import BalancerConfig
from duel_balance.core.stats import StatKey


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


# ---------------------------------------------------------------------------
# Deterministic resolver
# ---------------------------------------------------------------------------

class OutcomeKind(str, Enum):
    ATTACKER = "attacker"
    DEFENDER = "defender"
    DRAW = "draw"
    TIMEOUT = "timeout"


class FinalHP(BaseModel):
    model_config = ConfigDict(frozen=True)

    attacker: float
    defender: float


class DeterministicOutcome(BaseModel):
    """Result of the expected-value duel state machine."""

    model_config = ConfigDict(frozen=True)

    result: OutcomeKind
    turns: int
    final_hp: FinalHP

    @property
    def decided(self) -> bool:
        """True when one side actually won (time-to-kill is defined)."""
        return self.result in (OutcomeKind.ATTACKER, OutcomeKind.DEFENDER)


# ---------------------------------------------------------------------------
# Sensitivity
# ---------------------------------------------------------------------------

class Perspective(str, Enum):
    ATTACKER = "attacker"
    DEFENDER = "defender"


class SensitivityResult(BaseModel):
    """Elasticity of time-to-kill with respect to one stat."""

    model_config = ConfigDict(frozen=True)

    stat: StatKey
    value: float
    """Signed elasticity. Positive = raising the stat shortens TTK."""
    percent_change: float
    """Perturbation applied, in percent."""
    ttk_baseline: int
    ttk_perturbed: int


class BidirectionalSensitivity(BaseModel):
    model_config = ConfigDict(frozen=True)

    attacker: list[SensitivityResult]
    defender: list[SensitivityResult]


# ---------------------------------------------------------------------------
# Stochastic sampler / matrix cells
# ---------------------------------------------------------------------------

class TimeSeriesPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    mean: float
    median: float


class SamplerResult(BaseModel):
    """Aggregates over all trials of one ordered pairing."""

    model_config = ConfigDict(frozen=True)

    total: int
    wins_row: int
    wins_col: int
    draws: int
    win_rate_row: float = Field(ge=0.0, le=1.0)

    # TTK statistics
    avg_ttk_row_win: float
    """Mean turns over trials the row side won."""
    avg_ttk_col_win: float
    median_ttk: float
    """Median over all trials."""
    std_ttk: float
    """Population standard deviation over all trials."""

    # HP statistics
    avg_hp_remaining_row_wins: float
    avg_hp_remaining_col_wins: float
    avg_overkill: float

    # Per-turn damage estimates (total damage spread over each trial's turns)
    early_impact_row: list[float] = Field(default_factory=list)
    early_impact_col: list[float] = Field(default_factory=list)
    damage_time_series: dict[str, TimeSeriesPoint] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_counts(self) -> SamplerResult:
        if self.wins_row + self.wins_col + self.draws != self.total:
            raise ValueError(
                f"wins_row + wins_col + draws must equal total "
                f"({self.wins_row} + {self.wins_col} + {self.draws} != {self.total})"
            )
        return self


class MatchupResult(SamplerResult):
    """One cell of the N x N matrix: sampler aggregates plus sensitivity."""

    row: str
    col: str
    swi: dict[StatKey, float] = Field(default_factory=dict)
    """Attacker-perspective sensitivity per stat (undefined stats omitted)."""
    runtime_ms: float = 0.0
    seed: int = 0

    @property
    def is_mirror(self) -> bool:
        return self.row == self.col

    @property
    def deviation(self) -> float:
        """Distance of the row win rate from an even 0.5."""
        return abs(self.win_rate_row - 0.5)


# ---------------------------------------------------------------------------
# Presets and runs
# ---------------------------------------------------------------------------

class BalancePreset(BaseModel):
    """A named, persisted ``BalancerConfig`` with optional stat weights."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""
    config: BalancerConfig = Field(default_factory=BalancerConfig)
    weights: dict[str, float] = Field(default_factory=dict)


class RunMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    run_id: str
    preset_name: str
    created_at: str = Field(default_factory=utc_now)
    n_sim: int
    seed: int
    balancer_snapshot: BalancePreset


class MatrixRunResult(BaseModel):
    """A complete N x N run, cells in row-major order."""

    model_config = ConfigDict(frozen=True)

    run_meta: RunMeta
    archetypes: list[str]
    matrix: list[MatchupResult]

    @model_validator(mode="after")
    def _check_shape(self) -> MatrixRunResult:
        k = len(self.archetypes)
        if len(self.matrix) != k * k:
            raise ValueError(
                f"matrix must hold {k * k} cells for {k} archetypes, got {len(self.matrix)}"
            )
        return self


# ---------------------------------------------------------------------------
# Auto-balance
# ---------------------------------------------------------------------------

class Aggressiveness(str, Enum):
    CONSERVATIVE = "conservative"
    """Adjust the single most impactful stat."""
    AGGRESSIVE = "aggressive"
    """Adjust up to three stats."""


class TuningConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    win_rate_target_min: float = 0.45
    win_rate_target_max: float = 0.55
    max_adjustment_per_iteration: float = Field(default=0.05, ge=0)
    top_n_imbalanced: int = Field(default=5, ge=1)
    aggressiveness: Aggressiveness = Aggressiveness.CONSERVATIVE

    @model_validator(mode="after")
    def _check_band(self) -> TuningConfig:
        if self.win_rate_target_min > self.win_rate_target_max:
            raise ValueError("win_rate_target_min must not exceed win_rate_target_max")
        return self

    @property
    def stats_per_archetype(self) -> int:
        return 3 if self.aggressiveness == Aggressiveness.AGGRESSIVE else 1


class StatAdjustment(BaseModel):
    model_config = ConfigDict(frozen=True)

    archetype_id: str
    stat: StatKey
    current_value: float
    proposed_value: float
    change_percent: float
    """Signed: negative for nerfs."""
    reason: str


class BalanceIteration(BaseModel):
    model_config = ConfigDict(frozen=True)

    iteration: int
    timestamp: str = Field(default_factory=utc_now)
    previous_run_id: str
    balance_score_before: float
    balance_score_after: float | None = None
    adjustments: list[StatAdjustment] = Field(default_factory=list)
    archetypes_modified: list[str] = Field(default_factory=list)


class AutoBalanceSession(BaseModel):
    model_config = ConfigDict(frozen=True)

    session_id: str
    start_time: str = Field(default_factory=utc_now)
    end_time: str | None = None
    iterations: list[BalanceIteration] = Field(default_factory=list)
    initial_balance_score: float
    final_balance_score: float | None = None
    target_achieved: bool = False
