"""Seeded Monte Carlo sampling of one ordered pairing.

Every trial is played by the turn engine driven from a single
``SeededRNG`` stream, so the same ``(profiles, n_sim, seed, config)``
always yields the same aggregates.

The early-impact vector and the damage time series spread each trial's
total damage evenly across its own turns.  They are estimates, not
per-turn measurements.
"""

from __future__ import annotations

import logging

import numpy as np

from duel_balance.balance.models import SamplerResult, TimeSeriesPoint
from duel_balance.core.config import DEFAULT_CONFIG, BalancerConfig
from duel_balance.core.rng import SeededRNG
from duel_balance.core.stats import StatProfile
from duel_balance.sim.engine import DuelEngine
from duel_balance.sim.telemetry import SIDE_A, SIDE_B, DuelTelemetry

logger = logging.getLogger(__name__)


def _mean(values: list[float]) -> float:
    return float(np.mean(values)) if values else 0.0


def _median(values: list[float]) -> float:
    return float(np.median(values)) if values else 0.0


def _std(values: list[float]) -> float:
    """Population standard deviation."""
    return float(np.std(values)) if values else 0.0


def run_trials(
    row: StatProfile,
    col: StatProfile,
    n_sim: int,
    seed: int,
    config: BalancerConfig | None = None,
) -> list[DuelTelemetry]:
    """Play *n_sim* duels, row profile as side A."""
    config = config or DEFAULT_CONFIG
    rng = SeededRNG(seed)
    engine = DuelEngine(
        rng,
        max_turns=config.turn_limit_policy.max_turns,
        armor_k=config.armor_k,
        lifesteal_mode=config.lifesteal_mode,
    )
    return [engine.resolve(row, col) for _ in range(n_sim)]


def aggregate(trials: list[DuelTelemetry], early_impact_turns: int = 3) -> SamplerResult:
    """Summarise trial telemetry.  Empty input yields all-zero aggregates."""
    wins_row = wins_col = draws = 0
    ttk_all: list[float] = []
    ttk_row_wins: list[float] = []
    ttk_col_wins: list[float] = []
    hp_row_wins: list[float] = []
    hp_col_wins: list[float] = []
    overkill_row: list[float] = []
    overkill_col: list[float] = []

    early_row = [0.0] * early_impact_turns
    early_col = [0.0] * early_impact_turns
    early_count = 0

    series_row: dict[int, list[float]] = {}
    series_col: dict[int, list[float]] = {}

    for t in trials:
        if t.winner == SIDE_A:
            wins_row += 1
            ttk_row_wins.append(t.turns)
            hp_row_wins.append(t.hp_remaining_a)
        elif t.winner == SIDE_B:
            wins_col += 1
            ttk_col_wins.append(t.turns)
            hp_col_wins.append(t.hp_remaining_b)
        else:
            draws += 1

        ttk_all.append(t.turns)
        overkill_row.append(t.overkill_a)
        overkill_col.append(t.overkill_b)

        if t.turns <= 0:
            continue

        per_turn_row = t.damage_dealt_a / t.turns
        per_turn_col = t.damage_dealt_b / t.turns

        if t.turns >= early_impact_turns:
            early_count += 1
            for i in range(early_impact_turns):
                early_row[i] += per_turn_row
                early_col[i] += per_turn_col

        for turn in range(1, t.turns + 1):
            series_row.setdefault(turn, []).append(per_turn_row)
            series_col.setdefault(turn, []).append(per_turn_col)

    total = len(trials)
    divisor = max(1, early_count)

    time_series = {
        f"turn{turn}": TimeSeriesPoint(
            mean=(_mean(values) + _mean(series_col[turn])) / 2,
            median=(_median(values) + _median(series_col[turn])) / 2,
        )
        for turn, values in sorted(series_row.items())
    }

    return SamplerResult(
        total=total,
        wins_row=wins_row,
        wins_col=wins_col,
        draws=draws,
        win_rate_row=wins_row / total if total else 0.0,
        avg_ttk_row_win=_mean(ttk_row_wins),
        avg_ttk_col_win=_mean(ttk_col_wins),
        median_ttk=_median(ttk_all),
        std_ttk=_std(ttk_all),
        avg_hp_remaining_row_wins=_mean(hp_row_wins),
        avg_hp_remaining_col_wins=_mean(hp_col_wins),
        avg_overkill=(_mean(overkill_row) + _mean(overkill_col)) / 2,
        early_impact_row=[s / divisor for s in early_row],
        early_impact_col=[s / divisor for s in early_col],
        damage_time_series=time_series,
    )


def run_monte_carlo(
    row: StatProfile,
    col: StatProfile,
    n_sim: int,
    seed: int,
    config: BalancerConfig | None = None,
    early_impact_turns: int | None = None,
) -> SamplerResult:
    """Sample *n_sim* duels of *row* vs *col* and aggregate them."""
    config = config or DEFAULT_CONFIG
    if early_impact_turns is None:
        early_impact_turns = config.early_impact_turns

    trials = run_trials(row, col, n_sim, seed, config)
    result = aggregate(trials, early_impact_turns)
    logger.debug(
        "Sampled %d duels (seed=%d): row %d / col %d / draw %d",
        n_sim, seed, result.wins_row, result.wins_col, result.draws,
    )
    return result
