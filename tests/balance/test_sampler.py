"""Tests for the Monte Carlo sampler and its aggregation."""

from __future__ import annotations

import math

import pytest

from duel_balance.balance.sampler import aggregate, run_monte_carlo, run_trials
from duel_balance.core.config import BalancerConfig
from duel_balance.core.stats import StatProfile
from duel_balance.sim.telemetry import DRAW, SIDE_A, SIDE_B, DuelTelemetry


def _make_trial(
    winner: str,
    turns: int,
    dealt_a: float = 0.0,
    dealt_b: float = 0.0,
    hp_a: float = 0.0,
    hp_b: float = 0.0,
    overkill_a: float = 0.0,
    overkill_b: float = 0.0,
) -> DuelTelemetry:
    return DuelTelemetry(
        winner=winner,
        turns=turns,
        damage_dealt_a=dealt_a,
        damage_dealt_b=dealt_b,
        hp_remaining_a=hp_a,
        hp_remaining_b=hp_b,
        overkill_a=overkill_a,
        overkill_b=overkill_b,
        timed_out=False,
    )


_TRIALS = [
    _make_trial(SIDE_A, 2, dealt_a=100, dealt_b=20, hp_a=30, overkill_a=10),
    _make_trial(SIDE_B, 4, dealt_a=40, dealt_b=120, hp_b=50),
    _make_trial(DRAW, 3, dealt_a=30, dealt_b=30),
]


# ---------------------------------------------------------------------------
# aggregate
# ---------------------------------------------------------------------------

class TestAggregate:
    def test_counts(self) -> None:
        r = aggregate(_TRIALS)
        assert (r.total, r.wins_row, r.wins_col, r.draws) == (3, 1, 1, 1)
        assert r.win_rate_row == pytest.approx(1 / 3)

    def test_ttk_stats(self) -> None:
        r = aggregate(_TRIALS)
        assert r.avg_ttk_row_win == 2
        assert r.avg_ttk_col_win == 4
        assert r.median_ttk == 3
        # Population std of [2, 4, 3]
        assert r.std_ttk == pytest.approx(math.sqrt(2 / 3))

    def test_hp_and_overkill(self) -> None:
        r = aggregate(_TRIALS)
        assert r.avg_hp_remaining_row_wins == 30
        assert r.avg_hp_remaining_col_wins == 50
        assert r.avg_overkill == pytest.approx((10 / 3 + 0) / 2)

    def test_early_impact(self) -> None:
        # Only the 4-turn and 3-turn trials last three turns
        r = aggregate(_TRIALS, early_impact_turns=3)
        assert r.early_impact_row == pytest.approx([10.0, 10.0, 10.0])
        assert r.early_impact_col == pytest.approx([20.0, 20.0, 20.0])

    def test_time_series(self) -> None:
        r = aggregate(_TRIALS)
        assert list(r.damage_time_series) == ["turn1", "turn2", "turn3", "turn4"]
        # Row per-turn [50, 10, 10], col [10, 30, 10]
        assert r.damage_time_series["turn1"].mean == pytest.approx((70 / 3 + 50 / 3) / 2)
        assert r.damage_time_series["turn1"].median == pytest.approx(10)
        assert r.damage_time_series["turn4"].mean == pytest.approx(20)

    def test_empty(self) -> None:
        r = aggregate([])
        assert r.total == 0
        assert r.win_rate_row == 0.0
        assert r.median_ttk == 0.0
        assert r.std_ttk == 0.0
        assert r.early_impact_row == [0.0, 0.0, 0.0]
        assert r.damage_time_series == {}


# ---------------------------------------------------------------------------
# run_monte_carlo
# ---------------------------------------------------------------------------

class TestRunMonteCarlo:
    def test_deterministic(self) -> None:
        a = StatProfile(damage=30)
        b = StatProfile(hp=200, armor=10)
        r1 = run_monte_carlo(a, b, 200, seed=7)
        r2 = run_monte_carlo(a, b, 200, seed=7)
        assert r1.model_dump() == r2.model_dump()

    def test_seed_changes_trials(self) -> None:
        a = StatProfile()
        assert run_trials(a, a, 50, seed=1) != run_trials(a, a, 50, seed=2)

    def test_counts_sum_to_total(self) -> None:
        r = run_monte_carlo(StatProfile(damage=30), StatProfile(hp=180), 300, seed=11)
        assert r.total == 300
        assert r.wins_row + r.wins_col + r.draws == 300
        assert 0.0 <= r.win_rate_row <= 1.0

    def test_mirror_near_even(self) -> None:
        r = run_monte_carlo(StatProfile(), StatProfile(), 2000, seed=42)
        assert abs(r.win_rate_row - 0.5) < 0.06

    def test_dominant_side_wins(self) -> None:
        r = run_monte_carlo(StatProfile(damage=100, hp=500), StatProfile(), 200, seed=3)
        assert r.win_rate_row > 0.95

    def test_respects_turn_cap(self) -> None:
        zero = StatProfile(damage=0)
        config = BalancerConfig(turn_limit_policy={"max_turns": 7})
        r = run_monte_carlo(zero, zero, 10, seed=1, config=config)
        assert r.draws == 10
        assert r.median_ttk == 7

    def test_early_impact_length_from_config(self) -> None:
        config = BalancerConfig(early_impact_turns=5)
        r = run_monte_carlo(StatProfile(), StatProfile(), 20, seed=1, config=config)
        assert len(r.early_impact_row) == 5
        assert len(r.early_impact_col) == 5
