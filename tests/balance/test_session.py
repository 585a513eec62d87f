"""Tests for auto-balance session records and the iteration loop."""

from __future__ import annotations

import logging

from duel_balance.balance.models import StatAdjustment, TuningConfig
from duel_balance.balance.session import (
    create_iteration,
    default_tuning,
    finish_session,
    record_iteration,
    run_auto_balance,
    start_session,
)
from duel_balance.core.archetype import Archetype
from duel_balance.core.config import BalancerConfig
from duel_balance.core.stats import StatKey, StatProfile


def _make_adjustment(archetype_id: str, stat: StatKey = StatKey.DAMAGE) -> StatAdjustment:
    return StatAdjustment(
        archetype_id=archetype_id,
        stat=stat,
        current_value=20,
        proposed_value=21,
        change_percent=5.0,
        reason="test",
    )


class TestSessionRecords:
    def test_start(self) -> None:
        session = start_session(0.3)
        assert session.session_id.startswith("session-")
        assert ":" not in session.session_id
        assert session.initial_balance_score == 0.3
        assert session.iterations == []
        assert session.end_time is None

    def test_create_iteration_dedupes_modified(self) -> None:
        adjustments = [
            _make_adjustment("b"),
            _make_adjustment("a"),
            _make_adjustment("b", StatKey.HP),
        ]
        iteration = create_iteration(1, "run-x", 0.3, adjustments)
        assert iteration.iteration == 1
        assert iteration.previous_run_id == "run-x"
        assert iteration.balance_score_before == 0.3
        assert iteration.balance_score_after is None
        assert iteration.archetypes_modified == ["b", "a"]
        assert len(iteration.adjustments) == 3

    def test_record_iteration_copies(self) -> None:
        session = start_session(0.3)
        iteration = create_iteration(1, "run-x", 0.3, [_make_adjustment("a")])
        updated = record_iteration(session, iteration, 0.2)

        assert session.iterations == []
        assert iteration.balance_score_after is None
        assert len(updated.iterations) == 1
        assert updated.iterations[0].balance_score_after == 0.2

    def test_finish(self) -> None:
        done = finish_session(start_session(0.3), 0.02)
        assert done.end_time is not None
        assert done.final_balance_score == 0.02
        assert done.target_achieved

    def test_finish_missed_target(self) -> None:
        assert not finish_session(start_session(0.3), 0.2).target_achieved


class TestRunAutoBalance:
    def test_balanced_roster_stops_immediately(self, fast_config) -> None:
        roster = [Archetype(id="x", name="X"), Archetype(id="y", name="Y")]
        tuning = TuningConfig(win_rate_target_min=0.2, win_rate_target_max=0.8)
        result, session = run_auto_balance(roster, tuning, fast_config, max_iterations=3, seed=1)

        assert session.iterations == []
        assert session.target_achieved
        assert result == roster

    def test_lopsided_roster(self, fast_config) -> None:
        roster = [
            Archetype(id="strong", name="Strong", stats=StatProfile(damage=60, hp=250)),
            Archetype(id="weak", name="Weak", stats=StatProfile(damage=15, hp=120)),
        ]
        result, session = run_auto_balance(roster, config=fast_config, max_iterations=2, seed=4)

        assert [a.id for a in result] == ["strong", "weak"]
        assert session.initial_balance_score > 0.4
        assert len(session.iterations) <= 2
        assert session.end_time is not None
        assert session.final_balance_score is not None
        for n, iteration in enumerate(session.iterations, start=1):
            assert iteration.iteration == n
            assert iteration.balance_score_after is not None
            assert iteration.previous_run_id.endswith("baseline" if n == 1 else f"iter{n - 1}")
        # Input roster is never modified
        assert roster[0].stats.damage == 60

    def test_reproducible(self, fast_config) -> None:
        roster = [
            Archetype(id="strong", name="Strong", stats=StatProfile(damage=60, hp=250)),
            Archetype(id="weak", name="Weak", stats=StatProfile(damage=15, hp=120)),
        ]
        r1, s1 = run_auto_balance(roster, config=fast_config, max_iterations=2, seed=4)
        r2, s2 = run_auto_balance(roster, config=fast_config, max_iterations=2, seed=4)
        assert [a.stats for a in r1] == [a.stats for a in r2]
        assert s1.final_balance_score == s2.final_balance_score

    def test_cap_defaults_from_config(self) -> None:
        roster = [
            Archetype(id="strong", name="Strong", stats=StatProfile(damage=60, hp=250)),
            Archetype(id="weak", name="Weak", stats=StatProfile(damage=15, hp=120)),
        ]
        config = BalancerConfig(n_sim_fast=40, max_iteration_adjustment=0.01)
        _, session = run_auto_balance(roster, config=config, max_iterations=2, seed=4)

        for iteration in session.iterations:
            for adjustment in iteration.adjustments:
                assert abs(adjustment.change_percent) <= 1.0 + 1e-9

    def test_logs_worst_matchups(self, fast_config, caplog) -> None:
        roster = [
            Archetype(id="strong", name="Strong", stats=StatProfile(damage=60, hp=250)),
            Archetype(id="weak", name="Weak", stats=StatProfile(damage=15, hp=120)),
        ]
        tuning = TuningConfig(top_n_imbalanced=1)
        with caplog.at_level(logging.INFO, logger="duel_balance.balance.session"):
            run_auto_balance(roster, tuning, fast_config, max_iterations=0, seed=4)
        lines = [r.getMessage() for r in caplog.records if "imbalanced:" in r.getMessage()]
        assert len(lines) == 1


class TestDefaultTuning:
    def test_cap_from_config(self) -> None:
        tuning = default_tuning(BalancerConfig(max_iteration_adjustment=0.02))
        assert tuning.max_adjustment_per_iteration == 0.02
        assert tuning.win_rate_target_min == 0.45

    def test_matches_default_when_config_is_default(self) -> None:
        assert default_tuning(BalancerConfig()) == TuningConfig()
