"""Tests for Stat Weight Index computation."""

from __future__ import annotations

import pytest

from duel_balance.balance.models import OutcomeKind, Perspective
from duel_balance.balance.resolver import simulate_expected_ttk
from duel_balance.balance.sensitivity import (
    compute_all_swi,
    compute_bidirectional_swi,
    compute_swi,
    format_swi,
)
from duel_balance.core.stats import StatKey, StatProfile

# Default attacker kills this defender in exactly 16 turns (300 / 18.75)
# while taking 1 damage per turn.
_DEFENDER = StatProfile(hp=300, damage=1)


class TestComputeSWI:
    def test_damage_shortens_fight(self) -> None:
        result = compute_swi(StatProfile(), _DEFENDER, StatKey.DAMAGE, delta=0.1)
        assert result is not None
        assert result.ttk_baseline == 16
        assert result.ttk_perturbed == 15
        # (16 - 15) / 16 / 0.1
        assert result.value == pytest.approx(0.625)
        assert result.percent_change == pytest.approx(10.0)

    def test_defender_perspective(self) -> None:
        result = compute_swi(
            StatProfile(), _DEFENDER, StatKey.HP, delta=0.1,
            perspective=Perspective.DEFENDER,
        )
        assert result is not None
        # 330 HP takes 18 turns
        assert result.ttk_perturbed == 18
        assert result.value == pytest.approx(-1.25)

    def test_irrelevant_stat_is_zero(self) -> None:
        result = compute_swi(StatProfile(), _DEFENDER, StatKey.REGEN, delta=0.1)
        assert result is not None
        assert result.value == 0.0

    def test_undefined_for_draw(self) -> None:
        assert compute_swi(StatProfile(), StatProfile(), StatKey.DAMAGE) is None

    def test_undefined_for_timeout(self) -> None:
        zero = StatProfile(damage=0)
        assert compute_swi(zero, zero, StatKey.HP) is None

    def test_undefined_when_perturbation_forces_draw(self) -> None:
        # 160 HP attacker wins at turn 8 with 10 HP left.  Defender at 165 HP
        # survives to turn 9, when both sides have taken 168.75.
        attacker = StatProfile(hp=160)
        baseline = simulate_expected_ttk(attacker, StatProfile())
        assert baseline.result == OutcomeKind.ATTACKER
        assert baseline.turns == 8

        result = compute_swi(
            attacker, StatProfile(), StatKey.HP, delta=0.1,
            perspective=Perspective.DEFENDER,
        )
        assert result is None

    def test_uses_config_delta(self, fast_config) -> None:
        result = compute_swi(StatProfile(), _DEFENDER, StatKey.DAMAGE, config=fast_config)
        assert result is not None
        assert result.percent_change == pytest.approx(1.0)


class TestComputeAllSWI:
    def test_sorted_by_magnitude(self) -> None:
        results = compute_all_swi(StatProfile(), _DEFENDER, delta=0.1)
        magnitudes = [abs(r.value) for r in results]
        assert magnitudes == sorted(magnitudes, reverse=True)
        assert results[0].value != 0

    def test_one_entry_per_stat(self) -> None:
        results = compute_all_swi(StatProfile(), _DEFENDER, delta=0.1)
        stats = [r.stat for r in results]
        assert len(stats) == len(set(stats))

    def test_mirror_has_no_defined_swi(self) -> None:
        assert compute_all_swi(StatProfile(), StatProfile()) == []

    def test_bidirectional(self) -> None:
        both = compute_bidirectional_swi(StatProfile(), _DEFENDER)
        assert both.attacker
        assert both.defender


class TestFormatSWI:
    def test_positive(self) -> None:
        assert format_swi(0.5) == "50.0% TTK reduction per 1% stat increase"

    def test_negative(self) -> None:
        assert format_swi(-0.25, 2.0) == "50.0% TTK increase per 2% stat increase"

    def test_zero(self) -> None:
        assert format_swi(0.0) == "No significant impact"
