"""Tests for expected-value formulas and the deterministic resolver."""

from __future__ import annotations

import math

import pytest

from duel_balance.balance.formulas import (
    effective_damage_per_turn,
    effective_hp_reference,
    estimate_ttk,
    expected_damage_per_hit,
    expected_hits_per_turn,
)
from duel_balance.balance.models import OutcomeKind
from duel_balance.balance.resolver import predict_win_probability, simulate_expected_ttk
from duel_balance.core.config import BalancerConfig, LifestealMode, TurnLimitPolicy
from duel_balance.core.stats import StatProfile


# ---------------------------------------------------------------------------
# Formulas
# ---------------------------------------------------------------------------

class TestFormulas:
    def test_damage_per_hit_default(self) -> None:
        # 5% x2 + 5% x0 + 90% x1 = 1.0
        assert expected_damage_per_hit(StatProfile()) == pytest.approx(25.0)

    def test_damage_per_hit_crit_build(self) -> None:
        s = StatProfile(crit_chance=10, crit_mult=3, fail_chance=0)
        assert expected_damage_per_hit(s) == pytest.approx(30.0)

    def test_hits_per_turn_default(self) -> None:
        assert expected_hits_per_turn(StatProfile(), StatProfile()) == pytest.approx(0.75)

    def test_hits_per_turn_full_evasion(self) -> None:
        assert expected_hits_per_turn(StatProfile(), StatProfile(evasion=500)) == 0.0

    def test_edpt_default(self) -> None:
        assert effective_damage_per_turn(StatProfile(), StatProfile()) == pytest.approx(18.75)

    def test_edpt_never_negative(self) -> None:
        assert effective_damage_per_turn(StatProfile(), StatProfile(regen=1000)) == 0.0

    def test_edpt_uses_config_k(self) -> None:
        dfn = StatProfile(armor=50)
        soft = effective_damage_per_turn(StatProfile(), dfn, BalancerConfig(armor_k=100))
        hard = effective_damage_per_turn(StatProfile(), dfn, BalancerConfig(armor_k=1))
        assert hard < soft

    def test_ehp_resistance(self) -> None:
        assert effective_hp_reference(StatProfile(hp=100, resistance=50)) == pytest.approx(200)

    def test_ehp_armor(self) -> None:
        # armor 100 vs 100 damage: 100 / 1100 absorbed
        assert effective_hp_reference(StatProfile(hp=100, armor=100)) == pytest.approx(110)

    def test_ehp_full_mitigation(self) -> None:
        assert effective_hp_reference(StatProfile(resistance=100)) == math.inf

    def test_estimate_ttk_infinite(self) -> None:
        zero = StatProfile(damage=0)
        assert estimate_ttk(zero, zero) == math.inf

    def test_estimate_ttk_faster_side(self) -> None:
        att = StatProfile(damage=100, hp=500)
        dfn = StatProfile(damage=10, hp=100)
        # min(100 / 75, 500 / 7.5)
        assert estimate_ttk(att, dfn) == pytest.approx(100 / 75)


# ---------------------------------------------------------------------------
# simulate_expected_ttk
# ---------------------------------------------------------------------------

class TestSimulateExpectedTTK:
    def test_attacker_wins(self) -> None:
        att = StatProfile(damage=100, hp=500)
        dfn = StatProfile(damage=10, hp=100)
        out = simulate_expected_ttk(att, dfn)
        assert out.result == OutcomeKind.ATTACKER
        assert out.turns == 2
        assert out.final_hp.defender == 0
        assert out.final_hp.attacker == pytest.approx(485)
        assert out.decided

    def test_defender_wins(self) -> None:
        att = StatProfile(damage=10, hp=100)
        dfn = StatProfile(damage=100, hp=500)
        out = simulate_expected_ttk(att, dfn)
        assert out.result == OutcomeKind.DEFENDER
        assert out.final_hp.attacker == 0

    def test_zero_damage_timeout(self) -> None:
        zero = StatProfile(damage=0)
        out = simulate_expected_ttk(zero, zero, turn_limit=5)
        assert out.result == OutcomeKind.TIMEOUT
        assert out.turns == 5
        assert out.final_hp.attacker == 150
        assert out.final_hp.defender == 150
        assert not out.decided

    def test_zero_damage_default_limit(self) -> None:
        zero = StatProfile(damage=0)
        config = BalancerConfig(turn_limit_policy=TurnLimitPolicy(max_turns=12))
        out = simulate_expected_ttk(zero, zero, config)
        assert out.result == OutcomeKind.TIMEOUT
        assert out.turns == 12

    def test_mirror_is_draw(self) -> None:
        out = simulate_expected_ttk(StatProfile(), StatProfile())
        assert out.result == OutcomeKind.DRAW
        # 150 / 18.75
        assert out.turns == 8
        assert out.final_hp.attacker == 0
        assert out.final_hp.defender == 0

    def test_lifesteal_breaks_mirror(self) -> None:
        out = simulate_expected_ttk(StatProfile(lifesteal=50), StatProfile())
        assert out.result == OutcomeKind.ATTACKER
        assert out.turns == 8
        # Net loss 18.75 - 9.375 per turn
        assert out.final_hp.attacker == pytest.approx(75)

    def test_on_damage_lifesteal_capped_by_remaining_hp(self) -> None:
        # Defender has 10 HP left after turn 1 and takes 75 on turn 2
        att = StatProfile(damage=100, hp=500, lifesteal=100)
        dfn = StatProfile(damage=200, hp=85)
        on_hit = simulate_expected_ttk(att, dfn, BalancerConfig())
        on_damage = simulate_expected_ttk(
            att, dfn, BalancerConfig(lifesteal_mode=LifestealMode.ON_DAMAGE)
        )
        assert on_hit.result == on_damage.result == OutcomeKind.ATTACKER
        assert on_hit.final_hp.attacker > on_damage.final_hp.attacker

    def test_regen_capped(self) -> None:
        att = StatProfile(damage=100, regen=500)
        out = simulate_expected_ttk(att, StatProfile())
        assert out.final_hp.attacker == 150

    def test_more_damage_kills_faster(self) -> None:
        dfn = StatProfile(hp=1000, damage=1)
        slow = simulate_expected_ttk(StatProfile(damage=100), dfn)
        fast = simulate_expected_ttk(StatProfile(damage=200), dfn)
        assert slow.result == fast.result == OutcomeKind.ATTACKER
        assert fast.turns < slow.turns

    def test_more_armor_survives_longer(self) -> None:
        att = StatProfile(damage=40)
        soft = simulate_expected_ttk(att, StatProfile(hp=400, damage=0))
        hard = simulate_expected_ttk(att, StatProfile(hp=400, damage=0, armor=200))
        assert hard.turns > soft.turns


class TestPredictWinProbability:
    def test_attacker(self) -> None:
        assert predict_win_probability(StatProfile(damage=100, hp=500), StatProfile()) == 1.0

    def test_defender(self) -> None:
        assert predict_win_probability(StatProfile(), StatProfile(damage=100, hp=500)) == 0.0

    def test_mirror(self) -> None:
        assert predict_win_probability(StatProfile(), StatProfile()) == 0.5

    def test_timeout_uses_hp_share(self) -> None:
        att = StatProfile(damage=0, hp=300)
        dfn = StatProfile(damage=0, hp=100)
        assert predict_win_probability(att, dfn) == pytest.approx(0.75)
