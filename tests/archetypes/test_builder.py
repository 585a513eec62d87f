"""Tests for the archetype builder and template catalog."""

from __future__ import annotations

import logging

import pytest

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
    TEMPLATES_BY_ID,
    get_template,
)
from duel_balance.archetypes.models import ArchetypeTemplate, ArchetypeValidationError
from duel_balance.core.stats import StatKey


def _make_template(**overrides) -> ArchetypeTemplate:
    fields = {
        "id": "t",
        "name": "T",
        "category": "tank",
        "allocation": {StatKey.HP: 70, StatKey.DAMAGE: 30},
    }
    fields.update(overrides)
    return ArchetypeTemplate(**fields)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class TestCatalog:
    def test_sixteen_templates(self) -> None:
        assert len(DEFAULT_TEMPLATES) == 16
        assert len(TEMPLATES_BY_ID) == 16

    def test_every_allocation_valid(self) -> None:
        for template in DEFAULT_TEMPLATES:
            assert allocation_errors(template.allocation) == [], template.id

    def test_lookup(self) -> None:
        assert get_template("tank_juggernaut").category == "tank"
        with pytest.raises(KeyError):
            get_template("missing")

    def test_targets_reference_templates(self) -> None:
        for target in DEFAULT_TTK_TARGETS:
            assert target.archetype_a in TEMPLATES_BY_ID
            assert target.archetype_b in TEMPLATES_BY_ID

    def test_budget_tiers_ascending(self) -> None:
        points = [tier.points for tier in BUDGET_TIERS]
        assert points == sorted(points)


# ---------------------------------------------------------------------------
# Rounding and validation
# ---------------------------------------------------------------------------

class TestRounding:
    def test_integer_stats_half_up(self) -> None:
        assert round_stat(StatKey.HP, 6.5) == 7
        assert round_stat(StatKey.DAMAGE, 4.29) == 4

    def test_percentage_one_decimal(self) -> None:
        assert round_stat(StatKey.CRIT_CHANCE, 12.34) == pytest.approx(12.3)

    def test_multiplier_two_decimals(self) -> None:
        assert round_stat(StatKey.CRIT_MULT, 1.236) == pytest.approx(1.24)


class TestValidation:
    def test_valid(self) -> None:
        validate_allocation({StatKey.HP: 60, StatKey.DAMAGE: 40})

    def test_within_tolerance(self) -> None:
        validate_allocation({StatKey.HP: 60.05, StatKey.DAMAGE: 40})

    def test_bad_sum(self) -> None:
        with pytest.raises(ArchetypeValidationError, match="sum is 90%"):
            validate_allocation({StatKey.HP: 60, StatKey.DAMAGE: 30})

    def test_negative(self) -> None:
        errors = allocation_errors({StatKey.HP: 110, StatKey.DAMAGE: -10})
        assert any("negative" in e for e in errors)
        assert any("exceeds 100%" in e for e in errors)

    def test_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            validate_allocation({StatKey.HP: 10})


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------

class TestCalculateStatValues:
    def test_simple(self) -> None:
        stats = calculate_stat_values({StatKey.HP: 70, StatKey.DAMAGE: 30}, 50)
        assert stats.hp == 35
        # 15 / 3.5 = 4.29
        assert stats.damage == 4
        # Unallocated stats keep their defaults
        assert stats.crit_mult == 2.0

    def test_juggernaut(self) -> None:
        stats = calculate_stat_values(get_template("tank_juggernaut").allocation, 50)
        assert stats.hp == 20
        assert stats.armor == 8
        assert stats.crit_chance == 0

    def test_custom_weights_by_name(self) -> None:
        stats = calculate_stat_values({StatKey.HP: 100}, 50, weights={"hp": 2.0})
        assert stats.hp == 25

    def test_unweighted_stat_warns(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            stats = calculate_stat_values({StatKey.HP: 90, StatKey.CRIT_MULT: 10}, 50)
        assert "crit_mult" in caplog.text
        assert stats.crit_mult == 2.0

    def test_unweighted_zero_share_silent(self, caplog) -> None:
        with caplog.at_level(logging.WARNING):
            calculate_stat_values({StatKey.HP: 100, StatKey.CRIT_MULT: 0}, 50)
        assert caplog.text == ""


class TestBuildArchetype:
    def test_build(self) -> None:
        archetype = build_archetype(_make_template(), 50)
        assert archetype.id == "t"
        assert archetype.role == "tank"
        assert archetype.stats.hp == 35
        assert archetype.meta.created_by == "builder"

    def test_budget_bounds(self) -> None:
        with pytest.raises(ArchetypeValidationError, match="outside template bounds"):
            build_archetype(_make_template(), 10)
        with pytest.raises(ArchetypeValidationError):
            build_archetype(_make_template(), 150)

    def test_invalid_allocation(self) -> None:
        template = _make_template(allocation={StatKey.HP: 50})
        with pytest.raises(ArchetypeValidationError):
            build_archetype(template, 50)

    def test_roster_skips_unsupported(self) -> None:
        templates = [_make_template(id="low"), _make_template(id="high", min_budget=60)]
        roster = build_roster(templates, 50)
        assert [a.id for a in roster] == ["low"]

    def test_default_roster(self) -> None:
        roster = build_roster(DEFAULT_TEMPLATES, 50)
        assert len(roster) == 16
        assert all(a.stats.hp > 0 for a in roster)
