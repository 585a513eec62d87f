"""Built-in archetype templates, budget tiers, stat weights and TTK targets."""

from __future__ import annotations

from duel_balance.archetypes.models import (
    ArchetypeTemplate,
    BudgetTier,
    ExpectedWinner,
    TTKTarget,
)
from duel_balance.core.stats import StatKey

# Budget points per unit of each stat.  Stats missing here cannot be bought.
NORMALIZED_WEIGHTS: dict[StatKey, float] = {
    StatKey.HP: 1.0,
    StatKey.DAMAGE: 3.5,
    StatKey.TXC: 2.0,
    StatKey.EVASION: 2.0,
    StatKey.ARMOR: 1.8,
    StatKey.RESISTANCE: 100.0,
    StatKey.CRIT_CHANCE: 5.0,
    StatKey.LIFESTEAL: 40.0,
    StatKey.REGEN: 15.0,
    StatKey.WARD: 1.5,
    StatKey.BLOCK: 80.0,
}

BUDGET_TIERS: list[BudgetTier] = [
    BudgetTier(name="Basic", points=10, description="Minimal stats for testing"),
    BudgetTier(name="Common", points=20, description="Standard low-level character"),
    BudgetTier(name="Balanced", points=50, description="Mid-level balanced character"),
    BudgetTier(name="Enhanced", points=75, description="High-level character"),
    BudgetTier(name="Legendary", points=100, description="Maximum power character"),
]

# Every template lists these explicitly so a 0% share zeroes the stat.
_ALLOCATED_STATS = (
    StatKey.HP,
    StatKey.ARMOR,
    StatKey.RESISTANCE,
    StatKey.DAMAGE,
    StatKey.TXC,
    StatKey.EVASION,
    StatKey.CRIT_CHANCE,
    StatKey.CRIT_MULT,
    StatKey.LIFESTEAL,
    StatKey.REGEN,
    StatKey.WARD,
    StatKey.BLOCK,
    StatKey.ARMOR_PEN,
    StatKey.PEN_PERCENT,
)


def _template(
    id: str,
    name: str,
    category: str,
    description: str,
    tags: list[str],
    **shares: float,
) -> ArchetypeTemplate:
    allocation = {stat: 0.0 for stat in _ALLOCATED_STATS}
    for stat, pct in shares.items():
        allocation[StatKey(stat)] = float(pct)
    return ArchetypeTemplate(
        id=id,
        name=name,
        category=category,
        description=description,
        allocation=allocation,
        tags=tags,
    )


DEFAULT_TEMPLATES: list[ArchetypeTemplate] = [
    # -- tanks ---------------------------------------------------------------
    _template(
        "tank_juggernaut", "Juggernaut", "tank",
        "Pure tank: maximizes HP and armor. Low damage but nearly unkillable.",
        ["defensive", "physical", "sustain"],
        hp=40, armor=30, resistance=10, damage=10, txc=5, lifesteal=3, regen=2,
    ),
    _template(
        "tank_warden", "Warden", "tank",
        "Balanced tank with high HP and modest armor.",
        ["defensive", "balanced"],
        hp=50, armor=20, resistance=5, damage=15, txc=5, regen=5,
    ),
    _template(
        "tank_fortress", "Fortress", "tank",
        "Extreme defense with block chance. Relies on RNG mitigation.",
        ["defensive", "rng", "block"],
        hp=30, armor=25, resistance=10, damage=10, txc=5, block=20,
    ),
    _template(
        "tank_regenerator", "Regenerator", "tank",
        "Sustain tank with high regen and lifesteal. Outlasts enemies.",
        ["defensive", "sustain", "heal"],
        hp=35, armor=15, resistance=5, damage=15, txc=5, lifesteal=10, regen=15,
    ),
    _template(
        "tank_shieldbearer", "Shieldbearer", "tank",
        "Ward-focused tank. Relies on temporary shields.",
        ["defensive", "shield", "ward"],
        hp=30, armor=15, resistance=5, damage=10, txc=5, regen=5, ward=30,
    ),
    # -- dps -----------------------------------------------------------------
    _template(
        "dps_berserker", "Berserker", "dps",
        "Pure damage. Glass cannon.",
        ["offensive", "glass-cannon"],
        hp=20, damage=50, txc=20, crit_chance=5, crit_mult=5,
    ),
    _template(
        "dps_marksman", "Marksman", "dps",
        "High accuracy DPS. Focuses on consistent hits.",
        ["offensive", "accuracy"],
        hp=25, damage=40, txc=30, crit_chance=3, crit_mult=2,
    ),
    _template(
        "dps_duelist", "Duelist", "dps",
        "Moderate damage with some survivability.",
        ["offensive", "balanced"],
        hp=30, armor=10, damage=35, txc=15, evasion=5, crit_chance=3, crit_mult=2,
    ),
    _template(
        "dps_armorbreaker", "Armorbreaker", "dps",
        "Anti-tank DPS. High armor penetration.",
        ["offensive", "anti-tank", "penetration"],
        hp=25, damage=40, txc=15, armor_pen=15, pen_percent=5,
    ),
    # -- assassins -----------------------------------------------------------
    _template(
        "assassin_shadow", "Shadow", "assassin",
        "High crit DPS with evasion. Burst damage.",
        ["offensive", "crit", "evasion"],
        hp=20, damage=30, txc=15, evasion=10, crit_chance=15, crit_mult=10,
    ),
    _template(
        "assassin_phantom", "Phantom", "assassin",
        "Extreme evasion with moderate crit. Hard to hit.",
        ["offensive", "evasion", "dodge"],
        hp=25, damage=25, txc=10, evasion=20, crit_chance=10, crit_mult=10,
    ),
    # -- bruisers ------------------------------------------------------------
    _template(
        "bruiser_warrior", "Warrior", "bruiser",
        "Balanced fighter. Good offense and defense.",
        ["balanced", "versatile"],
        hp=30, armor=15, resistance=5, damage=30, txc=10, crit_chance=5, crit_mult=5,
    ),
    _template(
        "bruiser_brawler", "Brawler", "bruiser",
        "Sustain fighter with lifesteal. Heals through damage.",
        ["balanced", "sustain", "lifesteal"],
        hp=30, armor=10, damage=30, txc=10, lifesteal=15, regen=5,
    ),
    # -- support -------------------------------------------------------------
    _template(
        "support_healer", "Healer", "support",
        "Maximum regen and HP. Passive healing focus.",
        ["defensive", "heal", "sustain"],
        hp=40, armor=10, resistance=5, damage=10, txc=5, lifesteal=5, regen=25,
    ),
    _template(
        "support_bulwark", "Bulwark", "support",
        "Shield-focused support. Protects with ward.",
        ["defensive", "shield", "ward"],
        hp=35, armor=10, resistance=10, damage=10, txc=5, regen=5, ward=25,
    ),
    # -- hybrid --------------------------------------------------------------
    _template(
        "hybrid_allrounder", "Allrounder", "hybrid",
        "Jack of all trades. Even distribution across stats.",
        ["balanced", "versatile", "hybrid"],
        hp=20, armor=10, resistance=5, damage=20, txc=10, evasion=5,
        crit_chance=5, crit_mult=5, lifesteal=5, regen=5, ward=5, block=5,
    ),
]

TEMPLATES_BY_ID: dict[str, ArchetypeTemplate] = {t.id: t for t in DEFAULT_TEMPLATES}

DEFAULT_TTK_TARGETS: list[TTKTarget] = [
    TTKTarget(
        archetype_a="tank_juggernaut", archetype_b="dps_berserker", budget=50,
        min_rounds=6, target_rounds=8, max_rounds=10, tolerance=1,
        expected_winner=ExpectedWinner.A,
    ),
    TTKTarget(
        archetype_a="dps_berserker", archetype_b="tank_juggernaut", budget=50,
        min_rounds=6, target_rounds=8, max_rounds=10, tolerance=1,
        expected_winner=ExpectedWinner.B,
    ),
    TTKTarget(
        archetype_a="assassin_shadow", archetype_b="dps_berserker", budget=50,
        min_rounds=3, target_rounds=5, max_rounds=7, tolerance=1,
        expected_winner=ExpectedWinner.EITHER,
    ),
    TTKTarget(
        archetype_a="bruiser_warrior", archetype_b="bruiser_warrior", budget=50,
        min_rounds=5, target_rounds=7, max_rounds=9, tolerance=1,
        expected_winner=ExpectedWinner.EITHER,
    ),
]


def get_template(template_id: str) -> ArchetypeTemplate:
    """Look up a built-in template.  Raises ``KeyError`` if unknown."""
    return TEMPLATES_BY_ID[template_id]
