"""Stat profiles for duel balancing.

A ``StatProfile`` is the closed set of combat attributes owned by an
archetype.  Every numeric attribute has a matching ``StatKey`` so callers
that address stats by name (sensitivity analysis, stat adjustments) go
through a typed key instead of free-form strings.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class StatKey(str, Enum):
    """Identifiers for every numeric field of :class:`StatProfile`."""

    HP = "hp"
    DAMAGE = "damage"
    TXC = "txc"
    EVASION = "evasion"
    # Critical / fumble
    CRIT_CHANCE = "crit_chance"
    CRIT_MULT = "crit_mult"
    CRIT_TXC_BONUS = "crit_txc_bonus"
    FAIL_CHANCE = "fail_chance"
    FAIL_MULT = "fail_mult"
    FAIL_TXC_MALUS = "fail_txc_malus"
    # Mitigation
    ARMOR = "armor"
    RESISTANCE = "resistance"
    ARMOR_PEN = "armor_pen"
    PEN_PERCENT = "pen_percent"
    # Sustain
    LIFESTEAL = "lifesteal"
    REGEN = "regen"
    WARD = "ward"
    BLOCK = "block"
    ENERGY_SHIELD = "energy_shield"
    THORNS = "thorns"
    # Timing / speed
    COOLDOWN_REDUCTION = "cooldown_reduction"
    CAST_SPEED = "cast_speed"
    MOVEMENT_SPEED = "movement_speed"


# Stats perturbed by sensitivity analysis.  Derived values, config flags and
# stats the deterministic resolver ignores are excluded.
ANALYZABLE_STATS: tuple[StatKey, ...] = (
    StatKey.HP,
    StatKey.DAMAGE,
    StatKey.TXC,
    StatKey.EVASION,
    StatKey.CRIT_CHANCE,
    StatKey.CRIT_MULT,
    StatKey.CRIT_TXC_BONUS,
    StatKey.FAIL_CHANCE,
    StatKey.FAIL_MULT,
    StatKey.FAIL_TXC_MALUS,
    StatKey.ARMOR,
    StatKey.RESISTANCE,
    StatKey.ARMOR_PEN,
    StatKey.PEN_PERCENT,
    StatKey.LIFESTEAL,
    StatKey.REGEN,
)

# Stats expressed as percentages (0-100) rather than flat values.
PERCENTAGE_STATS: frozenset[StatKey] = frozenset({
    StatKey.RESISTANCE,
    StatKey.CRIT_CHANCE,
    StatKey.FAIL_CHANCE,
    StatKey.LIFESTEAL,
    StatKey.BLOCK,
    StatKey.PEN_PERCENT,
    StatKey.COOLDOWN_REDUCTION,
    StatKey.CAST_SPEED,
    StatKey.MOVEMENT_SPEED,
})

MULTIPLIER_STATS: frozenset[StatKey] = frozenset({
    StatKey.CRIT_MULT,
    StatKey.FAIL_MULT,
})


class StatProfile(BaseModel):
    """Immutable set of combat attributes.

    Chances (``crit_chance``, ``fail_chance``, ``block``, ``lifesteal``,
    ``resistance``, ``pen_percent``) are expressed on a 0-100 scale.
    """

    model_config = ConfigDict(frozen=True)

    hp: float = 150.0
    damage: float = 25.0
    txc: float = 25.0
    """Flat accuracy, contested against the defender's evasion."""
    evasion: float = 0.0

    crit_chance: float = 5.0
    crit_mult: float = 2.0
    crit_txc_bonus: float = 20.0
    fail_chance: float = 5.0
    fail_mult: float = 0.0
    fail_txc_malus: float = 20.0

    armor: float = 0.0
    resistance: float = 0.0
    armor_pen: float = 0.0
    pen_percent: float = 0.0

    lifesteal: float = 0.0
    regen: float = 0.0
    """HP restored at the end of every turn."""
    ward: float = 0.0
    block: float = 0.0
    energy_shield: float = 0.0
    thorns: float = 0.0

    cooldown_reduction: float = 0.0
    cast_speed: float = 0.0
    movement_speed: float = 100.0

    config_flat_first: bool = True
    """Apply armor before resistance when mitigating a hit."""
    config_apply_before_crit: bool = False
    """Mitigate base damage before the critical multiplier is applied."""

    # -- keyed access --------------------------------------------------------

    def get(self, key: StatKey) -> float:
        """Return the value of the stat identified by *key*."""
        return getattr(self, StatKey(key).value)

    def with_stat(self, key: StatKey, value: float) -> StatProfile:
        """Return a copy of this profile with *key* set to *value*."""
        return self.model_copy(update={StatKey(key).value: float(value)})

    def with_stats(self, updates: dict[StatKey, float]) -> StatProfile:
        """Return a copy with several stats replaced at once."""
        return self.model_copy(
            update={StatKey(k).value: float(v) for k, v in updates.items()}
        )

    def scaled(self, key: StatKey, factor: float) -> StatProfile:
        """Return a copy with *key* multiplied by *factor*."""
        return self.with_stat(key, self.get(key) * factor)


DEFAULT_STATS = StatProfile()
