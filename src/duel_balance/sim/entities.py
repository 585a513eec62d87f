"""Combatant model for the headless duel engine.

A ``Combatant`` is the mutable per-duel state built from an immutable
``StatProfile``: current HP and the remaining one-time shield.
"""

from __future__ import annotations

from pydantic import BaseModel

from duel_balance.core.stats import StatProfile


class Combatant(BaseModel):
    """One side of a duel."""

    name: str
    stats: StatProfile
    max_hp: float
    current_hp: float
    shield: float = 0.0
    """Remaining ward + energy shield.  Absorbs damage before HP."""

    @classmethod
    def from_profile(cls, name: str, stats: StatProfile) -> Combatant:
        return cls(
            name=name,
            stats=stats,
            max_hp=stats.hp,
            current_hp=stats.hp,
            shield=max(0.0, stats.ward) + max(0.0, stats.energy_shield),
        )

    # -- HP queries ----------------------------------------------------------

    @property
    def is_dead(self) -> bool:
        return self.current_hp <= 0

    # -- damage / heal -------------------------------------------------------

    def take_damage(self, amount: float) -> float:
        """Apply *amount* damage: absorbed by shield first, remainder to HP.

        Returns the actual HP lost.  HP never drops below 0.
        """
        if amount <= 0:
            return 0.0

        absorbed = min(self.shield, amount)
        self.shield -= absorbed
        remaining = amount - absorbed

        hp_lost = min(self.current_hp, remaining)
        self.current_hp -= hp_lost
        return hp_lost

    def heal(self, amount: float) -> None:
        """Heal *amount* HP, capped at ``max_hp``.  The dead stay dead."""
        if amount <= 0 or self.is_dead:
            return
        self.current_hp = min(self.max_hp, self.current_hp + amount)
