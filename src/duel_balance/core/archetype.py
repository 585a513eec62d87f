"""Archetype value objects."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from duel_balance.core.stats import StatKey, StatProfile


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ArchetypeMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    created_by: str = "system"
    created_at: str = Field(default_factory=_utc_now)
    """ISO 8601 timestamp."""


class Archetype(BaseModel):
    """A named character archetype owning exactly one stat profile.

    Archetypes are immutable: :meth:`with_stats` returns a new archetype
    rather than modifying a shared instance.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    role: str = ""
    """Role label, e.g. ``"Tank"`` or ``"DPS"``."""
    description: str = ""
    stats: StatProfile = Field(default_factory=StatProfile)
    meta: ArchetypeMeta = Field(default_factory=ArchetypeMeta)

    def with_stats(self, stats: StatProfile) -> Archetype:
        return self.model_copy(update={"stats": stats})

    def with_stat(self, key: StatKey, value: float) -> Archetype:
        return self.with_stats(self.stats.with_stat(key, value))
