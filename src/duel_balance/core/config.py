"""Balancer configuration.

Every formula, resolver, sampler and orchestrator entry point receives a
``BalancerConfig`` explicitly.  ``DEFAULT_CONFIG`` is only used when a
caller omits the argument.
"""

from __future__ import annotations

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LifestealMode(str, Enum):
    ON_HIT = "on_hit"
    """Heal from the full damage of the hit."""
    ON_DAMAGE = "on_damage"
    """Heal only from HP the target actually lost."""


class TurnLimitPolicy(BaseModel):
    """Maps an estimated time-to-kill to a hard turn limit.

    ``limit(ttk) = ceil(min(ttk * multiplier, max_turns))``, never below 1.
    An infinite estimate (neither side can deal damage) yields ``max_turns``.
    """

    model_config = ConfigDict(frozen=True)

    multiplier: float = 10.0
    max_turns: int = 50

    def limit(self, expected_ttk: float) -> int:
        if math.isnan(expected_ttk) or math.isinf(expected_ttk):
            return self.max_turns
        bounded = min(expected_ttk * self.multiplier, float(self.max_turns))
        return max(1, math.ceil(bounded))


class BalancerConfig(BaseModel):
    """Named constants shared by the whole balancing pipeline."""

    model_config = ConfigDict(frozen=True)

    armor_k: float = 10.0
    """Armor scaling constant in ``armor / (armor + k * damage)``."""
    n_sim_fast: int = Field(default=1000, ge=1)
    n_sim_full: int = Field(default=10000, ge=1)
    swi_delta: float = Field(default=0.01, gt=0)
    """Fractional stat perturbation used by sensitivity analysis."""
    max_iteration_adjustment: float = Field(default=0.05, ge=0)
    """Auto-balance cap per adjustment when no explicit tuning is given."""
    lifesteal_mode: LifestealMode = LifestealMode.ON_HIT
    turn_limit_policy: TurnLimitPolicy = Field(default_factory=TurnLimitPolicy)
    early_impact_turns: int = Field(default=3, ge=0)

    def n_sim(self, fast: bool) -> int:
        return self.n_sim_fast if fast else self.n_sim_full


DEFAULT_CONFIG = BalancerConfig()
