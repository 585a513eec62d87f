"""Built-in balance presets and edge-of-application config resolution.

Core functions take a ``BalancerConfig`` argument; scripts resolve the
preset once through :func:`resolve_preset` and pass its config down.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from duel_balance.archetypes.catalog import NORMALIZED_WEIGHTS
from duel_balance.balance.models import BalancePreset
from duel_balance.core.config import DEFAULT_CONFIG, BalancerConfig, TurnLimitPolicy

if TYPE_CHECKING:
    from duel_balance.storage.repository import BalanceRepository

logger = logging.getLogger(__name__)

_STANDARD_WEIGHTS = {stat.value: w for stat, w in NORMALIZED_WEIGHTS.items()}

DEFAULT_PRESETS: dict[str, BalancePreset] = {
    "standard": BalancePreset(
        id="standard",
        name="Standard",
        description="Baseline stat weights and default simulation settings",
        config=DEFAULT_CONFIG,
        weights=_STANDARD_WEIGHTS,
    ),
    "long_fights": BalancePreset(
        id="long_fights",
        name="Long Fights",
        description="Cheaper armor and HP, pricier damage; doubled turn cap",
        config=BalancerConfig(turn_limit_policy=TurnLimitPolicy(multiplier=10.0, max_turns=100)),
        weights={**_STANDARD_WEIGHTS, "armor": 1.2, "damage": 4.5, "hp": 0.8},
    ),
}


def resolve_preset(
    repository: BalanceRepository | None,
    preset_id: str | None,
) -> BalancePreset:
    """Find *preset_id* in the repository, then the built-ins.

    Falls back to ``standard`` (with a warning) when the id is unknown.
    """
    preset_id = preset_id or "standard"

    if repository is not None:
        stored = repository.load_preset(preset_id)
        if stored is not None:
            return stored

    preset = DEFAULT_PRESETS.get(preset_id)
    if preset is None:
        logger.warning("Unknown preset %r, using 'standard'", preset_id)
        preset = DEFAULT_PRESETS["standard"]
    return preset


def resolve_config(
    repository: BalanceRepository | None,
    preset_id: str | None,
) -> BalancerConfig:
    return resolve_preset(repository, preset_id).config
