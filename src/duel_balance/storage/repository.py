"""Typed save/load of archetypes, matrix runs, single cells and presets.

Storage failures never propagate: they are logged and reported as
``None`` (loads) or ``False`` (saves) so callers can treat a broken store
like an empty one.
"""

from __future__ import annotations

import json
import logging
from typing import TypeVar

from pydantic import BaseModel, ValidationError

from duel_balance.balance.models import BalancePreset, MatchupResult, MatrixRunResult
from duel_balance.core.archetype import Archetype
from duel_balance.storage.store import KeyValueStore

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

ARCHETYPES = "archetypes"
RUNS = "runs"
PRESETS = "presets"
CELLS = "cells"


class BalanceRepository:
    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    # -- generic -------------------------------------------------------------

    def _save(self, kind: str, record_id: str, record: BaseModel) -> bool:
        key = f"{kind}/{record_id}"
        try:
            self.store.put(key, record.model_dump(mode="json"))
        except (OSError, TypeError, ValueError) as exc:
            logger.warning("Failed to save %s: %s", key, exc)
            return False
        return True

    def _load(self, kind: str, record_id: str, model: type[M]) -> M | None:
        key = f"{kind}/{record_id}"
        try:
            data = self.store.get(key)
        except (OSError, json.JSONDecodeError, ValueError) as exc:
            logger.warning("Failed to load %s: %s", key, exc)
            return None
        if data is None:
            return None
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.warning("Stored %s is not a valid %s: %s", key, model.__name__, exc)
            return None

    def _list(self, kind: str) -> list[str]:
        prefix = f"{kind}/"
        try:
            keys = self.store.list_keys(prefix)
        except OSError as exc:
            logger.warning("Failed to list %s: %s", kind, exc)
            return []
        return [k[len(prefix):] for k in keys]

    def _delete(self, kind: str, record_id: str) -> bool:
        try:
            return self.store.delete(f"{kind}/{record_id}")
        except OSError as exc:
            logger.warning("Failed to delete %s/%s: %s", kind, record_id, exc)
            return False

    # -- archetypes ----------------------------------------------------------

    def save_archetype(self, archetype: Archetype) -> bool:
        return self._save(ARCHETYPES, archetype.id, archetype)

    def load_archetype(self, archetype_id: str) -> Archetype | None:
        return self._load(ARCHETYPES, archetype_id, Archetype)

    def list_archetypes(self) -> list[str]:
        return self._list(ARCHETYPES)

    def load_all_archetypes(self) -> list[Archetype]:
        loaded = (self.load_archetype(aid) for aid in self.list_archetypes())
        return [a for a in loaded if a is not None]

    def delete_archetype(self, archetype_id: str) -> bool:
        return self._delete(ARCHETYPES, archetype_id)

    # -- matrix runs ---------------------------------------------------------

    def save_run(self, run: MatrixRunResult) -> bool:
        return self._save(RUNS, run.run_meta.run_id, run)

    def load_run(self, run_id: str) -> MatrixRunResult | None:
        return self._load(RUNS, run_id, MatrixRunResult)

    def list_runs(self) -> list[str]:
        return self._list(RUNS)

    # -- presets -------------------------------------------------------------

    def save_preset(self, preset: BalancePreset) -> bool:
        return self._save(PRESETS, preset.id, preset)

    def load_preset(self, preset_id: str) -> BalancePreset | None:
        return self._load(PRESETS, preset_id, BalancePreset)

    def list_presets(self) -> list[str]:
        return self._list(PRESETS)

    def load_all_presets(self) -> list[BalancePreset]:
        loaded = (self.load_preset(pid) for pid in self.list_presets())
        return [p for p in loaded if p is not None]

    # -- single cells --------------------------------------------------------

    def save_matchup(self, run_id: str, result: MatchupResult) -> bool:
        """Store one cell of a run on its own, keyed by run and pairing."""
        return self._save(CELLS, f"{run_id}/{result.row}_vs_{result.col}", result)

    def load_matchup(self, run_id: str, row: str, col: str) -> MatchupResult | None:
        return self._load(CELLS, f"{run_id}/{row}_vs_{col}", MatchupResult)
