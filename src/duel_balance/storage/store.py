"""Key -> JSON value stores.

Keys are ``/``-separated paths such as ``"runs/run-1a2b"``.  Values are
JSON-compatible dicts.  Backends are chosen by the caller; the balancing
core never inspects its environment to pick one.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

_SUFFIX = ".json"


class KeyValueStore(ABC):
    """Minimal persistence interface used by :class:`BalanceRepository`."""

    @abstractmethod
    def get(self, key: str) -> dict[str, Any] | None:
        """Return the value stored at *key*, or ``None`` if absent."""

    @abstractmethod
    def put(self, key: str, value: dict[str, Any]) -> None:
        """Store *value* at *key*, replacing any existing value."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove *key*.  Returns ``False`` if it was not present."""

    @abstractmethod
    def list_keys(self, prefix: str = "") -> list[str]:
        """All keys starting with *prefix*, sorted."""


class InMemoryStore(KeyValueStore):
    """Dict-backed store.  Values are kept as JSON text so reads never
    alias the caller's objects."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> dict[str, Any] | None:
        raw = self._data.get(key)
        return None if raw is None else json.loads(raw)

    def put(self, key: str, value: dict[str, Any]) -> None:
        self._data[key] = json.dumps(value)

    def delete(self, key: str) -> bool:
        return self._data.pop(key, None) is not None

    def list_keys(self, prefix: str = "") -> list[str]:
        return sorted(k for k in self._data if k.startswith(prefix))


class JsonDirectoryStore(KeyValueStore):
    """One pretty-printed JSON file per key under *root*.

    ``"runs/run-1"`` is stored at ``<root>/runs/run-1.json``.
    Dots in a key are kept, so ``"archetypes/mage.v1"`` maps to
    ``<root>/archetypes/mage.v1.json``.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        parts = [p for p in key.split("/") if p not in ("", ".", "..")]
        if not parts:
            raise ValueError(f"Invalid key: {key!r}")
        return self.root.joinpath(*parts[:-1], parts[-1] + _SUFFIX)

    def get(self, key: str) -> dict[str, Any] | None:
        path = self._path(key)
        if not path.exists():
            return None
        return json.loads(path.read_text())

    def put(self, key: str, value: dict[str, Any]) -> None:
        path = self._path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(value, indent=2))

    def delete(self, key: str) -> bool:
        path = self._path(key)
        if not path.exists():
            return False
        path.unlink()
        return True

    def list_keys(self, prefix: str = "") -> list[str]:
        if not self.root.exists():
            return []
        keys = (
            p.relative_to(self.root).as_posix()[: -len(_SUFFIX)]
            for p in self.root.rglob(f"*{_SUFFIX}")
        )
        return sorted(k for k in keys if k.startswith(prefix))
