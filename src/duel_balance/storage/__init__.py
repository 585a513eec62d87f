"""Persistence boundary: pluggable key-value stores and a typed repository."""

from duel_balance.storage.repository import BalanceRepository
from duel_balance.storage.store import InMemoryStore, JsonDirectoryStore, KeyValueStore

__all__ = [
    "BalanceRepository",
    "InMemoryStore",
    "JsonDirectoryStore",
    "KeyValueStore",
]
