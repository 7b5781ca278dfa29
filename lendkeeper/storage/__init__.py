"""Persistence for the loan collection."""

from lendkeeper.storage.archive import LedgerArchive
from lendkeeper.storage.backends import InMemoryStorage, JsonFileStorage, KeyValueStorage

__all__ = ["InMemoryStorage", "JsonFileStorage", "KeyValueStorage", "LedgerArchive"]
