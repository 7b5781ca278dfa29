"""In-memory ledger store."""

from lendkeeper.store.ledger import Ledger

__all__ = ["Ledger"]
