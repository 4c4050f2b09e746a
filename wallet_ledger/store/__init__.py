"""Versioned key-value stores backing the ledger."""

from wallet_ledger.store.base import KeyModification, VersionedStore
from wallet_ledger.store.memory import InMemoryVersionedStore

__all__ = ["InMemoryVersionedStore", "KeyModification", "VersionedStore"]
