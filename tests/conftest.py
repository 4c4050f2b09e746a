"""Pytest configuration and fixtures."""

import itertools
import logging
from typing import Iterator

import pytest

from wallet_ledger.ledger import WalletLedger
from wallet_ledger.store.memory import InMemoryVersionedStore


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    """Undo handler changes made by setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def seed() -> int:
    """Fixed seed for reproducible tests."""
    return 42


@pytest.fixture
def store() -> InMemoryVersionedStore:
    """Fresh in-memory store with sequential, predictable tx ids."""
    counter = itertools.count(1)
    return InMemoryVersionedStore(tx_id_factory=lambda: f"tx-{next(counter):04d}")


@pytest.fixture
def ledger(store: InMemoryVersionedStore) -> WalletLedger:
    """Ledger over the in-memory store, no event sink."""
    return WalletLedger(store)


@pytest.fixture
def funded_ledger(ledger: WalletLedger) -> WalletLedger:
    """Ledger with wallet "1" holding 10000 and an empty wallet "2"."""
    ledger.init_wallet("1")
    ledger.publish("1", "admin", 10000, "20181212")
    ledger.init_wallet("2")
    return ledger
