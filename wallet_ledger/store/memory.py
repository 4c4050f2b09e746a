"""In-memory versioned store."""

import threading
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Iterator

from wallet_ledger.exceptions import StoreError
from wallet_ledger.store.base import KeyModification, VersionedStore


def _new_tx_id() -> str:
    return uuid.uuid4().hex


@dataclass
class InMemoryVersionedStore(VersionedStore):
    """Keeps every version of every key in process memory.

    ``failing_keys`` makes writes to the listed keys raise ``StoreError``,
    which lets callers exercise partial-failure paths.
    """

    tx_id_factory: Callable[[], str] = _new_tx_id
    failing_keys: set[str] = field(default_factory=set)

    _versions: dict[str, list[KeyModification]] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def get_state(self, key: str) -> bytes | None:
        """Return the latest value for ``key``."""
        versions = self._versions.get(key)
        if not versions:
            return None
        latest = versions[-1]
        return None if latest.is_delete else latest.value

    def put_state(self, key: str, value: bytes) -> str:
        """Append a new version of ``key``."""
        if key in self.failing_keys:
            raise StoreError(f"Write rejected for key {key}")
        return self._append(key, value, is_delete=False)

    def delete_state(self, key: str) -> str:
        """Append a tombstone for ``key``."""
        if key in self.failing_keys:
            raise StoreError(f"Delete rejected for key {key}")
        return self._append(key, None, is_delete=True)

    def get_history(self, key: str) -> Iterator[KeyModification]:
        """Iterate over a snapshot of the versions of ``key``."""
        with self._lock:
            versions = list(self._versions.get(key, []))
        return iter(versions)

    def keys(self) -> list[str]:
        """Return keys whose latest version is not a tombstone."""
        return [key for key in self._versions if self.get_state(key) is not None]

    def summary(self) -> dict[str, int]:
        """Return key and version counts."""
        return {
            "keys": len(self._versions),
            "versions": sum(len(v) for v in self._versions.values()),
        }

    def _append(self, key: str, value: bytes | None, is_delete: bool) -> str:
        tx_id = self.tx_id_factory()
        modification = KeyModification(
            tx_id=tx_id,
            value=value,
            is_delete=is_delete,
            timestamp=datetime.now(timezone.utc),
        )
        with self._lock:
            self._versions.setdefault(key, []).append(modification)
        return tx_id
