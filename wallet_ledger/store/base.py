"""Versioned key-value store interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator


@dataclass(frozen=True)
class KeyModification:
    """One committed version of a key, as returned by history retrieval."""

    tx_id: str
    value: bytes | None
    is_delete: bool = False
    timestamp: datetime | None = None


class VersionedStore(ABC):
    """Authoritative store keyed by wallet identifier.

    Writes to one key are serialized by the store; there is no atomicity
    across keys. Every write is retained as a version for ``get_history``.
    """

    @abstractmethod
    def get_state(self, key: str) -> bytes | None:
        """Return the current value for ``key``, or None if absent or deleted."""

    @abstractmethod
    def put_state(self, key: str, value: bytes) -> str:
        """Commit ``value`` under ``key`` and return the assigned transaction id.

        Raises
        ------
        StoreError
            If the write is rejected.
        """

    @abstractmethod
    def get_history(self, key: str) -> Iterator[KeyModification]:
        """Return the versions of ``key``, oldest first.

        Implementations open the history before returning, so a failure to
        open surfaces here rather than on first iteration.
        """

    def close(self) -> None:
        """Release resources held by the store."""
