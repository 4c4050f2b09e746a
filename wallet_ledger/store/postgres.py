"""PostgreSQL-backed versioned store.

Every write appends a row to ``wallet_state_history`` in its own committed
transaction; the current value of a key is its highest-sequence row. The
database assigns the transaction id at insert time.
"""

import logging
from typing import Any, Iterator

import psycopg

from wallet_ledger.config import PostgresConfig
from wallet_ledger.exceptions import StoreError
from wallet_ledger.store.base import KeyModification, VersionedStore

logger = logging.getLogger(__name__)

TABLE_NAME = "wallet_state_history"

DDL = f"""
CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
    seq BIGSERIAL PRIMARY KEY,
    key TEXT NOT NULL,
    tx_id TEXT NOT NULL DEFAULT md5(random()::text || clock_timestamp()::text),
    value BYTEA,
    is_delete BOOLEAN NOT NULL DEFAULT FALSE,
    committed_at TIMESTAMPTZ NOT NULL DEFAULT now()
);
CREATE INDEX IF NOT EXISTS idx_{TABLE_NAME}_key_seq ON {TABLE_NAME} (key, seq);
"""

SELECT_LATEST = f"""
SELECT value, is_delete FROM {TABLE_NAME}
WHERE key = %s ORDER BY seq DESC LIMIT 1
"""

INSERT_VERSION = f"""
INSERT INTO {TABLE_NAME} (key, value, is_delete) VALUES (%s, %s, %s)
RETURNING tx_id
"""

SELECT_HISTORY = f"""
SELECT tx_id, value, is_delete, committed_at FROM {TABLE_NAME}
WHERE key = %s ORDER BY seq
"""


class PostgresVersionedStore(VersionedStore):
    """Versioned store on a single PostgreSQL table."""

    def __init__(self, config: PostgresConfig | str, create_schema: bool = True) -> None:
        """Initialize the store.

        Parameters
        ----------
        config : PostgresConfig | str
            Connection configuration or a libpq connection string.
        create_schema : bool
            Create the history table and index if missing.
        """
        if isinstance(config, PostgresConfig):
            self.conninfo = config.connection_string
        else:
            self.conninfo = config

        try:
            self.conn: Any = psycopg.connect(self.conninfo)
        except psycopg.Error as exc:
            raise StoreError(f"Could not connect to PostgreSQL: {exc}") from exc

        if create_schema:
            self.create_schema()

    def create_schema(self) -> None:
        """Create the history table if it does not exist."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(DDL)
            self.conn.commit()
        except psycopg.Error as exc:
            self.conn.rollback()
            raise StoreError(f"Failed to create {TABLE_NAME}: {exc}") from exc
        logger.debug("Schema ready: %s", TABLE_NAME)

    def get_state(self, key: str) -> bytes | None:
        """Return the latest value for ``key``."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(SELECT_LATEST, (key,))
                row = cur.fetchone()
            self.conn.commit()
        except psycopg.Error as exc:
            self.conn.rollback()
            raise StoreError(f"Failed to read {key}: {exc}") from exc

        if row is None:
            return None
        value, is_delete = row
        return None if is_delete or value is None else bytes(value)

    def put_state(self, key: str, value: bytes) -> str:
        """Insert and commit a new version of ``key``."""
        return self._insert(key, value, is_delete=False)

    def delete_state(self, key: str) -> str:
        """Insert and commit a tombstone for ``key``."""
        return self._insert(key, None, is_delete=True)

    def get_history(self, key: str) -> Iterator[KeyModification]:
        """Fetch every version of ``key``, oldest first."""
        try:
            with self.conn.cursor() as cur:
                cur.execute(SELECT_HISTORY, (key,))
                rows = cur.fetchall()
            self.conn.commit()
        except psycopg.Error as exc:
            self.conn.rollback()
            raise StoreError(f"Failed to open history for {key}: {exc}") from exc

        return (
            KeyModification(
                tx_id=tx_id,
                value=None if value is None else bytes(value),
                is_delete=is_delete,
                timestamp=committed_at,
            )
            for tx_id, value, is_delete, committed_at in rows
        )

    def close(self) -> None:
        """Close the connection."""
        self.conn.close()

    def _insert(self, key: str, value: bytes | None, is_delete: bool) -> str:
        try:
            with self.conn.cursor() as cur:
                cur.execute(INSERT_VERSION, (key, value, is_delete))
                (tx_id,) = cur.fetchone()
            self.conn.commit()
        except psycopg.Error as exc:
            self.conn.rollback()
            raise StoreError(f"Write rejected for key {key}: {exc}") from exc
        return tx_id
