"""Construct stores, sinks and ledgers from configuration."""

import logging
from typing import Any

from wallet_ledger.config import LedgerConfig
from wallet_ledger.ledger import WalletLedger
from wallet_ledger.models.enums import SinkType, StoreBackend
from wallet_ledger.store.base import VersionedStore
from wallet_ledger.store.memory import InMemoryVersionedStore

logger = logging.getLogger(__name__)

EVENTS_TOPIC_SUFFIX = "wallet-events"


def create_store(config: LedgerConfig) -> VersionedStore:
    """Create the store backend named by the config."""
    if config.store_backend is StoreBackend.POSTGRES:
        from wallet_ledger.store.postgres import PostgresVersionedStore

        logger.info("Using PostgreSQL store at %s:%d", config.postgres.host, config.postgres.port)
        return PostgresVersionedStore(config.postgres)

    logger.info("Using in-memory store")
    return InMemoryVersionedStore()


def create_sink(config: LedgerConfig) -> Any:
    """Create the event sink named by the config, or None."""
    if config.sink is SinkType.CONSOLE:
        from wallet_ledger.sinks.console import ConsoleSink

        return ConsoleSink(pretty=config.output.pretty_json)
    if config.sink is SinkType.JSON:
        from wallet_ledger.sinks.json_file import JsonFileSink

        return JsonFileSink(config.output.json_output_dir)
    if config.sink is SinkType.KAFKA:
        from wallet_ledger.sinks.kafka import KafkaSink

        return KafkaSink(config.kafka)
    return None


def events_topic(config: LedgerConfig) -> str:
    """Return the topic ledger events are written under."""
    return f"{config.kafka.topic_prefix}.{EVENTS_TOPIC_SUFFIX}"


def create_ledger(config: LedgerConfig, store: VersionedStore | None = None) -> WalletLedger:
    """Create a ledger wired to the configured store and sink.

    Parameters
    ----------
    config : LedgerConfig
        Application configuration.
    store : VersionedStore | None
        Store to use instead of the configured backend.

    Returns
    -------
    WalletLedger
        Ready-to-use ledger.
    """
    return WalletLedger(
        store=store if store is not None else create_store(config),
        config=config.engine,
        sink=create_sink(config),
        topic=events_topic(config),
    )
