"""Output sinks for the ledger movement feed."""

from wallet_ledger.sinks.console import ConsoleSink
from wallet_ledger.sinks.json_file import JsonFileSink
from wallet_ledger.sinks.kafka import KafkaSink

__all__ = ["ConsoleSink", "JsonFileSink", "KafkaSink"]
