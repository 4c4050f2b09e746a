"""Configuration management for wallet-ledger."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from wallet_ledger.exceptions import ConfigurationError
from wallet_ledger.models.enums import SinkType, StoreBackend, TransferProtocol
from wallet_ledger.models.wallet import BALANCE_BITS


@dataclass
class EngineConfig:
    """Account engine limits and the transfer write protocol."""

    amount_bits: int = 32
    transfer_protocol: TransferProtocol = TransferProtocol.BEST_EFFORT

    def __post_init__(self) -> None:
        if not 1 <= self.amount_bits <= BALANCE_BITS:
            raise ConfigurationError(
                f"amount_bits must be between 1 and {BALANCE_BITS}, got {self.amount_bits}"
            )

    @property
    def max_amount(self) -> int:
        """Largest amount a single publish or transfer may carry."""
        return 2**self.amount_bits - 1


@dataclass
class KafkaConfig:
    """Kafka producer configuration for the movement feed."""

    bootstrap_servers: str = "localhost:9092"
    acks: str = "all"
    batch_size: int = 16384
    linger_ms: int = 5
    compression: str = "snappy"
    retries: int = 3
    topic_prefix: str = "dev.ledger"

    def to_dict(self) -> dict[str, Any]:
        """Convert to confluent-kafka config dict."""
        return {
            "bootstrap.servers": self.bootstrap_servers,
            "acks": self.acks,
            "batch.size": self.batch_size,
            "linger.ms": self.linger_ms,
            "compression.type": self.compression,
            "retries": self.retries,
        }


@dataclass
class PostgresConfig:
    """PostgreSQL connection configuration."""

    host: str = "localhost"
    port: int = 5432
    database: str = "ledger"
    user: str = "postgres"
    password: str = "postgres"

    @property
    def connection_string(self) -> str:
        """Get connection string."""
        return f"postgresql://{self.user}:{self.password}@{self.host}:{self.port}/{self.database}"


@dataclass
class OutputConfig:
    """Output configuration for file and console sinks."""

    json_output_dir: Path = field(default_factory=lambda: Path("output"))
    pretty_json: bool = False


@dataclass
class LedgerConfig:
    """Main configuration for wallet-ledger."""

    engine: EngineConfig = field(default_factory=EngineConfig)
    kafka: KafkaConfig = field(default_factory=KafkaConfig)
    postgres: PostgresConfig = field(default_factory=PostgresConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    store_backend: StoreBackend = StoreBackend.MEMORY
    sink: SinkType = SinkType.NONE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "LedgerConfig":
        """Create config from environment variables."""
        import os

        engine = EngineConfig(
            amount_bits=_parse_int("LEDGER_AMOUNT_BITS", os.getenv("LEDGER_AMOUNT_BITS", "32")),
            transfer_protocol=_parse_enum(
                TransferProtocol,
                "LEDGER_TRANSFER_PROTOCOL",
                os.getenv("LEDGER_TRANSFER_PROTOCOL", TransferProtocol.BEST_EFFORT.value),
            ),
        )

        kafka = KafkaConfig(
            bootstrap_servers=os.getenv("KAFKA_BOOTSTRAP_SERVERS", "localhost:9092"),
            acks=os.getenv("KAFKA_ACKS", "all"),
            topic_prefix=os.getenv("KAFKA_TOPIC_PREFIX", "dev.ledger"),
        )

        postgres = PostgresConfig(
            host=os.getenv("POSTGRES_HOST", "localhost"),
            port=_parse_int("POSTGRES_PORT", os.getenv("POSTGRES_PORT", "5432")),
            database=os.getenv("POSTGRES_DB", "ledger"),
            user=os.getenv("POSTGRES_USER", "postgres"),
            password=os.getenv("POSTGRES_PASSWORD", "postgres"),
        )

        output = OutputConfig(
            json_output_dir=Path(os.getenv("OUTPUT_DIR", "output")),
            pretty_json=os.getenv("PRETTY_JSON", "false").lower() == "true",
        )

        return cls(
            engine=engine,
            kafka=kafka,
            postgres=postgres,
            output=output,
            store_backend=_parse_enum(
                StoreBackend, "LEDGER_STORE", os.getenv("LEDGER_STORE", StoreBackend.MEMORY.value)
            ),
            sink=_parse_enum(SinkType, "LEDGER_SINK", os.getenv("LEDGER_SINK", SinkType.NONE.value)),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


def _parse_enum(enum_cls: Any, name: str, raw: str) -> Any:
    try:
        return enum_cls(raw.lower())
    except ValueError as exc:
        choices = ", ".join(member.value for member in enum_cls)
        raise ConfigurationError(f"{name} must be one of: {choices}; got {raw!r}") from exc
