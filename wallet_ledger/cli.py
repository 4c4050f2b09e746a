"""Command-line entry point.

Run a single invocation::

    wallet-ledger --store postgres get_account 1

or a batch of JSON lines, one invocation per line::

    {"Args": ["init_wallet", "1"]}
    {"Args": ["publish", "1", "admin", "10000", "20181212"]}

    wallet-ledger --batch invocations.jsonl

Responses are printed to stdout, one per line; logs go to stderr.
"""

import argparse
import json
import logging
import sys
from typing import Iterator, TextIO

from wallet_ledger.config import LedgerConfig
from wallet_ledger.exceptions import ConfigurationError, LedgerError
from wallet_ledger.factory import create_ledger
from wallet_ledger.ledger import Response, WalletLedger
from wallet_ledger.logging import setup_logging
from wallet_ledger.models.enums import SinkType, StoreBackend, TransferProtocol

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="wallet-ledger",
        description="Run wallet ledger invocations against a versioned store.",
    )
    parser.add_argument(
        "--store",
        choices=[b.value for b in StoreBackend],
        help="Store backend (default: LEDGER_STORE or memory)",
    )
    parser.add_argument(
        "--sink",
        choices=[s.value for s in SinkType],
        help="Event sink (default: LEDGER_SINK or none)",
    )
    parser.add_argument(
        "--transfer-protocol",
        choices=[p.value for p in TransferProtocol],
        help="Behaviour when a transfer's destination write fails",
    )
    parser.add_argument("--log-level", help="Log level (default: LOG_LEVEL or INFO)")
    parser.add_argument(
        "--log-format",
        choices=["standard", "json"],
        default="standard",
        help="Log output format",
    )
    parser.add_argument(
        "--batch",
        metavar="FILE",
        help='JSON lines file of {"Args": [...]} invocations ("-" for stdin)',
    )
    parser.add_argument("function", nargs="?", help="Operation name, e.g. transfer")
    parser.add_argument("args", nargs="*", help="Operation arguments")
    return parser


def parse_batch_line(line: str) -> list[str]:
    """Parse one batch line into an argument vector.

    Accepts ``{"Args": [...]}`` objects or bare JSON arrays.
    """
    try:
        raw = json.loads(line)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid batch line: {exc}") from exc
    if isinstance(raw, dict):
        raw = raw.get("Args")
    if not isinstance(raw, list) or not raw or not all(isinstance(a, str) for a in raw):
        raise ConfigurationError(f"Batch line must hold a non-empty list of strings: {line!r}")
    return raw


def read_batch(stream: TextIO) -> Iterator[list[str]]:
    """Yield argument vectors from a JSON lines stream, skipping blanks."""
    for line in stream:
        line = line.strip()
        if line:
            yield parse_batch_line(line)


def render(response: Response) -> str:
    """Format a response for stdout."""
    if response.ok:
        return response.payload
    return f"Error [{response.error_kind}]: {response.message}"


def run_invocations(ledger: WalletLedger, vectors: Iterator[list[str]], out: TextIO) -> int:
    """Run argument vectors in order and return the number of failures."""
    failures = 0
    for vector in vectors:
        response = ledger.invoke(vector[0], vector[1:])
        if not response.ok:
            failures += 1
        print(render(response), file=out)
    return failures


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    parser = build_parser()
    options = parser.parse_args(argv)

    if options.batch is None and options.function is None:
        parser.error("either FUNCTION or --batch is required")

    try:
        config = LedgerConfig.from_env()
        if options.store:
            config.store_backend = StoreBackend(options.store)
        if options.sink:
            config.sink = SinkType(options.sink)
        if options.transfer_protocol:
            config.engine.transfer_protocol = TransferProtocol(options.transfer_protocol)
        if options.log_level:
            config.log_level = options.log_level
    except ConfigurationError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    setup_logging(level=config.log_level, format_type=options.log_format, stream=sys.stderr)

    try:
        ledger = create_ledger(config)
    except LedgerError as exc:
        logger.error("Could not start ledger: %s", exc)
        return 2

    try:
        if options.batch is not None:
            if options.batch == "-":
                failures = run_invocations(ledger, read_batch(sys.stdin), sys.stdout)
            else:
                with open(options.batch, encoding="utf-8") as f:
                    failures = run_invocations(ledger, read_batch(f), sys.stdout)
        else:
            vector = [options.function, *options.args]
            failures = run_invocations(ledger, iter([vector]), sys.stdout)
    except ConfigurationError as exc:
        logger.error("%s", exc)
        return 2
    except OSError as exc:
        logger.error("Could not read batch %s: %s", options.batch, exc)
        return 2
    finally:
        ledger.store.close()
        if ledger.sink is not None:
            ledger.sink.close()

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
