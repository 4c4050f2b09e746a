"""Tests for the command-line entry point."""

import io
import json
import os
from pathlib import Path
from typing import Iterator
from unittest.mock import patch

import psycopg
import pytest

from wallet_ledger.cli import main, parse_batch_line, read_batch, render
from wallet_ledger.exceptions import ConfigurationError
from wallet_ledger.ledger import Response

SCENARIO = [
    ["init_wallet", "1"],
    ["publish", "1", "admin", "10000", "20181212"],
    ["init_wallet", "2"],
    ["transfer", "1", "2", "1000", "3", "20181212"],
    ["get_account", "1"],
    ["get_account", "2"],
]


def write_batch(path: Path, vectors: list[list[str]]) -> Path:
    path.write_text("\n".join(json.dumps({"Args": v}) for v in vectors) + "\n", encoding="utf-8")
    return path


class TestBatchParsing:
    """Tests for batch line parsing."""

    def test_args_object(self) -> None:
        """Test the {"Args": [...]} form."""
        assert parse_batch_line('{"Args": ["get_account", "1"]}') == ["get_account", "1"]

    def test_bare_list(self) -> None:
        """Test the bare array form."""
        assert parse_batch_line('["init_wallet", "1"]') == ["init_wallet", "1"]

    @pytest.mark.parametrize("line", ["nope", "[]", '{"args": ["x"]}', '["publish", 1]', "42"])
    def test_rejects(self, line: str) -> None:
        """Test malformed lines raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            parse_batch_line(line)

    def test_read_batch_skips_blank_lines(self) -> None:
        """Test blank lines are ignored."""
        stream = io.StringIO('["get_account", "1"]\n\n   \n["get_account", "2"]\n')
        assert list(read_batch(stream)) == [["get_account", "1"], ["get_account", "2"]]

    def test_render(self) -> None:
        """Test payloads and errors are formatted for stdout."""
        assert render(Response.success("10")) == "10"
        assert render(Response(status=500, message="boom", error_kind="not_found")) == (
            "Error [not_found]: boom"
        )


class TestMain:
    """Tests for main."""

    @pytest.fixture(autouse=True)
    def clean_env(self) -> Iterator[None]:
        """Run with default configuration."""
        env = {k: v for k, v in os.environ.items() if not k.startswith(("LEDGER_", "LOG_LEVEL"))}
        with patch.dict(os.environ, env, clear=True):
            yield

    def test_batch_scenario(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Test a batch file runs in order against one store."""
        batch = write_batch(tmp_path / "batch.jsonl", SCENARIO)

        code = main(["--log-level", "ERROR", "--batch", str(batch)])

        lines = capsys.readouterr().out.splitlines()
        assert code == 0
        assert lines[1] == (
            '{"value":10000,"Transfer":{"fromOrTo":"admin","value":10000,"date":"20181212","type":"0"}}'
        )
        assert lines[-2:] == ["9000", "1000"]

    def test_batch_with_failure(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Test a failed invocation sets exit code 1 and keeps going."""
        batch = write_batch(
            tmp_path / "batch.jsonl",
            [["get_account", "ghost"], ["init_wallet", "1"], ["get_account", "1"]],
        )

        code = main(["--log-level", "ERROR", "--batch", str(batch)])

        lines = capsys.readouterr().out.splitlines()
        assert code == 1
        assert lines[0] == "Error [not_found]: Could not locate Wallet: ghost"
        assert lines[-1] == "0"

    def test_batch_from_stdin(self, capsys: pytest.CaptureFixture) -> None:
        """Test "-" reads the batch from stdin."""
        stdin = io.StringIO('["init_wallet", "a"]\n["get_account", "a"]\n')
        with patch("sys.stdin", stdin):
            code = main(["--log-level", "ERROR", "--batch", "-"])

        assert code == 0
        assert capsys.readouterr().out.splitlines()[-1] == "0"

    def test_single_invocation(self, capsys: pytest.CaptureFixture) -> None:
        """Test one positional invocation."""
        code = main(["--log-level", "ERROR", "get_txList", "nobody"])

        assert code == 0
        assert capsys.readouterr().out.strip() == "[]"

    def test_unknown_function(self, capsys: pytest.CaptureFixture) -> None:
        """Test an unknown function is an error response."""
        code = main(["--log-level", "ERROR", "mint", "1"])

        assert code == 1
        assert "Received unknown invoke function name: mint" in capsys.readouterr().out

    def test_malformed_batch(self, tmp_path: Path) -> None:
        """Test a malformed batch line exits with 2."""
        batch = tmp_path / "batch.jsonl"
        batch.write_text("not json\n", encoding="utf-8")

        assert main(["--log-level", "ERROR", "--batch", str(batch)]) == 2

    def test_missing_batch_file(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Test an unreadable batch file exits with 2."""
        missing = tmp_path / "missing.jsonl"

        code = main(["--log-level", "ERROR", "--batch", str(missing)])

        captured = capsys.readouterr()
        assert code == 2
        assert captured.out == ""
        assert "Could not read batch" in captured.err

    def test_bad_environment(self, capsys: pytest.CaptureFixture) -> None:
        """Test invalid configuration exits with 2."""
        with patch.dict(os.environ, {"LEDGER_AMOUNT_BITS": "0"}):
            code = main(["get_account", "1"])

        assert code == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_store_startup_failure(self) -> None:
        """Test an unreachable store exits with 2."""
        with patch(
            "wallet_ledger.store.postgres.psycopg.connect",
            side_effect=psycopg.OperationalError("refused"),
        ):
            assert main(["--log-level", "ERROR", "--store", "postgres", "get_account", "1"]) == 2

    def test_requires_function_or_batch(self) -> None:
        """Test argparse rejects an empty command line."""
        with pytest.raises(SystemExit):
            main([])

    def test_compensating_protocol_flag(self, tmp_path: Path, capsys: pytest.CaptureFixture) -> None:
        """Test the protocol flag is accepted."""
        batch = write_batch(tmp_path / "batch.jsonl", SCENARIO)

        code = main(
            ["--log-level", "ERROR", "--transfer-protocol", "compensating", "--batch", str(batch)]
        )

        assert code == 0
        assert capsys.readouterr().out.splitlines()[-2:] == ["9000", "1000"]
