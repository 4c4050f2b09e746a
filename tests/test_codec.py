"""Tests for the wallet record codec."""

import json

import pytest

from wallet_ledger.codec import (
    decode_wallet,
    encode_history,
    encode_wallet,
    wallet_from_dict,
    wallet_to_dict,
)
from wallet_ledger.exceptions import RecordDecodeError
from wallet_ledger.models import MAX_BALANCE, HistoryEntry, MovementRecord, Wallet


@pytest.fixture
def debited_wallet() -> Wallet:
    return Wallet(
        balance=9000,
        last_movement=MovementRecord(
            counterparty="2",
            amount=1000,
            occurred_on="20181212",
            movement_code=4,
        ),
    )


class TestEncode:
    """Tests for encoding."""

    def test_stored_layout(self, debited_wallet: Wallet) -> None:
        """Test the stored wallet layout."""
        assert encode_wallet(debited_wallet) == (
            b'{"value":9000,"Transfer":{"fromOrTo":"2","value":1000,"date":"20181212","type":"4"}}'
        )

    def test_empty_wallet_has_blank_type(self) -> None:
        """Test an empty wallet encodes a blank type."""
        assert encode_wallet(Wallet()) == (
            b'{"value":0,"Transfer":{"fromOrTo":"","value":0,"date":"","type":""}}'
        )

    def test_publish_code_is_zero_string(self) -> None:
        """Test the publish code encodes as "0"."""
        wallet = Wallet(balance=10, last_movement=MovementRecord("admin", 10, "20181212", 0))
        assert wallet_to_dict(wallet)["Transfer"]["type"] == "0"

    def test_history_layout(self, debited_wallet: Wallet) -> None:
        """Test the history array layout."""
        encoded = encode_history([HistoryEntry("tx-1", Wallet()), HistoryEntry("tx-2", debited_wallet)])
        data = json.loads(encoded)
        assert [entry["txId"] for entry in data] == ["tx-1", "tx-2"]
        assert data[1]["value"]["value"] == 9000
        assert data[1]["value"]["Transfer"]["type"] == "4"

    def test_empty_history_is_empty_array(self) -> None:
        """Test an empty history encodes as []."""
        assert encode_history([]) == "[]"


class TestDecode:
    """Tests for decoding stored records."""

    def test_decodes_encoded_wallet(self, debited_wallet: Wallet) -> None:
        """Test decoding an encoded wallet."""
        assert decode_wallet(encode_wallet(debited_wallet)) == debited_wallet

    def test_accepts_lowercase_movement_key(self) -> None:
        """Test the lowercase movement key is read."""
        wallet = decode_wallet(
            '{"value": 5, "transfer": {"fromOrTo": "9", "value": 5, "date": "d", "type": "1"}}'
        )
        assert wallet.balance == 5
        assert wallet.last_movement.counterparty == "9"
        assert wallet.last_movement.movement_code == 1

    def test_accepts_integer_type(self) -> None:
        """Test an integer type is read."""
        wallet = decode_wallet(b'{"value": 1, "Transfer": {"type": 7}}')
        assert wallet.last_movement.movement_code == 7

    def test_missing_movement_is_empty(self) -> None:
        """Test a missing movement decodes as empty."""
        assert decode_wallet(b'{"value": 12}') == Wallet(balance=12)

    def test_empty_object_is_zero_wallet(self) -> None:
        """Test an empty object decodes as a zero wallet."""
        assert decode_wallet(b"{}") == Wallet()

    @pytest.mark.parametrize(
        "data",
        [
            b"",
            b"not json",
            b"\xff\xfe",
            b"[]",
            b'"wallet"',
            b'{"value": -1}',
            b'{"value": "100"}',
            b'{"value": 1.5}',
            b'{"value": true}',
            b'{"value": 1, "Transfer": []}',
            b'{"value": 1, "Transfer": {"type": "x"}}',
            b'{"value": 1, "Transfer": {"fromOrTo": 3}}',
            b'{"value": 1, "Transfer": {"value": -5}}',
        ],
    )
    def test_rejects_malformed(self, data: bytes) -> None:
        """Test malformed records raise RecordDecodeError."""
        with pytest.raises(RecordDecodeError):
            decode_wallet(data)

    def test_rejects_balance_over_64_bits(self) -> None:
        """Test a balance above 64 bits is rejected."""
        with pytest.raises(RecordDecodeError, match="64-bit"):
            wallet_from_dict({"value": MAX_BALANCE + 1})

    def test_accepts_max_balance(self) -> None:
        """Test the largest balance decodes."""
        assert wallet_from_dict({"value": MAX_BALANCE}).balance == MAX_BALANCE
