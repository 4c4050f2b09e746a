"""Tests for domain models."""

import dataclasses

import pytest

from wallet_ledger.models import (
    MAX_BALANCE,
    TRANSFER_BASE_CODES,
    GetTxList,
    HistoryEntry,
    MovementCode,
    MovementRecord,
    OperationKind,
    Publish,
    Transfer,
    Wallet,
    paired_code,
)


class TestWallet:
    """Tests for Wallet snapshots."""

    def test_default_is_empty(self) -> None:
        """Test a default wallet is empty."""
        wallet = Wallet()
        assert wallet.balance == 0
        assert wallet.last_movement == MovementRecord()
        assert wallet.last_movement.movement_code is None

    def test_is_immutable(self) -> None:
        """Test wallets are frozen."""
        wallet = Wallet(balance=5)
        with pytest.raises(dataclasses.FrozenInstanceError):
            wallet.balance = 10  # type: ignore[misc]

    def test_max_balance_is_64_bit(self) -> None:
        """Test the balance bound."""
        assert MAX_BALANCE == 18446744073709551615

    def test_history_entry(self) -> None:
        """Test history entry fields."""
        entry = HistoryEntry(tx_id="tx-1", wallet=Wallet(balance=3))
        assert entry.tx_id == "tx-1"
        assert entry.wallet.balance == 3


class TestMovementCode:
    """Tests for movement code pairing."""

    def test_publish_is_zero(self) -> None:
        """Test the publish code."""
        assert MovementCode.PUBLISH == 0

    @pytest.mark.parametrize("base", list(TRANSFER_BASE_CODES))
    def test_pairs_are_adjacent(self, base: MovementCode) -> None:
        """Test each family pairs base and base + 1."""
        paired = MovementCode(paired_code(base))
        assert paired.name == f"{base.name}_PAIRED"

    def test_paired_code_is_plus_one(self) -> None:
        """Test paired_code."""
        assert paired_code(3) == 4
        assert paired_code(41) == 42

    def test_transfer_base_codes_are_odd(self) -> None:
        """Test transfer base codes are odd."""
        assert [c.value for c in TRANSFER_BASE_CODES] == [1, 3, 5, 7]


class TestOperations:
    """Tests for typed operation requests."""

    def test_kinds(self) -> None:
        """Test each operation reports its kind."""
        assert Publish("1", "admin", 10, "20181212").kind is OperationKind.PUBLISH
        assert Transfer("1", "2", 10, 3, "20181212").kind is OperationKind.TRANSFER
        assert GetTxList("1").kind is OperationKind.GET_TX_LIST

    def test_kind_is_not_a_field(self) -> None:
        """Test kind is not a dataclass field."""
        names = [f.name for f in dataclasses.fields(Publish)]
        assert names == ["account_id", "issuer_id", "amount", "occurred_on"]

    def test_history_operation_name(self) -> None:
        """Test the history function name."""
        assert OperationKind.GET_TX_LIST.value == "get_txList"
