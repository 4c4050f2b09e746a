"""Wallet snapshot models."""

from dataclasses import dataclass, field

BALANCE_BITS = 64
MAX_BALANCE = 2**BALANCE_BITS - 1


@dataclass(frozen=True)
class MovementRecord:
    """The last balance-changing event applied to a wallet.

    ``movement_code`` is None until the wallet sees its first movement.
    ``occurred_on`` is the caller's date string, stored verbatim.
    """

    counterparty: str = ""
    amount: int = 0
    occurred_on: str = ""
    movement_code: int | None = None


@dataclass(frozen=True)
class Wallet:
    """Immutable wallet snapshot."""

    balance: int = 0
    last_movement: MovementRecord = field(default_factory=MovementRecord)


@dataclass(frozen=True)
class HistoryEntry:
    """A wallet snapshot paired with the store transaction that wrote it."""

    tx_id: str
    wallet: Wallet
