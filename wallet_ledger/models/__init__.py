"""Domain models for the wallet ledger."""

from wallet_ledger.models.base import Event
from wallet_ledger.models.enums import (
    TRANSFER_BASE_CODES,
    MovementCode,
    OperationKind,
    SinkType,
    StoreBackend,
    TransferProtocol,
    paired_code,
)
from wallet_ledger.models.operations import (
    GetAccount,
    GetTxList,
    InitWallet,
    Operation,
    Publish,
    Transfer,
)
from wallet_ledger.models.wallet import (
    BALANCE_BITS,
    MAX_BALANCE,
    HistoryEntry,
    MovementRecord,
    Wallet,
)

__all__ = [
    "BALANCE_BITS",
    "Event",
    "GetAccount",
    "GetTxList",
    "HistoryEntry",
    "InitWallet",
    "MAX_BALANCE",
    "MovementCode",
    "MovementRecord",
    "Operation",
    "OperationKind",
    "Publish",
    "SinkType",
    "StoreBackend",
    "TRANSFER_BASE_CODES",
    "Transfer",
    "TransferProtocol",
    "Wallet",
    "paired_code",
]
