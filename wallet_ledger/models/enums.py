"""Enumeration types for the wallet ledger."""

from enum import Enum, IntEnum


class MovementCode(IntEnum):
    """Movement codes recorded on a wallet.

    Transfer families come in pairs: the destination records the base code
    and the source records ``base + 1``. ``PUBLISH`` is reserved for issuance
    and is never produced by a transfer.
    """

    PUBLISH = 0
    PAYMENT = 1
    PAYMENT_PAIRED = 2
    CANCEL_PAYMENT = 3
    CANCEL_PAYMENT_PAIRED = 4
    REMITTANCE = 5
    REMITTANCE_PAIRED = 6
    CANCEL_REMITTANCE = 7
    CANCEL_REMITTANCE_PAIRED = 8


TRANSFER_BASE_CODES = (
    MovementCode.PAYMENT,
    MovementCode.CANCEL_PAYMENT,
    MovementCode.REMITTANCE,
    MovementCode.CANCEL_REMITTANCE,
)


def paired_code(base_code: int) -> int:
    """Return the code recorded on the source side of a transfer."""
    return base_code + 1


class OperationKind(str, Enum):
    INIT_WALLET = "init_wallet"
    PUBLISH = "publish"
    TRANSFER = "transfer"
    GET_ACCOUNT = "get_account"
    GET_TX_LIST = "get_txList"


class TransferProtocol(str, Enum):
    BEST_EFFORT = "best_effort"
    COMPENSATING = "compensating"


class StoreBackend(str, Enum):
    MEMORY = "memory"
    POSTGRES = "postgres"


class SinkType(str, Enum):
    NONE = "none"
    CONSOLE = "console"
    JSON = "json"
    KAFKA = "kafka"
