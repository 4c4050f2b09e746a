"""Custom exception hierarchy for wallet-ledger.

Every error carries a stable ``kind`` so callers at the text boundary can
branch on it without parsing the message.
"""


class LedgerError(Exception):
    """Base exception for all wallet-ledger errors."""

    kind = "ledger_error"


class InvalidArgumentError(LedgerError):
    """Raised on wrong arity or an unparsable or out-of-range argument."""

    kind = "invalid_argument"


class AccountNotFoundError(LedgerError):
    """Raised when a wallet record is absent or cannot be decoded."""

    kind = "not_found"


class InsufficientBalanceError(LedgerError):
    """Raised when a transfer source holds less than the amount."""

    kind = "insufficient_balance"


class WriteFailedError(LedgerError):
    """Raised when the store rejects a write.

    ``source_debited`` is True when a transfer committed the source debit but
    not the destination credit, leaving the two wallets inconsistent.
    ``compensated`` is True when that debit was reverted by a compensating write.
    """

    kind = "write_failed"

    def __init__(
        self,
        message: str,
        *,
        source_debited: bool = False,
        compensated: bool = False,
    ) -> None:
        super().__init__(message)
        self.source_debited = source_debited
        self.compensated = compensated


class StoreError(LedgerError):
    """Raised when the store adapter cannot serve a read, write or history."""

    kind = "store_error"


class RecordDecodeError(LedgerError):
    """Raised when stored bytes are not a valid wallet record."""

    kind = "record_decode"


class ConfigurationError(LedgerError):
    """Raised when configuration is invalid or missing."""

    kind = "configuration"


class SinkError(LedgerError):
    """Raised when a sink operation fails."""

    kind = "sink"
