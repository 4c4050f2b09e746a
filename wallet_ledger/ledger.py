"""Ledger service: runs engine transitions against a versioned store.

The service reads snapshots, hands them to the pure engine, and commits the
resulting write set key by key. Transfers write the source before the
destination and are not atomic across the two keys; see
``WalletLedger.transfer`` for what a failure between the two writes leaves
behind.
"""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from wallet_ledger.codec import decode_wallet, encode_history, encode_wallet, wallet_to_dict
from wallet_ledger.config import EngineConfig
from wallet_ledger.engine import (
    StateWrite,
    Transition,
    apply_publish,
    apply_transfer,
    initialize,
    iter_history,
)
from wallet_ledger.exceptions import (
    AccountNotFoundError,
    LedgerError,
    RecordDecodeError,
    SinkError,
    StoreError,
    WriteFailedError,
)
from wallet_ledger.models.base import Event
from wallet_ledger.models.enums import TransferProtocol, paired_code
from wallet_ledger.models.operations import (
    GetAccount,
    GetTxList,
    InitWallet,
    Operation,
    Publish,
    Transfer,
)
from wallet_ledger.models.wallet import HistoryEntry, Wallet
from wallet_ledger.operations import parse_invocation
from wallet_ledger.store.base import VersionedStore

logger = logging.getLogger(__name__)

DEFAULT_TOPIC = "ledger.wallet-events"
EVENT_SOURCE = "wallet-ledger"


@dataclass(frozen=True)
class Response:
    """Text-boundary result of one invocation."""

    status: int
    payload: str = ""
    message: str = ""
    error_kind: str | None = None

    OK = 200
    ERROR = 500

    @property
    def ok(self) -> bool:
        return self.status == self.OK

    @classmethod
    def success(cls, payload: str) -> "Response":
        return cls(status=cls.OK, payload=payload)

    @classmethod
    def error(cls, exc: LedgerError) -> "Response":
        return cls(status=cls.ERROR, message=str(exc), error_kind=exc.kind)


class WalletLedger:
    """Wallet operations over a ``VersionedStore``.

    Parameters
    ----------
    store : VersionedStore
        Authoritative versioned key-value store.
    config : EngineConfig | None
        Amount width and transfer write protocol.
    sink : Any
        Optional event sink with a ``write_batch(topic, records)`` method.
        Events are written after the store commit; a sink failure is logged
        and does not fail the operation.
    topic : str
        Topic or file name the events are written under.
    """

    def __init__(
        self,
        store: VersionedStore,
        config: EngineConfig | None = None,
        sink: Any = None,
        topic: str = DEFAULT_TOPIC,
    ) -> None:
        self.store = store
        self.config = config or EngineConfig()
        self.sink = sink
        self.topic = topic

    @property
    def max_amount(self) -> int:
        return self.config.max_amount

    # Operations
    def init_wallet(self, account_id: str) -> Wallet:
        """Create (or reset) a wallet with balance 0.

        Re-initializing an existing wallet resets its balance; use
        ``wallet_exists`` first when create-once behaviour is needed.
        """
        transition = initialize(InitWallet(account_id=account_id))
        self._warn_on_reset(account_id)

        tx_id = self._commit_single(transition, f"Failed to create Wallet: {account_id}")
        logger.info(
            "Initialized wallet %s (tx %s)",
            account_id,
            tx_id,
            extra={"extra": {"account_id": account_id, "tx_id": tx_id}},
        )
        self._emit(
            "wallet.initialized",
            account_id,
            tx_id,
            {"wallet": wallet_to_dict(transition.result)},
        )
        return transition.result

    def publish(self, account_id: str, issuer_id: str, amount: int, occurred_on: str) -> Wallet:
        """Issue ``amount`` into an existing wallet."""
        request = Publish(
            account_id=account_id,
            issuer_id=issuer_id,
            amount=amount,
            occurred_on=occurred_on,
        )
        transition = apply_publish(self._load(account_id), request, self.max_amount)

        tx_id = self._commit_single(transition, "Failed to publish")
        logger.info(
            "Published %d to %s from %s (tx %s)",
            amount,
            account_id,
            issuer_id,
            tx_id,
            extra={"extra": {"account_id": account_id, "tx_id": tx_id, "amount": amount}},
        )
        self._emit(
            "wallet.published",
            account_id,
            tx_id,
            {
                "issuer": issuer_id,
                "amount": amount,
                "date": occurred_on,
                "wallet": wallet_to_dict(transition.result),
            },
        )
        return transition.result

    def transfer(
        self,
        source_id: str,
        destination_id: str,
        amount: int,
        base_code: int,
        occurred_on: str,
    ) -> str:
        """Move ``amount`` from source to destination and return the source tx id.

        Both records are computed from one pair of snapshots, then written
        source first. If the source write fails nothing has moved. If the
        destination write fails the source stays debited
        (``WriteFailedError.source_debited``) unless the engine is configured
        with ``TransferProtocol.COMPENSATING``, in which case the original
        source record is written back first.
        """
        request = Transfer(
            source_id=source_id,
            destination_id=destination_id,
            amount=amount,
            base_code=base_code,
            occurred_on=occurred_on,
        )
        source = self._load(source_id)
        destination = self._load(destination_id)
        transition = apply_transfer(source, destination, request, self.max_amount)

        tx_id = self._commit_transfer(transition, source)
        logger.info(
            "Transferred %d from %s to %s, code %d (tx %s)",
            amount,
            source_id,
            destination_id,
            base_code,
            tx_id,
            extra={
                "extra": {
                    "account_id": source_id,
                    "destination_id": destination_id,
                    "tx_id": tx_id,
                    "amount": amount,
                }
            },
        )
        self._emit(
            "wallet.transferred",
            source_id,
            tx_id,
            {
                "source": source_id,
                "destination": destination_id,
                "amount": amount,
                "destination_code": base_code,
                "source_code": paired_code(base_code),
                "date": occurred_on,
            },
        )
        return tx_id

    def get_account(self, account_id: str) -> str:
        """Return the wallet balance as a decimal string."""
        wallet = self._load(account_id)
        if wallet is None:
            raise AccountNotFoundError(f"Could not locate Wallet: {account_id}")
        return str(wallet.balance)

    def get_tx_list(self, account_id: str) -> list[HistoryEntry]:
        """Return every stored version of the wallet, oldest first."""
        modifications = self.store.get_history(account_id)
        history = list(iter_history(modifications))
        logger.debug("History for %s: %d entries", account_id, len(history))
        return history

    def wallet_exists(self, account_id: str) -> bool:
        """Return True if the store holds a record for ``account_id``."""
        return self.store.get_state(account_id) is not None

    # Dispatch
    def execute(self, operation: Operation) -> str:
        """Run a typed operation and return its text-encoded result."""
        if isinstance(operation, InitWallet):
            return encode_wallet(self.init_wallet(operation.account_id)).decode("utf-8")
        if isinstance(operation, Publish):
            wallet = self.publish(
                operation.account_id,
                operation.issuer_id,
                operation.amount,
                operation.occurred_on,
            )
            return encode_wallet(wallet).decode("utf-8")
        if isinstance(operation, Transfer):
            return self.transfer(
                operation.source_id,
                operation.destination_id,
                operation.amount,
                operation.base_code,
                operation.occurred_on,
            )
        if isinstance(operation, GetAccount):
            return self.get_account(operation.account_id)
        if isinstance(operation, GetTxList):
            return encode_history(self.get_tx_list(operation.account_id))
        raise TypeError(f"Unsupported operation: {operation!r}")

    def invoke(self, function: str, args: list[str]) -> Response:
        """Parse and run one text invocation.

        Ledger errors become error responses carrying the message verbatim;
        any other exception propagates.
        """
        try:
            operation = parse_invocation(function, args, self.max_amount)
            payload = self.execute(operation)
        except LedgerError as exc:
            logger.info("%s failed (%s): %s", function, exc.kind, exc)
            return Response.error(exc)
        return Response.success(payload)

    # Internals
    def _load(self, account_id: str) -> Wallet | None:
        try:
            data = self.store.get_state(account_id)
        except StoreError as exc:
            raise AccountNotFoundError(f"Could not read wallet {account_id}: {exc}") from exc
        if data is None:
            return None
        try:
            return decode_wallet(data)
        except RecordDecodeError as exc:
            raise AccountNotFoundError(f"Could not decode wallet {account_id}: {exc}") from exc

    def _warn_on_reset(self, account_id: str) -> None:
        try:
            existing = self.store.get_state(account_id)
        except StoreError as exc:
            logger.warning("Could not check %s before init: %s", account_id, exc)
            return
        if existing is not None:
            logger.warning(
                "Re-initializing existing wallet %s resets its balance to 0",
                account_id,
                extra={"extra": {"account_id": account_id}},
            )

    def _put(self, write: StateWrite) -> str:
        return self.store.put_state(write.key, encode_wallet(write.wallet))

    def _commit_single(self, transition: Transition, message: str) -> str:
        (write,) = transition.writes
        try:
            return self._put(write)
        except StoreError as exc:
            raise WriteFailedError(f"{message}: {exc}") from exc

    def _commit_transfer(self, transition: Transition, original_source: Wallet) -> str:
        source_write, destination_write = transition.writes
        try:
            tx_id = self._put(source_write)
        except StoreError as exc:
            raise WriteFailedError(f"Failed to transfer: {exc}") from exc

        try:
            self._put(destination_write)
        except StoreError as exc:
            logger.error(
                "Destination write failed after debiting %s (tx %s): %s",
                source_write.key,
                tx_id,
                exc,
                extra={
                    "extra": {
                        "account_id": source_write.key,
                        "destination_id": destination_write.key,
                        "tx_id": tx_id,
                    }
                },
            )
            if self.config.transfer_protocol is TransferProtocol.COMPENSATING:
                self._compensate(StateWrite(source_write.key, original_source), tx_id, exc)
            raise WriteFailedError(
                f"Failed to transfer: {exc}; {source_write.key} was debited "
                f"but {destination_write.key} was not credited",
                source_debited=True,
            ) from exc
        return tx_id

    def _compensate(self, restore: StateWrite, debit_tx_id: str, cause: StoreError) -> None:
        try:
            restore_tx_id = self._put(restore)
        except StoreError as exc:
            logger.error(
                "Compensating write for %s failed: %s",
                restore.key,
                exc,
                extra={"extra": {"account_id": restore.key, "tx_id": debit_tx_id}},
            )
            raise WriteFailedError(
                f"Failed to transfer: {cause}; compensating write for {restore.key} "
                f"also failed: {exc}",
                source_debited=True,
            ) from exc
        logger.warning(
            "Reverted debit of %s (tx %s) with tx %s",
            restore.key,
            debit_tx_id,
            restore_tx_id,
            extra={"extra": {"account_id": restore.key, "tx_id": restore_tx_id}},
        )
        raise WriteFailedError(
            f"Failed to transfer: {cause}; debit of {restore.key} was reverted",
            compensated=True,
        ) from cause

    def _emit(self, event_type: str, subject: str, tx_id: str, data: dict) -> None:
        if self.sink is None:
            return
        event = Event(
            event_id=uuid.uuid4().hex,
            event_type=event_type,
            event_time=datetime.now(timezone.utc),
            source=EVENT_SOURCE,
            subject=subject,
            data=data,
            metadata={"tx_id": tx_id},
        )
        # Committed state stands; a failed event write is logged, not raised
        try:
            self.sink.write_batch(self.topic, [event])
        except SinkError as exc:
            logger.error(
                "Failed to emit %s for %s (tx %s): %s",
                event_type,
                subject,
                tx_id,
                exc,
                extra={"extra": {"account_id": subject, "tx_id": tx_id, "event_type": event_type}},
            )
