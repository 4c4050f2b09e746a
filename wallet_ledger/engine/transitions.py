"""Pure wallet state transitions.

Each function takes decoded snapshots (``None`` for a wallet the store does
not hold) plus a typed request, and returns a ``Transition``: the writes to
commit, in order, and the operation result. Nothing here reads or writes the
store, and input snapshots are never modified.
"""

from dataclasses import dataclass, replace

from wallet_ledger.engine.validation import (
    DEFAULT_MAX_AMOUNT,
    check_amount,
    check_base_code,
    require_account_id,
)
from wallet_ledger.exceptions import (
    AccountNotFoundError,
    InsufficientBalanceError,
    InvalidArgumentError,
)
from wallet_ledger.models.enums import MovementCode, paired_code
from wallet_ledger.models.operations import InitWallet, Publish, Transfer
from wallet_ledger.models.wallet import MAX_BALANCE, MovementRecord, Wallet


@dataclass(frozen=True)
class StateWrite:
    """One wallet record to persist under ``key``."""

    key: str
    wallet: Wallet


@dataclass(frozen=True)
class Transition:
    """Ordered write set produced by an operation, plus its result wallet."""

    writes: tuple[StateWrite, ...]
    result: Wallet


def initialize(request: InitWallet) -> Transition:
    """Produce a zero-balance wallet with no movement.

    An existing wallet under the same key is not consulted; committing this
    transition resets it.
    """
    account_id = require_account_id(request.account_id)
    wallet = Wallet()
    return Transition(writes=(StateWrite(account_id, wallet),), result=wallet)


def apply_publish(
    snapshot: Wallet | None,
    request: Publish,
    max_amount: int = DEFAULT_MAX_AMOUNT,
) -> Transition:
    """Credit ``request.amount`` to an existing wallet.

    Parameters
    ----------
    snapshot : Wallet | None
        Current target wallet, or None when it does not exist.
    request : Publish
        Publish request. The issuer is recorded as counterparty only; no
        issuer balance is debited.
    max_amount : int
        Largest amount accepted for a single publish.

    Returns
    -------
    Transition
        A single write for the target wallet.
    """
    account_id = require_account_id(request.account_id)
    amount = check_amount(request.amount, max_amount)
    if snapshot is None:
        raise AccountNotFoundError(f"Not found wallet: {account_id}")

    new_balance = snapshot.balance + amount
    if new_balance > MAX_BALANCE:
        raise InvalidArgumentError(f"Publishing {amount} would overflow the balance of {account_id}")

    wallet = replace(
        snapshot,
        balance=new_balance,
        last_movement=MovementRecord(
            counterparty=request.issuer_id,
            amount=amount,
            occurred_on=request.occurred_on,
            movement_code=MovementCode.PUBLISH.value,
        ),
    )
    return Transition(writes=(StateWrite(account_id, wallet),), result=wallet)


def apply_transfer(
    source: Wallet | None,
    destination: Wallet | None,
    request: Transfer,
    max_amount: int = DEFAULT_MAX_AMOUNT,
) -> Transition:
    """Move ``request.amount`` from source to destination.

    The destination records the caller's base code and the source records
    ``base_code + 1``. Writes are ordered source first, destination second;
    the result is the updated source wallet.

    Raises
    ------
    InvalidArgumentError
        On a bad amount or code, a self-transfer, or a destination overflow.
    AccountNotFoundError
        If either wallet is missing.
    InsufficientBalanceError
        If the source holds less than the amount.
    """
    source_id = require_account_id(request.source_id, "source")
    destination_id = require_account_id(request.destination_id, "destination")
    if source_id == destination_id:
        raise InvalidArgumentError(f"Source and destination are the same wallet: {source_id}")
    amount = check_amount(request.amount, max_amount)
    base_code = check_base_code(request.base_code)

    if source is None or destination is None:
        missing = source_id if source is None else destination_id
        raise AccountNotFoundError(f"Not found wallet: {missing}")

    if source.balance < amount:
        raise InsufficientBalanceError(f"{source_id} is not enough balance.")
    if destination.balance + amount > MAX_BALANCE:
        raise InvalidArgumentError(f"Transferring {amount} would overflow the balance of {destination_id}")

    debited = replace(
        source,
        balance=source.balance - amount,
        last_movement=MovementRecord(
            counterparty=destination_id,
            amount=amount,
            occurred_on=request.occurred_on,
            movement_code=paired_code(base_code),
        ),
    )
    credited = replace(
        destination,
        balance=destination.balance + amount,
        last_movement=MovementRecord(
            counterparty=source_id,
            amount=amount,
            occurred_on=request.occurred_on,
            movement_code=base_code,
        ),
    )
    return Transition(
        writes=(StateWrite(source_id, debited), StateWrite(destination_id, credited)),
        result=debited,
    )
