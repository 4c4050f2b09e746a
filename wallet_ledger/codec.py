"""Wire encoding of wallet records.

Stored wallets are compact JSON objects whose field names are shared with
records already written by earlier deployments::

    {"value": 9000, "Transfer": {"fromOrTo": "2", "value": 1000, "date": "20181212", "type": "4"}}

The movement key is spelled ``Transfer``; ``transfer`` is accepted on read.
``type`` holds the movement code as a decimal string, ``""`` for none.
"""

import json
from typing import Any, Iterable

from wallet_ledger.exceptions import RecordDecodeError
from wallet_ledger.models.wallet import MAX_BALANCE, HistoryEntry, MovementRecord, Wallet

MOVEMENT_KEY = "Transfer"
_MOVEMENT_KEY_ALIASES = (MOVEMENT_KEY, "transfer")
_SEPARATORS = (",", ":")


def movement_to_dict(movement: MovementRecord) -> dict[str, Any]:
    """Convert a movement record to its wire dict."""
    return {
        "fromOrTo": movement.counterparty,
        "value": movement.amount,
        "date": movement.occurred_on,
        "type": "" if movement.movement_code is None else str(movement.movement_code),
    }


def wallet_to_dict(wallet: Wallet) -> dict[str, Any]:
    """Convert a wallet to its wire dict."""
    return {
        "value": wallet.balance,
        MOVEMENT_KEY: movement_to_dict(wallet.last_movement),
    }


def encode_wallet(wallet: Wallet) -> bytes:
    """Encode a wallet as stored bytes."""
    return json.dumps(wallet_to_dict(wallet), separators=_SEPARATORS).encode("utf-8")


def history_to_list(entries: Iterable[HistoryEntry]) -> list[dict[str, Any]]:
    """Convert history entries to wire dicts."""
    return [{"txId": entry.tx_id, "value": wallet_to_dict(entry.wallet)} for entry in entries]


def encode_history(entries: Iterable[HistoryEntry]) -> str:
    """Encode history entries as a JSON array."""
    return json.dumps(history_to_list(entries), separators=_SEPARATORS)


def decode_wallet(data: bytes | str) -> Wallet:
    """Decode stored bytes into a wallet.

    Parameters
    ----------
    data : bytes | str
        Stored wallet record.

    Returns
    -------
    Wallet
        Decoded snapshot.

    Raises
    ------
    RecordDecodeError
        If the bytes are not a well-formed wallet record.
    """
    try:
        raw = json.loads(data)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise RecordDecodeError(f"Wallet record is not valid JSON: {exc}") from exc
    return wallet_from_dict(raw)


def wallet_from_dict(raw: Any) -> Wallet:
    """Build a wallet from a decoded wire dict."""
    if not isinstance(raw, dict):
        raise RecordDecodeError("Wallet record must be a JSON object")

    balance = _unsigned(raw.get("value", 0), "value")
    if balance > MAX_BALANCE:
        raise RecordDecodeError(f"Wallet balance {balance} exceeds 64-bit range")

    movement_raw = None
    for key in _MOVEMENT_KEY_ALIASES:
        if key in raw:
            movement_raw = raw[key]
            break

    if movement_raw is None:
        return Wallet(balance=balance)
    return Wallet(balance=balance, last_movement=_movement_from_dict(movement_raw))


def _movement_from_dict(raw: Any) -> MovementRecord:
    if not isinstance(raw, dict):
        raise RecordDecodeError("Movement record must be a JSON object")

    counterparty = raw.get("fromOrTo", "")
    occurred_on = raw.get("date", "")
    if not isinstance(counterparty, str) or not isinstance(occurred_on, str):
        raise RecordDecodeError("Movement counterparty and date must be strings")

    amount = _unsigned(raw.get("value", 0), "Transfer.value")
    return MovementRecord(
        counterparty=counterparty,
        amount=amount,
        occurred_on=occurred_on,
        movement_code=_movement_code(raw.get("type", "")),
    )


def _movement_code(raw: Any) -> int | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, bool):
        raise RecordDecodeError(f"Invalid movement type: {raw!r}")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        try:
            return int(raw)
        except ValueError as exc:
            raise RecordDecodeError(f"Invalid movement type: {raw!r}") from exc
    raise RecordDecodeError(f"Invalid movement type: {raw!r}")


def _unsigned(raw: Any, name: str) -> int:
    # bool is an int subclass; a stored true/false is never a balance
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 0:
        raise RecordDecodeError(f"Field {name!r} must be a non-negative integer, got {raw!r}")
    return raw
