"""Argument validation for ledger operations."""

import re

from wallet_ledger.exceptions import InvalidArgumentError
from wallet_ledger.models.enums import MovementCode

DEFAULT_MAX_AMOUNT = 2**32 - 1

_UNSIGNED = re.compile(r"[0-9]+")
_SIGNED = re.compile(r"[+-]?[0-9]+")


def require_account_id(account_id: str, role: str = "account") -> str:
    """Reject a missing or empty wallet identifier."""
    if not isinstance(account_id, str) or not account_id:
        raise InvalidArgumentError(f"Missing {role} identifier")
    return account_id


def parse_amount(text: str, max_amount: int = DEFAULT_MAX_AMOUNT) -> int:
    """Parse a decimal amount string.

    Parameters
    ----------
    text : str
        Unsigned base-10 digits, no sign or whitespace.
    max_amount : int
        Largest accepted value.

    Returns
    -------
    int
        Parsed amount.

    Raises
    ------
    InvalidArgumentError
        If the text is not an unsigned integer in range. A parse failure is
        never treated as zero.
    """
    if not isinstance(text, str) or not _UNSIGNED.fullmatch(text):
        raise InvalidArgumentError(f"Invalid amount: {text!r}")
    return check_amount(int(text), max_amount)


def check_amount(amount: int, max_amount: int = DEFAULT_MAX_AMOUNT) -> int:
    """Validate an already-typed amount."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise InvalidArgumentError(f"Invalid amount: {amount!r}")
    if amount < 0:
        raise InvalidArgumentError(f"Amount must not be negative: {amount}")
    if amount > max_amount:
        raise InvalidArgumentError(f"Amount {amount} exceeds maximum of {max_amount}")
    return amount


def parse_movement_code(text: str) -> int:
    """Parse a transfer base movement code (optionally signed decimal)."""
    if not isinstance(text, str) or not _SIGNED.fullmatch(text):
        raise InvalidArgumentError(f"Invalid movement code: {text!r}")
    return check_base_code(int(text))


def check_base_code(base_code: int) -> int:
    """Reject base codes whose pair could collide with the publish code.

    Anything from 1 upward is accepted; whether the code names a known
    transfer family is left to the caller.
    """
    if isinstance(base_code, bool) or not isinstance(base_code, int):
        raise InvalidArgumentError(f"Invalid movement code: {base_code!r}")
    if base_code <= MovementCode.PUBLISH:
        raise InvalidArgumentError(
            f"Movement code {base_code} is reserved; transfer codes start at {MovementCode.PAYMENT.value}"
        )
    return base_code
