"""Parsing of text invocations into typed operations."""

from wallet_ledger.engine.validation import (
    DEFAULT_MAX_AMOUNT,
    parse_amount,
    parse_movement_code,
    require_account_id,
)
from wallet_ledger.exceptions import InvalidArgumentError
from wallet_ledger.models.enums import OperationKind
from wallet_ledger.models.operations import (
    GetAccount,
    GetTxList,
    InitWallet,
    Operation,
    Publish,
    Transfer,
)

ARITY: dict[OperationKind, int] = {
    OperationKind.INIT_WALLET: 1,
    OperationKind.PUBLISH: 4,
    OperationKind.TRANSFER: 5,
    OperationKind.GET_ACCOUNT: 1,
    OperationKind.GET_TX_LIST: 1,
}


def parse_kind(function: str) -> OperationKind:
    """Map a function name to its operation kind."""
    try:
        return OperationKind(function)
    except ValueError:
        raise InvalidArgumentError(f"Received unknown invoke function name: {function}") from None


def parse_invocation(
    function: str,
    args: list[str],
    max_amount: int = DEFAULT_MAX_AMOUNT,
) -> Operation:
    """Build a typed operation from a function name and string arguments.

    Parameters
    ----------
    function : str
        Operation name, e.g. ``"transfer"``.
    args : list[str]
        Positional string arguments.
    max_amount : int
        Largest amount accepted by publish and transfer.

    Returns
    -------
    Operation
        The typed request.

    Raises
    ------
    InvalidArgumentError
        On an unknown function, wrong arity, or an unparsable numeric field.
    """
    kind = parse_kind(function)
    expected = ARITY[kind]
    if len(args) != expected:
        raise InvalidArgumentError(f"Incorrect number of arguments. Expecting {expected}")

    if kind is OperationKind.INIT_WALLET:
        return InitWallet(account_id=require_account_id(args[0]))
    if kind is OperationKind.PUBLISH:
        return Publish(
            account_id=require_account_id(args[0]),
            issuer_id=args[1],
            amount=parse_amount(args[2], max_amount),
            occurred_on=args[3],
        )
    if kind is OperationKind.TRANSFER:
        return Transfer(
            source_id=require_account_id(args[0], "source"),
            destination_id=require_account_id(args[1], "destination"),
            amount=parse_amount(args[2], max_amount),
            base_code=parse_movement_code(args[3]),
            occurred_on=args[4],
        )
    if kind is OperationKind.GET_ACCOUNT:
        return GetAccount(account_id=require_account_id(args[0]))
    return GetTxList(account_id=require_account_id(args[0]))
