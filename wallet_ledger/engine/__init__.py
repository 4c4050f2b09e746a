"""Account engine: pure state transitions over wallet snapshots."""

from wallet_ledger.engine.history import iter_history
from wallet_ledger.engine.transitions import (
    StateWrite,
    Transition,
    apply_publish,
    apply_transfer,
    initialize,
)
from wallet_ledger.engine.validation import (
    DEFAULT_MAX_AMOUNT,
    check_amount,
    check_base_code,
    parse_amount,
    parse_movement_code,
    require_account_id,
)

__all__ = [
    "DEFAULT_MAX_AMOUNT",
    "StateWrite",
    "Transition",
    "apply_publish",
    "apply_transfer",
    "check_amount",
    "check_base_code",
    "initialize",
    "iter_history",
    "parse_amount",
    "parse_movement_code",
    "require_account_id",
]
