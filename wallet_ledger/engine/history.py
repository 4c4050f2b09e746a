"""Reconstruction of wallet history from store versions."""

import logging
from typing import Iterable, Iterator

from wallet_ledger.codec import decode_wallet
from wallet_ledger.exceptions import RecordDecodeError
from wallet_ledger.models.wallet import HistoryEntry, Wallet
from wallet_ledger.store.base import KeyModification

logger = logging.getLogger(__name__)


def iter_history(modifications: Iterable[KeyModification]) -> Iterator[HistoryEntry]:
    """Yield one history entry per stored version, oldest first.

    Tombstones and undecodable values become a zero-value wallet instead of
    failing the whole history.
    """
    for modification in modifications:
        if modification.is_delete or modification.value is None:
            yield HistoryEntry(tx_id=modification.tx_id, wallet=Wallet())
            continue

        try:
            wallet = decode_wallet(modification.value)
        except RecordDecodeError as exc:
            logger.warning("Undecodable history value in tx %s: %s", modification.tx_id, exc)
            wallet = Wallet()
        yield HistoryEntry(tx_id=modification.tx_id, wallet=wallet)
