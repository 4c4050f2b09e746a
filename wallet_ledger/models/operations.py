"""Typed ledger operation requests.

The five operations form a closed set; ``Operation`` is their union and every
dispatcher handles each member explicitly.
"""

from dataclasses import dataclass
from typing import Union

from wallet_ledger.models.enums import OperationKind


@dataclass(frozen=True)
class InitWallet:
    account_id: str

    kind = OperationKind.INIT_WALLET


@dataclass(frozen=True)
class Publish:
    account_id: str
    issuer_id: str
    amount: int
    occurred_on: str

    kind = OperationKind.PUBLISH


@dataclass(frozen=True)
class Transfer:
    source_id: str
    destination_id: str
    amount: int
    base_code: int
    occurred_on: str

    kind = OperationKind.TRANSFER


@dataclass(frozen=True)
class GetAccount:
    account_id: str

    kind = OperationKind.GET_ACCOUNT


@dataclass(frozen=True)
class GetTxList:
    account_id: str

    kind = OperationKind.GET_TX_LIST


Operation = Union[InitWallet, Publish, Transfer, GetAccount, GetTxList]
