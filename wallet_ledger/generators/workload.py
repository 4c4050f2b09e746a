"""Workload generator producing ledger invocations."""

import random
from dataclasses import dataclass
from typing import Iterator

from wallet_ledger.generators.base import BaseGenerator
from wallet_ledger.models.enums import TRANSFER_BASE_CODES, OperationKind


@dataclass(frozen=True)
class Invocation:
    """A text invocation: function name plus string arguments."""

    function: str
    args: list[str]

    def to_args(self) -> list[str]:
        """Return the ``{"Args": [...]}`` vector form."""
        return [self.function, *self.args]


class WorkloadGenerator(BaseGenerator):
    """Generate realistic sequences of wallet operations.

    A workload initializes every wallet, funds each one with a publish, then
    mixes transfers (most), further publishes and balance queries. Some
    transfers deliberately exceed the source balance.
    """

    OPERATION_WEIGHTS = {
        OperationKind.TRANSFER: 0.75,
        OperationKind.PUBLISH: 0.15,
        OperationKind.GET_ACCOUNT: 0.10,
    }

    def __init__(
        self,
        seed: int | None = None,
        max_amount: int = 10_000,
        locale: str = "en_US",
    ) -> None:
        super().__init__(seed, locale=locale)
        self.max_amount = max_amount

    def wallet_id(self) -> str:
        """Return a new unique wallet identifier."""
        return self.fake.unique.numerify("wallet-######")

    def issuer_id(self) -> str:
        """Return an issuer name recorded as publish counterparty."""
        return self.fake.user_name()

    def date(self) -> str:
        """Return a ``YYYYMMDD`` date string."""
        return self.fake.date_between(start_date="-2y", end_date="today").strftime("%Y%m%d")

    def amount(self) -> int:
        return random.randint(0, self.max_amount)

    def generate(self, num_wallets: int, num_operations: int) -> Iterator[Invocation]:
        """Generate a workload.

        Parameters
        ----------
        num_wallets : int
            Number of wallets to create (at least 2).
        num_operations : int
            Number of operations after the setup phase.

        Yields
        ------
        Invocation
            Invocations in execution order.
        """
        if num_wallets < 2:
            raise ValueError("A workload needs at least two wallets")

        wallets = [self.wallet_id() for _ in range(num_wallets)]
        for wallet in wallets:
            yield Invocation(OperationKind.INIT_WALLET.value, [wallet])
        for wallet in wallets:
            yield self._publish(wallet)

        kinds = list(self.OPERATION_WEIGHTS)
        weights = list(self.OPERATION_WEIGHTS.values())
        for _ in range(num_operations):
            kind = random.choices(kinds, weights=weights, k=1)[0]
            if kind is OperationKind.TRANSFER:
                source, destination = random.sample(wallets, 2)
                yield Invocation(
                    kind.value,
                    [
                        source,
                        destination,
                        str(self.amount()),
                        str(random.choice(TRANSFER_BASE_CODES).value),
                        self.date(),
                    ],
                )
            elif kind is OperationKind.PUBLISH:
                yield self._publish(random.choice(wallets))
            else:
                yield Invocation(kind.value, [random.choice(wallets)])

    def _publish(self, wallet: str) -> Invocation:
        return Invocation(
            OperationKind.PUBLISH.value,
            [wallet, self.issuer_id(), str(self.amount()), self.date()],
        )
