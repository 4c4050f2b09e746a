"""Tests for the workload generator."""

import pytest

from wallet_ledger.generators import Invocation, WorkloadGenerator
from wallet_ledger.ledger import WalletLedger
from wallet_ledger.models import TRANSFER_BASE_CODES, OperationKind
from wallet_ledger.operations import ARITY, parse_invocation


class TestWorkloadGenerator:
    """Tests for WorkloadGenerator."""

    def test_deterministic_with_seed(self, seed: int) -> None:
        """Test same seed produces the same workload."""
        first = list(WorkloadGenerator(seed=seed).generate(5, 50))
        second = list(WorkloadGenerator(seed=seed).generate(5, 50))

        assert first == second

    def test_setup_phase(self, seed: int) -> None:
        """Test every wallet is initialized then funded."""
        invocations = list(WorkloadGenerator(seed=seed).generate(4, 0))

        assert [i.function for i in invocations] == ["init_wallet"] * 4 + ["publish"] * 4
        wallets = [i.args[0] for i in invocations[:4]]
        assert len(set(wallets)) == 4
        assert [i.args[0] for i in invocations[4:]] == wallets

    def test_invocations_parse(self, seed: int) -> None:
        """Test generated invocations are valid ledger input."""
        for invocation in WorkloadGenerator(seed=seed).generate(3, 200):
            kind = OperationKind(invocation.function)
            assert len(invocation.args) == ARITY[kind]
            parse_invocation(invocation.function, invocation.args)

    def test_transfer_fields(self, seed: int) -> None:
        """Test transfers use distinct wallets and known base codes."""
        codes = {str(code.value) for code in TRANSFER_BASE_CODES}
        transfers = [
            i for i in WorkloadGenerator(seed=seed).generate(3, 200) if i.function == "transfer"
        ]

        assert transfers
        for transfer in transfers:
            source, destination, amount, code, date = transfer.args
            assert source != destination
            assert 0 <= int(amount) <= 10_000
            assert code in codes
            assert len(date) == 8 and date.isdigit()

    def test_max_amount(self, seed: int) -> None:
        """Test amounts respect the configured maximum."""
        generator = WorkloadGenerator(seed=seed, max_amount=7)
        for invocation in generator.generate(2, 100):
            if invocation.function in ("publish", "transfer"):
                assert int(invocation.args[2]) <= 7

    def test_requires_two_wallets(self) -> None:
        """Test a workload needs at least two wallets."""
        with pytest.raises(ValueError):
            list(WorkloadGenerator().generate(1, 10))

    def test_to_args(self) -> None:
        """Test the vector form puts the function first."""
        assert Invocation("get_account", ["1"]).to_args() == ["get_account", "1"]

    def test_workload_conserves_supply(self, ledger: WalletLedger, seed: int) -> None:
        """Test balances always sum to the total published amount."""
        published = 0
        wallets = set()
        for invocation in WorkloadGenerator(seed=seed).generate(6, 300):
            response = ledger.invoke(invocation.function, invocation.args)
            if invocation.function == "init_wallet":
                wallets.add(invocation.args[0])
            elif invocation.function == "publish":
                assert response.ok
                published += int(invocation.args[2])
            elif not response.ok:
                assert response.error_kind == "insufficient_balance"

        assert sum(int(ledger.get_account(w)) for w in wallets) == published
