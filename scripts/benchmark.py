#!/usr/bin/env python3
"""Benchmark ledger throughput on a generated workload.

Measures:
- Workload generation rate (invocations/sec)
- Ledger invocation rate per operation kind
- Supply check: total balance equals total published amount

Usage:
    python scripts/benchmark.py
    python scripts/benchmark.py --wallets 500 --operations 50000
    python scripts/benchmark.py --store postgres
"""

import argparse
import logging
import sys
import time
from collections import Counter
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from wallet_ledger.config import LedgerConfig
from wallet_ledger.factory import create_ledger
from wallet_ledger.generators import Invocation, WorkloadGenerator
from wallet_ledger.ledger import WalletLedger
from wallet_ledger.models.enums import OperationKind, StoreBackend

logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def benchmark_generation(num_wallets: int, num_operations: int, seed: int) -> list[Invocation]:
    """Generate a workload and report the generation rate.

    Parameters
    ----------
    num_wallets : int
        Number of wallets in the workload.
    num_operations : int
        Number of operations after setup.
    seed : int
        Random seed.

    Returns
    -------
    list[Invocation]
        Generated invocations.
    """
    t0 = time.perf_counter()
    invocations = list(WorkloadGenerator(seed=seed).generate(num_wallets, num_operations))
    elapsed = time.perf_counter() - t0
    print(f"Generated {len(invocations)} invocations in {elapsed:.2f}s "
          f"({len(invocations) / elapsed:,.0f}/sec)")
    return invocations


def benchmark_ledger(ledger: WalletLedger, invocations: list[Invocation]) -> None:
    """Run invocations and report per-kind throughput and failures."""
    durations: Counter[str] = Counter()
    counts: Counter[str] = Counter()
    failures: Counter[str] = Counter()
    published = 0
    wallets: set[str] = set()

    for invocation in invocations:
        t0 = time.perf_counter()
        response = ledger.invoke(invocation.function, invocation.args)
        durations[invocation.function] += time.perf_counter() - t0
        counts[invocation.function] += 1
        if not response.ok:
            failures[f"{invocation.function}:{response.error_kind}"] += 1
            continue
        if invocation.function == OperationKind.INIT_WALLET.value:
            wallets.add(invocation.args[0])
        elif invocation.function == OperationKind.PUBLISH.value:
            published += int(invocation.args[2])

    print("-" * 60)
    print(f"{'operation':<15}{'count':>10}{'ops/sec':>15}")
    for function, count in counts.items():
        rate = count / durations[function] if durations[function] > 0 else 0.0
        print(f"{function:<15}{count:>10}{rate:>15,.0f}")

    if failures:
        print("Failures:")
        for key, count in failures.most_common():
            print(f"  {key}: {count}")

    total = sum(int(ledger.get_account(wallet)) for wallet in wallets)
    status = "OK" if total == published else "MISMATCH"
    print(f"Supply check [{status}]: balances={total} published={published}")


def main() -> None:
    """Run benchmarks."""
    parser = argparse.ArgumentParser(description="Benchmark wallet-ledger")
    parser.add_argument("--wallets", type=int, default=100, help="Number of wallets")
    parser.add_argument("--operations", type=int, default=10_000, help="Operations after setup")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument(
        "--store",
        choices=[b.value for b in StoreBackend],
        default=StoreBackend.MEMORY.value,
        help="Store backend",
    )
    args = parser.parse_args()

    config = LedgerConfig.from_env()
    config.store_backend = StoreBackend(args.store)

    print("=" * 60)
    print(f"wallet-ledger benchmark: wallets={args.wallets} operations={args.operations} "
          f"store={args.store}")
    print("=" * 60)

    invocations = benchmark_generation(args.wallets, args.operations, args.seed)
    ledger = create_ledger(config)
    try:
        benchmark_ledger(ledger, invocations)
    finally:
        ledger.store.close()


if __name__ == "__main__":
    main()
