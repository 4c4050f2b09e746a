"""Synthetic workload generators."""

from wallet_ledger.generators.workload import Invocation, WorkloadGenerator

__all__ = ["Invocation", "WorkloadGenerator"]
