"""Wallet ledger: integer-balance wallets mutated by publish and transfer."""

__version__ = "0.1.0"
