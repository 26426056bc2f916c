"""Wallet client logic for an ACT blockchain node: RPC commands, workers, token history and transfer checks."""

__version__ = "0.1.0"