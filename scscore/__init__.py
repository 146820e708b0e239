"""Revertable storage objects, hash sets, storage deltas, a mempool and an RPC address registry."""

__version__ = "0.1.0"