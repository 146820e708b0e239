"""Registry mapping contract hashes to remote call addresses."""

from __future__ import annotations

import threading
from dataclasses import dataclass


@dataclass(frozen=True)
class RpcAddress:
    addr: str


class RpcAddressDB:
    """Thread-safe map from a hash to the address serving calls for it."""

    def __init__(self) -> None:
        self._db: dict[bytes, RpcAddress] = {}
        self._lock = threading.Lock()

    def add_mapping(self, h: bytes, addr: RpcAddress) -> None:
        """Register ``addr`` for ``h``, replacing any earlier mapping."""
        with self._lock:
            self._db[bytes(h)] = addr

    def lookup(self, h: bytes) -> RpcAddress | None:
        """Return the address registered for ``h``, or None."""
        with self._lock:
            return self._db.get(bytes(h))