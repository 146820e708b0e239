"""A bounded first-in first-out pool of pending transactions."""

from __future__ import annotations

import itertools
import threading
from collections import deque
from collections.abc import Iterable
from typing import Any

MAX_MEMPOOL_SIZE = 1 << 24


class Mempool:
    """Thread-safe transaction queue holding at most ``max_size`` entries."""

    max_size = MAX_MEMPOOL_SIZE

    def __init__(self) -> None:
        self._queue: deque[Any] = deque()
        self._lock = threading.Lock()

    def get_new_tx(self) -> Any | None:
        """Take the oldest transaction, or None if the pool is empty."""
        with self._lock:
            return self._queue.popleft() if self._queue else None

    def available_size(self) -> int:
        with self._lock:
            return len(self._queue)

    def add_txs(self, txs: Iterable[Any]) -> int:
        """Add as many of ``txs`` as fit; return how many were added."""
        with self._lock:
            room = self.max_size - len(self._queue)
            batch = list(itertools.islice(txs, room))
            self._queue.extend(batch)
            return len(batch)