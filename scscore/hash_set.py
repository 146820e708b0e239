"""An open-addressed set of hash entries, plus helpers for hash-set objects."""

from __future__ import annotations

import bisect
import hashlib
import threading

from .types import HashSet, HashSetEntry

_EXTRA_BUFFER = 1.2
_TOMBSTONE = object()


def _slot_hash(entry: HashSetEntry, capacity: int) -> int:
    digest = hashlib.blake2b(entry.hash, digest_size=8).digest()
    return int.from_bytes(digest, "little") % capacity


class AtomicSet:
    """Fixed-capacity linear-probing set, safe to share between threads.

    Erased slots become tombstones; inserts only fill never-used slots,
    so space freed by ``erase`` is recovered only by ``clear`` or ``resize``.
    """

    def __init__(self, max_capacity: int) -> None:
        self._lock = threading.Lock()
        self._capacity = int(max_capacity * _EXTRA_BUFFER)
        self._slots: list = [None] * self._capacity
        self._filled = 0

    def resize(self, new_capacity: int) -> None:
        """Grow to hold ``new_capacity`` entries; drops the contents when it grows."""
        new_alloc = int(new_capacity * _EXTRA_BUFFER)
        with self._lock:
            if new_alloc < self._capacity:
                return
            self._capacity = new_alloc
            self._slots = [None] * new_alloc
            self._filled = 0

    def clear(self) -> None:
        with self._lock:
            self._slots = [None] * self._capacity
            self._filled = 0

    def _probe(self, entry: HashSetEntry):
        start = _slot_hash(entry, self._capacity)
        yield from range(start, self._capacity)
        yield from range(start)

    def try_insert(self, entry: HashSetEntry) -> bool:
        """Insert ``entry``; False if it is already present or there is no room."""
        with self._lock:
            if self._filled >= self._capacity:
                return False
            for idx in self._probe(entry):
                current = self._slots[idx]
                if current is None:
                    self._slots[idx] = entry
                    self._filled += 1
                    return True
                if current is not _TOMBSTONE and current == entry:
                    return False
            return False

    def erase(self, entry: HashSetEntry) -> None:
        """Remove ``entry``; raises KeyError if it is not present."""
        with self._lock:
            if self._capacity == 0:
                raise KeyError("deletion failed to find element")
            for idx in self._probe(entry):
                current = self._slots[idx]
                if current is None:
                    raise KeyError("deletion failed to find element")
                if current is not _TOMBSTONE and current == entry:
                    self._slots[idx] = _TOMBSTONE
                    self._filled -= 1
                    return
            raise KeyError("deletion failed after complete scan")

    def get_hashes(self) -> list[HashSetEntry]:
        """Return the stored entries in slot order."""
        with self._lock:
            return [
                s for s in self._slots if s is not None and s is not _TOMBSTONE
            ]


def normalize_hashset(hs: HashSet) -> None:
    """Sort the entries of ``hs`` in descending order."""
    hs.hashes.sort(reverse=True)


def clear_hashset(hs: HashSet, threshold: int) -> None:
    """Drop every entry whose index is at most ``threshold``.

    ``hs`` must already be normalized.
    """
    cut = bisect.bisect_left(hs.hashes, -threshold, key=lambda e: -e.index)
    del hs.hashes[cut:]