"""Core storage value types: hash-set entries, deltas and stored objects."""

from __future__ import annotations

import enum
import functools
from dataclasses import dataclass, field

HASH_LEN = 32
RAW_MEMORY_MAX_LEN = 65535
START_HASH_SET_SIZE = 64
MAX_HASH_SET_SIZE = 65535

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
UINT64_MAX = (1 << 64) - 1
UINT16_MAX = (1 << 16) - 1


@functools.total_ordering
@dataclass(frozen=True)
class HashSetEntry:
    """A hash tagged with an index; ordered by index first, then by hash."""

    hash: bytes
    index: int = 0

    def _key(self) -> tuple[int, bytes]:
        return (self.index, self.hash)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, HashSetEntry):
            return NotImplemented
        return self._key() < other._key()


@dataclass
class HashSet:
    """A bounded list of hash-set entries."""

    hashes: list[HashSetEntry] = field(default_factory=list)
    max_size: int = 0


class DeltaType(enum.Enum):
    RAW_MEMORY_WRITE = 0
    NONNEGATIVE_INT64_SET_ADD = 1
    DELETE_LAST = 2
    HASH_SET_INSERT = 3
    HASH_SET_INCREASE_LIMIT = 4
    HASH_SET_CLEAR = 5
    ASSET_OBJECT_ADD = 6


class ObjectType(enum.Enum):
    RAW_MEMORY = 0
    NONNEGATIVE_INT64 = 1
    HASH_SET = 2
    KNOWN_SUPPLY_ASSET = 3


@dataclass(frozen=True)
class StorageDelta:
    """A single modification to a stored object.

    Only the fields belonging to ``type`` carry meaning.
    """

    type: DeltaType
    data: bytes = b""
    set_value: int = 0
    add: int = 0
    hash: HashSetEntry | None = None
    limit_increase: int = 0
    threshold: int = 0
    asset_delta: int = 0


@dataclass(frozen=True)
class StorageDeltaClass:
    """The part of a delta that concurrent deltas on one object must agree on."""

    type: ObjectType
    data: bytes = b""
    nonnegative_int64: int = 0


@dataclass
class StorageObject:
    """A stored object; only the fields belonging to ``type`` carry meaning."""

    type: ObjectType
    data: bytes = b""
    nonnegative_int64: int = 0
    hash_set: HashSet = field(default_factory=HashSet)
    asset_amount: int = 0