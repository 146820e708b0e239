"""Constructors for each kind of storage delta."""

from __future__ import annotations

from .types import (
    HASH_LEN,
    INT64_MAX,
    INT64_MIN,
    RAW_MEMORY_MAX_LEN,
    UINT16_MAX,
    UINT64_MAX,
    DeltaType,
    HashSetEntry,
    StorageDelta,
)


def _check_range(name: str, value: int, low: int, high: int) -> None:
    if not low <= value <= high:
        raise ValueError(f"{name} out of range: {value}")


def make_raw_memory_write(data) -> StorageDelta:
    payload = bytes(data)
    if len(payload) > RAW_MEMORY_MAX_LEN:
        raise ValueError(f"raw memory write too long: {len(payload)} bytes")
    return StorageDelta(DeltaType.RAW_MEMORY_WRITE, data=payload)


def make_delete_last() -> StorageDelta:
    return StorageDelta(DeltaType.DELETE_LAST)


def make_nonnegative_int64_set_add(set_value: int, add: int) -> StorageDelta:
    _check_range("set_value", set_value, INT64_MIN, INT64_MAX)
    _check_range("add", add, INT64_MIN, INT64_MAX)
    return StorageDelta(
        DeltaType.NONNEGATIVE_INT64_SET_ADD, set_value=set_value, add=add
    )


def make_hash_set_insert_entry(entry: HashSetEntry) -> StorageDelta:
    if len(entry.hash) != HASH_LEN:
        raise ValueError(f"hash must be {HASH_LEN} bytes")
    _check_range("threshold", entry.index, 0, UINT64_MAX)
    return StorageDelta(DeltaType.HASH_SET_INSERT, hash=entry)


def make_hash_set_insert(h: bytes, threshold: int) -> StorageDelta:
    return make_hash_set_insert_entry(HashSetEntry(bytes(h), threshold))


def make_hash_set_increase_limit(limit: int) -> StorageDelta:
    _check_range("limit", limit, 0, UINT16_MAX)
    return StorageDelta(DeltaType.HASH_SET_INCREASE_LIMIT, limit_increase=limit)


def make_hash_set_clear(threshold: int) -> StorageDelta:
    _check_range("threshold", threshold, 0, UINT64_MAX)
    return StorageDelta(DeltaType.HASH_SET_CLEAR, threshold=threshold)


def make_asset_add(delta: int) -> StorageDelta:
    _check_range("delta", delta, INT64_MIN, INT64_MAX)
    return StorageDelta(DeltaType.ASSET_OBJECT_ADD, asset_delta=delta)