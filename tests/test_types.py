import hashlib

from scscore.types import (
    HashSet,
    HashSetEntry,
    ObjectType,
    StorageDeltaClass,
    StorageObject,
)


def hash_xdr(i):
    return hashlib.blake2b(i.to_bytes(8, "big"), digest_size=32).digest()


def test_entries_order_by_index_first():
    low = HashSetEntry(b"\xff" * 32, 1)
    high = HashSetEntry(b"\x00" * 32, 2)
    assert low < high
    assert high > low


def test_entries_same_index_order_by_hash():
    a = HashSetEntry(b"\x00" * 32, 5)
    b = HashSetEntry(b"\x01" + b"\x00" * 31, 5)
    assert a < b
    assert sorted([b, a]) == [a, b]


def test_entry_equality_and_hashable():
    h = hash_xdr(3)
    assert HashSetEntry(h, 7) == HashSetEntry(h, 7)
    assert HashSetEntry(h, 7) != HashSetEntry(h, 8)
    assert len({HashSetEntry(h, 7), HashSetEntry(h, 7)}) == 1


def test_entry_compare_with_other_type():
    assert (HashSetEntry(b"", 0) == "x") is False


def test_hash_set_defaults_are_independent():
    a = HashSet()
    b = HashSet()
    a.hashes.append(HashSetEntry(hash_xdr(0)))
    assert b.hashes == []
    assert a.max_size == 0


def test_delta_class_equality():
    x = StorageDeltaClass(ObjectType.NONNEGATIVE_INT64, nonnegative_int64=100)
    y = StorageDeltaClass(ObjectType.NONNEGATIVE_INT64, nonnegative_int64=100)
    z = StorageDeltaClass(ObjectType.NONNEGATIVE_INT64, nonnegative_int64=101)
    assert x == y
    assert x != z
    assert x != StorageDeltaClass(ObjectType.RAW_MEMORY)


def test_storage_object_hash_sets_not_shared():
    a = StorageObject(ObjectType.HASH_SET)
    b = StorageObject(ObjectType.HASH_SET)
    a.hash_set.hashes.append(HashSetEntry(hash_xdr(1)))
    assert len(b.hash_set.hashes) == 0