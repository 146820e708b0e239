import hashlib

import pytest

from scscore.make_delta import (
    make_asset_add,
    make_delete_last,
    make_hash_set_clear,
    make_hash_set_increase_limit,
    make_hash_set_insert,
    make_hash_set_insert_entry,
    make_nonnegative_int64_set_add,
    make_raw_memory_write,
)
from scscore.types import (
    INT64_MAX,
    RAW_MEMORY_MAX_LEN,
    UINT16_MAX,
    UINT64_MAX,
    DeltaType,
    HashSetEntry,
)


def hash_xdr(i):
    return hashlib.blake2b(i.to_bytes(8, "big"), digest_size=32).digest()


def test_raw_memory_write():
    d = make_raw_memory_write(bytearray([1, 2, 3, 4]))
    assert d.type is DeltaType.RAW_MEMORY_WRITE
    assert d.data == b"\x01\x02\x03\x04"


def test_raw_memory_write_too_long():
    with pytest.raises(ValueError):
        make_raw_memory_write(b"\x00" * (RAW_MEMORY_MAX_LEN + 1))


def test_delete_last():
    assert make_delete_last().type is DeltaType.DELETE_LAST


def test_set_add():
    d = make_nonnegative_int64_set_add(100, -50)
    assert d.type is DeltaType.NONNEGATIVE_INT64_SET_ADD
    assert (d.set_value, d.add) == (100, -50)


def test_set_add_out_of_range():
    with pytest.raises(ValueError):
        make_nonnegative_int64_set_add(INT64_MAX + 1, 0)


def test_hash_set_insert_forms_agree():
    h = hash_xdr(0)
    a = make_hash_set_insert(h, 10)
    b = make_hash_set_insert_entry(HashSetEntry(h, 10))
    assert a == b
    assert a.type is DeltaType.HASH_SET_INSERT
    assert a.hash == HashSetEntry(h, 10)


def test_hash_set_insert_bad_hash_length():
    with pytest.raises(ValueError):
        make_hash_set_insert(b"short", 0)


def test_increase_limit_bounds():
    assert make_hash_set_increase_limit(UINT16_MAX).limit_increase == UINT16_MAX
    with pytest.raises(ValueError):
        make_hash_set_increase_limit(UINT16_MAX + 1)
    with pytest.raises(ValueError):
        make_hash_set_increase_limit(-1)


def test_clear():
    d = make_hash_set_clear(UINT64_MAX)
    assert d.type is DeltaType.HASH_SET_CLEAR
    assert d.threshold == UINT64_MAX
    with pytest.raises(ValueError):
        make_hash_set_clear(-1)


def test_asset_add():
    d = make_asset_add(-10)
    assert d.type is DeltaType.ASSET_OBJECT_ADD
    assert d.asset_delta == -10