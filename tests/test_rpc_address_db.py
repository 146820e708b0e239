import threading

from scscore.rpc_address_db import RpcAddress, RpcAddressDB

H1 = bytes(32)
H2 = bytes([1]) * 32


def test_lookup_missing_is_none():
    db = RpcAddressDB()
    assert db.lookup(H1) is None


def test_add_and_lookup():
    db = RpcAddressDB()
    db.add_mapping(H1, RpcAddress("localhost:9000"))
    assert db.lookup(H1) == RpcAddress("localhost:9000")
    assert db.lookup(H2) is None


def test_mapping_is_replaced():
    db = RpcAddressDB()
    db.add_mapping(H1, RpcAddress("localhost:9000"))
    db.add_mapping(H1, RpcAddress("localhost:9001"))
    assert db.lookup(H1).addr == "localhost:9001"


def test_bytearray_key_matches_bytes():
    db = RpcAddressDB()
    db.add_mapping(bytearray(H2), RpcAddress("localhost:9002"))
    assert db.lookup(H2) == RpcAddress("localhost:9002")


def test_concurrent_adds():
    db = RpcAddressDB()
    keys = [i.to_bytes(32, "big") for i in range(50)]

    def worker(k):
        db.add_mapping(k, RpcAddress(k.hex()))

    threads = [threading.Thread(target=worker, args=(k,)) for k in keys]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert all(db.lookup(k).addr == k.hex() for k in keys)