# scscore

Storage building blocks for a parallel smart-contract execution engine. The
package has no third-party dependencies.

## Modules

- `scscore.types` holds the data model. `HashSetEntry` is a hash with an
  index, and entries are ordered by index and then by hash. The module also
  defines `HashSet`, the enums `DeltaType` and `ObjectType`, `StorageDelta`,
  `StorageDeltaClass` and `StorageObject`, together with limits such as
  `START_HASH_SET_SIZE` and `MAX_HASH_SET_SIZE`.
- `scscore.make_delta` builds deltas and checks the ranges of their
  arguments. It provides `make_raw_memory_write`, `make_delete_last`,
  `make_nonnegative_int64_set_add`, `make_hash_set_insert`,
  `make_hash_set_insert_entry`, `make_hash_set_increase_limit`,
  `make_hash_set_clear` and `make_asset_add`. An out-of-range value raises
  `ValueError`.
- `scscore.hash_set` provides `AtomicSet`, a thread-safe linear-probing set
  of fixed capacity.
  - `try_insert` returns `False` when the entry is already there or the set
    is full.
  - `erase` leaves a tombstone in place of the entry and raises `KeyError` if
    the entry is missing.
  - `get_hashes` returns the stored entries.
  - `resize` and `clear` reset the set.

  The same module also has two helpers. `normalize_hashset` sorts the entries
  of a `HashSet` in descending order. `clear_hashset` drops every entry whose
  index is at or below a threshold.
- `scscore.object_defaults` provides `object_from_delta_class`, which builds
  a fresh `StorageObject` from a `StorageDeltaClass`. It carries hash-set
  contents and asset amounts over from the previous object, and raises
  `ValueError` if the types differ.
- `scscore.mempool` provides `Mempool`, a thread-safe FIFO queue that holds up
  to `MAX_MEMPOOL_SIZE` (2^24) transactions.
  - `add_txs` adds as many as fit and returns how many it added.
  - `get_new_tx` returns the oldest transaction, or `None`.
  - `available_size` returns the number of queued transactions.
- `scscore.revertable_base` provides `RevertableBaseObject` and its `Rewind`
  handle. Together they track the base value that concurrent deltas on one
  object must agree on.
- `scscore.revertable_object` provides `RevertableObject` and its
  `DeltaRewind` handle.
  - `try_add_delta` accepts a delta tentatively.
  - The handle that comes back is committed or reverted on its own.
  - `commit_round` folds every committed delta into the stored object.
  - `rewind_round` discards the round.
  - `committed_object()` returns the current stored object, or `None`.
- `scscore.rpc_address_db` provides `RpcAddressDB`, a thread-safe map from a
  hash to an `RpcAddress`. It has two methods, `add_mapping` and `lookup`.

## Example

```python
from scscore.make_delta import make_nonnegative_int64_set_add
from scscore.revertable_object import RevertableObject

obj = RevertableObject()

with obj.try_add_delta(make_nonnegative_int64_set_add(100, 50)) as rewind:
    rewind.commit()

obj.commit_round()
print(obj.committed_object().nonnegative_int64)  # 150
```

`try_add_delta` returns `None` when a delta conflicts with those already
accepted in the round. Otherwise it returns a `DeltaRewind`. A rewind that is
not committed is reverted when its `with` block ends or when `revert()` is
called on it.

## What is not included

The package stores objects in memory only. It does not include:

- a virtual machine or block assembly;
- persistence to disk;
- a network layer. `RpcAddressDB` records addresses but opens no connections.

## Installation and tests

```
pip install ".[test]"
pytest
```