"""Building a fresh stored object from the type a round of deltas agreed on."""

from __future__ import annotations

import copy

from .types import (
    START_HASH_SET_SIZE,
    HashSet,
    ObjectType,
    StorageDeltaClass,
    StorageObject,
)


def object_from_delta_class(
    dc: StorageDeltaClass, prev_object: StorageObject | None
) -> StorageObject:
    """Return the base object for ``dc``, carrying state over from ``prev_object``.

    Raises ValueError if ``prev_object`` has a different type.
    """
    if prev_object is not None and prev_object.type != dc.type:
        raise ValueError("type mismatch in object_from_delta_class")

    out = StorageObject(dc.type)
    if dc.type is ObjectType.RAW_MEMORY:
        out.data = dc.data
    elif dc.type is ObjectType.NONNEGATIVE_INT64:
        out.nonnegative_int64 = dc.nonnegative_int64
    elif dc.type is ObjectType.HASH_SET:
        if prev_object is not None:
            out.hash_set = HashSet(
                hashes=copy.copy(prev_object.hash_set.hashes),
                max_size=prev_object.hash_set.max_size,
            )
        else:
            out.hash_set = HashSet(max_size=START_HASH_SET_SIZE)
    elif dc.type is ObjectType.KNOWN_SUPPLY_ASSET:
        if prev_object is not None:
            out.asset_amount = prev_object.asset_amount
    else:
        raise ValueError(f"unsupported object type {dc.type}")
    return out