"""Stored objects that accept concurrent, individually revertable deltas."""

from __future__ import annotations

import copy
import threading

from .hash_set import AtomicSet, clear_hashset, normalize_hashset
from .object_defaults import object_from_delta_class
from .revertable_base import RevertableBaseObject, Rewind
from .types import (
    INT64_MAX,
    INT64_MIN,
    MAX_HASH_SET_SIZE,
    START_HASH_SET_SIZE,
    UINT64_MAX,
    DeltaType,
    HashSetEntry,
    ObjectType,
    StorageDelta,
    StorageDeltaClass,
    StorageObject,
)


class DeltaRewind:
    """Handle on one delta accepted by ``RevertableObject.try_add_delta``.

    The delta is undone by ``revert`` (or on leaving a ``with`` block
    without committing) unless ``commit`` was called first.
    """

    def __init__(
        self, rewind_base: Rewind, delta: StorageDelta, obj: RevertableObject
    ) -> None:
        self._rewind_base = rewind_base
        self._delta = delta
        self._obj = obj
        self._pending = True

    @property
    def delta(self) -> StorageDelta:
        return self._delta

    @property
    def pending(self) -> bool:
        """True while the delta can still be committed or reverted."""
        return self._pending

    def commit(self) -> None:
        if not self._pending:
            return
        self._obj._commit_delta(self._delta)
        self._rewind_base.commit()
        self._pending = False

    def revert(self) -> None:
        if self._pending:
            self._obj._revert_delta(self._delta)
            self._pending = False
        self._rewind_base.revert()

    def __enter__(self) -> DeltaRewind:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.revert()


def _claim_for(delta: StorageDelta) -> StorageDeltaClass:
    kind = delta.type
    if kind is DeltaType.NONNEGATIVE_INT64_SET_ADD:
        return StorageDeltaClass(
            ObjectType.NONNEGATIVE_INT64, nonnegative_int64=delta.set_value
        )
    if kind is DeltaType.RAW_MEMORY_WRITE:
        return StorageDeltaClass(ObjectType.RAW_MEMORY, data=delta.data)
    if kind in (
        DeltaType.HASH_SET_INCREASE_LIMIT,
        DeltaType.HASH_SET_INSERT,
        DeltaType.HASH_SET_CLEAR,
    ):
        return StorageDeltaClass(ObjectType.HASH_SET)
    if kind is DeltaType.ASSET_OBJECT_ADD:
        return StorageDeltaClass(ObjectType.KNOWN_SUPPLY_ASSET)
    raise ValueError(f"unsupported delta type {kind}")


class RevertableObject:
    """A stored object plus the pending modifications of the current round.

    ``try_add_delta``, and committing or reverting the handles it returns,
    may run concurrently. Every handle must be committed or reverted before
    ``commit_round`` or ``rewind_round`` is called.
    """

    def __init__(self, committed_base: StorageObject | None = None) -> None:
        self._lock = threading.Lock()
        if committed_base is None:
            self._base_obj = RevertableBaseObject()
            self._new_hashes = AtomicSet(START_HASH_SET_SIZE)
            self._committed: StorageObject | None = None
        else:
            self._base_obj = RevertableBaseObject(committed_base)
            self._new_hashes = AtomicSet(0)
            self._committed = copy.deepcopy(committed_base)
            if self._committed.type is ObjectType.HASH_SET:
                self._new_hashes.resize(self._committed.hash_set.max_size)
        self._clear_mods()

    def committed_object(self) -> StorageObject | None:
        """The object as of the last committed round, or None if absent."""
        return self._committed

    def _clear_mods(self) -> None:
        with self._lock:
            self._total_subtracted = 0
            self._total_added = 0
            self._size_increase = 0
            self._new_hashes.clear()
            self._num_new_elts = 0
            self._hashset_clear_committed = False
            self._max_clear_threshold = 0
            self._delete_last_committed = False
            committed = self._committed
            if committed is not None and committed.type is ObjectType.KNOWN_SUPPLY_ASSET:
                self._available_asset = committed.asset_amount
                self._available_asset_upperbound = committed.asset_amount
            else:
                self._available_asset = 0
                self._available_asset_upperbound = 0

    def try_add_delta(self, delta: StorageDelta) -> DeltaRewind | None:
        """Tentatively apply ``delta``; None if it conflicts with this round."""
        if delta.type is DeltaType.DELETE_LAST:
            return DeltaRewind(Rewind(), delta, self)

        claim = self._base_obj.try_set(_claim_for(delta))
        if claim is None:
            return None
        if self._reserve(delta):
            return DeltaRewind(claim, delta, self)
        claim.revert()
        return None

    def _reserve(self, delta: StorageDelta) -> bool:
        kind = delta.type
        if kind is DeltaType.NONNEGATIVE_INT64_SET_ADD:
            d = delta.add
            with self._lock:
                if d >= 0:
                    self._total_added += d
                    return True
                new_value = self._total_subtracted + d
                if new_value < INT64_MIN:
                    return False
                if delta.set_value < 0 or delta.set_value + new_value < 0:
                    return False
                self._total_subtracted = new_value
                return True
        if kind is DeltaType.HASH_SET_INCREASE_LIMIT:
            with self._lock:
                self._size_increase += delta.limit_increase
            return True
        if kind is DeltaType.HASH_SET_INSERT:
            return self._reserve_insert(delta.hash)
        if kind is DeltaType.ASSET_OBJECT_ADD:
            d = delta.asset_delta
            with self._lock:
                if d < 0:
                    new_value = self._available_asset + d
                    if new_value < 0:
                        return False
                    self._available_asset = new_value
                else:
                    new_value = self._available_asset_upperbound + d
                    if new_value > UINT64_MAX:
                        return False
                    self._available_asset_upperbound = new_value
            return True
        return True

    def _reserve_insert(self, entry: HashSetEntry) -> bool:
        cur_size = 0
        max_size = START_HASH_SET_SIZE
        committed = self._committed
        if committed is not None:
            hs = committed.hash_set
            cur_size = len(hs.hashes)
            max_size = hs.max_size
            if entry in hs.hashes:
                return False

        with self._lock:
            self._num_new_elts += 1
            cur_size += self._num_new_elts

        if cur_size > max_size or not self._new_hashes.try_insert(entry):
            with self._lock:
                self._num_new_elts -= 1
            return False
        return True

    def _commit_delta(self, delta: StorageDelta) -> None:
        kind = delta.type
        with self._lock:
            if kind is DeltaType.DELETE_LAST:
                self._delete_last_committed = True
            elif kind is DeltaType.HASH_SET_CLEAR:
                self._hashset_clear_committed = True
                self._max_clear_threshold = max(
                    self._max_clear_threshold, delta.threshold
                )
            elif kind is DeltaType.ASSET_OBJECT_ADD:
                d = delta.asset_delta
                if d < 0:
                    self._available_asset_upperbound += d
                else:
                    self._available_asset += d

    def _revert_delta(self, delta: StorageDelta) -> None:
        kind = delta.type
        if kind is DeltaType.HASH_SET_INSERT:
            with self._lock:
                self._num_new_elts -= 1
            self._new_hashes.erase(delta.hash)
            return
        with self._lock:
            if kind is DeltaType.NONNEGATIVE_INT64_SET_ADD:
                d = delta.add
                if d < 0:
                    self._total_subtracted -= d
                else:
                    self._total_added -= d
            elif kind is DeltaType.HASH_SET_INCREASE_LIMIT:
                self._size_increase -= delta.limit_increase
            elif kind is DeltaType.ASSET_OBJECT_ADD:
                d = delta.asset_delta
                if d < 0:
                    self._available_asset -= d
                else:
                    self._available_asset_upperbound -= d

    def commit_round(self) -> None:
        """Fold every committed delta of the round into the stored object."""
        new_base = self._base_obj.commit_round_and_reset()
        if new_base is not None:
            self._committed = object_from_delta_class(new_base, self._committed)

        committed = self._committed
        if committed is None:
            self._clear_mods()
            return

        if self._delete_last_committed:
            self._clear_mods()
            self._committed = None
            self._base_obj.clear_required_type()
            return

        kind = committed.type
        if kind is ObjectType.NONNEGATIVE_INT64:
            value = committed.nonnegative_int64 + self._total_subtracted
            value += min(self._total_added, UINT64_MAX)
            committed.nonnegative_int64 = min(value, INT64_MAX)
        elif kind is ObjectType.HASH_SET:
            hs = committed.hash_set
            size_inc = self._size_increase
            new_size = size_inc + hs.max_size
            hs.max_size = min(MAX_HASH_SET_SIZE, new_size)

            new_entries = self._new_hashes.get_hashes()
            if size_inc > 0:
                self._new_hashes.resize(new_size)

            hs.hashes.extend(new_entries)
            normalize_hashset(hs)
            if self._hashset_clear_committed:
                clear_hashset(hs, self._max_clear_threshold)
        elif kind is ObjectType.KNOWN_SUPPLY_ASSET:
            committed.asset_amount = self._available_asset
            if committed.asset_amount != self._available_asset_upperbound:
                raise RuntimeError("asset value vs. upperbound mismatch in commit")
        elif kind is not ObjectType.RAW_MEMORY:
            raise ValueError(f"unsupported object type {kind}")
        self._clear_mods()

    def rewind_round(self) -> None:
        """Discard every modification of the round."""
        self._base_obj.rewind_round()
        self._clear_mods()