"""Tentative, revertable claims on the base value of a stored object."""

from __future__ import annotations

import threading

from .types import ObjectType, StorageDeltaClass, StorageObject


class Rewind:
    """Handle on one claim made through ``RevertableBaseObject.try_set``.

    The claim is released by ``revert`` (or on leaving a ``with`` block
    without committing) unless ``commit`` was called first.
    """

    def __init__(self, obj: RevertableBaseObject | None = None, do_revert: bool = False) -> None:
        self._obj = obj
        self._do_revert = do_revert and obj is not None

    @property
    def pending(self) -> bool:
        """True while the claim can still be committed or reverted."""
        return self._do_revert

    def commit(self) -> None:
        if self._do_revert:
            self._obj._commit()
        self._do_revert = False

    def revert(self) -> None:
        if self._do_revert:
            self._obj._revert()
        self._do_revert = False

    def __enter__(self) -> Rewind:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.revert()


class RevertableBaseObject:
    """Tracks the base value that concurrent deltas on one object agree on.

    Deltas may proceed only if they name the same base value. The value is
    cleared again once every uncommitted claim on it has been reverted; once
    any claim is committed, the value is fixed for the rest of the round.
    """

    def __init__(self, obj: StorageObject | None = None) -> None:
        self._lock = threading.Lock()
        self._current: StorageDeltaClass | None = None
        self._inflight = 0
        self._finalized = False
        self.required_type: ObjectType | None = obj.type if obj is not None else None

    @property
    def current(self) -> StorageDeltaClass | None:
        """The base value claimed so far this round, if any."""
        with self._lock:
            return self._current

    def try_set(self, new_obj: StorageDeltaClass) -> Rewind | None:
        """Claim ``new_obj`` as the base value; None if it conflicts."""
        if self.required_type is not None and new_obj.type != self.required_type:
            return None
        with self._lock:
            if self._current is None:
                self._current = new_obj
                self._inflight += 1
                return Rewind(self, True)
            if self._current != new_obj:
                return None
            if self._finalized:
                return Rewind(self, False)
            self._inflight += 1
            return Rewind(self, True)

    def _commit(self) -> None:
        with self._lock:
            self._finalized = True

    def _revert(self) -> None:
        with self._lock:
            if self._finalized:
                return
            self._inflight -= 1
            if self._inflight == 0:
                self._current = None

    def _reset(self) -> StorageDeltaClass | None:
        out = self._current
        self._current = None
        self._inflight = 0
        self._finalized = False
        return out

    def commit_round_and_reset(self) -> StorageDeltaClass | None:
        """End the round, returning the agreed base value if there was one."""
        with self._lock:
            out = self._reset()
        if out is not None:
            self.required_type = out.type
        return out

    def clear_required_type(self) -> None:
        """Allow any object type again, e.g. after the object was deleted."""
        self.required_type = None

    def rewind_round(self) -> None:
        """Discard the round without changing the required type."""
        with self._lock:
            self._reset()