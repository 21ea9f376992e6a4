from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from ..core.exceptions import ConcurrentModificationError
from .record_store import ID_FIELD, VERSION_FIELD, RecordKind

logger = logging.getLogger(__name__)

_State = tuple[dict[RecordKind, dict[int, dict]], dict[RecordKind, int]]


class InMemoryRecordStore:
    """Record store kept in process memory, indexed by kind and id.

    Subclasses persist the collections by overriding ``_flush``; it is called
    once per outermost transaction (every single write is its own
    transaction).
    """

    def __init__(self, initial: Optional[dict[str, list[dict]]] = None):
        self._lock = threading.RLock()
        self._collections: dict[RecordKind, dict[int, dict]] = {kind: {} for kind in RecordKind}
        self._next_ids: dict[RecordKind, int] = {kind: 1 for kind in RecordKind}
        self._depth = 0
        if initial:
            self._load(initial)

    def _load(self, data: dict[str, list[dict]]) -> None:
        for kind in RecordKind:
            index: dict[int, dict] = {}
            for row in data.get(kind.storage_key) or []:
                record = dict(row)
                record[ID_FIELD] = int(record[ID_FIELD])
                record.setdefault(VERSION_FIELD, 1)
                index[record[ID_FIELD]] = record
            self._collections[kind] = index
            self._next_ids[kind] = max(index, default=0) + 1

    def dump(self) -> dict[str, list[dict]]:
        """Snapshot of every collection keyed by its storage key."""
        with self._lock:
            return {
                kind.storage_key: [dict(r) for r in self._collections[kind].values()]
                for kind in RecordKind
            }

    def get_all(self, kind: RecordKind) -> list[dict]:
        with self._lock:
            return [dict(r) for r in self._collections[kind].values()]

    def get_by_id(self, kind: RecordKind, record_id: int) -> Optional[dict]:
        with self._lock:
            record = self._collections[kind].get(int(record_id))
            return dict(record) if record else None

    def append(self, kind: RecordKind, record: dict) -> dict:
        with self.transaction():
            record_id = self._next_ids[kind]
            stored = dict(record)
            stored[ID_FIELD] = record_id
            stored[VERSION_FIELD] = 1
            self._collections[kind][record_id] = stored
            self._next_ids[kind] = record_id + 1
            return dict(stored)

    def update_by_id(
        self,
        kind: RecordKind,
        record_id: int,
        patch: dict,
        *,
        expected_version: Optional[int] = None,
    ) -> Optional[dict]:
        with self.transaction():
            current = self._collections[kind].get(int(record_id))
            if current is None:
                return None

            version = int(current.get(VERSION_FIELD, 1))
            if expected_version is not None and version != int(expected_version):
                raise ConcurrentModificationError(
                    f"{kind.value} #{record_id} was modified (version {version}, expected {expected_version})"
                )

            updated = {**current, **patch}
            updated[ID_FIELD] = current[ID_FIELD]
            updated[VERSION_FIELD] = version + 1
            self._collections[kind][current[ID_FIELD]] = updated
            return dict(updated)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            outermost = self._depth == 0
            snapshot = self._snapshot() if outermost else None
            self._depth += 1
            try:
                yield
                if outermost:
                    self._flush()
            except Exception:
                if snapshot is not None:
                    logger.debug("Rolling back record store transaction")
                    self._restore(snapshot)
                raise
            finally:
                self._depth -= 1

    def _snapshot(self) -> _State:
        collections = {kind: {rid: dict(r) for rid, r in index.items()} for kind, index in self._collections.items()}
        return collections, dict(self._next_ids)

    def _restore(self, state: _State) -> None:
        self._collections, self._next_ids = state

    def _flush(self) -> None:
        """Persist collections. Nothing to do for the pure in-memory store."""
