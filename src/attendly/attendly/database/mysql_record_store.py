from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

import mysql.connector

from ..core.exceptions import ConcurrentModificationError, StorageError
from ..storage.record_store import ID_FIELD, VERSION_FIELD, RecordKind
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)


def _decode_row(row: dict) -> dict:
    payload = row["payload"]
    if isinstance(payload, (bytes, bytearray)):
        payload = payload.decode("utf-8")
    record = json.loads(payload) if isinstance(payload, str) else dict(payload)
    record[ID_FIELD] = int(row["record_id"])
    record[VERSION_FIELD] = int(row["version"])
    return record


def _encode_payload(record: dict) -> str:
    body = {k: v for k, v in record.items() if k not in (ID_FIELD, VERSION_FIELD)}
    return json.dumps(body, ensure_ascii=False)


class MySQLRecordStore:
    """Record store backed by the ``records`` table (one row per record)."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._local = threading.local()

    @contextmanager
    def _cursor(self) -> Iterator:
        # Joins the open transaction of this thread, or runs in its own.
        try:
            with self.transaction():
                cur = self._local.conn.cursor(dictionary=True)
                try:
                    yield cur
                finally:
                    cur.close()
        except mysql.connector.Error as exc:
            logger.error("Record store query failed: %s", exc)
            raise StorageError("Database error") from exc

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self._in_transaction():
            yield
            return

        try:
            conn = self._conn_factory.connect()
        except mysql.connector.Error as exc:
            logger.error("Cannot connect to %s: %s", self._conn_factory.config.describe(), exc)
            raise StorageError("Database unavailable") from exc

        self._local.conn = conn
        try:
            yield
            conn.commit()
        except mysql.connector.Error as exc:
            conn.rollback()
            logger.error("Record store transaction failed: %s", exc)
            raise StorageError("Database error") from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            self._local.conn = None
            conn.close()

    def _in_transaction(self) -> bool:
        return getattr(self._local, "conn", None) is not None

    def get_all(self, kind: RecordKind) -> list[dict]:
        # Inside a transaction the read locks the whole kind (next-key locks on
        # the primary key), so check-then-insert sequences cannot interleave.
        lock = " FOR UPDATE" if self._in_transaction() else ""
        with self._cursor() as cur:
            cur.execute(
                "SELECT record_id, payload, version FROM records WHERE kind=%s ORDER BY record_id" + lock,
                (kind.value,),
            )
            return [_decode_row(r) for r in cur.fetchall()]

    def get_by_id(self, kind: RecordKind, record_id: int) -> Optional[dict]:
        lock = " FOR UPDATE" if self._in_transaction() else ""
        with self._cursor() as cur:
            cur.execute(
                "SELECT record_id, payload, version FROM records WHERE kind=%s AND record_id=%s" + lock,
                (kind.value, int(record_id)),
            )
            row = cur.fetchone()
            return _decode_row(row) if row else None

    def append(self, kind: RecordKind, record: dict) -> dict:
        with self.transaction(), self._cursor() as cur:
            cur.execute(
                "SELECT COALESCE(MAX(record_id), 0) + 1 AS next_id FROM records WHERE kind=%s FOR UPDATE",
                (kind.value,),
            )
            record_id = int(cur.fetchone()["next_id"])
            cur.execute(
                "INSERT INTO records(kind, record_id, payload, version) VALUES(%s,%s,%s,1)",
                (kind.value, record_id, _encode_payload(record)),
            )

        stored = dict(record)
        stored[ID_FIELD] = record_id
        stored[VERSION_FIELD] = 1
        return stored

    def update_by_id(
        self,
        kind: RecordKind,
        record_id: int,
        patch: dict,
        *,
        expected_version: Optional[int] = None,
    ) -> Optional[dict]:
        with self.transaction(), self._cursor() as cur:
            cur.execute(
                "SELECT record_id, payload, version FROM records WHERE kind=%s AND record_id=%s FOR UPDATE",
                (kind.value, int(record_id)),
            )
            row = cur.fetchone()
            if not row:
                return None

            current = _decode_row(row)
            version = current[VERSION_FIELD]
            if expected_version is not None and version != int(expected_version):
                raise ConcurrentModificationError(
                    f"{kind.value} #{record_id} was modified (version {version}, expected {expected_version})"
                )

            updated = {**current, **patch}
            cur.execute(
                """
                UPDATE records
                SET payload=%s, version=version+1
                WHERE kind=%s AND record_id=%s AND version=%s
                """,
                (_encode_payload(updated), kind.value, int(record_id), version),
            )
            if cur.rowcount == 0:
                raise ConcurrentModificationError(f"{kind.value} #{record_id} was modified concurrently")

        updated[ID_FIELD] = int(record_id)
        updated[VERSION_FIELD] = version + 1
        return updated
