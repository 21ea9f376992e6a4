from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import datetime_from_str, datetime_to_str
from ..storage.record_store import RecordKind, RecordStore
from .model import RegistrationCode


class RegistrationCodeRepository(Protocol):
    def get_by_code(self, code: str) -> Optional[RegistrationCode]:
        raise NotImplementedError

    def list_all(self) -> Sequence[RegistrationCode]:
        raise NotImplementedError

    def create(
        self,
        *,
        code: str,
        expiry_date: datetime,
        created_by: Optional[int],
        created_at: datetime,
    ) -> RegistrationCode:
        raise NotImplementedError

    def mark_used(self, *, code_id: int) -> Optional[RegistrationCode]:
        raise NotImplementedError


def _from_record(r: dict) -> RegistrationCode:
    return RegistrationCode(
        code_id=int(r["id"]),
        code=r["code"],
        expiry_date=datetime_from_str(r["expiry_date"]),
        is_used=bool(r.get("is_used")),
        created_by=r.get("created_by"),
        created_at=datetime_from_str(r.get("created_at")),
    )


class StoreRegistrationCodeRepository(RegistrationCodeRepository):
    def __init__(self, store: RecordStore):
        self._store = store

    def get_by_code(self, code: str) -> Optional[RegistrationCode]:
        wanted = (code or "").strip().upper()
        for r in self._store.get_all(RecordKind.REGISTRATION_CODES):
            if r.get("code") == wanted:
                return _from_record(r)
        return None

    def list_all(self) -> Sequence[RegistrationCode]:
        rows = [_from_record(r) for r in self._store.get_all(RecordKind.REGISTRATION_CODES)]
        rows.sort(key=lambda c: c.code_id, reverse=True)
        return rows

    def create(
        self,
        *,
        code: str,
        expiry_date: datetime,
        created_by: Optional[int],
        created_at: datetime,
    ) -> RegistrationCode:
        stored = self._store.append(
            RecordKind.REGISTRATION_CODES,
            {
                "code": code,
                "expiry_date": datetime_to_str(expiry_date),
                "is_used": False,
                "created_by": created_by,
                "created_at": datetime_to_str(created_at),
            },
        )
        return _from_record(stored)

    def mark_used(self, *, code_id: int) -> Optional[RegistrationCode]:
        r = self._store.update_by_id(RecordKind.REGISTRATION_CODES, int(code_id), {"is_used": True})
        return _from_record(r) if r else None
