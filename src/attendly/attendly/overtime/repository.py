from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import date_from_str, date_to_str, datetime_from_str, datetime_to_str
from ..core.enums import RequestStatus
from ..storage.record_store import RecordKind, RecordStore
from .model import OvertimeRecord


class OvertimeRepository(Protocol):
    def get(self, overtime_id: int) -> Optional[OvertimeRecord]:
        raise NotImplementedError

    def list_records(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[OvertimeRecord]:
        """Newest work date first."""

        raise NotImplementedError

    def list_approved_in_month(self, *, employee_id: int, year: int, month: int) -> Sequence[OvertimeRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        hours: float,
        rate: float,
        reason: str,
        created_at: datetime,
    ) -> OvertimeRecord:
        raise NotImplementedError

    def decide(
        self,
        *,
        overtime_id: int,
        status: RequestStatus,
        approved_by: int,
        decided_at: datetime,
        expected_version: Optional[int] = None,
    ) -> Optional[OvertimeRecord]:
        raise NotImplementedError


def _from_record(r: dict) -> OvertimeRecord:
    return OvertimeRecord(
        overtime_id=int(r["id"]),
        employee_id=int(r["employeeId"]),
        work_date=date_from_str(r["date"]),
        hours=float(r["hours"]),
        rate=float(r["rate"]),
        reason=r.get("reason") or "",
        status=RequestStatus(r["status"]),
        approved_by=r.get("approvedBy"),
        decided_at=datetime_from_str(r.get("decidedAt")),
        created_at=datetime_from_str(r.get("createdAt")),
        version=int(r.get("version", 1)),
    )


class StoreOvertimeRepository(OvertimeRepository):
    """Overtime records in the ``mockOvertimeData`` collection."""

    def __init__(self, store: RecordStore):
        self._store = store

    def _all(self) -> list[OvertimeRecord]:
        return [_from_record(r) for r in self._store.get_all(RecordKind.OVERTIME)]

    def get(self, overtime_id: int) -> Optional[OvertimeRecord]:
        r = self._store.get_by_id(RecordKind.OVERTIME, int(overtime_id))
        return _from_record(r) if r else None

    def list_records(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[OvertimeRecord]:
        rows = self._all()
        if status is not None:
            rows = [r for r in rows if r.status == status]
        if employee_id is not None:
            rows = [r for r in rows if r.employee_id == int(employee_id)]
        rows.sort(key=lambda r: (r.work_date, r.overtime_id), reverse=True)
        return rows[: int(limit)]

    def list_approved_in_month(self, *, employee_id: int, year: int, month: int) -> Sequence[OvertimeRecord]:
        return [
            r
            for r in self._all()
            if r.employee_id == int(employee_id)
            and r.status == RequestStatus.APPROVED
            and r.work_date.year == int(year)
            and r.work_date.month == int(month)
        ]

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        hours: float,
        rate: float,
        reason: str,
        created_at: datetime,
    ) -> OvertimeRecord:
        stored = self._store.append(
            RecordKind.OVERTIME,
            {
                "employeeId": int(employee_id),
                "date": date_to_str(work_date),
                "hours": float(hours),
                "rate": float(rate),
                "reason": reason,
                "status": RequestStatus.PENDING.value,
                "approvedBy": None,
                "createdAt": datetime_to_str(created_at),
            },
        )
        return _from_record(stored)

    def decide(
        self,
        *,
        overtime_id: int,
        status: RequestStatus,
        approved_by: int,
        decided_at: datetime,
        expected_version: Optional[int] = None,
    ) -> Optional[OvertimeRecord]:
        r = self._store.update_by_id(
            RecordKind.OVERTIME,
            int(overtime_id),
            {"status": status.value, "approvedBy": int(approved_by), "decidedAt": datetime_to_str(decided_at)},
            expected_version=expected_version,
        )
        return _from_record(r) if r else None
