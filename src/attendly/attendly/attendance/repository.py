from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import date_from_str, date_to_str, datetime_from_str, datetime_to_str
from ..storage.record_store import RecordKind, RecordStore
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_for_employee_and_date(self, employee_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        """Records of one employee on one day, oldest first."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: Optional[datetime],
        check_out: Optional[datetime] = None,
        modified_by: Optional[int] = None,
        modified_at: Optional[datetime] = None,
        is_admin_override: bool = False,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update(self, attendance_id: int, **fields) -> Optional[AttendanceRecord]:
        raise NotImplementedError


def _from_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["id"]),
        employee_id=int(r["employeeId"]),
        work_date=date_from_str(r["date"]),
        check_in=datetime_from_str(r.get("checkIn")),
        check_out=datetime_from_str(r.get("checkOut")),
        modified_by=r.get("modifiedBy"),
        modified_at=datetime_from_str(r.get("modifiedAt")),
        is_admin_override=bool(r.get("isAdminOverride")),
    )


_FIELD_KEYS = {
    "employee_id": "employeeId",
    "work_date": "date",
    "check_in": "checkIn",
    "check_out": "checkOut",
    "modified_by": "modifiedBy",
    "modified_at": "modifiedAt",
    "is_admin_override": "isAdminOverride",
}


def _to_patch(fields: dict) -> dict:
    patch = {}
    for key, value in fields.items():
        if isinstance(value, datetime):
            value = datetime_to_str(value)
        elif isinstance(value, date):
            value = date_to_str(value)
        patch[_FIELD_KEYS[key]] = value
    return patch


def _sort_key(rec: AttendanceRecord):
    return rec.work_date, rec.check_in or rec.check_out or datetime.min, rec.attendance_id


class StoreAttendanceRepository(AttendanceRepository):
    """Attendance records in the ``mockAttendanceData`` collection."""

    def __init__(self, store: RecordStore):
        self._store = store

    def _all(self) -> list[AttendanceRecord]:
        return [_from_record(r) for r in self._store.get_all(RecordKind.ATTENDANCE)]

    def list_for_employee_and_date(self, employee_id: int, work_date: date) -> Sequence[AttendanceRecord]:
        rows = [r for r in self._all() if r.employee_id == int(employee_id) and r.work_date == work_date]
        rows.sort(key=_sort_key)
        return rows

    def list_for_employee(self, employee_id: int, limit: int) -> Sequence[AttendanceRecord]:
        rows = [r for r in self._all() if r.employee_id == int(employee_id)]
        rows.sort(key=_sort_key, reverse=True)
        return rows[: int(limit)]

    def list_all(self, limit: int) -> Sequence[AttendanceRecord]:
        rows = self._all()
        rows.sort(key=_sort_key, reverse=True)
        return rows[: int(limit)]

    def create(
        self,
        *,
        employee_id: int,
        work_date: date,
        check_in: Optional[datetime],
        check_out: Optional[datetime] = None,
        modified_by: Optional[int] = None,
        modified_at: Optional[datetime] = None,
        is_admin_override: bool = False,
    ) -> AttendanceRecord:
        stored = self._store.append(
            RecordKind.ATTENDANCE,
            _to_patch(
                dict(
                    employee_id=int(employee_id),
                    work_date=work_date,
                    check_in=check_in,
                    check_out=check_out,
                    modified_by=modified_by,
                    modified_at=modified_at,
                    is_admin_override=is_admin_override,
                )
            ),
        )
        return _from_record(stored)

    def update(self, attendance_id: int, **fields) -> Optional[AttendanceRecord]:
        r = self._store.update_by_id(RecordKind.ATTENDANCE, int(attendance_id), _to_patch(fields))
        return _from_record(r) if r else None
