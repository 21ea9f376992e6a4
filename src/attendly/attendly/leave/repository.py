from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import date_from_str, date_to_str, datetime_from_str, datetime_to_str
from ..core.enums import LeaveType, RequestStatus
from ..storage.record_store import RecordKind, RecordStore
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def get(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        """Newest first."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        reason: str,
        leave_type: LeaveType,
        created_at: datetime,
    ) -> LeaveRequest:
        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        decided_at: datetime,
        expected_version: Optional[int] = None,
    ) -> Optional[LeaveRequest]:
        raise NotImplementedError

def _from_record(r: dict) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["id"]),
        employee_id=int(r["employeeId"]),
        start_date=date_from_str(r["startDate"]),
        end_date=date_from_str(r["endDate"]),
        reason=r.get("reason") or "",
        leave_type=LeaveType(r.get("type") or LeaveType.ANNUAL.value),
        status=RequestStatus(r["status"]),
        created_at=datetime_from_str(r["createdAt"]),
        decided_by=r.get("decidedBy"),
        decided_at=datetime_from_str(r.get("decidedAt")),
        version=int(r.get("version", 1)),
    )


class StoreLeaveRepository(LeaveRepository):
    """Leave requests in the ``mockLeaveRequests`` collection."""

    def __init__(self, store: RecordStore):
        self._store = store

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        r = self._store.get_by_id(RecordKind.LEAVE, int(request_id))
        return _from_record(r) if r else None

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        rows = [_from_record(r) for r in self._store.get_all(RecordKind.LEAVE)]
        if status is not None:
            rows = [r for r in rows if r.status == status]
        if employee_id is not None:
            rows = [r for r in rows if r.employee_id == int(employee_id)]
        rows.sort(key=lambda r: (r.created_at, r.request_id), reverse=True)
        return rows[: int(limit)]

    def create(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        reason: str,
        leave_type: LeaveType,
        created_at: datetime,
    ) -> LeaveRequest:
        stored = self._store.append(
            RecordKind.LEAVE,
            {
                "employeeId": int(employee_id),
                "startDate": date_to_str(start_date),
                "endDate": date_to_str(end_date),
                "reason": reason,
                "type": leave_type.value,
                "status": RequestStatus.PENDING.value,
                "createdAt": datetime_to_str(created_at),
            },
        )
        return _from_record(stored)

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        decided_at: datetime,
        expected_version: Optional[int] = None,
    ) -> Optional[LeaveRequest]:
        r = self._store.update_by_id(
            RecordKind.LEAVE,
            int(request_id),
            {"status": status.value, "decidedBy": int(decided_by), "decidedAt": datetime_to_str(decided_at)},
            expected_version=expected_version,
        )
        return _from_record(r) if r else None
