from __future__ import annotations

import logging
from contextlib import nullcontext
from datetime import date, datetime
from typing import Callable, ContextManager, Optional, Sequence

from ..common.datetime_utils import now_local, to_local_naive
from ..common.validators import parse_enum
from ..core.constants import DEFAULT_HISTORY_LIMIT, DEFAULT_LIST_LIMIT
from ..core.enums import REVIEWER_ROLES, AttendanceState, CyclePolicy, OverrideField, Role
from ..core.exceptions import AuthorizationError, EmployeeNotFound, NoActiveCheckIn, StorageError
from ..employees.repository import EmployeeRepository
from .factory import CheckInPolicyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def worked_minutes(record: AttendanceRecord) -> int:
    """Minutes between check-in and check-out; 0 while the cycle is open."""

    if not record.check_in or not record.check_out:
        return 0
    minutes = int((record.check_out - record.check_in).total_seconds() // 60)
    return max(minutes, 0)


def format_duration(minutes: int) -> str:
    hours, mins = divmod(int(minutes), 60)
    if hours == 0:
        return f"{mins}m"
    return f"{hours}h {mins}m"


class AttendanceService:
    """Per employee, per day state machine: NoRecord -> CheckedIn -> CheckedOut."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        policy: CyclePolicy | str = CyclePolicy.STRICT,
        policy_factory: CheckInPolicyFactory | None = None,
        transaction: Optional[Callable[[], ContextManager]] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._transaction = transaction or nullcontext
        self._policy = (policy_factory or CheckInPolicyFactory()).for_policy(policy)

    def _require_employee(self, employee_id: int) -> None:
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFound()

    def _day_records(self, employee_id: int, today: date) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_employee_and_date(int(employee_id), today)

    def check_in(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        # The day is read and written in one transaction: one open record at most.
        with self._transaction():
            self._require_employee(employee_id)
            self._policy.ensure_can_check_in(self._day_records(employee_id, today))
            record = self._attendance.create(employee_id=int(employee_id), work_date=today, check_in=now)
        logger.info("Employee %s checked in at %s", employee_id, now.isoformat())
        return record

    def check_out(self, employee_id: int, *, now: datetime | None = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()

        with self._transaction():
            open_records = [r for r in self._day_records(employee_id, today) if r.is_open]
            if not open_records:
                raise NoActiveCheckIn()

            updated = self._attendance.update(open_records[-1].attendance_id, check_out=now)
            if not updated:
                raise StorageError("Check-out could not be saved")
        logger.info("Employee %s checked out at %s", employee_id, now.isoformat())
        return updated

    def admin_override(
        self,
        *,
        current_role: Role,
        admin_id: int,
        employee_id: int,
        field: OverrideField | str,
        timestamp: datetime,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        """Set check-in or check-out of today's record directly.

        Skips the state machine rules; only the employee must exist.
        """

        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can override attendance")

        field = parse_enum(OverrideField, field, "Field")
        now = now or now_local()
        today = now.date()
        timestamp = to_local_naive(timestamp)

        audit = {
            field.value: timestamp,
            "modified_by": int(admin_id),
            "modified_at": now,
            "is_admin_override": True,
        }

        with self._transaction():
            self._require_employee(employee_id)
            day_records = self._day_records(employee_id, today)
            if day_records:
                target = next((r for r in reversed(day_records) if r.is_open), day_records[-1])
                record = self._attendance.update(target.attendance_id, **audit)
                if not record:
                    raise StorageError("Attendance override could not be saved")
            else:
                check_in = timestamp if field == OverrideField.CHECK_IN else None
                check_out = timestamp if field == OverrideField.CHECK_OUT else None
                record = self._attendance.create(
                    employee_id=int(employee_id),
                    work_date=today,
                    check_in=check_in,
                    check_out=check_out,
                    modified_by=int(admin_id),
                    modified_at=now,
                    is_admin_override=True,
                )

        logger.info(
            "Admin %s set %s=%s for employee %s", admin_id, field.value, timestamp.isoformat(), employee_id
        )
        return record

    def get_today_record(self, employee_id: int, *, now: datetime | None = None) -> Optional[AttendanceRecord]:
        """The open record of today if any, otherwise the latest one."""

        day_records = self._day_records(employee_id, (now or now_local()).date())
        if not day_records:
            return None
        return next((r for r in reversed(day_records) if r.is_open), day_records[-1])

    def status_for_today(self, employee_id: int, *, now: datetime | None = None) -> AttendanceState:
        record = self.get_today_record(employee_id, now=now)
        if record is None:
            return AttendanceState.NOT_CHECKED_IN
        if record.is_open:
            return AttendanceState.CHECKED_IN
        return AttendanceState.CHECKED_OUT

    def list_for_employee(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_employee(int(employee_id), limit)

    def list_all(self, *, current_role: Role, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[AttendanceRecord]:
        if current_role not in REVIEWER_ROLES:
            raise AuthorizationError("You do not have permission to view all attendance")
        return self._attendance.list_all(limit)

    def get_history_ui(self, employee_id: int, *, limit: int = 15) -> list[dict]:
        return [self.to_ui(r) for r in self.list_for_employee(employee_id, limit=limit)]

    def to_ui(self, r: AttendanceRecord) -> dict:
        minutes = worked_minutes(r)
        return {
            "id": r.attendance_id,
            "employee_id": r.employee_id,
            "date": r.work_date.strftime("%Y-%m-%d"),
            "check_in": r.check_in.isoformat() if r.check_in else None,
            "check_out": r.check_out.isoformat() if r.check_out else None,
            "worked_minutes": minutes,
            "duration": format_duration(minutes) if r.check_out else "-",
            "is_admin_override": r.is_admin_override,
        }
