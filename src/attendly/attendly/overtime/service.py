from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Sequence

from ..common.datetime_utils import now_local
from ..common.validators import parse_enum, require_non_empty, require_positive
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import REVIEWER_ROLES, RequestStatus, Role
from ..core.exceptions import (
    AuthorizationError,
    EmployeeNotFound,
    InvalidStatusTransition,
    OvertimeRecordNotFound,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from .model import OvertimeRecord
from .repository import OvertimeRepository

logger = logging.getLogger(__name__)

DECISIONS = frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED})


class OvertimeService:
    def __init__(self, overtime: OvertimeRepository, employees: EmployeeRepository):
        self._overtime = overtime
        self._employees = employees

    def submit_overtime(
        self,
        *,
        employee_id: int,
        work_date: date,
        hours: float,
        rate: float,
        reason: str,
        now: datetime | None = None,
    ) -> OvertimeRecord:
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFound()

        hours = require_positive(hours, "Hours")
        if hours > 24:
            raise ValidationError("Hours cannot exceed 24 for a single day")
        rate = require_positive(rate, "Rate")
        reason = require_non_empty(reason, "Reason")

        created = self._overtime.create(
            employee_id=int(employee_id),
            work_date=work_date,
            hours=hours,
            rate=rate,
            reason=reason,
            created_at=now or now_local(),
        )
        logger.info(
            "Overtime #%s submitted by employee %s (%.2fh x%.2f)", created.overtime_id, employee_id, hours, rate
        )
        return created

    def decide_overtime(
        self,
        *,
        current_role: Role,
        approver_id: int,
        overtime_id: int,
        status: RequestStatus | str,
        now: datetime | None = None,
    ) -> OvertimeRecord:
        if current_role not in REVIEWER_ROLES:
            raise AuthorizationError("You do not have permission to review overtime")

        status = parse_enum(RequestStatus, status, "Status")
        if status not in DECISIONS:
            raise ValidationError("Status must be approved or rejected")

        record = self._overtime.get(int(overtime_id))
        if not record:
            raise OvertimeRecordNotFound()
        if record.status != RequestStatus.PENDING:
            raise InvalidStatusTransition(f"Overtime has already been {record.status.value}")

        decided = self._overtime.decide(
            overtime_id=record.overtime_id,
            status=status,
            approved_by=int(approver_id),
            decided_at=now or now_local(),
            expected_version=record.version,
        )
        if not decided:
            raise OvertimeRecordNotFound()
        logger.info("Overtime #%s %s by %s", record.overtime_id, status.value, approver_id)
        return decided

    def list_for_employee(self, employee_id: int, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[OvertimeRecord]:
        return self._overtime.list_records(employee_id=int(employee_id), limit=limit)

    def list_all(
        self,
        *,
        current_role: Role,
        status: RequestStatus | str | None = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[OvertimeRecord]:
        if current_role not in REVIEWER_ROLES:
            raise AuthorizationError("You do not have permission to view all overtime")
        if status is not None:
            status = parse_enum(RequestStatus, status, "Status")
        return self._overtime.list_records(status=status, limit=limit)
