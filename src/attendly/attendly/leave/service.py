from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Sequence

from ..common.datetime_utils import now_local
from ..common.validators import parse_enum, require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import REVIEWER_ROLES, LeaveType, RequestStatus, Role
from ..core.exceptions import (
    AuthorizationError,
    EmployeeNotFound,
    InvalidStatusTransition,
    LeaveRequestNotFound,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

DECISIONS = frozenset({RequestStatus.APPROVED, RequestStatus.REJECTED})


class LeaveService:
    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    def submit_leave(
        self,
        *,
        employee_id: int,
        start_date: date,
        end_date: date,
        reason: str,
        leave_type: LeaveType | str = LeaveType.ANNUAL,
        now: datetime | None = None,
    ) -> LeaveRequest:
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFound()
        if end_date < start_date:
            raise ValidationError("End date must be on or after start date")

        reason = require_non_empty(reason, "Reason")
        leave_type = parse_enum(LeaveType, leave_type, "Leave type")

        created = self._leaves.create(
            employee_id=int(employee_id),
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            leave_type=leave_type,
            created_at=now or now_local(),
        )
        logger.info("Leave request #%s submitted by employee %s", created.request_id, employee_id)
        return created

    def decide_leave(
        self,
        *,
        current_role: Role,
        decided_by: int,
        request_id: int,
        status: RequestStatus | str,
        now: datetime | None = None,
    ) -> LeaveRequest:
        if current_role not in REVIEWER_ROLES:
            raise AuthorizationError("You do not have permission to review leave requests")

        status = parse_enum(RequestStatus, status, "Status")
        if status not in DECISIONS:
            raise ValidationError("Status must be approved or rejected")

        req = self._leaves.get(int(request_id))
        if not req:
            raise LeaveRequestNotFound()
        if req.status != RequestStatus.PENDING:
            raise InvalidStatusTransition(f"Leave request has already been {req.status.value}")

        decided = self._leaves.decide(
            request_id=req.request_id,
            status=status,
            decided_by=int(decided_by),
            decided_at=now or now_local(),
            expected_version=req.version,
        )
        if not decided:
            raise LeaveRequestNotFound()
        logger.info("Leave request #%s %s by %s", req.request_id, status.value, decided_by)
        return decided

    def list_for_employee(self, employee_id: int, *, limit: int = DEFAULT_LIST_LIMIT) -> Sequence[LeaveRequest]:
        return self._leaves.list_requests(employee_id=int(employee_id), limit=limit)

    def list_all(
        self,
        *,
        current_role: Role,
        status: RequestStatus | str | None = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[LeaveRequest]:
        if current_role not in REVIEWER_ROLES:
            raise AuthorizationError("You do not have permission to view all leave requests")
        if status is not None:
            status = parse_enum(RequestStatus, status, "Status")
        return self._leaves.list_requests(status=status, limit=limit)
