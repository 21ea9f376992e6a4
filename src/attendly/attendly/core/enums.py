from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Employee role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"
    HR = "hr"
    MANAGER = "manager"


# Roles allowed to review requests of other employees.
REVIEWER_ROLES = frozenset({Role.ADMIN, Role.HR, Role.MANAGER})
PAYROLL_ROLES = frozenset({Role.ADMIN, Role.HR})


class EmployeeStatus(str, Enum):
    AVAILABLE = "available"
    BUSY = "busy"
    AWAY = "away"
    OFFLINE = "offline"


class RequestStatus(str, Enum):
    """Approval flow status for leave and overtime requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveType(str, Enum):
    ANNUAL = "annual"
    SICK = "sick"
    PERSONAL = "personal"
    UNPAID = "unpaid"
    OTHER = "other"


class PayrollStatus(str, Enum):
    """Monotonic: draft -> processed -> paid."""

    DRAFT = "draft"
    PROCESSED = "processed"
    PAID = "paid"


class AttendanceState(str, Enum):
    """Derived state of an employee for one calendar day."""

    NOT_CHECKED_IN = "not_checked_in"
    CHECKED_IN = "checked_in"
    CHECKED_OUT = "checked_out"


class CyclePolicy(str, Enum):
    """Whether a day allows more than one check-in/check-out cycle."""

    STRICT = "strict"
    MULTIPLE = "multiple"


class OverrideField(str, Enum):
    CHECK_IN = "check_in"
    CHECK_OUT = "check_out"
