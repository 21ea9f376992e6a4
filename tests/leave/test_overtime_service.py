from datetime import date

import pytest

from src.attendly.attendly.core.enums import RequestStatus, Role
from src.attendly.attendly.core.exceptions import (
    AuthorizationError,
    InvalidStatusTransition,
    OvertimeRecordNotFound,
    ValidationError,
)


def _submit(container, employee, hours=2.5, rate=1.5, reason="Deployment"):
    return container.overtime_service.submit_overtime(
        employee_id=employee.employee_id, work_date=date(2025, 1, 10), hours=hours, rate=rate, reason=reason
    )


def test_submit_and_approve(container, admin, employee):
    ot = _submit(container, employee)
    assert ot.status == RequestStatus.PENDING

    approved = container.overtime_service.decide_overtime(
        current_role=Role.ADMIN, approver_id=admin.employee_id, overtime_id=ot.overtime_id, status="approved"
    )

    assert approved.status == RequestStatus.APPROVED
    assert approved.approved_by == admin.employee_id
    with pytest.raises(InvalidStatusTransition):
        container.overtime_service.decide_overtime(
            current_role=Role.ADMIN, approver_id=admin.employee_id, overtime_id=ot.overtime_id, status="rejected"
        )


@pytest.mark.parametrize(
    "hours,rate,reason",
    [
        (0, 1.5, "x"),
        (25, 1.5, "x"),
        (2, 0, "x"),
        (2, 1.5, ""),
        ("abc", 1, "x"),
        ("nan", 1.5, "x"),
        (float("nan"), 1.5, "x"),
        ("inf", 1.5, "x"),
        (2, "nan", "x"),
        (2, float("inf"), "x"),
    ],
)
def test_submit_validation(container, employee, hours, rate, reason):
    with pytest.raises(ValidationError):
        _submit(container, employee, hours=hours, rate=rate, reason=reason)


def test_decide_requires_reviewer_and_existing_record(container, employee):
    ot = _submit(container, employee)

    with pytest.raises(AuthorizationError):
        container.overtime_service.decide_overtime(
            current_role=Role.EMPLOYEE, approver_id=employee.employee_id, overtime_id=ot.overtime_id, status="approved"
        )
    with pytest.raises(OvertimeRecordNotFound):
        container.overtime_service.decide_overtime(
            current_role=Role.HR, approver_id=1, overtime_id=999, status="approved"
        )
