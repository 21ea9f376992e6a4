from datetime import date, datetime

import pytest

from src.attendly.attendly.core.enums import PayrollStatus, Role
from src.attendly.attendly.core.exceptions import (
    AuthorizationError,
    EmployeeNotFound,
    InvalidStatusTransition,
    PayrollRecordNotFound,
    ValidationError,
)

NOW = datetime(2025, 2, 1, 10, 0)


def _process(container, employee_id, month="January", year=2025, role=Role.HR):
    return container.payroll_service.process_payroll(
        current_role=role, employee_id=employee_id, month=month, year=year, now=NOW
    )


def _approved_overtime(container, admin, employee, hours=4, rate=1.5):
    ot = container.overtime_service.submit_overtime(
        employee_id=employee.employee_id, work_date=date(2025, 1, 15), hours=hours, rate=rate, reason="Release"
    )
    container.overtime_service.decide_overtime(
        current_role=Role.ADMIN, approver_id=admin.employee_id, overtime_id=ot.overtime_id, status="approved"
    )


def test_processing_twice_yields_the_same_record(container, employee):
    first = _process(container, employee.employee_id)
    second = _process(container, employee.employee_id, month="jan")

    assert first.status == PayrollStatus.PROCESSED
    assert second.payroll_id == first.payroll_id
    assert second.month == "January"
    assert (second.base_salary, second.bonus, second.deductions, second.net_salary) == (
        first.base_salary,
        first.bonus,
        first.deductions,
        first.net_salary,
    )
    assert len(container.payroll_service.list_for_employee(employee.employee_id)) == 1


def test_reprocessing_picks_up_newly_approved_overtime(container, admin, employee):
    first = _process(container, employee.employee_id)
    assert first.overtime_pay == 0.0

    _approved_overtime(container, admin, employee, hours=4, rate=1.5)
    second = _process(container, employee.employee_id)

    hourly = second.base_salary / 160
    assert second.payroll_id == first.payroll_id
    assert second.overtime_pay == round(4 * hourly * 1.5, 2)
    assert second.net_salary == round(first.net_salary + second.overtime_pay, 2)


def test_only_approved_overtime_of_the_month_counts(container, admin, employee):
    container.overtime_service.submit_overtime(
        employee_id=employee.employee_id, work_date=date(2025, 1, 20), hours=2, rate=2, reason="Pending"
    )
    _approved_overtime(container, admin, employee)

    feb = _process(container, employee.employee_id, month=2)
    jan = _process(container, employee.employee_id, month=1)

    assert feb.overtime_pay == 0.0
    assert jan.overtime_pay == round(4 * (jan.base_salary / 160) * 1.5, 2)


def test_mark_paid_and_paid_is_final(container, employee):
    record = _process(container, employee.employee_id)

    paid = container.payroll_service.mark_paid(current_role=Role.ADMIN, payroll_id=record.payroll_id, now=NOW)

    assert paid.status == PayrollStatus.PAID
    assert paid.payment_date == NOW
    with pytest.raises(InvalidStatusTransition):
        _process(container, employee.employee_id)
    with pytest.raises(InvalidStatusTransition):
        container.payroll_service.mark_paid(current_role=Role.ADMIN, payroll_id=record.payroll_id)


def test_draft_cannot_be_marked_paid(container, employee):
    draft = container.payroll_service.create_draft(
        current_role=Role.HR, employee_id=employee.employee_id, month="March", year=2025
    )
    assert draft.status == PayrollStatus.DRAFT

    with pytest.raises(InvalidStatusTransition):
        container.payroll_service.mark_paid(current_role=Role.HR, payroll_id=draft.payroll_id)

    processed = _process(container, employee.employee_id, month="March")
    assert processed.payroll_id == draft.payroll_id
    assert processed.status == PayrollStatus.PROCESSED


@pytest.mark.parametrize("role", [Role.EMPLOYEE, Role.MANAGER])
def test_payroll_requires_hr_or_admin(container, employee, role):
    with pytest.raises(AuthorizationError):
        _process(container, employee.employee_id, role=role)
    with pytest.raises(AuthorizationError):
        container.payroll_service.list_all(current_role=role)


def test_invalid_period_and_unknown_records(container, employee):
    with pytest.raises(ValidationError):
        _process(container, employee.employee_id, month="Smarch")
    with pytest.raises(ValidationError):
        _process(container, employee.employee_id, month=13)
    with pytest.raises(EmployeeNotFound):
        _process(container, 999)
    with pytest.raises(PayrollRecordNotFound):
        container.payroll_service.mark_paid(current_role=Role.ADMIN, payroll_id=999)
