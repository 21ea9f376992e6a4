import threading
from datetime import datetime, timezone

import pytest

from src.attendly.attendly.attendance.service import AttendanceService, format_duration, worked_minutes
from src.attendly.attendly.core.enums import AttendanceState, CyclePolicy, Role
from src.attendly.attendly.core.exceptions import (
    AlreadyCheckedIn,
    AuthorizationError,
    CycleComplete,
    EmployeeNotFound,
    NoActiveCheckIn,
)

MORNING = datetime(2025, 1, 6, 9, 0)
EVENING = datetime(2025, 1, 6, 17, 30)


def test_full_day_cycle(container, employee):
    service = container.attendance_service

    assert service.status_for_today(employee.employee_id, now=MORNING) == AttendanceState.NOT_CHECKED_IN

    service.check_in(employee.employee_id, now=MORNING)
    assert service.status_for_today(employee.employee_id, now=MORNING) == AttendanceState.CHECKED_IN

    record = service.check_out(employee.employee_id, now=EVENING)
    assert record.check_in == MORNING
    assert record.check_out == EVENING
    assert service.status_for_today(employee.employee_id, now=EVENING) == AttendanceState.CHECKED_OUT

    ui = service.to_ui(record)
    assert ui["worked_minutes"] == 510
    assert ui["duration"] == "8h 30m"


def test_second_check_in_while_open_is_rejected(container, employee):
    service = container.attendance_service
    service.check_in(employee.employee_id, now=MORNING)

    with pytest.raises(AlreadyCheckedIn):
        service.check_in(employee.employee_id, now=datetime(2025, 1, 6, 9, 5))

    assert len(service.list_for_employee(employee.employee_id)) == 1


def test_check_out_without_check_in_is_rejected(container, employee):
    with pytest.raises(NoActiveCheckIn):
        container.attendance_service.check_out(employee.employee_id, now=EVENING)


def test_check_out_of_yesterday_does_not_close_today(container, employee):
    service = container.attendance_service
    service.check_in(employee.employee_id, now=datetime(2025, 1, 5, 22, 0))

    with pytest.raises(NoActiveCheckIn):
        service.check_out(employee.employee_id, now=datetime(2025, 1, 6, 6, 0))


def test_strict_policy_allows_one_cycle_per_day(container, employee):
    service = container.attendance_service
    service.check_in(employee.employee_id, now=MORNING)
    service.check_out(employee.employee_id, now=EVENING)

    with pytest.raises(CycleComplete):
        service.check_in(employee.employee_id, now=datetime(2025, 1, 6, 18, 0))

    # next day starts a new cycle
    service.check_in(employee.employee_id, now=datetime(2025, 1, 7, 9, 0))


def test_multiple_policy_allows_new_cycle_after_check_out(container, employee):
    service = AttendanceService(
        container.attendance_repo, container.employees_repo, policy=CyclePolicy.MULTIPLE
    )
    service.check_in(employee.employee_id, now=MORNING)
    service.check_out(employee.employee_id, now=datetime(2025, 1, 6, 12, 0))

    second = service.check_in(employee.employee_id, now=datetime(2025, 1, 6, 13, 0))

    assert second.is_open
    assert service.status_for_today(employee.employee_id, now=EVENING) == AttendanceState.CHECKED_IN
    with pytest.raises(AlreadyCheckedIn):
        service.check_in(employee.employee_id, now=EVENING)


def test_check_in_unknown_employee(container):
    with pytest.raises(EmployeeNotFound):
        container.attendance_service.check_in(999, now=MORNING)


def test_admin_override_records_audit_fields(container, admin, employee):
    service = container.attendance_service
    service.check_in(employee.employee_id, now=datetime(2025, 1, 6, 9, 20))

    record = service.admin_override(
        current_role=Role.ADMIN,
        admin_id=admin.employee_id,
        employee_id=employee.employee_id,
        field="check_in",
        timestamp=MORNING,
        now=datetime(2025, 1, 6, 10, 0),
    )

    assert record.check_in == MORNING
    assert record.is_admin_override
    assert record.modified_by == admin.employee_id
    assert record.modified_at == datetime(2025, 1, 6, 10, 0)
    assert len(service.list_for_employee(employee.employee_id)) == 1


def test_admin_override_creates_missing_record(container, admin, employee):
    record = container.attendance_service.admin_override(
        current_role=Role.ADMIN,
        admin_id=admin.employee_id,
        employee_id=employee.employee_id,
        field="check_out",
        timestamp=EVENING,
        now=EVENING,
    )

    assert record.check_in is None
    assert record.check_out == EVENING
    assert record.work_date == EVENING.date()


@pytest.mark.parametrize("role", [Role.EMPLOYEE, Role.HR, Role.MANAGER])
def test_admin_override_requires_admin(container, employee, role):
    with pytest.raises(AuthorizationError):
        container.attendance_service.admin_override(
            current_role=role,
            admin_id=employee.employee_id,
            employee_id=employee.employee_id,
            field="check_in",
            timestamp=MORNING,
            now=MORNING,
        )


def test_list_all_is_for_reviewers(container, employee):
    container.attendance_service.check_in(employee.employee_id, now=MORNING)

    assert len(container.attendance_service.list_all(current_role=Role.MANAGER)) == 1
    with pytest.raises(AuthorizationError):
        container.attendance_service.list_all(current_role=Role.EMPLOYEE)


def test_history_is_newest_first(container, employee):
    service = container.attendance_service
    for day in (6, 7, 8):
        service.check_in(employee.employee_id, now=datetime(2025, 1, day, 9, 0))

    history = service.get_history_ui(employee.employee_id, limit=2)

    assert [h["date"] for h in history] == ["2025-01-08", "2025-01-07"]


def test_duration_helpers():
    assert format_duration(45) == "45m"
    assert format_duration(61) == "1h 1m"


def test_admin_override_with_utc_timestamp_stays_comparable(container, admin, employee):
    service = container.attendance_service
    service.check_in(employee.employee_id, now=MORNING)
    utc_evening = datetime(2025, 1, 6, 17, 30, tzinfo=timezone.utc)

    record = service.admin_override(
        current_role=Role.ADMIN,
        admin_id=admin.employee_id,
        employee_id=employee.employee_id,
        field="check_out",
        timestamp=utc_evening,
        now=EVENING,
    )

    assert record.check_out.tzinfo is None
    assert record.check_out == utc_evening.astimezone().replace(tzinfo=None)
    assert service.to_ui(record)["worked_minutes"] == worked_minutes(record)
    assert service.get_history_ui(employee.employee_id)[0]["id"] == record.attendance_id


def test_concurrent_check_ins_leave_one_open_record(container, employee):
    service = container.attendance_service
    start = threading.Barrier(8)
    errors = []

    def worker():
        start.wait()
        try:
            service.check_in(employee.employee_id, now=MORNING)
        except AlreadyCheckedIn as exc:
            errors.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    records = service.list_for_employee(employee.employee_id)
    assert len(records) == 1
    assert records[0].is_open
    assert len(errors) == 7
