from datetime import datetime, timedelta

import pytest
from werkzeug.security import check_password_hash

from src.attendly.attendly.core.enums import EmployeeStatus, Role
from src.attendly.attendly.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    EmailAlreadyRegistered,
    InvalidOrExpiredCode,
    ValidationError,
)
from src.attendly.attendly.employees.model import NewEmployee

NOW = datetime(2025, 1, 6, 8, 0)


def _form(**overrides):
    data = dict(
        name="Sarah Chen",
        email="Sarah@Example.com",
        password="secret1",
        department="Design",
        designation="Designer",
    )
    data.update(overrides)
    return NewEmployee(**data)


def _code(container, admin, now=NOW):
    return container.registration_service.generate(
        current_role=Role.ADMIN, creator_id=admin.employee_id, now=now
    ).code


def test_register_consumes_code(container, admin):
    code = _code(container, admin)

    employee = container.employee_service.register(_form(), code, now=NOW)

    assert employee.email == "sarah@example.com"
    assert employee.role == Role.EMPLOYEE
    assert employee.status == EmployeeStatus.OFFLINE
    assert employee.employee_code.startswith("EMP-")
    assert check_password_hash(employee.password_hash, "secret1")
    assert not container.registration_service.is_valid(code, now=NOW)


def test_code_cannot_be_used_twice(container, admin):
    code = _code(container, admin)
    container.employee_service.register(_form(), code, now=NOW)

    with pytest.raises(InvalidOrExpiredCode):
        container.employee_service.register(_form(email="other@example.com"), code, now=NOW)


def test_expired_code_is_rejected(container, admin):
    code = _code(container, admin)

    with pytest.raises(InvalidOrExpiredCode):
        container.employee_service.register(_form(), code, now=NOW + timedelta(days=8))


def test_failed_registration_keeps_code_usable(container, admin):
    code = _code(container, admin)

    with pytest.raises(EmailAlreadyRegistered):
        container.employee_service.register(_form(email="ADMIN@example.com"), code, now=NOW)

    assert container.registration_service.is_valid(code, now=NOW)
    assert len(container.employee_service.list_all()) == 1


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": ""},
        {"email": "not-an-email"},
        {"password": "123"},
        {"department": " "},
        {"role": "superuser"},
        {"role": "admin"},
    ],
)
def test_invalid_forms_are_rejected(container, admin, overrides):
    code = _code(container, admin)

    with pytest.raises(ValidationError):
        container.employee_service.register(_form(**overrides), code, now=NOW)

    assert container.registration_service.is_valid(code, now=NOW)


@pytest.mark.parametrize("role", ["hr", "manager", "admin"])
def test_register_cannot_choose_an_elevated_role(container, admin, role):
    code = _code(container, admin)

    with pytest.raises(ValidationError):
        container.employee_service.register(_form(role=role), code, now=NOW)

    assert container.registration_service.is_valid(code, now=NOW)
    assert [e.role for e in container.employee_service.list_all()] == [Role.ADMIN]


def test_only_admin_changes_roles(container, admin, employee):
    service = container.employee_service

    with pytest.raises(AuthorizationError):
        service.change_role(current_role=Role.HR, employee_id=employee.employee_id, role="manager")

    promoted = service.change_role(current_role=Role.ADMIN, employee_id=employee.employee_id, role="Manager")
    assert promoted.role == Role.MANAGER
    assert service.get(employee.employee_id).role == Role.MANAGER
    with pytest.raises(ValidationError):
        service.change_role(current_role=Role.ADMIN, employee_id=employee.employee_id, role="owner")


def test_authenticate_checks_password_hash(container, employee):
    service = container.employee_service

    assert service.authenticate("ALEX@example.com", "secret1").employee_id == employee.employee_id
    with pytest.raises(AuthenticationError):
        service.authenticate("alex@example.com", "wrong-password")
    with pytest.raises(AuthenticationError):
        service.authenticate("nobody@example.com", "secret1")


def test_update_profile_rules(container, admin, employee):
    service = container.employee_service

    updated = service.update_profile(
        current_employee_id=employee.employee_id,
        current_role=Role.EMPLOYEE,
        employee_id=employee.employee_id,
        phone="+1 555 0100",
    )
    assert updated.phone == "+1 555 0100"

    with pytest.raises(ValidationError):
        service.update_profile(
            current_employee_id=employee.employee_id,
            current_role=Role.EMPLOYEE,
            employee_id=employee.employee_id,
            role="admin",
        )
    with pytest.raises(AuthorizationError):
        service.update_profile(
            current_employee_id=employee.employee_id,
            current_role=Role.EMPLOYEE,
            employee_id=admin.employee_id,
            name="Nope",
        )


def test_update_status(container, admin, employee):
    updated = container.employee_service.update_status(
        current_employee_id=admin.employee_id,
        current_role=Role.ADMIN,
        employee_id=employee.employee_id,
        status="Busy",
    )

    assert updated.status == EmployeeStatus.BUSY
    with pytest.raises(ValidationError):
        container.employee_service.update_status(
            current_employee_id=employee.employee_id,
            current_role=Role.EMPLOYEE,
            employee_id=employee.employee_id,
            status="sleeping",
        )
