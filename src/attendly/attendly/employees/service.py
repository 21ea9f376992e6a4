from __future__ import annotations

import logging
from contextlib import nullcontext
from datetime import datetime
from typing import Callable, ContextManager, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import now_local
from ..common.validators import parse_enum, require_email, require_min_length, require_non_empty
from ..core.constants import EMPLOYEE_CODE_PREFIX
from ..core.enums import EmployeeStatus, Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    EmailAlreadyRegistered,
    EmployeeNotFound,
    InvalidOrExpiredCode,
    ValidationError,
)
from ..registration.service import RegistrationCodeService
from .model import Employee, NewEmployee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

PROFILE_FIELDS = frozenset(
    {"name", "department", "designation", "phone", "address", "avatar_url", "organization_logo"}
)


class EmployeeService:
    """Use case: register and maintain employees."""

    def __init__(
        self,
        employees: EmployeeRepository,
        codes: RegistrationCodeService,
        *,
        transaction: Optional[Callable[[], ContextManager]] = None,
    ):
        self._employees = employees
        self._codes = codes
        self._transaction = transaction or nullcontext

    def _next_employee_code(self, now: datetime) -> str:
        seq = int(now.timestamp() * 1000) % 1_000_000
        while True:
            code = f"{EMPLOYEE_CODE_PREFIX}{seq:06d}"
            if not self._employees.get_by_code(code):
                return code
            seq = (seq + 1) % 1_000_000

    def _create(self, data: NewEmployee, *, now: datetime) -> Employee:
        name = require_non_empty(data.name, "Name")
        email = require_email(data.email)
        department = require_non_empty(data.department, "Department")
        designation = (data.designation or "").strip()
        require_min_length(data.password, "Password", 6)
        role = parse_enum(Role, data.role, "Role")

        if self._employees.get_by_email(email):
            raise EmailAlreadyRegistered()

        return self._employees.create(
            employee_code=self._next_employee_code(now),
            name=name,
            email=email,
            department=department,
            designation=designation,
            role=role,
            password_hash=generate_password_hash(data.password),
            status=EmployeeStatus.OFFLINE,
            created_at=now,
            avatar_url=data.avatar_url,
        )

    def register(self, data: NewEmployee, registration_code: str, *, now: datetime | None = None) -> Employee:
        """Self-registration; always creates an ``employee``. Admins promote later."""

        if parse_enum(Role, data.role, "Role") != Role.EMPLOYEE:
            raise ValidationError("New accounts are created with the employee role")

        now = now or now_local()
        with self._transaction():
            if not self._codes.is_valid(registration_code, now=now):
                raise InvalidOrExpiredCode()

            employee = self._create(data, now=now)
            self._codes.consume(registration_code)

        logger.info("Employee %s (%s) registered", employee.employee_code, employee.email)
        return employee

    def seed_admin(self, data: NewEmployee, *, now: datetime | None = None) -> Employee:
        """Create the first admin without a registration code (bootstrap only)."""

        existing = self._employees.get_by_email(data.email)
        if existing:
            return existing
        employee = self._create(
            NewEmployee(
                name=data.name,
                email=data.email,
                password=data.password,
                department=data.department,
                designation=data.designation,
                role=Role.ADMIN,
                avatar_url=data.avatar_url,
            ),
            now=now or now_local(),
        )
        logger.info("Admin %s seeded", employee.email)
        return employee

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise EmployeeNotFound()
        return employee

    def list_all(self) -> Sequence[Employee]:
        return self._employees.list_all()

    @staticmethod
    def _require_self_or_admin(*, current_employee_id: int, current_role: Role, employee_id: int) -> None:
        if current_role != Role.ADMIN and int(current_employee_id) != int(employee_id):
            raise AuthorizationError("You can only change your own profile")

    def update_status(
        self,
        *,
        current_employee_id: int,
        current_role: Role,
        employee_id: int,
        status: EmployeeStatus | str,
    ) -> Employee:
        self._require_self_or_admin(
            current_employee_id=current_employee_id, current_role=current_role, employee_id=employee_id
        )
        new_status = parse_enum(EmployeeStatus, status, "Status")
        self.get(employee_id)

        updated = self._employees.update(int(employee_id), status=new_status)
        if not updated:
            raise EmployeeNotFound()
        return updated

    def update_profile(
        self,
        *,
        current_employee_id: int,
        current_role: Role,
        employee_id: int,
        **fields,
    ) -> Employee:
        self._require_self_or_admin(
            current_employee_id=current_employee_id, current_role=current_role, employee_id=employee_id
        )

        unknown = set(fields) - PROFILE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be changed: {', '.join(sorted(unknown))}")
        if "name" in fields:
            fields["name"] = require_non_empty(fields["name"], "Name")
        if "department" in fields:
            fields["department"] = require_non_empty(fields["department"], "Department")

        self.get(employee_id)
        if not fields:
            return self.get(employee_id)

        updated = self._employees.update(int(employee_id), **fields)
        if not updated:
            raise EmployeeNotFound()
        return updated

    def change_role(self, *, current_role: Role, employee_id: int, role: Role | str) -> Employee:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can change roles")

        new_role = parse_enum(Role, role, "Role")
        employee = self.get(employee_id)
        if employee.role == new_role:
            return employee

        updated = self._employees.update(int(employee_id), role=new_role)
        if not updated:
            raise EmployeeNotFound()
        logger.info("Employee %s role changed %s -> %s", employee.employee_code, employee.role.value, new_role.value)
        return updated

    def authenticate(self, email: str, password: str) -> Employee:
        """Check credentials for the sign-in provider; sessions are not kept here."""

        employee = self._employees.get_by_email(email)
        if not employee:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except ValueError:
            # unknown hash method, e.g. imported placeholder values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")
        return employee
