from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import EmployeeStatus, Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object. ``employee_code`` and ``email`` are unique and
    never change after registration. ``password_hash`` is only read by
    ``EmployeeService.authenticate`` (credential check for the external
    sign-in provider) and never leaves the service layer.
    """

    employee_id: int
    employee_code: str
    name: str
    email: str
    department: str
    designation: str
    role: Role
    password_hash: str
    status: EmployeeStatus = EmployeeStatus.OFFLINE
    phone: Optional[str] = None
    address: Optional[str] = None
    avatar_url: Optional[str] = None
    organization_logo: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewEmployee:
    """Registration form data."""

    name: str
    email: str
    password: str
    department: str
    designation: str
    role: Role = Role.EMPLOYEE
    avatar_url: Optional[str] = None
