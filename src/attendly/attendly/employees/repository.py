from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import datetime_from_str, datetime_to_str
from ..core.enums import EmployeeStatus, Role
from ..storage.record_store import RecordKind, RecordStore
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete store.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_code: str,
        name: str,
        email: str,
        department: str,
        designation: str,
        role: Role,
        password_hash: str,
        status: EmployeeStatus,
        created_at: datetime,
        avatar_url: Optional[str] = None,
    ) -> Employee:
        raise NotImplementedError

    def update(self, employee_id: int, **fields) -> Optional[Employee]:
        raise NotImplementedError


def _from_record(r: dict) -> Employee:
    return Employee(
        employee_id=int(r["id"]),
        employee_code=r["employee_id"],
        name=r["name"],
        email=r["email"],
        department=r.get("department") or "",
        designation=r.get("designation") or "",
        role=Role(r["role"]),
        password_hash=r.get("password_hash") or "",
        status=EmployeeStatus(r.get("status") or EmployeeStatus.OFFLINE.value),
        phone=r.get("phone"),
        address=r.get("address"),
        avatar_url=r.get("avatar_url"),
        organization_logo=r.get("organization_logo"),
        created_at=datetime_from_str(r.get("created_at")),
    )


def _to_patch(fields: dict) -> dict:
    patch = {}
    for key, value in fields.items():
        if key == "employee_code":
            key = "employee_id"
        if isinstance(value, (Role, EmployeeStatus)):
            value = value.value
        elif isinstance(value, datetime):
            value = datetime_to_str(value)
        patch[key] = value
    return patch


class StoreEmployeeRepository(EmployeeRepository):
    """Employees kept in the ``users`` collection of a record store."""

    def __init__(self, store: RecordStore):
        self._store = store

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        r = self._store.get_by_id(RecordKind.EMPLOYEES, int(employee_id))
        return _from_record(r) if r else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        wanted = (email or "").strip().lower()
        for r in self._store.get_all(RecordKind.EMPLOYEES):
            if (r.get("email") or "").lower() == wanted:
                return _from_record(r)
        return None

    def get_by_code(self, employee_code: str) -> Optional[Employee]:
        for r in self._store.get_all(RecordKind.EMPLOYEES):
            if r.get("employee_id") == employee_code:
                return _from_record(r)
        return None

    def list_all(self) -> Sequence[Employee]:
        return [_from_record(r) for r in self._store.get_all(RecordKind.EMPLOYEES)]

    def create(
        self,
        *,
        employee_code: str,
        name: str,
        email: str,
        department: str,
        designation: str,
        role: Role,
        password_hash: str,
        status: EmployeeStatus,
        created_at: datetime,
        avatar_url: Optional[str] = None,
    ) -> Employee:
        stored = self._store.append(
            RecordKind.EMPLOYEES,
            _to_patch(
                dict(
                    employee_code=employee_code,
                    name=name,
                    email=email,
                    department=department,
                    designation=designation,
                    role=role,
                    password_hash=password_hash,
                    status=status,
                    created_at=created_at,
                    avatar_url=avatar_url,
                )
            ),
        )
        return _from_record(stored)

    def update(self, employee_id: int, **fields) -> Optional[Employee]:
        r = self._store.update_by_id(RecordKind.EMPLOYEES, int(employee_id), _to_patch(fields))
        return _from_record(r) if r else None
