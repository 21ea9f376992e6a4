from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .attendance.repository import StoreAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import (
    BASE_SALARY_TABLE,
    DEFAULT_BASE_SALARY,
    DEFAULT_REGISTRATION_CODE_DAYS,
    STANDARD_MONTHLY_HOURS,
)
from .core.enums import CyclePolicy
from .core.exceptions import ValidationError
from .database.connection import DatabaseConnection, DBConfig
from .database.mysql_record_store import MySQLRecordStore
from .employees.repository import StoreEmployeeRepository
from .employees.service import EmployeeService
from .leave.repository import StoreLeaveRepository
from .leave.service import LeaveService
from .overtime.repository import StoreOvertimeRepository
from .overtime.service import OvertimeService
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.repository import StorePayrollRepository
from .payroll.service import PayrollService
from .registration.repository import StoreRegistrationCodeRepository
from .registration.service import RegistrationCodeService
from .storage.json_store import JsonFileRecordStore
from .storage.memory_store import InMemoryRecordStore
from .storage.record_store import RecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Container:
    store: RecordStore

    employees_repo: StoreEmployeeRepository
    attendance_repo: StoreAttendanceRepository
    leave_repo: StoreLeaveRepository
    overtime_repo: StoreOvertimeRepository
    payroll_repo: StorePayrollRepository
    registration_repo: StoreRegistrationCodeRepository

    registration_service: RegistrationCodeService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveService
    overtime_service: OvertimeService
    payroll_service: PayrollService


def build_store(*, backend: str, data_file: Optional[str] = None, db_config: Optional[dict] = None) -> RecordStore:
    backend = (backend or "memory").strip().lower()
    if backend == "memory":
        return InMemoryRecordStore()
    if backend == "json":
        if not data_file:
            raise ValidationError("DATA_FILE is required for the json store")
        return JsonFileRecordStore(data_file)
    if backend == "mysql":
        return MySQLRecordStore(DatabaseConnection(DBConfig.from_dict(db_config or {})))
    raise ValidationError(f"Unknown store backend: {backend!r}")


def build_container(
    *,
    store: RecordStore,
    cycle_policy: CyclePolicy | str = CyclePolicy.STRICT,
    registration_code_days: int = DEFAULT_REGISTRATION_CODE_DAYS,
    base_salary_table: Optional[dict] = None,
    default_base_salary: float = DEFAULT_BASE_SALARY,
    monthly_hours: int = STANDARD_MONTHLY_HOURS,
) -> Container:
    employees_repo = StoreEmployeeRepository(store)
    attendance_repo = StoreAttendanceRepository(store)
    leave_repo = StoreLeaveRepository(store)
    overtime_repo = StoreOvertimeRepository(store)
    payroll_repo = StorePayrollRepository(store)
    registration_repo = StoreRegistrationCodeRepository(store)

    registration_service = RegistrationCodeService(registration_repo, default_days=registration_code_days)
    employee_service = EmployeeService(employees_repo, registration_service, transaction=store.transaction)
    attendance_service = AttendanceService(
        attendance_repo, employees_repo, policy=cycle_policy, transaction=store.transaction
    )
    leave_service = LeaveService(leave_repo, employees_repo)
    overtime_service = OvertimeService(overtime_repo, employees_repo)
    payroll_service = PayrollService(
        payroll_repo,
        overtime_repo,
        employees_repo,
        calculator=StandardPayrollCalculator(
            base_salary_table=BASE_SALARY_TABLE if base_salary_table is None else base_salary_table,
            default_base_salary=default_base_salary,
            monthly_hours=monthly_hours,
        ),
        transaction=store.transaction,
    )

    return Container(
        store=store,
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        leave_repo=leave_repo,
        overtime_repo=overtime_repo,
        payroll_repo=payroll_repo,
        registration_repo=registration_repo,
        registration_service=registration_service,
        employee_service=employee_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        overtime_service=overtime_service,
        payroll_service=payroll_service,
    )
