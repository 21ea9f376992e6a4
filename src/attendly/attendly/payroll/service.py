from __future__ import annotations

import logging
from contextlib import nullcontext
from datetime import datetime
from typing import Callable, ContextManager, Optional, Sequence

from ..common.datetime_utils import now_local, normalize_month
from ..core.enums import PAYROLL_ROLES, PayrollStatus, Role
from ..core.exceptions import (
    AuthorizationError,
    EmployeeNotFound,
    InvalidStatusTransition,
    PayrollRecordNotFound,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from ..overtime.repository import OvertimeRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollBreakdown, PayrollRecord
from .repository import PayrollRepository, breakdown_fields

logger = logging.getLogger(__name__)


class PayrollService:
    """Monthly payroll: draft -> processed -> paid.

    Processing always recomputes the period from the current approved
    overtime and upserts the single record of (employee, month, year), so
    running it twice with the same inputs yields the same record.
    """

    def __init__(
        self,
        payroll: PayrollRepository,
        overtime: OvertimeRepository,
        employees: EmployeeRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
        transaction: Optional[Callable[[], ContextManager]] = None,
    ):
        self._payroll = payroll
        self._overtime = overtime
        self._employees = employees
        self._calculator = calculator or StandardPayrollCalculator()
        self._transaction = transaction or nullcontext

    @staticmethod
    def _require_payroll_role(current_role: Role) -> None:
        if current_role not in PAYROLL_ROLES:
            raise AuthorizationError("You do not have permission to manage payroll")

    @staticmethod
    def _period(month: object, year: object) -> tuple[int, str, int]:
        month_no, month_name = normalize_month(month)
        try:
            year = int(year)
        except (TypeError, ValueError):
            raise ValidationError("Year must be a number")
        if year < 1:
            raise ValidationError("Year is not valid")
        return month_no, month_name, year

    def _require_employee(self, employee_id: int) -> None:
        if not self._employees.get_by_id(int(employee_id)):
            raise EmployeeNotFound()

    def calculate(self, *, employee_id: int, month: object, year: object) -> PayrollBreakdown:
        month_no, _, year = self._period(month, year)
        approved = self._overtime.list_approved_in_month(employee_id=int(employee_id), year=year, month=month_no)
        return self._calculator.calculate(
            employee_id=int(employee_id), month=month_no, year=year, approved_overtime=approved
        )

    def process_payroll(
        self,
        *,
        current_role: Role,
        employee_id: int,
        month: object,
        year: object,
        now: datetime | None = None,
    ) -> PayrollRecord:
        self._require_payroll_role(current_role)
        _, month_name, year = self._period(month, year)
        now = now or now_local()

        with self._transaction():
            self._require_employee(employee_id)
            breakdown = self.calculate(employee_id=employee_id, month=month_name, year=year)

            existing = self._payroll.get_for_period(employee_id=int(employee_id), month=month_name, year=year)
            if existing is None:
                record = self._payroll.create(
                    employee_id=int(employee_id),
                    month=month_name,
                    year=year,
                    breakdown=breakdown,
                    status=PayrollStatus.PROCESSED,
                    processed_date=now,
                )
            else:
                if existing.status == PayrollStatus.PAID:
                    raise InvalidStatusTransition("Payroll has already been paid and cannot be reprocessed")
                record = self._payroll.update(
                    existing.payroll_id,
                    expected_version=existing.version,
                    status=PayrollStatus.PROCESSED,
                    processed_date=now,
                    **breakdown_fields(breakdown),
                )
                if not record:
                    raise PayrollRecordNotFound()

        logger.info(
            "Payroll #%s processed for employee %s (%s %s): net %.2f",
            record.payroll_id,
            employee_id,
            month_name,
            year,
            record.net_salary,
        )
        return record

    def create_draft(
        self,
        *,
        current_role: Role,
        employee_id: int,
        month: object,
        year: object,
    ) -> PayrollRecord:
        self._require_payroll_role(current_role)
        _, month_name, year = self._period(month, year)

        with self._transaction():
            self._require_employee(employee_id)
            existing = self._payroll.get_for_period(employee_id=int(employee_id), month=month_name, year=year)
            if existing:
                return existing

            base = self._calculator.base_salary(int(employee_id))
            return self._payroll.create(
                employee_id=int(employee_id),
                month=month_name,
                year=year,
                breakdown=PayrollBreakdown(base_salary=base, overtime_pay=0.0, bonus=0.0, deductions=0.0),
                status=PayrollStatus.DRAFT,
            )

    def mark_paid(self, *, current_role: Role, payroll_id: int, now: datetime | None = None) -> PayrollRecord:
        self._require_payroll_role(current_role)

        record = self._payroll.get(int(payroll_id))
        if not record:
            raise PayrollRecordNotFound()
        if record.status != PayrollStatus.PROCESSED:
            raise InvalidStatusTransition(
                f"Only processed payroll can be marked as paid (current status: {record.status.value})"
            )

        paid = self._payroll.update(
            record.payroll_id,
            expected_version=record.version,
            status=PayrollStatus.PAID,
            payment_date=now or now_local(),
        )
        if not paid:
            raise PayrollRecordNotFound()
        logger.info("Payroll #%s marked as paid", paid.payroll_id)
        return paid

    def list_for_employee(self, employee_id: int) -> Sequence[PayrollRecord]:
        return self._payroll.list_records(employee_id=int(employee_id))

    def list_all(self, *, current_role: Role) -> Sequence[PayrollRecord]:
        self._require_payroll_role(current_role)
        return self._payroll.list_records()
