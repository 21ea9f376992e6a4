from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..common.datetime_utils import datetime_from_str, datetime_to_str, normalize_month
from ..core.enums import PayrollStatus
from ..storage.record_store import RecordKind, RecordStore
from .model import PayrollBreakdown, PayrollRecord


class PayrollRepository(Protocol):
    def get(self, payroll_id: int) -> Optional[PayrollRecord]:
        raise NotImplementedError

    def get_for_period(self, *, employee_id: int, month: str, year: int) -> Optional[PayrollRecord]:
        """The record for (employee, month, year); at most one exists."""

        raise NotImplementedError

    def list_records(self, *, employee_id: Optional[int] = None) -> Sequence[PayrollRecord]:
        """Newest period first."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        month: str,
        year: int,
        breakdown: PayrollBreakdown,
        status: PayrollStatus,
        processed_date: Optional[datetime] = None,
    ) -> PayrollRecord:
        raise NotImplementedError

    def update(self, payroll_id: int, *, expected_version: Optional[int] = None, **fields) -> Optional[PayrollRecord]:
        raise NotImplementedError


_FIELD_KEYS = {
    "base_salary": "baseSalary",
    "overtime_pay": "overtimePay",
    "bonus": "bonus",
    "deductions": "deductions",
    "net_salary": "netSalary",
    "status": "status",
    "processed_date": "processedDate",
    "payment_date": "paymentDate",
}


def _from_record(r: dict) -> PayrollRecord:
    return PayrollRecord(
        payroll_id=int(r["id"]),
        employee_id=int(r["employeeId"]),
        month=r["month"],
        year=int(r["year"]),
        base_salary=float(r["baseSalary"]),
        overtime_pay=float(r["overtimePay"]),
        bonus=float(r["bonus"]),
        deductions=float(r["deductions"]),
        net_salary=float(r["netSalary"]),
        status=PayrollStatus(r["status"]),
        processed_date=datetime_from_str(r.get("processedDate")),
        payment_date=datetime_from_str(r.get("paymentDate")),
        version=int(r.get("version", 1)),
    )


def _to_patch(fields: dict) -> dict:
    patch = {}
    for key, value in fields.items():
        if isinstance(value, PayrollStatus):
            value = value.value
        elif isinstance(value, datetime):
            value = datetime_to_str(value)
        patch[_FIELD_KEYS[key]] = value
    return patch


def breakdown_fields(breakdown: PayrollBreakdown) -> dict:
    return {
        "base_salary": breakdown.base_salary,
        "overtime_pay": breakdown.overtime_pay,
        "bonus": breakdown.bonus,
        "deductions": breakdown.deductions,
        "net_salary": breakdown.net_salary,
    }


class StorePayrollRepository(PayrollRepository):
    """Payroll records in the ``mockPayrollData`` collection."""

    def __init__(self, store: RecordStore):
        self._store = store

    def get(self, payroll_id: int) -> Optional[PayrollRecord]:
        r = self._store.get_by_id(RecordKind.PAYROLL, int(payroll_id))
        return _from_record(r) if r else None

    def get_for_period(self, *, employee_id: int, month: str, year: int) -> Optional[PayrollRecord]:
        for r in self._store.get_all(RecordKind.PAYROLL):
            if int(r["employeeId"]) == int(employee_id) and r["month"] == month and int(r["year"]) == int(year):
                return _from_record(r)
        return None

    def list_records(self, *, employee_id: Optional[int] = None) -> Sequence[PayrollRecord]:
        rows = [_from_record(r) for r in self._store.get_all(RecordKind.PAYROLL)]
        if employee_id is not None:
            rows = [r for r in rows if r.employee_id == int(employee_id)]
        rows.sort(key=lambda r: (r.year, normalize_month(r.month)[0], r.payroll_id), reverse=True)
        return rows

    def create(
        self,
        *,
        employee_id: int,
        month: str,
        year: int,
        breakdown: PayrollBreakdown,
        status: PayrollStatus,
        processed_date: Optional[datetime] = None,
    ) -> PayrollRecord:
        record = {"employeeId": int(employee_id), "month": month, "year": int(year)}
        record.update(
            _to_patch(
                dict(
                    breakdown_fields(breakdown),
                    status=status,
                    processed_date=processed_date,
                    payment_date=None,
                )
            )
        )
        return _from_record(self._store.append(RecordKind.PAYROLL, record))

    def update(self, payroll_id: int, *, expected_version: Optional[int] = None, **fields) -> Optional[PayrollRecord]:
        r = self._store.update_by_id(
            RecordKind.PAYROLL, int(payroll_id), _to_patch(fields), expected_version=expected_version
        )
        return _from_record(r) if r else None
