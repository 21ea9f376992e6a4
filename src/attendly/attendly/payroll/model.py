from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import PayrollStatus


@dataclass(frozen=True)
class PayrollBreakdown:
    """Pay components for one employee and one month."""

    base_salary: float
    overtime_pay: float
    bonus: float
    deductions: float

    @property
    def net_salary(self) -> float:
        return round(self.base_salary + self.overtime_pay + self.bonus - self.deductions, 2)


@dataclass(frozen=True)
class PayrollRecord:
    payroll_id: int
    employee_id: int
    month: str
    year: int
    base_salary: float
    overtime_pay: float
    bonus: float
    deductions: float
    net_salary: float
    status: PayrollStatus
    processed_date: Optional[datetime] = None
    payment_date: Optional[datetime] = None
    version: int = 1
