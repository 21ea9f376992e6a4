from __future__ import annotations

import random
from typing import Mapping, Optional, Sequence

from ...core.constants import (
    BASE_SALARY_TABLE,
    BONUS_PROBABILITY,
    BONUS_RATE,
    DEDUCTION_RATE,
    DEFAULT_BASE_SALARY,
    STANDARD_MONTHLY_HOURS,
)
from ...overtime.model import OvertimeRecord
from ..model import PayrollBreakdown
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule.

    - base salary from a fixed table, ``default_base_salary`` otherwise
    - overtime pay: hours x hourly rate x multiplier, hourly rate being
      base / standard monthly hours
    - bonus: ``bonus_rate`` of base, granted with ``bonus_probability``; the
      draw is seeded by (employee, year, month) so a period always gets the
      same outcome
    - deductions: ``deduction_rate`` of base
    """

    def __init__(
        self,
        *,
        base_salary_table: Optional[Mapping[int, float]] = None,
        default_base_salary: float = DEFAULT_BASE_SALARY,
        monthly_hours: int = STANDARD_MONTHLY_HOURS,
        bonus_probability: float = BONUS_PROBABILITY,
        bonus_rate: float = BONUS_RATE,
        deduction_rate: float = DEDUCTION_RATE,
    ):
        table = BASE_SALARY_TABLE if base_salary_table is None else base_salary_table
        self._table = {int(k): float(v) for k, v in table.items()}
        self._default_base = float(default_base_salary)
        self._monthly_hours = int(monthly_hours)
        self._bonus_probability = float(bonus_probability)
        self._bonus_rate = float(bonus_rate)
        self._deduction_rate = float(deduction_rate)

    def base_salary(self, employee_id: int) -> float:
        return self._table.get(int(employee_id), self._default_base)

    def hourly_rate(self, employee_id: int) -> float:
        return self.base_salary(employee_id) / self._monthly_hours

    def bonus_granted(self, *, employee_id: int, month: int, year: int) -> bool:
        rng = random.Random(f"{int(employee_id)}:{int(year)}:{int(month)}")
        return rng.random() < self._bonus_probability

    def calculate(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        approved_overtime: Sequence[OvertimeRecord],
    ) -> PayrollBreakdown:
        base = self.base_salary(employee_id)
        hourly = self.hourly_rate(employee_id)

        overtime_pay = sum(r.hours * hourly * r.rate for r in approved_overtime)
        bonus = base * self._bonus_rate if self.bonus_granted(employee_id=employee_id, month=month, year=year) else 0.0
        deductions = base * self._deduction_rate

        return PayrollBreakdown(
            base_salary=round(base, 2),
            overtime_pay=round(overtime_pay, 2),
            bonus=round(bonus, 2),
            deductions=round(deductions, 2),
        )
