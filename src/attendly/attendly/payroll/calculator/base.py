from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...overtime.model import OvertimeRecord
from ..model import PayrollBreakdown


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def base_salary(self, employee_id: int) -> float:
        raise NotImplementedError

    @abstractmethod
    def calculate(
        self,
        *,
        employee_id: int,
        month: int,
        year: int,
        approved_overtime: Sequence[OvertimeRecord],
    ) -> PayrollBreakdown:
        raise NotImplementedError
