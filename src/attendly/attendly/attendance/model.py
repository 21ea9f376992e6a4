from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in/check-out cycle of an employee on a day."""

    attendance_id: int
    employee_id: int
    work_date: date
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    modified_by: Optional[int] = None
    modified_at: Optional[datetime] = None
    is_admin_override: bool = False

    @property
    def is_open(self) -> bool:
        return self.check_in is not None and self.check_out is None

    @property
    def is_closed(self) -> bool:
        return self.check_out is not None
