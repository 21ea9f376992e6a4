from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class OvertimeRecord:
    overtime_id: int
    employee_id: int
    work_date: date
    hours: float
    rate: float
    reason: str
    status: RequestStatus
    approved_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    version: int = 1
