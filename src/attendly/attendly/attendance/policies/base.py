from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from ...core.exceptions import AlreadyCheckedIn
from ..model import AttendanceRecord


class CheckInPolicy(ABC):
    """Strategy Pattern: decide whether a new cycle may start on a day."""

    def ensure_can_check_in(self, day_records: Sequence[AttendanceRecord]) -> None:
        if any(r.is_open for r in day_records):
            raise AlreadyCheckedIn()
        self._ensure_cycle_allowed(day_records)

    @abstractmethod
    def _ensure_cycle_allowed(self, day_records: Sequence[AttendanceRecord]) -> None:
        raise NotImplementedError
