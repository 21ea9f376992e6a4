from __future__ import annotations

from typing import Sequence

from ...core.exceptions import CycleComplete
from ..model import AttendanceRecord
from .base import CheckInPolicy


class StrictCyclePolicy(CheckInPolicy):
    """One cycle per day: a closed record ends the day."""

    def _ensure_cycle_allowed(self, day_records: Sequence[AttendanceRecord]) -> None:
        if any(r.is_closed for r in day_records):
            raise CycleComplete()
