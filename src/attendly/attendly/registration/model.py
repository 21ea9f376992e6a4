from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class RegistrationCode:
    """Single-use, time-limited token gating self-registration."""

    code_id: int
    code: str
    expiry_date: datetime
    is_used: bool = False
    created_by: Optional[int] = None
    created_at: Optional[datetime] = None

    def is_valid_at(self, now: datetime) -> bool:
        return not self.is_used and self.expiry_date > now
