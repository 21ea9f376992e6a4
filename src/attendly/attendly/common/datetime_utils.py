from __future__ import annotations

import calendar
from datetime import date, datetime
from typing import Optional

from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp (``2025-01-01T09:00:00``).

    Timestamps carrying an offset (``...Z``, ``+07:00``) are converted to
    naive local time, the convention of ``now_local``.
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return to_local_naive(datetime.fromisoformat(text))


def to_local_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def date_to_str(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value else None


def datetime_to_str(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def date_from_str(value: Optional[str]) -> Optional[date]:
    return parse_iso_date(value) if value else None


def datetime_from_str(value: Optional[str]) -> Optional[datetime]:
    return parse_iso_datetime(value) if value else None


def normalize_month(value: object) -> tuple[int, str]:
    """Accept a month as name ("October", "oct") or number (10, "10").

    Returns ``(month_number, canonical_name)``.
    """

    if isinstance(value, int):
        number = value
    else:
        text = str(value or "").strip()
        if text.isdigit():
            number = int(text)
        else:
            lowered = text.lower()
            number = 0
            for idx in range(1, 13):
                if lowered in (calendar.month_name[idx].lower(), calendar.month_abbr[idx].lower()):
                    number = idx
                    break

    if not 1 <= number <= 12:
        raise ValidationError(f"Invalid month: {value!r}")
    return number, calendar.month_name[number]
