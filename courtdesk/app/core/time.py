"""Time utilities: timezone-aware UTC datetimes and billing month arithmetic."""

import calendar
import re
from datetime import UTC, date, datetime

_MONTH_REFERENCE_RE = re.compile(r"^(\d{4})-(0[1-9]|1[0-2])$")
MONTH_REFERENCE_PATTERN = _MONTH_REFERENCE_RE.pattern


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime for defaults and onupdate hooks."""
    return datetime.now(UTC)


def month_reference(year: int, month: int) -> str:
    """Build the ``YYYY-MM`` key that identifies a billing period."""
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month: {month}")
    return f"{year:04d}-{month:02d}"


def parse_month_reference(value: str) -> tuple[int, int]:
    match = _MONTH_REFERENCE_RE.match(value or "")
    if not match:
        raise ValueError(f"Invalid month reference: {value!r}")
    return int(match.group(1)), int(match.group(2))


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Move ``delta`` months forward (or backward when negative)."""
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def invoice_due_date(year: int, month: int, day: int = 10) -> date:
    """Due date for a billing month: ``day`` of the following month.

    A day past the end of that month falls on its last day.
    """
    next_year, next_month = shift_month(year, month, 1)
    last_day = calendar.monthrange(next_year, next_month)[1]
    return date(next_year, next_month, max(1, min(day, last_day)))


def current_month_reference() -> str:
    now = utc_now()
    return month_reference(now.year, now.month)
