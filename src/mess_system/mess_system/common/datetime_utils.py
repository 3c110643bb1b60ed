from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Any

from ..core.exceptions import ValidationError


def parse_iso_date(value: Any, field_name: str = "date") -> date:
    """Parse an ISO-8601 date or datetime into a calendar day.

    Accepts ``YYYY-MM-DD`` as well as full timestamps (``2024-01-15T10:30:00Z``);
    the time of day is dropped.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"Valid {field_name} is required")

    raw = value.strip()
    try:
        return datetime.strptime(raw, "%Y-%m-%d").date()
    except ValueError:
        pass

    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw).date()
    except ValueError:
        raise ValidationError(f"Valid {field_name} is required")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def today_local() -> date:
    return now_local().date()


def add_months(start: date, months: int) -> date:
    """Shift ``start`` by whole calendar months, clamping to the month end.

    2024-01-31 + 1 month -> 2024-02-29; 2023-01-31 + 1 month -> 2023-02-28.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(start.day, last_day))


def add_days(start: date, days: int) -> date:
    return start + timedelta(days=days)


def to_iso(value: date | datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat()
