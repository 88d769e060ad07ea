"""ISO-8601 week helpers. Weeks start on Monday."""

from datetime import date, datetime, timedelta
from typing import List, Optional


def _as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def week_id(value: date) -> str:
    """Return the ISO week identifier, e.g. "2020-W53", using the ISO year."""
    iso_year, iso_week, _ = _as_date(value).isocalendar()
    return f"{iso_year}-W{iso_week:02d}"


def week_dates(start_date: Optional[date] = None) -> List[date]:
    """Return Monday..Sunday of the week containing `start_date` (default today)."""
    day = _as_date(start_date) if start_date is not None else date.today()
    monday = day - timedelta(days=day.weekday())
    return [monday + timedelta(days=offset) for offset in range(7)]
