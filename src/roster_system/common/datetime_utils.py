from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Union


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def to_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def coerce_date(value: Union[date, datetime, str]) -> date:
    """Accept a date, a datetime or an ISO string and return a plain date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value).strip())


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can inject a fixed clock instead.
    """
    return datetime.now()


def subtract_months(value: date, months: int) -> date:
    """Go back ``months`` calendar months, clamping to the end of the month.

    31 March minus one month is 28 (or 29) February.
    """
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(value.day, last_day))


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end, both inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def time_ago(then: datetime, now: datetime) -> str:
    seconds = int((now - then).total_seconds())
    if seconds < 60:
        return "Just now"
    if seconds < 3600:
        return f"{seconds // 60}m ago"
    if seconds < 86400:
        return f"{seconds // 3600}h ago"
    return f"{seconds // 86400}d ago"
