from __future__ import annotations

from datetime import date, timedelta
from typing import Union

from ..common.datetime_utils import subtract_months
from ..core.constants import MONTH_MONTHS, SEMESTER_MONTHS, WEEK_DAYS
from ..core.enums import Period
from ..core.exceptions import ValidationError


def parse_period(value: Union[Period, str]) -> Period:
    if isinstance(value, Period):
        return value
    try:
        return Period(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown period: {value!r}", {"period": "Must be week, month or semester"})


def window_start(period: Union[Period, str], today: date) -> date:
    """First day of the trailing window that ends on ``today`` (inclusive)."""
    period = parse_period(period)
    if period == Period.WEEK:
        return today - timedelta(days=WEEK_DAYS)
    if period == Period.MONTH:
        return subtract_months(today, MONTH_MONTHS)
    return subtract_months(today, SEMESTER_MONTHS)
