from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status of one attendance mark."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"


class Period(str, Enum):
    """Trailing windows used for attendance history and percentages."""

    WEEK = "week"
    MONTH = "month"
    SEMESTER = "semester"
