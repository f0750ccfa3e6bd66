"""Demo roster: three students and a month of random marks."""

from __future__ import annotations

import random
from datetime import date, timedelta
from typing import Optional

from ..core.enums import AttendanceStatus
from .engine import RosterEngine

SAMPLE_STUDENTS = [
    {
        "firstName": "John",
        "lastName": "Doe",
        "email": "john.doe@example.com",
        "phone": "+1-555-0123",
        "grade": "5",
        "dateOfBirth": "2010-03-15",
        "address": "123 Main St, Anytown, USA",
        "parentName": "Jane Doe",
        "parentPhone": "+1-555-0124",
    },
    {
        "firstName": "Alice",
        "lastName": "Smith",
        "email": "alice.smith@example.com",
        "phone": "+1-555-0125",
        "grade": "4",
        "dateOfBirth": "2011-07-22",
        "address": "456 Oak Ave, Anytown, USA",
        "parentName": "Bob Smith",
        "parentPhone": "+1-555-0126",
    },
    {
        "firstName": "Michael",
        "lastName": "Johnson",
        "email": "michael.johnson@example.com",
        "phone": "+1-555-0127",
        "grade": "3",
        "dateOfBirth": "2012-11-08",
        "address": "789 Pine Rd, Anytown, USA",
        "parentName": "Sarah Johnson",
        "parentPhone": "+1-555-0128",
    },
]

# weighted 3:1:1 towards present
_STATUS_POOL = [
    AttendanceStatus.PRESENT,
    AttendanceStatus.PRESENT,
    AttendanceStatus.PRESENT,
    AttendanceStatus.ABSENT,
    AttendanceStatus.LATE,
]


def seed_demo_data(
    engine: RosterEngine,
    *,
    days: int = 30,
    today: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> bool:
    """Seed only an empty roster. Returns False when students already exist."""
    if engine.list_students():
        return False

    rng = rng or random.Random()
    today = today or date.today()
    students = [engine.add_student(data) for data in SAMPLE_STUDENTS]

    for offset in range(days):
        day = today - timedelta(days=offset)
        for s in students:
            engine.mark_attendance(s.id, day, rng.choice(_STATUS_POOL))
    return True
