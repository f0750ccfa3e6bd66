from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class DashboardStats:
    """Read-model for the dashboard cards."""

    total_students: int
    attendance_today: int
    average_attendance: int
    low_attendance: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class Activity:
    student_id: str
    message: str
    time: str
