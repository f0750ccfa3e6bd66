from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Callable, Mapping, Optional, Union

from ..attendance.model import AttendanceBook, AttendanceEntry, DaySummary, HistoryItem
from ..attendance.windows import parse_period, window_start
from ..common.datetime_utils import coerce_date, iter_days, now_local, time_ago
from ..common.ids import generate_student_id
from ..common.numbers import percentage, round_half_up_ratio
from ..core.constants import LOW_ATTENDANCE_THRESHOLD, RECENT_ACTIVITY_LIMIT
from ..core.enums import AttendanceStatus, Period
from ..core.exceptions import ValidationError
from ..storage.adapter import PersistenceAdapter
from ..students.model import Student, StudentData, StudentUpdate
from .model import Activity, DashboardStats

logger = logging.getLogger(__name__)

DateLike = Union[date, datetime, str]


def _parse_status(value: Union[AttendanceStatus, str]) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        return value
    try:
        return AttendanceStatus(str(value).strip().lower())
    except ValueError:
        raise ValidationError(f"Unknown status: {value!r}", {"status": "Must be present, absent or late"})


def _parse_timestamp(value: str) -> Optional[datetime]:
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


class RosterEngine:
    """Owns the student list and the attendance book.

    Every mutation goes through here and is saved through the adapter before
    the in-memory collection is swapped, so a failed save leaves both the
    store and the engine on the previous state. Lookups of unknown ids return
    ``None``/``False`` rather than raising.
    """

    def __init__(
        self,
        persistence: PersistenceAdapter,
        *,
        clock: Callable[[], datetime] = now_local,
        id_factory: Callable[[], str] = generate_student_id,
        low_attendance_threshold: int = LOW_ATTENDANCE_THRESHOLD,
    ):
        self._persistence = persistence
        self._clock = clock
        self._id_factory = id_factory
        self._low_threshold = int(low_attendance_threshold)
        self._students: list[Student] = persistence.load_students()
        self._attendance: AttendanceBook = persistence.load_attendance()
        logger.info(
            "Roster loaded: %d students, %d attendance days", len(self._students), len(self._attendance)
        )

    def _today(self) -> date:
        return self._clock().date()

    def _index_of(self, student_id: str) -> int:
        for i, s in enumerate(self._students):
            if s.id == student_id:
                return i
        return -1

    def _commit_students(self, students: list[Student]) -> None:
        self._persistence.save_students(students)
        self._students = students

    def _commit_attendance(self, book: AttendanceBook) -> None:
        self._persistence.save_attendance(book)
        self._attendance = book

    # ------------------------------------------------------------------
    # Students
    # ------------------------------------------------------------------

    def add_student(self, data: Union[StudentData, Mapping[str, Any]]) -> Student:
        if not isinstance(data, StudentData):
            data = StudentData.from_mapping(data)
        student = Student.create(data, student_id=self._id_factory(), created_at=self._clock().isoformat())
        self._commit_students([*self._students, student])
        logger.debug("Added student %s", student.id)
        return student

    def update_student(
        self, student_id: str, changes: Union[StudentUpdate, Mapping[str, Any]]
    ) -> Optional[Student]:
        index = self._index_of(student_id)
        if index == -1:
            return None
        if not isinstance(changes, StudentUpdate):
            changes = StudentUpdate.from_mapping(changes)

        updated = changes.apply(self._students[index])
        students = list(self._students)
        students[index] = updated
        self._commit_students(students)
        logger.debug("Updated student %s", student_id)
        return updated

    def delete_student(self, student_id: str) -> bool:
        index = self._index_of(student_id)
        if index == -1:
            return False
        students = list(self._students)
        del students[index]
        self._commit_students(students)
        logger.debug("Deleted student %s", student_id)
        return True

    def get_student(self, student_id: str) -> Optional[Student]:
        index = self._index_of(student_id)
        return self._students[index] if index != -1 else None

    def list_students(self) -> list[Student]:
        return list(self._students)

    def search_students(self, term: str = "", grade: str = "") -> list[Student]:
        found = self._students
        term = (term or "").strip().lower()
        if term:
            found = [
                s
                for s in found
                if term in s.first_name.lower() or term in s.last_name.lower() or term in s.email.lower()
            ]
        if grade:
            found = [s for s in found if s.grade == grade]
        return list(found)

    def recent_activity(self, limit: int = RECENT_ACTIVITY_LIMIT, *, now: Optional[datetime] = None) -> list[Activity]:
        now = now or self._clock()
        dated = [(s, _parse_timestamp(s.created_at)) for s in self._students]
        dated.sort(key=lambda pair: pair[1] or datetime.min, reverse=True)

        out: list[Activity] = []
        for student, created in dated[: max(limit, 0)]:
            out.append(
                Activity(
                    student_id=student.id,
                    message=f"{student.first_name} {student.last_name} was added",
                    time=time_ago(created, now) if created else "",
                )
            )
        return out

    # ------------------------------------------------------------------
    # Attendance
    # ------------------------------------------------------------------

    def mark_attendance(
        self, student_id: str, on: DateLike, status: Union[AttendanceStatus, str]
    ) -> AttendanceEntry:
        day = coerce_date(on)
        entry = AttendanceEntry(status=_parse_status(status), timestamp=self._clock().isoformat())

        book = dict(self._attendance)
        bucket = dict(book.get(day, {}))
        bucket[student_id] = entry
        book[day] = bucket
        self._commit_attendance(book)
        return entry

    def mark_all(self, on: DateLike, status: Union[AttendanceStatus, str]) -> int:
        """Mark every current student with the same status; one save."""
        day = coerce_date(on)
        status = _parse_status(status)
        timestamp = self._clock().isoformat()

        book = dict(self._attendance)
        bucket = dict(book.get(day, {}))
        for s in self._students:
            bucket[s.id] = AttendanceEntry(status=status, timestamp=timestamp)
        book[day] = bucket
        self._commit_attendance(book)
        return len(self._students)

    def get_attendance_for_date(self, on: DateLike) -> dict[str, AttendanceEntry]:
        return dict(self._attendance.get(coerce_date(on), {}))

    def day_summary(self, on: DateLike) -> DaySummary:
        bucket = self._attendance.get(coerce_date(on), {})
        counts = {status: 0 for status in AttendanceStatus}
        unmarked = 0
        for s in self._students:
            entry = bucket.get(s.id)
            if entry is None:
                unmarked += 1
            else:
                counts[entry.status] += 1
        return DaySummary(
            present=counts[AttendanceStatus.PRESENT],
            absent=counts[AttendanceStatus.ABSENT],
            late=counts[AttendanceStatus.LATE],
            unmarked=unmarked,
        )

    def get_student_attendance(
        self,
        student_id: str,
        period: Union[Period, str] = Period.MONTH,
        *,
        today: Optional[date] = None,
    ) -> list[HistoryItem]:
        today = today or self._today()
        start = window_start(parse_period(period), today)

        history: list[HistoryItem] = []
        for day in iter_days(start, today):
            entry = self._attendance.get(day, {}).get(student_id)
            if entry is not None:
                history.append(HistoryItem(date=day, status=entry.status))
        return history

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def calculate_attendance_percentage(
        self,
        student_id: str,
        period: Union[Period, str] = Period.MONTH,
        *,
        today: Optional[date] = None,
    ) -> int:
        history = self.get_student_attendance(student_id, period, today=today)
        if not history:
            return 0
        present = sum(1 for item in history if item.status == AttendanceStatus.PRESENT)
        return percentage(present, len(history))

    def calculate_average_attendance(self, *, today: Optional[date] = None) -> int:
        if not self._students:
            return 0
        today = today or self._today()
        total = sum(self.calculate_attendance_percentage(s.id, today=today) for s in self._students)
        return round_half_up_ratio(total, len(self._students))

    def dashboard_stats(self, *, today: Optional[date] = None) -> DashboardStats:
        today = today or self._today()
        total = len(self._students)

        todays = self._attendance.get(today, {})
        present_today = sum(1 for e in todays.values() if e.status == AttendanceStatus.PRESENT)

        per_student = [self.calculate_attendance_percentage(s.id, today=today) for s in self._students]
        average = round_half_up_ratio(sum(per_student), total) if total else 0
        low = sum(1 for p in per_student if p < self._low_threshold)

        return DashboardStats(
            total_students=total,
            attendance_today=percentage(present_today, total),
            average_attendance=average,
            low_attendance=low,
        )

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def attendance_snapshot(self) -> AttendanceBook:
        return {day: dict(bucket) for day, bucket in self._attendance.items()}
