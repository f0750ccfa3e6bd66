from __future__ import annotations

import itertools
from datetime import date, datetime, timedelta

import pytest

from roster_system.core.enums import AttendanceStatus, Period
from roster_system.core.exceptions import ValidationError
from roster_system.roster.engine import RosterEngine
from roster_system.storage.adapter import PersistenceAdapter
from roster_system.storage.memory_store import InMemoryKeyValueStore

TODAY = date(2024, 1, 10)
_ids = itertools.count(1)


class SteppingClock:
    """Returns a later time on every call."""

    def __init__(self, start: datetime):
        self._current = start

    def __call__(self) -> datetime:
        value = self._current
        self._current += timedelta(minutes=1)
        return value


def _engine(store=None, clock=None):
    return RosterEngine(
        PersistenceAdapter(store or InMemoryKeyValueStore()),
        clock=clock or SteppingClock(datetime(2024, 1, 10, 8, 0)),
        id_factory=lambda: f"STU_{next(_ids)}",
    )


def _add(engine, first, grade="5"):
    return engine.add_student(
        {"firstName": first, "lastName": "Test", "email": f"{first.lower()}@example.com", "grade": grade}
    )


def test_mark_creates_bucket_and_entry():
    engine = _engine()
    a = _add(engine, "A")

    entry = engine.mark_attendance(a.id, "2024-01-10", "present")

    assert entry.status == AttendanceStatus.PRESENT
    assert engine.get_attendance_for_date(TODAY) == {a.id: entry}


def test_remark_overwrites_status_and_timestamp():
    engine = _engine()
    a = _add(engine, "A")

    first = engine.mark_attendance(a.id, TODAY, AttendanceStatus.PRESENT)
    second = engine.mark_attendance(a.id, TODAY, AttendanceStatus.LATE)

    records = engine.get_attendance_for_date(TODAY)
    assert len(records) == 1
    assert records[a.id] == second
    assert second.timestamp > first.timestamp


def test_unknown_status_is_rejected():
    engine = _engine()
    a = _add(engine, "A")

    with pytest.raises(ValidationError):
        engine.mark_attendance(a.id, TODAY, "excused")
    assert engine.get_attendance_for_date(TODAY) == {}


def test_attendance_for_unrecorded_date_is_empty():
    assert _engine().get_attendance_for_date("2023-12-25") == {}


def test_returned_mapping_is_a_copy():
    engine = _engine()
    a = _add(engine, "A")
    engine.mark_attendance(a.id, TODAY, "present")

    engine.get_attendance_for_date(TODAY).clear()

    assert a.id in engine.get_attendance_for_date(TODAY)


def test_attendance_survives_reload():
    store = InMemoryKeyValueStore()
    engine = _engine(store)
    a = _add(engine, "A")
    entry = engine.mark_attendance(a.id, TODAY, "absent")

    assert _engine(store).get_attendance_for_date(TODAY) == {a.id: entry}


def test_mark_all_marks_every_student():
    engine = _engine()
    a = _add(engine, "A")
    b = _add(engine, "B")
    engine.mark_attendance(a.id, TODAY, "late")

    assert engine.mark_all(TODAY, "absent") == 2

    records = engine.get_attendance_for_date(TODAY)
    assert {sid: e.status for sid, e in records.items()} == {
        a.id: AttendanceStatus.ABSENT,
        b.id: AttendanceStatus.ABSENT,
    }


def test_day_summary_counts_unmarked_students():
    engine = _engine()
    a = _add(engine, "A")
    b = _add(engine, "B")
    c = _add(engine, "C")
    _add(engine, "D")
    engine.mark_attendance(a.id, TODAY, "present")
    engine.mark_attendance(b.id, TODAY, "absent")
    engine.mark_attendance(c.id, TODAY, "late")

    summary = engine.day_summary(TODAY)

    assert (summary.present, summary.absent, summary.late, summary.unmarked) == (1, 1, 1, 1)


def test_history_is_ascending_and_skips_unrecorded_days():
    engine = _engine()
    a = _add(engine, "A")
    engine.mark_attendance(a.id, date(2024, 1, 9), "late")
    engine.mark_attendance(a.id, date(2024, 1, 5), "present")
    engine.mark_attendance(a.id, date(2023, 12, 1), "absent")

    history = engine.get_student_attendance(a.id, Period.MONTH, today=TODAY)

    assert [(h.date, h.status) for h in history] == [
        (date(2024, 1, 5), AttendanceStatus.PRESENT),
        (date(2024, 1, 9), AttendanceStatus.LATE),
    ]


def test_history_window_edges_are_inclusive():
    engine = _engine()
    a = _add(engine, "A")
    engine.mark_attendance(a.id, date(2024, 1, 3), "present")
    engine.mark_attendance(a.id, date(2024, 1, 2), "present")
    engine.mark_attendance(a.id, TODAY, "absent")

    history = engine.get_student_attendance(a.id, "week", today=TODAY)

    assert [h.date for h in history] == [date(2024, 1, 3), TODAY]


def test_history_ignores_other_students():
    engine = _engine()
    a = _add(engine, "A")
    b = _add(engine, "B")
    engine.mark_attendance(b.id, TODAY, "present")

    assert engine.get_student_attendance(a.id, today=TODAY) == []


def test_history_is_recomputed_on_each_call():
    engine = _engine()
    a = _add(engine, "A")
    assert engine.get_student_attendance(a.id, today=TODAY) == []

    engine.mark_attendance(a.id, TODAY, "present")

    assert len(engine.get_student_attendance(a.id, today=TODAY)) == 1


def test_unknown_period_is_rejected():
    engine = _engine()
    a = _add(engine, "A")

    with pytest.raises(ValidationError):
        engine.get_student_attendance(a.id, "fortnight", today=TODAY)
