from __future__ import annotations

import itertools
import json
from datetime import date, datetime

from roster_system.reports.service import ReportService
from roster_system.roster.engine import RosterEngine
from roster_system.storage.adapter import PersistenceAdapter
from roster_system.storage.memory_store import InMemoryKeyValueStore

NOW = datetime(2024, 1, 10, 15, 30)
_ids = itertools.count(1)


def _engine():
    return RosterEngine(
        PersistenceAdapter(InMemoryKeyValueStore()),
        clock=lambda: NOW,
        id_factory=lambda: f"STU_{next(_ids)}",
    )


def test_export_contains_collections_and_stats():
    engine = _engine()
    a = engine.add_student({"firstName": "A", "lastName": "X", "email": "a@x.io", "grade": "5"})
    b = engine.add_student({"firstName": "B", "lastName": "Y", "email": "b@x.io", "grade": "4"})
    engine.mark_attendance(a.id, date(2024, 1, 10), "present")
    engine.mark_attendance(b.id, date(2024, 1, 10), "absent")

    export = ReportService(engine).build_export(now=NOW)

    assert [s["id"] for s in export["students"]] == [a.id, b.id]
    assert export["attendance"]["2024-01-10"][a.id]["status"] == "present"
    assert export["generatedAt"] == "2024-01-10T15:30:00"
    assert export["stats"] == {"totalStudents": 2, "averageAttendance": 50}
    json.dumps(export)


def test_export_of_empty_roster():
    export = ReportService(_engine()).build_export(now=NOW)

    assert export["students"] == []
    assert export["attendance"] == {}
    assert export["stats"] == {"totalStudents": 0, "averageAttendance": 0}


def test_export_filename_embeds_the_date():
    assert ReportService(_engine()).export_filename(now=NOW) == "student-report-2024-01-10.json"


def test_student_profile():
    engine = _engine()
    a = engine.add_student({"firstName": "Ann", "lastName": "Lee", "email": "ann@x.io", "grade": "3"})
    engine.mark_attendance(a.id, date(2024, 1, 9), "present")
    service = ReportService(engine)

    assert service.student_profile(a.id) == {
        "id": a.id,
        "name": "Ann Lee",
        "email": "ann@x.io",
        "grade": "3",
        "attendance": 100,
    }
    assert service.student_profile("STU_missing") is None
