import json
from datetime import date

import pytest

from roster_system.attendance.model import AttendanceEntry
from roster_system.core.enums import AttendanceStatus
from roster_system.core.exceptions import PersistenceError
from roster_system.roster.engine import RosterEngine
from roster_system.storage.adapter import PersistenceAdapter
from roster_system.storage.memory_store import InMemoryKeyValueStore
from roster_system.students.model import Student


class BrokenStore:
    """Reads and writes both fail, like a full or locked disk."""

    def get(self, key):
        raise OSError("disk unavailable")

    def set(self, key, value):
        raise OSError("quota exceeded")


def _student(sid, email):
    return Student(
        id=sid,
        first_name="First",
        last_name="Last",
        email=email,
        grade="5",
        created_at="2024-01-01T08:00:00",
        phone="+1-555-0100",
        date_of_birth="2010-03-15",
        address="1 Main St",
        parent_name="Parent",
        parent_phone="+1-555-0101",
    )


def test_missing_keys_load_as_empty_collections():
    adapter = PersistenceAdapter(InMemoryKeyValueStore())

    assert adapter.load_students() == []
    assert adapter.load_attendance() == {}


def test_students_round_trip_keeps_order_and_fields():
    store = InMemoryKeyValueStore()
    students = [_student("STU_1_a", "a@x.io"), _student("STU_2_b", "b@x.io")]

    PersistenceAdapter(store).save_students(students)

    assert PersistenceAdapter(store).load_students() == students


def test_attendance_is_stored_with_iso_date_keys():
    store = InMemoryKeyValueStore()
    book = {date(2024, 1, 10): {"STU_1_a": AttendanceEntry(AttendanceStatus.LATE, "2024-01-10T08:05:00")}}

    PersistenceAdapter(store).save_attendance(book)

    assert json.loads(store.get("attendance")) == {
        "2024-01-10": {"STU_1_a": {"status": "late", "timestamp": "2024-01-10T08:05:00"}}
    }
    assert PersistenceAdapter(store).load_attendance() == book


def test_reads_data_written_by_the_browser_version():
    store = InMemoryKeyValueStore(
        {
            "students": json.dumps(
                [
                    {
                        "id": "STU_1700000000000_k3j2h1g0f",
                        "firstName": "John",
                        "lastName": "Doe",
                        "email": "john.doe@example.com",
                        "grade": "5",
                        "createdAt": "2024-01-01T08:00:00.000Z",
                        "attendance": [],
                    }
                ]
            ),
            "attendance": json.dumps(
                {"2024-01-10": {"STU_1700000000000_k3j2h1g0f": {"status": "present", "timestamp": "x"}}}
            ),
        }
    )
    adapter = PersistenceAdapter(store)

    students = adapter.load_students()
    book = adapter.load_attendance()

    assert students[0].first_name == "John"
    assert students[0].extra == {"attendance": []}
    assert book[date(2024, 1, 10)]["STU_1700000000000_k3j2h1g0f"].status == AttendanceStatus.PRESENT


@pytest.mark.parametrize(
    "students_raw, attendance_raw",
    [
        ("{not json", "[1, 2"),
        ('{"id": 1}', '["2024-01-10"]'),
        ('[{"firstName": "no id"}]', '{"not-a-date": {}}'),
        ("[]", '{"2024-01-10": {"s": {"status": "sleeping"}}}'),
    ],
)
def test_corrupted_values_degrade_to_empty(students_raw, attendance_raw):
    store = InMemoryKeyValueStore({"students": students_raw, "attendance": attendance_raw})
    adapter = PersistenceAdapter(store)

    assert adapter.load_students() == []
    assert adapter.load_attendance() == {}


def test_unreadable_store_degrades_to_empty():
    adapter = PersistenceAdapter(BrokenStore())

    assert adapter.load_students() == []
    assert adapter.load_attendance() == {}


def test_save_failure_is_raised():
    adapter = PersistenceAdapter(BrokenStore())

    with pytest.raises(PersistenceError):
        adapter.save_students([_student("STU_1_a", "a@x.io")])
    with pytest.raises(PersistenceError):
        adapter.save_attendance({})


def test_empty_phone_survives_reload():
    store = InMemoryKeyValueStore()
    engine = RosterEngine(PersistenceAdapter(store))
    student = engine.add_student(
        {"firstName": "A", "lastName": "B", "email": "a@x.io", "grade": "5", "phone": "555"}
    )
    engine.update_student(student.id, {"phone": ""})
    before = engine.list_students()

    after = RosterEngine(PersistenceAdapter(store)).list_students()

    assert after == before
    assert after[0].phone == ""


def test_stored_phone_values_are_read_back_unchanged():
    store = InMemoryKeyValueStore(
        {
            "students": json.dumps(
                [
                    {"id": "STU_1_a", "firstName": "A", "email": "a@x.io", "phone": ""},
                    {"id": "STU_2_b", "firstName": "B", "email": "b@x.io", "phone": None},
                ]
            )
        }
    )

    students = PersistenceAdapter(store).load_students()

    assert [s.phone for s in students] == ["", None]
