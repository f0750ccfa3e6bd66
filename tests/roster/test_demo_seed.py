import random
from datetime import date

from roster_system.roster.demo import SAMPLE_STUDENTS, seed_demo_data
from roster_system.roster.engine import RosterEngine
from roster_system.storage.adapter import PersistenceAdapter
from roster_system.storage.memory_store import InMemoryKeyValueStore

TODAY = date(2024, 1, 10)


def test_seeds_students_and_a_month_of_marks():
    engine = RosterEngine(PersistenceAdapter(InMemoryKeyValueStore()))

    assert seed_demo_data(engine, today=TODAY, rng=random.Random(7)) is True

    students = engine.list_students()
    assert [s.email for s in students] == [s["email"] for s in SAMPLE_STUDENTS]
    assert len(engine.get_attendance_for_date(TODAY)) == 3
    assert len(engine.get_attendance_for_date(date(2023, 12, 12))) == 3
    assert engine.get_attendance_for_date(date(2023, 12, 11)) == {}


def test_does_not_seed_a_roster_with_students():
    engine = RosterEngine(PersistenceAdapter(InMemoryKeyValueStore()))
    engine.add_student({"firstName": "A", "lastName": "B", "email": "a@b.io", "grade": "1"})

    assert seed_demo_data(engine, today=TODAY) is False
    assert len(engine.list_students()) == 1
