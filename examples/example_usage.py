"""Example: drive the engine directly (no Flask).

Controllers are a thin layer; every statistic comes from the RosterEngine.
"""

import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from roster_system.container import build_container
from roster_system.roster.demo import seed_demo_data
from roster_system.storage.memory_store import InMemoryKeyValueStore


def main():
    container = build_container(store=InMemoryKeyValueStore())
    seed_demo_data(container.engine)

    print(container.engine.dashboard_stats().to_dict())
    for student in container.engine.list_students():
        print(student.full_name, container.engine.calculate_attendance_percentage(student.id, "week"))


if __name__ == "__main__":
    main()
