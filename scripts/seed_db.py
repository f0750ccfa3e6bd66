from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
SRC = REPO_ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from roster_system.config import get_settings_module
from roster_system.container import build_container, build_store
from roster_system.roster.demo import seed_demo_data


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    store = build_store(
        backend=getattr(settings, "STORAGE_BACKEND", "file"),
        directory=getattr(settings, "STORAGE_DIR", "data"),
    )
    container = build_container(store=store)

    if not seed_demo_data(container.engine):
        print("SKIP: roster is not empty, demo data not added")
        return

    stats = container.engine.dashboard_stats()
    print(
        "OK: Seeded demo roster -> "
        f"{settings.STORAGE_BACKEND}:{settings.STORAGE_DIR} "
        f"(students={stats.total_students}, avg={stats.average_attendance}%)"
    )


if __name__ == "__main__":
    main()
