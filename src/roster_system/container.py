from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from .common.datetime_utils import now_local
from .core.constants import LOW_ATTENDANCE_THRESHOLD
from .reports.service import ReportService
from .roster.engine import RosterEngine
from .storage.adapter import PersistenceAdapter
from .storage.file_store import FileKeyValueStore
from .storage.memory_store import InMemoryKeyValueStore
from .storage.repository import KeyValueStore


@dataclass(frozen=True)
class Container:
    store: KeyValueStore
    persistence: PersistenceAdapter
    engine: RosterEngine
    report_service: ReportService


def build_store(*, backend: str, directory: str = "") -> KeyValueStore:
    backend = (backend or "file").lower()
    if backend == "memory":
        return InMemoryKeyValueStore()
    if backend == "file":
        return FileKeyValueStore(directory or "data")
    raise ValueError(f"Unknown storage backend: {backend!r}")


def build_container(
    *,
    store: KeyValueStore,
    clock: Callable[[], datetime] = now_local,
    low_attendance_threshold: int = LOW_ATTENDANCE_THRESHOLD,
    id_factory: Optional[Callable[[], str]] = None,
) -> Container:
    persistence = PersistenceAdapter(store)
    engine_kwargs = {"clock": clock, "low_attendance_threshold": low_attendance_threshold}
    if id_factory is not None:
        engine_kwargs["id_factory"] = id_factory
    engine = RosterEngine(persistence, **engine_kwargs)
    report_service = ReportService(engine)

    return Container(
        store=store,
        persistence=persistence,
        engine=engine,
        report_service=report_service,
    )
