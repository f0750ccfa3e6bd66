from __future__ import annotations

import json
import logging
from typing import Any, Callable, Sequence, TypeVar

from ..attendance.model import AttendanceBook, AttendanceEntry
from ..common.datetime_utils import parse_iso_date, to_iso_date
from ..core.constants import ATTENDANCE_KEY, STUDENTS_KEY
from ..core.exceptions import PersistenceError
from ..students.model import Student
from .repository import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PersistenceAdapter:
    """Moves the two roster collections in and out of a ``KeyValueStore``.

    Loading never fails: a missing key gives the empty collection and an
    unreadable one is logged and treated the same way. Saving overwrites the
    stored text unconditionally and raises ``PersistenceError`` when the store
    refuses the write.
    """

    def __init__(self, store: KeyValueStore):
        self._store = store

    def _load(self, key: str, decode: Callable[[Any], T], empty: Callable[[], T]) -> T:
        try:
            raw = self._store.get(key)
        except Exception:
            logger.warning("Could not read %r from storage, starting empty", key, exc_info=True)
            return empty()
        if raw is None:
            return empty()
        try:
            return decode(json.loads(raw))
        except (ValueError, TypeError, KeyError, AttributeError):
            logger.warning("Stored %r is corrupted, starting empty", key, exc_info=True)
            return empty()

    def _save(self, key: str, payload: Any) -> None:
        text = json.dumps(payload, ensure_ascii=False)
        try:
            self._store.set(key, text)
        except Exception as e:
            raise PersistenceError(f"Failed to save {key}: {e}") from e

    def load_students(self) -> list[Student]:
        return self._load(STUDENTS_KEY, decode_students, list)

    def save_students(self, students: Sequence[Student]) -> None:
        self._save(STUDENTS_KEY, encode_students(students))

    def load_attendance(self) -> AttendanceBook:
        return self._load(ATTENDANCE_KEY, decode_attendance, dict)

    def save_attendance(self, book: AttendanceBook) -> None:
        self._save(ATTENDANCE_KEY, encode_attendance(book))


def encode_students(students: Sequence[Student]) -> list[dict]:
    return [s.to_wire() for s in students]


def decode_students(payload: Any) -> list[Student]:
    if not isinstance(payload, list):
        raise TypeError("students payload must be a list")
    return [Student.from_wire(item) for item in payload]


def encode_attendance(book: AttendanceBook) -> dict[str, dict]:
    return {
        to_iso_date(day): {sid: entry.to_wire() for sid, entry in bucket.items()}
        for day, bucket in sorted(book.items())
    }


def decode_attendance(payload: Any) -> AttendanceBook:
    if not isinstance(payload, dict):
        raise TypeError("attendance payload must be an object")
    book: AttendanceBook = {}
    for day_s, bucket in payload.items():
        book[parse_iso_date(day_s)] = {sid: AttendanceEntry.from_wire(e) for sid, e in bucket.items()}
    return book
