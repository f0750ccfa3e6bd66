from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from ..common.datetime_utils import now_local, to_iso_date
from ..core.constants import EXPORT_FILENAME_TEMPLATE
from ..roster.engine import RosterEngine
from ..storage.adapter import encode_attendance, encode_students


class ReportService:
    """Builds the export artifact and per-student summaries from the engine."""

    def __init__(self, engine: RosterEngine):
        self._engine = engine

    def build_export(self, *, now: Optional[datetime] = None) -> dict[str, Any]:
        now = now or now_local()
        return {
            "students": encode_students(self._engine.list_students()),
            "attendance": encode_attendance(self._engine.attendance_snapshot()),
            "generatedAt": now.isoformat(),
            "stats": {
                "totalStudents": len(self._engine.list_students()),
                "averageAttendance": self._engine.calculate_average_attendance(today=now.date()),
            },
        }

    def export_filename(self, *, now: Optional[datetime] = None) -> str:
        now = now or now_local()
        return EXPORT_FILENAME_TEMPLATE.format(date=to_iso_date(now.date()))

    def student_profile(self, student_id: str) -> Optional[dict[str, Any]]:
        student = self._engine.get_student(student_id)
        if not student:
            return None
        return {
            "id": student.id,
            "name": student.full_name,
            "email": student.email,
            "grade": student.grade,
            "attendance": self._engine.calculate_attendance_percentage(student_id),
        }
