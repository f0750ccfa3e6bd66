from __future__ import annotations

from datetime import date, datetime

from flask import Flask, jsonify, request

from ..common.validators import require_json_object
from ..container import Container
from ..core.enums import AttendanceStatus, Period
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    engine = container.engine

    def _parse_date(value: str) -> date:
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            raise ValidationError("Invalid date (YYYY-MM-DD)", {"date": "Invalid date (YYYY-MM-DD)"})

    @app.route("/api/attendance/<day>", methods=["GET"], endpoint="attendance_for_date")
    def attendance_for_date(day: str):
        on = _parse_date(day)
        records = engine.get_attendance_for_date(on)
        summary = engine.day_summary(on)
        return jsonify(
            {
                "date": on.strftime("%Y-%m-%d"),
                "records": {sid: entry.to_wire() for sid, entry in records.items()},
                "summary": {
                    "present": summary.present,
                    "absent": summary.absent,
                    "late": summary.late,
                    "unmarked": summary.unmarked,
                },
            }
        )

    @app.route("/api/attendance/<day>", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance(day: str):
        on = _parse_date(day)
        data = require_json_object(request.get_json(silent=True))
        student_id = str(data.get("studentId") or "")
        if engine.get_student(student_id) is None:
            return jsonify({"error": "Student not found"}), 404

        entry = engine.mark_attendance(student_id, on, data.get("status", ""))
        return jsonify({"studentId": student_id, "date": on.strftime("%Y-%m-%d"), **entry.to_wire()})

    @app.route("/api/attendance/<day>/all", methods=["POST"], endpoint="mark_all_attendance")
    def mark_all_attendance(day: str):
        on = _parse_date(day)
        data = require_json_object(request.get_json(silent=True))
        marked = engine.mark_all(on, data.get("status", AttendanceStatus.PRESENT.value))
        return jsonify({"date": on.strftime("%Y-%m-%d"), "marked": marked})

    @app.route("/api/students/<student_id>/attendance", methods=["GET"], endpoint="student_attendance")
    def student_attendance(student_id: str):
        if engine.get_student(student_id) is None:
            return jsonify({"error": "Student not found"}), 404

        period = request.args.get("period") or Period.MONTH.value
        history = engine.get_student_attendance(student_id, period)
        return jsonify(
            {
                "studentId": student_id,
                "period": period,
                "history": [item.to_dict() for item in history],
                "percentage": engine.calculate_attendance_percentage(student_id, period),
            }
        )
