from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_json_object
from ..container import Container
from .model import StudentUpdate
from .validation import ensure_valid_student


def register(app: Flask, container: Container) -> None:
    engine = container.engine

    def _not_found():
        return jsonify({"error": "Student not found"}), 404

    @app.route("/api/students", methods=["GET"], endpoint="list_students")
    def list_students():
        term = request.args.get("q", "")
        grade = request.args.get("grade", "")
        students = engine.search_students(term, grade)
        return jsonify({"students": [s.to_wire() for s in students]})

    @app.route("/api/students", methods=["POST"], endpoint="create_student")
    def create_student():
        data = require_json_object(request.get_json(silent=True))
        ensure_valid_student(data, engine.list_students())
        student = engine.add_student(data)
        return jsonify(student.to_wire()), 201

    @app.route("/api/students/<student_id>", methods=["GET"], endpoint="get_student")
    def get_student(student_id: str):
        profile = container.report_service.student_profile(student_id)
        if profile is None:
            return _not_found()
        student = engine.get_student(student_id)
        return jsonify({"student": student.to_wire(), "profile": profile})

    @app.route("/api/students/<student_id>", methods=["PATCH", "PUT"], endpoint="update_student")
    def update_student(student_id: str):
        if engine.get_student(student_id) is None:
            return _not_found()

        data = require_json_object(request.get_json(silent=True))
        # Duplicate e-mails are only rejected on creation.
        ensure_valid_student(data, engine.list_students(), editing_id=student_id, partial=True)
        updated = engine.update_student(student_id, StudentUpdate.from_mapping(data))
        if updated is None:
            return _not_found()
        return jsonify(updated.to_wire())

    @app.route("/api/students/<student_id>", methods=["DELETE"], endpoint="delete_student")
    def delete_student(student_id: str):
        if not engine.delete_student(student_id):
            return _not_found()
        return "", 204
