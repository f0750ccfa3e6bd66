from __future__ import annotations

import json

from flask import Flask, jsonify

from ..common.datetime_utils import now_local
from ..container import Container


def register(app: Flask, container: Container) -> None:
    engine = container.engine
    reports = container.report_service

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    def dashboard():
        return jsonify(engine.dashboard_stats().to_dict())

    @app.route("/api/activity", methods=["GET"], endpoint="recent_activity")
    def recent_activity():
        return jsonify(
            {
                "activities": [
                    {"studentId": a.student_id, "message": a.message, "time": a.time}
                    for a in engine.recent_activity()
                ]
            }
        )

    @app.route("/api/reports/export", methods=["GET"], endpoint="export_report")
    def export_report():
        now = now_local()
        body = json.dumps(reports.build_export(now=now), indent=2, ensure_ascii=False)
        filename = reports.export_filename(now=now)
        return app.response_class(
            body.encode("utf-8"),
            mimetype="application/json",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
