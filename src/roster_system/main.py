from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import build_container, build_store
from .core.exceptions import PersistenceError, ValidationError
from .reports.controller import register as register_reports
from .roster.demo import seed_demo_data
from .storage.repository import KeyValueStore
from .students.controller import register as register_students

logger = logging.getLogger(__name__)


def create_app(settings_module: Optional[str] = None, *, store: Optional[KeyValueStore] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if app.config["DEBUG"]:
        logging.basicConfig(level=logging.DEBUG)

    if store is None:
        store = build_store(
            backend=getattr(settings, "STORAGE_BACKEND", "file"),
            directory=getattr(settings, "STORAGE_DIR", "data"),
        )
    container = build_container(
        store=store,
        low_attendance_threshold=int(getattr(settings, "LOW_ATTENDANCE_THRESHOLD", 80)),
    )
    logger.info("settings=%s storage=%s", settings_module, type(store).__name__)

    if bool(getattr(settings, "AUTO_SEED_DEMO", False)) and seed_demo_data(container.engine):
        logger.info("demo roster seeded")

    @app.errorhandler(ValidationError)
    def handle_validation_error(e: ValidationError):
        return jsonify({"error": str(e), "errors": e.errors}), 400

    @app.errorhandler(PersistenceError)
    def handle_persistence_error(e: PersistenceError):
        logger.error("Save failed: %s", e)
        return jsonify({"error": "Changes could not be saved"}), 500

    app.extensions["roster"] = container

    register_students(app, container)
    register_attendance(app, container)
    register_reports(app, container)

    return app
