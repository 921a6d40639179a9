from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import RequestEntityTooLarge

from config import get_settings_module

from .announcements.controller import register as register_announcements
from .applications.controller import register as register_applications
from .attendance.controller import register as register_attendance
from .common.web import error_response
from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .documents.controller import register as register_documents
from .resumes.controller import register as register_resumes
from .scanning.controller import register as register_scanning
from .store.repository import KeyValueStore
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

# Headroom for the multipart envelope around a maximum-size resume.
_UPLOAD_OVERHEAD_BYTES = 64 * 1024


def create_app(*, store: Optional[KeyValueStore] = None, overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app from the ``APP_ENV`` settings module.

    ``overrides`` is applied on top of the settings; ``store`` swaps out the
    MySQL key-value store (and skips schema bootstrapping).
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    app.config.from_object(importlib.import_module(settings_module))
    if overrides:
        app.config.update(overrides)

    app.config["MAX_CONTENT_LENGTH"] = int(app.config["MAX_RESUME_BYTES"]) + _UPLOAD_OVERHEAD_BYTES

    logging.basicConfig(
        level=str(app.config.get("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s [intern-portal] %(levelname)s %(name)s: %(message)s",
    )

    db_config = app.config["DB_CONFIG"]
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if store is None and app.config.get("AUTO_INIT_DB"):
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(db_config, schema_path=schema_path)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container(settings=app.config, store=store)
    app.extensions["intern_portal.container"] = container

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok"})

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(_e):
        return error_response("Uploaded file is too large", 413)

    register_users(app, container)
    register_applications(app, container)
    register_attendance(app, container)
    register_scanning(app, container)
    register_documents(app, container)
    register_resumes(app, container)
    register_announcements(app, container)

    return app
