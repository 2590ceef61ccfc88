from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.responses import domain_error, infrastructure_error
from .container import Container, build_container
from .core.constants import DEFAULT_GRACE_PERIOD_MINUTES
from .core.exceptions import DomainError, InfrastructureError
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .schedules.controller import register as register_schedules

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db_config = getattr(settings, "DB_CONFIG", {})
    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql"))
    grace_minutes = int(getattr(settings, "GRACE_PERIOD_MINUTES", DEFAULT_GRACE_PERIOD_MINUTES))

    app.logger.info(
        "settings=%s backend=%s grace=%smin db=%s@%s:%s/%s",
        settings_module, backend, grace_minutes,
        db_config.get("user"), db_config.get("host"), db_config.get("port", 3306), db_config.get("database"),
    )

    if container is None and backend == "mysql":
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            app.logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            app.logger.info("demo seed ready")

    container = container or build_container(
        db_config=db_config,
        backend=backend,
        grace_minutes=grace_minutes,
        timezone=getattr(settings, "SCHOOL_TIMEZONE", None) or None,
    )
    app.extensions["rfid_attendance"] = container

    register_attendance(app, container)
    register_schedules(app, container)
    _register_error_handlers(app)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "gracePeriodMinutes": container.validator.grace_minutes}), 200

    return app


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def on_domain_error(e: DomainError):
        return domain_error(e)

    @app.errorhandler(InfrastructureError)
    def on_infrastructure_error(e: InfrastructureError):
        app.logger.error("infrastructure failure: %s", e)
        return infrastructure_error(e)

    @app.errorhandler(HTTPException)
    def on_http_error(e: HTTPException):
        return jsonify({"success": False, "error": e.description, "code": e.name}), e.code

    @app.errorhandler(Exception)
    def on_unexpected(e: Exception):
        app.logger.exception("unhandled error")
        return jsonify({"success": False, "error": "Internal server error"}), 500
