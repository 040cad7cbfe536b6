from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .core.logging import configure_logging, get_logger
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables

logger = get_logger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[2]


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Pass a prebuilt ``container`` (e.g. in-memory repositories) to skip the
    MySQL wiring and database bootstrap entirely.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("Schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
            logger.info("Seed data ready")

        container = build_container(db_config=db_config, settings=settings)

    logger.info("Attendance day timezone: %s", container.clock.tz)

    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "timezone": str(container.clock.tz)})

    register_attendance(app, container)

    return app
