from __future__ import annotations

import importlib
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.http import register_error_handlers, register_request_logging
from .container import Container, build_container
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .database.connection import DBConfig
from .messes.controller import register as register_messes
from .plans.controller import register as register_plans
from .subscriptions.controller import register as register_subscriptions
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _register_health(app: Flask, container: Container, db_name: str) -> None:
    @app.route("/health", methods=["GET"], endpoint="health")
    def health():
        return jsonify({"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()})

    @app.route("/health/db", methods=["GET"], endpoint="health_db")
    def health_db():
        try:
            container.conn.ping()
        except Exception as e:
            logger.error("Database health check failed: %s", e)
            return jsonify({"status": "error", "message": "Database unavailable"}), 500
        return jsonify(
            {
                "status": "connected",
                "database": db_name,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            }
        )


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    _configure_logging(str(getattr(settings, "LOG_LEVEL", "INFO")))
    logger.info("settings=%s db=%s", settings_module, DBConfig.from_dict(db_config).describe())

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            ensure_demo_users(db_config)
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_expires_minutes=int(getattr(settings, "JWT_EXPIRES_MINUTES")),
        )

    register_error_handlers(app)
    register_request_logging(app)
    _register_health(app, container, str(db_config.get("database")))

    register_users(app, container)
    register_messes(app, container)
    register_plans(app, container)
    register_dashboard(app, container)
    register_subscriptions(app, container)
    register_attendance(app, container)

    return app
