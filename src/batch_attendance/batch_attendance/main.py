from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask
from flask_mail import Mail

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .database.bootstrap import apply_schema, list_tables
from .escalation.controller import register as register_escalation
from .notifications.mail_sender import FlaskMailNotificationSender
from .ranking.controller import register as register_ranking

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def load_settings():
    load_dotenv(override=False)
    settings_module = get_settings_module()
    return settings_module, importlib.import_module(settings_module)


def service_options(settings) -> dict:
    """Engine tunables shared by the web app and the sweep script."""
    return {
        "utc_offset_minutes": int(getattr(settings, "UTC_OFFSET_MINUTES")),
        "checkin_open_minutes": int(getattr(settings, "CHECKIN_OPEN_MINUTES")),
        "warning_threshold": int(getattr(settings, "ABSENCE_WARNING_THRESHOLD")),
        "block_threshold": int(getattr(settings, "ABSENCE_BLOCK_THRESHOLD")),
        "use_default_schedule": bool(getattr(settings, "USE_DEFAULT_SCHEDULE", False)),
    }


def build_notifier(app: Flask, settings) -> FlaskMailNotificationSender:
    for key in ("MAIL_SERVER", "MAIL_PORT", "MAIL_USE_TLS", "MAIL_USERNAME", "MAIL_PASSWORD", "MAIL_DEFAULT_SENDER"):
        app.config[key] = getattr(settings, key)
    app.config["MAIL_SUPPRESS_SEND"] = bool(getattr(settings, "MAIL_SUPPRESS_SEND", False))
    return FlaskMailNotificationSender(app, Mail(app), sender=app.config["MAIL_DEFAULT_SENDER"])


def create_app(container: Optional[Container] = None) -> Flask:
    settings_module, settings = load_settings()
    app = Flask(__name__)

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["CRON_SECRET"] = getattr(settings, "CRON_SECRET", "")

    logging.basicConfig(
        level=logging.DEBUG if app.config["DEBUG"] else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

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
            apply_schema(db_config, schema_path=SCHEMA_PATH)
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

        container = build_container(
            db_config=db_config,
            notifier=build_notifier(app, settings),
            **service_options(settings),
        )

    app.extensions["batch_attendance"] = container

    register_attendance(app, container)
    register_ranking(app, container)
    register_escalation(app, container)

    return app
