from __future__ import annotations

import importlib
import logging
from pathlib import Path
from types import SimpleNamespace
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, render_template

from config import get_settings_module

from .committees.controller import register as register_committees
from .common.datetime_utils import format_date, format_timestamp
from .container import build_container, build_store
from .core.exceptions import LoadError
from .database.bootstrap import apply_schema
from .logging_setup import configure_logging
from .meetings.controller import register as register_meetings
from .submissions.controller import register as register_submissions
from .users.controller import register as register_users

LOGGER = logging.getLogger("governance_tracker.main")

_SETTING_NAMES = (
    "SECRET_KEY",
    "DEBUG",
    "TESTING",
    "DATA_DIR",
    "STORAGE_BACKEND",
    "PROFILE_DIR",
    "PROFILE_NAME",
    "DB_CONFIG",
    "MAX_ATTACHMENT_BYTES",
    "LOG_LEVEL",
    "AUTO_INIT_DB",
)


def load_settings(overrides: Optional[dict] = None) -> SimpleNamespace:
    settings_module = importlib.import_module(get_settings_module())
    values = {name: getattr(settings_module, name, None) for name in _SETTING_NAMES}
    values.update(overrides or {})
    return SimpleNamespace(**values)


def create_app(overrides: Optional[dict] = None, *, store=None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder="../../../templates", static_folder="../../../static")

    settings = load_settings(overrides)
    configure_logging(settings.LOG_LEVEL)

    app.secret_key = settings.SECRET_KEY
    app.config["DEBUG"] = bool(settings.DEBUG)
    app.config["TESTING"] = bool(settings.TESTING)
    # Room for the multipart envelope around a maximum-size attachment.
    app.config["MAX_CONTENT_LENGTH"] = int(settings.MAX_ATTACHMENT_BYTES) * 2

    if settings.AUTO_INIT_DB and str(settings.STORAGE_BACKEND).lower() == "mysql":
        schema_path = Path(__file__).resolve().parents[3] / "database" / "schema.sql"
        apply_schema(settings.DB_CONFIG, schema_path=schema_path)

    container = build_container(
        data_dir=settings.DATA_DIR,
        store=store if store is not None else build_store(settings),
        max_attachment_bytes=int(settings.MAX_ATTACHMENT_BYTES),
    )
    app.extensions["governance_tracker"] = container
    LOGGER.info("Started with %s profile store, data from %s", settings.STORAGE_BACKEND, settings.DATA_DIR)

    app.jinja_env.filters["format_date"] = format_date
    app.jinja_env.filters["format_timestamp"] = format_timestamp

    @app.errorhandler(LoadError)
    def handle_load_error(e: LoadError):
        return render_template("error.html", message=str(e)), 500

    register_users(app, container)
    register_submissions(app, container)
    register_committees(app, container)
    register_meetings(app, container)

    return app
