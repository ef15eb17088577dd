from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask, render_template

from config import get_settings_module

from .common.auth import current_principal
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, ensure_demo_employees, list_tables
from .database.connection import DBConfig
from .employees.controller import register as register_employees
from .reports.controller import register as register_reports

REPO_ROOT = Path(__file__).resolve().parents[3]
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

log = logging.getLogger("daily_report_system")


def _load_settings(settings_override: Optional[Mapping[str, Any]]):
    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    if not settings_override:
        return settings_module, settings
    merged = {k: getattr(settings, k) for k in dir(settings) if k.isupper()}
    merged.update(settings_override)
    return settings_module, SimpleNamespace(**merged)


def _register_error_pages(app: Flask) -> None:
    @app.errorhandler(404)
    def page_not_found(_e):
        principal = current_principal()
        return (
            render_template(
                "404.html",
                logged_in_user_name=principal.name if principal else None,
                message="The requested page does not exist.",
            ),
            404,
        )


def create_app(settings_override: Optional[Mapping[str, Any]] = None, *, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    settings_module, settings = _load_settings(settings_override)

    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"), format=LOG_FORMAT)

    app = Flask(
        __name__,
        template_folder=str(REPO_ROOT / "templates"),
        static_folder=str(REPO_ROOT / "static"),
    )
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)

    if container is None:
        db_config = dict(getattr(settings, "DB_CONFIG"))
        log.info("settings=%s db=%s", settings_module, DBConfig.from_mapping(db_config).describe())

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=REPO_ROOT / "database" / "schema.sql")
            log.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            ensure_demo_employees(db_config)

        container = build_container(db_config=db_config)

    app.extensions["daily_report_container"] = container

    register_employees(app, container)
    register_reports(app, container)
    _register_error_pages(app)

    return app
