from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.http import register_error_handlers
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS, DENIED_VISIBILITY_DAYS, ENTRY_HISTORY_MONTHS
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .time_entries.controller import register as register_time_entries
from .timeoff.controller import register as register_timeoff
from .users.controller import register as register_users

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=DEFAULT_SESSION_DAYS)
    app.logger.setLevel(getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO))

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")

        # Helpful startup info to see which database the app is talking to.
        if app.config["DEBUG"]:
            print(
                "[staff-portal] settings=", settings_module,
                " db=", f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
            )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            if app.config["DEBUG"]:
                print(f"[staff-portal] schema ready (tables={len(list_tables(db_config))})")
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)
            if app.config["DEBUG"]:
                print("[staff-portal] demo seed ready")

        container = build_container(
            db_config=db_config,
            denied_visibility_days=int(getattr(settings, "DENIED_VISIBILITY_DAYS", DENIED_VISIBILITY_DAYS)),
            history_months=int(getattr(settings, "ENTRY_HISTORY_MONTHS", ENTRY_HISTORY_MONTHS)),
        )

    app.extensions["staff_portal"] = container

    register_users(app, container)
    register_time_entries(app, container)
    register_timeoff(app, container)
    register_error_handlers(app)

    return app
