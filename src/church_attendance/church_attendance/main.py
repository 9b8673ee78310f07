from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import (
    DEFAULT_PLACEHOLDER_DOMAIN,
    DEFAULT_SESSION_DAYS,
    DEFAULT_SIGNIN_COOLDOWN_SECONDS,
    DEFAULT_SIGNIN_MAX_ATTEMPTS,
    DEFAULT_SIGNIN_WINDOW_SECONDS,
)
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_admin, list_tables
from .database.connection import DBConfig
from .navigation.controller import register as register_navigation
from .profiles.controller import register as register_profiles
from .stats.controller import register as register_stats

logger = logging.getLogger(__name__)

REPO_ROOT = Path(__file__).resolve().parents[3]


def create_app(*, container: Optional[Container] = None, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__, template_folder=str(REPO_ROOT / "templates"), static_folder=str(REPO_ROOT / "static"))

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SERVICE_ROLE_KEY"] = getattr(settings, "SERVICE_ROLE_KEY", None)
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))

    placeholder_domain = getattr(settings, "LOGIN_PLACEHOLDER_DOMAIN", DEFAULT_PLACEHOLDER_DOMAIN)

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        target = DBConfig.from_dict(db_config)
        logger.info("settings=%s db=%s", settings_module, target.describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(target, schema_path=REPO_ROOT / "database" / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(target)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(target, seed_path=REPO_ROOT / "database" / "seed.sql")
            ensure_demo_admin(target, placeholder_domain=placeholder_domain)

        container = build_container(
            db_config=db_config,
            placeholder_domain=placeholder_domain,
            signin_max_attempts=int(getattr(settings, "SIGNIN_MAX_ATTEMPTS", DEFAULT_SIGNIN_MAX_ATTEMPTS)),
            signin_cooldown_seconds=int(getattr(settings, "SIGNIN_COOLDOWN_SECONDS", DEFAULT_SIGNIN_COOLDOWN_SECONDS)),
            signin_window_seconds=int(getattr(settings, "SIGNIN_WINDOW_SECONDS", DEFAULT_SIGNIN_WINDOW_SECONDS)),
        )

    app.extensions["container"] = container

    register_navigation(app, container)
    register_profiles(app, container)
    register_attendance(app, container)
    register_stats(app, container)

    return app
