from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from types import SimpleNamespace
from typing import Any, Mapping, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .accounts.controller import register as register_accounts
from .container import build_container_from_settings
from .core.constants import DEFAULT_SESSION_DAYS
from .database.bootstrap import apply_schema, list_tables
from .logging_config import configure_logging

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parents[3] / "database" / "schema.sql"


def load_settings(overrides: Optional[Mapping[str, Any]] = None) -> SimpleNamespace:
    """Active config module (APP_ENV) as a namespace, with `overrides` applied on top."""
    settings_module = get_settings_module()
    module = importlib.import_module(settings_module)
    values = {k: getattr(module, k) for k in dir(module) if k.isupper()}
    values.update(overrides or {})
    values["SETTINGS_MODULE"] = settings_module
    return SimpleNamespace(**values)


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    load_dotenv(override=False)
    settings = load_settings(overrides)

    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"), getattr(settings, "LOG_FORMAT", "text"))

    app = Flask(__name__)
    app.secret_key = settings.SECRET_KEY
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.permanent_session_lifetime = timedelta(days=int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS)))

    logger.info(
        "settings=%s storage=%s identity_policy=%s hasher=%s demo_accounts=%s",
        settings.SETTINGS_MODULE,
        settings.STORAGE_BACKEND,
        settings.TEACHER_IDENTITY_POLICY,
        settings.PASSWORD_HASHER,
        settings.ENABLE_DEMO_ACCOUNTS,
    )

    if settings.STORAGE_BACKEND == "mysql" and bool(getattr(settings, "AUTO_INIT_DB", False)):
        db_config = settings.DB_CONFIG
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("schema ready (tables=%d)", len(list_tables(db_config)))

    container = build_container_from_settings(settings)
    app.extensions["jurnal_guru"] = container

    register_accounts(app, container)

    return app
