from __future__ import annotations

import importlib
import logging
from typing import Any, Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .container import build_container
from .database.bootstrap import apply_schema, list_tables
from .webhook.controller import register as register_webhook

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Any] = None, **overrides: Any) -> Flask:
    """Build the Flask app.

    ``overrides`` are passed to ``build_container`` (store, classifier,
    holiday_source, messenger) so tests can swap the external collaborators.
    """
    load_dotenv(override=False)
    app = Flask(__name__)

    if settings is None:
        settings = importlib.import_module(get_settings_module())
    logging.basicConfig(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY", None)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    if bool(getattr(settings, "AUTO_INIT_DB", False)) and "store" not in overrides:
        db_config = getattr(settings, "DB_CONFIG")
        apply_schema(db_config)
        logger.info(
            "Schema ready for %s@%s:%s/%s (tables=%d)",
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
            len(list_tables(db_config)),
        )

    container = build_container(settings=settings, **overrides)
    app.extensions["attendance_bot"] = container

    register_webhook(app, container)

    return app
