from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .common.logger import setup_logger
from .core.constants import SESSION_DAYS
from .container import Container, build_container
from .dashboard.controller import register as register_dashboard
from .users.controller import register as register_users
from .visits.controller import register as register_visits


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.permanent_session_lifetime = timedelta(days=SESSION_DAYS)
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["MAX_CONTENT_LENGTH"] = int(getattr(settings, "MAX_UPLOAD_BYTES", 10 * 1024 * 1024))

    level = getattr(logging, str(getattr(settings, "LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logger = setup_logger(level=level)

    store_config = getattr(settings, "STORE_CONFIG")
    logger.info("settings=%s store=%s bucket=%s", settings_module, store_config.get("url"), store_config.get("bucket"))

    if container is None:
        legacy = bool(getattr(settings, "LEGACY_PLAINTEXT_PASSWORDS", False))
        if legacy:
            logger.warning("Plaintext password fallback is enabled")
        container = build_container(store_config=store_config, allow_legacy_plaintext=legacy)

    register_users(app, container)
    register_visits(app, container)
    register_dashboard(app, container)

    return app
