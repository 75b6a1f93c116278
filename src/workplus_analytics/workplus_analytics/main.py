from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .api.controller import register as register_api
from .common.logging_config import setup_logging
from .container import build_container

logger = logging.getLogger(__name__)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        json_output=bool(getattr(settings, "LOG_JSON", True)),
    )
    logger.info("Starting WorkPlus analytics (settings=%s)", settings_module)

    container = build_container(analytics_settings=getattr(settings, "ANALYTICS_SETTINGS", {}))
    register_api(app, container)

    return app
