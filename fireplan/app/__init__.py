"""Application factory and app-wide configuration."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from fireplan.app.api.routes import STORE_EXTENSION, api_bp
from fireplan.settings import Settings
from fireplan.state.persistence import JsonFileStorage
from fireplan.state.store import ConfigStore

logger = logging.getLogger(__name__)


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance."""
    app = Flask(__name__)
    app.config.from_object(Settings)
    app.config.from_prefixed_env("FIREPLAN")
    if overrides:
        app.config.update(overrides)

    logging.basicConfig(level=app.config["LOG_LEVEL"])

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    store = ConfigStore()
    storage = JsonFileStorage(app.config["STATE_PATH"], app.config["STATE_WRITE_ATTEMPTS"])
    if storage.restore(store):
        logger.info("Restored saved plan from %s", storage.path)
    storage.attach(store)
    app.extensions[STORE_EXTENSION] = store

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
