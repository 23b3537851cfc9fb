"""
Task tracker Flask application factory.

Provides the ``create_app`` factory that assembles the service: it loads
configuration, builds the two in-memory stores, attaches them to the app,
and registers the API blueprint.  Each application instance owns its own
stores, so test apps never share state with each other.
"""

from __future__ import annotations

import logging

from flask import Flask

from config import get_config

from .models import CredentialStore, TaskRepository

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

CREDENTIAL_STORE_KEY = "credential_store"
TASK_REPOSITORY_KEY = "task_repository"


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the task tracker application.

    Args:
        config_name: Optional configuration environment name
            (``"development"``, ``"testing"``, ``"production"``).  When
            ``None``, the value is read from ``FLASK_ENV``, defaulting to
            ``"development"``.

    Returns:
        A configured Flask application with empty stores.
    """
    app = Flask(__name__)
    config_class = get_config(config_name)
    app.config.from_object(config_class)

    logger.info("Creating task tracker app with config: %s", config_class.__name__)

    # Stores live on app.extensions so handlers reach them through
    # current_app rather than module globals.
    app.extensions[CREDENTIAL_STORE_KEY] = CredentialStore(
        hash_method=app.config["PASSWORD_HASH_METHOD"]
    )
    app.extensions[TASK_REPOSITORY_KEY] = TaskRepository()

    from .routes.api import api_bp

    app.register_blueprint(api_bp)

    return app
