"""
Task tracker Flask application factory.

Provides the ``create_app`` factory used to build the task tracker REST
backend: users register and log in, own projects, and manage the tasks
inside those projects.  The factory wires configuration, the shared
SQLAlchemy instance, JWT keys, blueprints, error handlers and CLI commands
in a deterministic order so that every consumer (WSGI server, test
harness, ``flask`` CLI) gets an identical application for a given
configuration name.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from flask import Flask
from flask_sqlalchemy import SQLAlchemy

from config import get_config, load_jwt_keys


# Shared SQLAlchemy instance -- initialised with a concrete app inside create_app()
db = SQLAlchemy()

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    """Install the root log format once, at the configured level."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _ensure_sqlite_db_parent_exists(database_uri: str) -> None:
    """Create parent directories for file-based SQLite URIs when missing."""
    sqlite_prefix = "sqlite:///"
    if not database_uri.startswith(sqlite_prefix):
        return

    sqlite_path = database_uri[len(sqlite_prefix) :].split("?", 1)[0]
    if sqlite_path == ":memory:":
        return

    Path(sqlite_path).parent.mkdir(parents=True, exist_ok=True)


def create_app(config_name: str | None = None) -> Flask:
    """
    Create and configure the task tracker application.

    Args:
        config_name: The configuration environment to load (e.g.
            ``"development"``, ``"testing"``, ``"production"``).  When
            ``None``, the value is resolved from the ``FLASK_ENV``
            environment variable, defaulting to ``"development"``.

    Returns:
        A fully configured :class:`~flask.Flask` application instance
        with all extensions initialised and database tables created.
    """
    app = Flask(__name__, instance_relative_config=True)
    config_class = get_config(config_name)
    app.config.from_object(config_class)
    _configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    private_key, public_key = load_jwt_keys(testing=bool(app.config.get("TESTING")))
    app.config["JWT_PRIVATE_KEY"] = private_key
    app.config["JWT_PUBLIC_KEY"] = public_key

    logger.info("Creating task tracker app with config: %s", config_class.__name__)

    os.makedirs(app.instance_path, exist_ok=True)
    _ensure_sqlite_db_parent_exists(app.config.get("SQLALCHEMY_DATABASE_URI", ""))

    db.init_app(app)

    # Imported here to avoid circular imports -- these modules reference
    # ``db`` from this package, which must exist first.
    from .cli import register_commands
    from .errors import register_error_handlers
    from .routes import register_blueprints

    register_blueprints(app)
    register_error_handlers(app)
    register_commands(app)

    # Tables are created directly; there is no migration tooling.
    with app.app_context():
        db.create_all()
        logger.info("Task tracker database tables created")

    return app
