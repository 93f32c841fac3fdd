"""
HTTP controllers of the task tracker.

Blueprints:
- auth: registration, login and the current-user profile (``/auth``)
- projects: project CRUD and progress (``/projects``)
- tasks: project task listings and per-task operations
- system: public health check
"""

from __future__ import annotations

import os

from flask import Blueprint, Flask, Response, current_app, g, jsonify

from .. import db
from ..dto import SQL_INTEGER_MAX, PageRequest
from ..services import Services, build_services

# Ids past the 64-bit range never match, so they answer 404 like unknown ids
PROJECT_ID = f"<int(max={SQL_INTEGER_MAX}):project_id>"
TASK_ID = f"<int(max={SQL_INTEGER_MAX}):task_id>"

system_bp = Blueprint("system", __name__)


@system_bp.route("/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Liveness probe for load balancers and orchestrators."""
    return jsonify(
        {
            "status": "healthy",
            "service": "tracker",
            "environment": os.getenv("ENVIRONMENT", "unknown"),
        }
    ), 200


def get_services() -> Services:
    """Return the request-scoped service set, building it on first use."""
    if "services" not in g:
        g.services = build_services(db.session)
    return g.services


def page_request_from(args, *, with_filters: bool = False) -> PageRequest:
    """Parse pagination query parameters using the configured page sizes."""
    return PageRequest.from_args(
        args,
        default_size=current_app.config.get("DEFAULT_PAGE_SIZE", 10),
        max_size=current_app.config.get("MAX_PAGE_SIZE", 100),
        with_filters=with_filters,
    )


def register_blueprints(app: Flask) -> None:
    from .auth import auth_bp
    from .projects import projects_bp
    from .tasks import tasks_bp

    app.register_blueprint(system_bp)
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(projects_bp, url_prefix="/projects")
    app.register_blueprint(tasks_bp)
