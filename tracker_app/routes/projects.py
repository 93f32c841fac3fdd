"""
Project endpoints.

All routes require a Bearer token and only ever expose projects owned by
the authenticated user; someone else's project id answers 404.

Endpoints:
    POST /projects                 - Create a project
    GET  /projects                 - List the caller's projects
    GET  /projects/paginated       - One page of the caller's projects
    GET  /projects/<id>            - Retrieve a project
    PUT  /projects/<id>            - Update title/description
    GET  /projects/<id>/progress   - Task completion summary
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, g, jsonify, request

from ..auth import require_auth
from ..dto import ProjectRequest
from . import PROJECT_ID, get_services, page_request_from

logger = logging.getLogger(__name__)

projects_bp = Blueprint("projects", __name__)


@projects_bp.route("", methods=["POST"])
@require_auth
def create_project() -> tuple[Response, int]:
    """
    Create a project owned by the authenticated user.

    Request Body (JSON):
        title: Project title (required)
        description: Project description (optional)
    """
    payload = ProjectRequest.from_json(request.get_json(silent=True))
    project = get_services().projects.create_project(g.user_email, payload)
    return jsonify(project), 201


@projects_bp.route("", methods=["GET"])
@require_auth
def get_user_projects() -> tuple[Response, int]:
    """List every project owned by the caller, ordered by id."""
    logger.info("GET /projects - Fetching projects for %s", g.user_email)
    return jsonify(get_services().projects.get_user_projects(g.user_email)), 200


@projects_bp.route("/paginated", methods=["GET"])
@require_auth
def get_user_projects_paginated() -> tuple[Response, int]:
    """
    One page of the caller's projects.

    Query Parameters:
        page: Zero-based page number (default 0)
        size: Page size (default 10)
        sortBy: id, title, description or createdAt (default id)
        sortDir: asc or desc (default asc)
    """
    page_request = page_request_from(request.args)
    page = get_services().projects.get_user_projects_paginated(g.user_email, page_request)
    return jsonify(page.to_dict()), 200


@projects_bp.route(f"/{PROJECT_ID}", methods=["GET"])
@require_auth
def get_project(project_id: int) -> tuple[Response, int]:
    """
    Retrieve one of the caller's projects.

    Returns:
        200 with the project.
        404 if it does not exist or belongs to another user.
    """
    return jsonify(get_services().projects.get_project_by_id(g.user_email, project_id)), 200


@projects_bp.route(f"/{PROJECT_ID}", methods=["PUT"])
@require_auth
def update_project(project_id: int) -> tuple[Response, int]:
    """
    Replace a project's title and description.  The owner never changes.

    Request Body (JSON):
        title: Project title (required)
        description: Project description (optional)
    """
    payload = ProjectRequest.from_json(request.get_json(silent=True))
    project = get_services().projects.update_project(g.user_email, project_id, payload)
    return jsonify(project), 200


@projects_bp.route(f"/{PROJECT_ID}/progress", methods=["GET"])
@require_auth
def get_project_progress(project_id: int) -> tuple[Response, int]:
    """Task totals and completion percentage of one of the caller's projects."""
    progress = get_services().projects.get_project_progress(g.user_email, project_id)
    return jsonify(progress.to_dict()), 200
