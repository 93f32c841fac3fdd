"""
Task endpoints.

Every route requires a Bearer token.  Project-scoped routes check the
project through the ownership gate; task-id routes additionally
re-resolve the task's project, so a task in another user's project is
never visible.

Endpoints:
    POST   /projects/<id>/tasks            - Create a task (always incomplete)
    GET    /projects/<id>/tasks            - List a project's tasks
    GET    /projects/<id>/tasks/paginated  - One filtered page of tasks
    PUT    /tasks/<id>                     - Update title/description/dueDate
    PUT    /tasks/<id>/complete            - Mark completed
    PUT    /tasks/<id>/toggle              - Flip completion
    DELETE /tasks/<id>                     - Delete a task
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from flask import Blueprint, Response, g, jsonify, request

from ..auth import require_auth
from ..dto import TaskRequest
from ..errors import TrackerError, json_error
from . import PROJECT_ID, TASK_ID, get_services, page_request_from

logger = logging.getLogger(__name__)

tasks_bp = Blueprint("tasks", __name__)


def _state_change(
    operation: Callable[[str, int], dict[str, Any]],
    task_id: int,
    failure_prefix: str,
    unexpected_message: str,
) -> tuple[Response, int]:
    """
    Run a completion-state operation with this endpoint family's error contract.

    Domain failures (missing task, foreign project) answer 400 with a
    prefixed message; anything else answers 500 with a generic message.
    """
    try:
        return jsonify(operation(g.user_email, task_id)), 200
    except TrackerError as exc:
        return json_error(f"{failure_prefix}: {exc.message}", 400)
    except Exception:
        logger.exception("Unexpected error changing task %s", task_id)
        return json_error(unexpected_message, 500)


@tasks_bp.route(f"/projects/{PROJECT_ID}/tasks", methods=["POST"])
@require_auth
def create_task(project_id: int) -> tuple[Response, int]:
    """
    Create a task inside one of the caller's projects.

    Request Body (JSON):
        title: Task title (required)
        description: Task description (optional)
        dueDate: Due date, ISO format YYYY-MM-DD (required)

    Any ``completed`` value in the body is ignored.
    """
    payload = TaskRequest.from_json(request.get_json(silent=True))
    task = get_services().tasks.create_task(g.user_email, project_id, payload)
    return jsonify(task), 201


@tasks_bp.route(f"/projects/{PROJECT_ID}/tasks", methods=["GET"])
@require_auth
def get_project_tasks(project_id: int) -> tuple[Response, int]:
    """List every task of one of the caller's projects, ordered by id."""
    return jsonify(get_services().tasks.get_project_tasks(g.user_email, project_id)), 200


@tasks_bp.route(f"/projects/{PROJECT_ID}/tasks/paginated", methods=["GET"])
@require_auth
def get_project_tasks_paginated(project_id: int) -> tuple[Response, int]:
    """
    One page of a project's tasks, optionally filtered.

    Query Parameters:
        page, size, sortBy, sortDir: as for ``/projects/paginated``;
            sortBy also accepts dueDate and completed
        title: Case-insensitive substring of the task title (optional)
        completed: true or false (optional)
    """
    page_request = page_request_from(request.args, with_filters=True)
    page = get_services().tasks.get_project_tasks_paginated(
        g.user_email, project_id, page_request
    )
    return jsonify(page.to_dict()), 200


@tasks_bp.route(f"/tasks/{TASK_ID}", methods=["PUT"])
@require_auth
def update_task(task_id: int) -> tuple[Response, int]:
    """
    Update a task's title, description and due date.

    Request Body (JSON):
        title: Task title (required)
        description: Task description (optional)
        dueDate: Due date, ISO format YYYY-MM-DD (required)

    Completion state and project are left unchanged.
    """
    payload = TaskRequest.from_json(request.get_json(silent=True))
    return jsonify(get_services().tasks.update_task(g.user_email, task_id, payload)), 200


@tasks_bp.route(f"/tasks/{TASK_ID}/complete", methods=["PUT"])
@require_auth
def complete_task(task_id: int) -> tuple[Response, int]:
    """
    Mark a task completed.  Completing a completed task is a no-op.

    Returns:
        200 with the task.
        400 if the task is missing or not the caller's.
        500 on an unexpected failure.
    """
    return _state_change(
        get_services().tasks.complete_task,
        task_id,
        "Failed to complete task",
        "An unexpected error occurred while completing the task",
    )


@tasks_bp.route(f"/tasks/{TASK_ID}/toggle", methods=["PUT"])
@require_auth
def toggle_task_completion(task_id: int) -> tuple[Response, int]:
    """Flip a task between completed and not completed; errors as for complete."""
    return _state_change(
        get_services().tasks.toggle_task_completion,
        task_id,
        "Failed to toggle task completion",
        "An unexpected error occurred while toggling the task",
    )


@tasks_bp.route(f"/tasks/{TASK_ID}", methods=["DELETE"])
@require_auth
def delete_task(task_id: int) -> tuple[str, int]:
    """
    Delete a task.

    Returns:
        204 with an empty body.
        404 if the task is missing or not the caller's.
    """
    get_services().tasks.delete_task(g.user_email, task_id)
    return "", 204
