"""
Conversion between ORM entities and API request/response shapes.

Response builders return plain dicts ready for ``jsonify``.  Entity
builders never touch ownership columns after creation, and new tasks are
always incomplete.
"""

from __future__ import annotations

from typing import Any

from .dto import ProjectRequest, RegisterRequest, TaskRequest
from .models import Project, Task, User


def user_from_request(request: RegisterRequest, password_hash: str) -> User:
    return User(
        email=request.email,
        password_hash=password_hash,
        first_name=request.first_name,
        last_name=request.last_name,
    )


def user_to_response(user: User) -> dict[str, Any]:
    """Public profile of a user; the password hash is never included."""
    return {
        "id": user.id,
        "email": user.email,
        "firstName": user.first_name,
        "lastName": user.last_name,
    }


def project_from_request(request: ProjectRequest, user: User) -> Project:
    return Project(title=request.title, description=request.description, user=user)


def project_to_response(project: Project) -> dict[str, Any]:
    return {
        "id": project.id,
        "title": project.title,
        "description": project.description,
    }


def update_project(project: Project, request: ProjectRequest) -> None:
    # owner is immutable
    project.title = request.title
    project.description = request.description


def task_from_request(request: TaskRequest, project: Project) -> Task:
    return Task(
        title=request.title,
        description=request.description,
        due_date=request.due_date,
        completed=False,
        project=project,
    )


def task_to_response(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "description": task.description,
        "dueDate": task.due_date.isoformat() if task.due_date else None,
        "completed": bool(task.completed),
        "projectId": task.project_id,
    }


def update_task(task: Task, request: TaskRequest) -> None:
    """Copy editable fields; project and completion state are left alone."""
    task.title = request.title
    task.description = request.description
    task.due_date = request.due_date


def mark_completed(task: Task) -> None:
    task.completed = True


def mark_incomplete(task: Task) -> None:
    task.completed = False
