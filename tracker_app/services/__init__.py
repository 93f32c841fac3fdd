"""
Domain services.

Services receive their session and repositories through the constructor.
:func:`build_services` wires one consistent set around a session; the
HTTP layer calls it once per request.
"""

from __future__ import annotations

from typing import NamedTuple

from sqlalchemy.orm import Session

from ..repositories import ProjectRepository, TaskRepository, UserRepository
from .project_service import ProjectService, compute_progress
from .task_service import TaskService
from .user_service import UserService

__all__ = [
    "ProjectService",
    "Services",
    "TaskService",
    "UserService",
    "build_services",
    "compute_progress",
]


class Services(NamedTuple):
    users: UserService
    projects: ProjectService
    tasks: TaskService


def build_services(session: Session) -> Services:
    user_repository = UserRepository(session)
    project_repository = ProjectRepository(session)
    task_repository = TaskRepository(session)

    project_service = ProjectService(
        session, user_repository, project_repository, task_repository
    )
    return Services(
        users=UserService(session, user_repository),
        projects=project_service,
        tasks=TaskService(session, task_repository, project_service),
    )
