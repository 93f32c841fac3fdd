"""
Projects: creation, listing, lookup through the ownership gate, progress.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from .. import mappers
from ..dto import Page, PageRequest, ProgressResponse, ProjectRequest
from ..models import Project
from ..ownership import resolve_owned_project, resolve_user
from ..repositories import ProjectRepository, TaskRepository, UserRepository
from .base import transactional

logger = logging.getLogger(__name__)


def compute_progress(total_tasks: int, completed_tasks: int) -> ProgressResponse:
    """
    Build the progress summary for a project.

    The percentage is ``completed / total * 100`` without rounding, and
    exactly ``0.0`` for a project with no tasks.
    """
    percentage = completed_tasks / total_tasks * 100 if total_tasks > 0 else 0.0
    return ProgressResponse(
        total_tasks=total_tasks,
        completed_tasks=completed_tasks,
        progress_percentage=percentage,
    )


class ProjectService:
    def __init__(
        self,
        session: Session,
        users: UserRepository,
        projects: ProjectRepository,
        tasks: TaskRepository,
    ) -> None:
        self.session = session
        self.users = users
        self.projects = projects
        self.tasks = tasks

    @transactional
    def create_project(self, user_email: str, request: ProjectRequest) -> dict[str, Any]:
        user = resolve_user(self.users, user_email)
        project = self.projects.save(mappers.project_from_request(request, user))
        logger.info("Created project %s for %s", project.id, user_email)
        return mappers.project_to_response(project)

    @transactional
    def get_user_projects(self, user_email: str) -> list[dict[str, Any]]:
        user = resolve_user(self.users, user_email)
        return [mappers.project_to_response(p) for p in self.projects.find_by_user(user.id)]

    @transactional
    def get_user_projects_paginated(self, user_email: str, page_request: PageRequest) -> Page:
        user = resolve_user(self.users, user_email)
        page = self.projects.find_page_by_user(user.id, page_request)
        return page.map(mappers.project_to_response)

    @transactional
    def get_project_entity(self, user_email: str, project_id: int) -> Project:
        """Ownership gate: the project if *user_email* owns it, else NotFoundError."""
        return resolve_owned_project(self.users, self.projects, user_email, project_id)

    @transactional
    def get_project_by_id(self, user_email: str, project_id: int) -> dict[str, Any]:
        return mappers.project_to_response(self.get_project_entity(user_email, project_id))

    @transactional
    def update_project(
        self, user_email: str, project_id: int, request: ProjectRequest
    ) -> dict[str, Any]:
        project = self.get_project_entity(user_email, project_id)
        mappers.update_project(project, request)
        self.projects.save(project)
        logger.info("Updated project %s", project_id)
        return mappers.project_to_response(project)

    @transactional
    def get_project_progress(self, user_email: str, project_id: int) -> ProgressResponse:
        project = self.get_project_entity(user_email, project_id)
        return compute_progress(
            self.tasks.count_by_project(project.id),
            self.tasks.count_completed_by_project(project.id),
        )
