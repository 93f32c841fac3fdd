"""
Tasks: creation, listing, completion state changes and deletion.

Every operation goes through :meth:`ProjectService.get_project_entity`.
Task-id based operations first load the task and then re-resolve its
project through that gate, so a task row that exists but sits in another
user's project is rejected exactly like a missing one.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from .. import mappers
from ..dto import Page, PageRequest, TaskRequest
from ..errors import NotFoundError
from ..models import Task
from ..repositories import TaskRepository
from .base import transactional
from .project_service import ProjectService

logger = logging.getLogger(__name__)

TASK_NOT_FOUND = "Task not found"


class TaskService:
    def __init__(
        self,
        session: Session,
        tasks: TaskRepository,
        project_service: ProjectService,
    ) -> None:
        self.session = session
        self.tasks = tasks
        self.project_service = project_service

    @transactional
    def create_task(
        self, user_email: str, project_id: int, request: TaskRequest
    ) -> dict[str, Any]:
        project = self.project_service.get_project_entity(user_email, project_id)
        task = self.tasks.save(mappers.task_from_request(request, project))
        logger.info("Created task %s in project %s", task.id, project.id)
        return mappers.task_to_response(task)

    @transactional
    def get_project_tasks(self, user_email: str, project_id: int) -> list[dict[str, Any]]:
        project = self.project_service.get_project_entity(user_email, project_id)
        return [mappers.task_to_response(t) for t in self.tasks.find_by_project(project.id)]

    @transactional
    def get_project_tasks_paginated(
        self, user_email: str, project_id: int, page_request: PageRequest
    ) -> Page:
        project = self.project_service.get_project_entity(user_email, project_id)
        page = self.tasks.find_page_by_project(project.id, page_request)
        return page.map(mappers.task_to_response)

    @transactional
    def complete_task(self, user_email: str, task_id: int) -> dict[str, Any]:
        """Mark the task completed; completing a completed task is a no-op."""
        task = self.get_task_entity(user_email, task_id)
        mappers.mark_completed(task)
        self.tasks.save(task)
        logger.info("Completed task %s", task_id)
        return mappers.task_to_response(task)

    @transactional
    def toggle_task_completion(self, user_email: str, task_id: int) -> dict[str, Any]:
        task = self.get_task_entity(user_email, task_id)
        if task.completed:
            mappers.mark_incomplete(task)
        else:
            mappers.mark_completed(task)
        self.tasks.save(task)
        logger.info("Toggled task %s to completed=%s", task_id, task.completed)
        return mappers.task_to_response(task)

    @transactional
    def update_task(
        self, user_email: str, task_id: int, request: TaskRequest
    ) -> dict[str, Any]:
        task = self.get_task_entity(user_email, task_id)
        mappers.update_task(task, request)
        self.tasks.save(task)
        logger.info("Updated task %s", task_id)
        return mappers.task_to_response(task)

    @transactional
    def delete_task(self, user_email: str, task_id: int) -> None:
        task = self.get_task_entity(user_email, task_id)
        self.tasks.delete(task)
        logger.info("Deleted task %s", task_id)

    @transactional
    def get_task_entity(self, user_email: str, task_id: int) -> Task:
        """
        Load a task and confirm the caller owns its project.

        Raises:
            NotFoundError: If the task does not exist, or its project is
                not owned by *user_email*.
        """
        task = self.tasks.find_by_id(task_id)
        if task is None:
            raise NotFoundError(TASK_NOT_FOUND)

        project = self.project_service.get_project_entity(user_email, task.project_id)
        if task.project_id != project.id:
            raise NotFoundError("Task does not belong to user's project")
        return task
