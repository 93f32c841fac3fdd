"""
Ownership gate shared by every project- and task-scoped operation.

:func:`resolve_owned_project` is the single place that decides whether the
caller may see a project.  It depends only on two lookup capabilities, so
it can run against the SQLAlchemy repositories or any stand-in offering
the same methods.
"""

from __future__ import annotations

import logging
from typing import Protocol

from .errors import NotFoundError
from .models import Project, User

logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND = "Project not found or access denied"
USER_NOT_FOUND = "User not found"


class UserLookup(Protocol):
    def find_by_email(self, email: str) -> User | None: ...


class ProjectLookup(Protocol):
    def find_by_id_and_user(self, project_id: int, user_id: int) -> Project | None: ...


def resolve_user(users: UserLookup, email: str) -> User:
    """Return the user registered under *email* or raise NotFoundError."""
    user = users.find_by_email(email)
    if user is None:
        raise NotFoundError(USER_NOT_FOUND)
    return user


def resolve_owned_project(
    users: UserLookup,
    projects: ProjectLookup,
    owner_email: str,
    project_id: int,
) -> Project:
    """
    Return project *project_id* if it belongs to *owner_email*.

    A project that exists but belongs to someone else is reported exactly
    like a missing one, so callers cannot probe other tenants' ids.

    Raises:
        NotFoundError: If the user is unknown, or the project is absent or
            owned by another user.
    """
    user = resolve_user(users, owner_email)
    project = projects.find_by_id_and_user(project_id, user.id)
    if project is None:
        logger.warning("Project %s not accessible to %s", project_id, owner_email)
        raise NotFoundError(PROJECT_NOT_FOUND)
    return project
