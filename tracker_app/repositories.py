"""
Persistence layer: query and mutation helpers over a SQLAlchemy session.

Repositories never commit.  ``save`` and ``delete`` only flush so that
generated primary keys are available; the enclosing service operation
owns the transaction (see :func:`tracker_app.services.base.transactional`).
"""

from __future__ import annotations

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session

from .dto import Page, PageRequest
from .errors import ValidationError
from .models import Project, Task, User


def _apply_sort(stmt: Select, model, page_request: PageRequest) -> Select:
    column = getattr(model, page_request.sort_field, None)
    if column is None:
        raise ValidationError(f"Cannot sort {model.__tablename__} by '{page_request.sort_field}'")
    order = column.desc() if page_request.descending else column.asc()
    # id as tiebreaker keeps pages stable when the sort column has duplicates
    return stmt.order_by(order, model.id.asc())


class _Repository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def _paginate(self, stmt: Select, model, page_request: PageRequest) -> Page:
        total = self.session.scalar(select(func.count()).select_from(stmt.subquery()))
        rows = self.session.scalars(
            _apply_sort(stmt, model, page_request)
            .offset(page_request.offset)
            .limit(page_request.size)
        ).all()
        return Page(
            content=list(rows),
            total_elements=int(total or 0),
            page=page_request.page,
            size=page_request.size,
        )

    def _persist(self, entity):
        self.session.add(entity)
        self.session.flush()
        return entity


class UserRepository(_Repository):
    def find_by_email(self, email: str) -> User | None:
        return self.session.scalar(select(User).where(User.email == email))

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def save(self, user: User) -> User:
        return self._persist(user)


class ProjectRepository(_Repository):
    def find_by_user(self, user_id: int) -> list[Project]:
        stmt = select(Project).where(Project.user_id == user_id).order_by(Project.id)
        return list(self.session.scalars(stmt).all())

    def find_page_by_user(self, user_id: int, page_request: PageRequest) -> Page:
        stmt = select(Project).where(Project.user_id == user_id)
        return self._paginate(stmt, Project, page_request)

    def find_by_id_and_user(self, project_id: int, user_id: int) -> Project | None:
        return self.session.scalar(
            select(Project).where(Project.id == project_id, Project.user_id == user_id)
        )

    def save(self, project: Project) -> Project:
        return self._persist(project)


class TaskRepository(_Repository):
    def find_by_id(self, task_id: int) -> Task | None:
        return self.session.get(Task, task_id)

    def find_by_project(self, project_id: int) -> list[Task]:
        stmt = select(Task).where(Task.project_id == project_id).order_by(Task.id)
        return list(self.session.scalars(stmt).all())

    def find_page_by_project(self, project_id: int, page_request: PageRequest) -> Page:
        """
        Return one page of a project's tasks.

        Four query shapes depending on which filters are present: none,
        title only (case-insensitive substring), completed only, or both.
        """
        stmt = select(Task).where(Task.project_id == project_id)
        if page_request.title is not None:
            pattern = f"%{page_request.title.lower()}%"
            stmt = stmt.where(func.lower(Task.title).like(pattern))
        if page_request.completed is not None:
            stmt = stmt.where(Task.completed == page_request.completed)
        return self._paginate(stmt, Task, page_request)

    def count_by_project(self, project_id: int) -> int:
        return int(
            self.session.scalar(
                select(func.count(Task.id)).where(Task.project_id == project_id)
            )
            or 0
        )

    def count_completed_by_project(self, project_id: int) -> int:
        return int(
            self.session.scalar(
                select(func.count(Task.id)).where(
                    Task.project_id == project_id, Task.completed.is_(True)
                )
            )
            or 0
        )

    def save(self, task: Task) -> Task:
        return self._persist(task)

    def delete(self, task: Task) -> None:
        self.session.delete(task)
        self.session.flush()
