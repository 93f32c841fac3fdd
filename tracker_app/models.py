"""
Database models for the task tracker.

Defines the SQLAlchemy ORM models that back the tracker: a :class:`User`
owns zero or more :class:`Project` rows, and each project owns zero or
more :class:`Task` rows.  Ownership columns (``Project.user_id`` and
``Task.project_id``) are set once at creation and never reassigned.

Serialisation to API shapes lives in :mod:`tracker_app.mappers`; the
models only describe storage.
"""

from __future__ import annotations

from datetime import date, datetime, timezone

from . import db


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(db.Model):
    """
    Registered user of the tracker.

    Attributes:
        id: Auto-incrementing integer primary key.
        email: Unique login identity, also the ``email`` claim of issued
            tokens.  Indexed because every authenticated request resolves
            the caller by email.
        password_hash: Werkzeug-generated salted hash.  The plain-text
            password is never stored.
        first_name: Given name.
        last_name: Family name.
        created_at: Timestamp of account creation, stored as UTC.
    """

    __tablename__ = "users"

    id: int = db.Column(db.Integer, primary_key=True)
    email: str = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash: str = db.Column(db.String(256), nullable=False)
    first_name: str = db.Column(db.String(255), nullable=False)
    last_name: str = db.Column(db.String(255), nullable=False)
    created_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_utcnow
    )

    projects = db.relationship("Project", back_populates="user", lazy="select")

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.email}>"


class Project(db.Model):
    """
    Project owned by a single user.

    Attributes:
        id: Auto-incrementing primary key.
        title: Short project name.
        description: Optional longer text.
        user_id: Owning user.  Every project query in the repository layer
            filters by this column, which is what keeps tenants isolated.
        created_at: Timestamp of project creation (UTC).
    """

    __tablename__ = "projects"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(255), nullable=False)
    description: str | None = db.Column(db.Text, nullable=True)
    user_id: int = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    created_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_utcnow
    )

    user = db.relationship("User", back_populates="projects")
    tasks = db.relationship("Task", back_populates="project", lazy="select")

    def __repr__(self) -> str:
        return f"<Project {self.id}: {self.title}>"


class Task(db.Model):
    """
    Task inside a project.

    A task is either incomplete or completed; ``completed`` starts out
    ``False`` and is flipped by the complete/toggle operations.

    Attributes:
        id: Auto-incrementing primary key.
        title: Short summary of the task.
        description: Optional longer text.
        due_date: Calendar date the task is due.
        completed: Completion flag.
        project_id: Owning project.  Indexed for per-project listings.
        created_at: Timestamp of task creation (UTC).
    """

    __tablename__ = "tasks"

    id: int = db.Column(db.Integer, primary_key=True)
    title: str = db.Column(db.String(255), nullable=False)
    description: str | None = db.Column(db.Text, nullable=True)
    due_date: date = db.Column(db.Date, nullable=False)
    completed: bool = db.Column(db.Boolean, nullable=False, default=False)
    project_id: int = db.Column(
        db.Integer, db.ForeignKey("projects.id"), nullable=False, index=True
    )
    created_at: datetime = db.Column(
        db.DateTime(timezone=True), nullable=False, default=_utcnow
    )

    project = db.relationship("Project", back_populates="tasks")

    def __repr__(self) -> str:
        return f"<Task {self.id}: {self.title}>"
