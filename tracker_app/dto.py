"""
Request and response shapes of the HTTP API.

Each request dataclass knows how to build itself from a decoded JSON body
(or, for :class:`PageRequest`, from query-string arguments) and raises
:class:`~tracker_app.errors.ValidationError` on the first invalid field.
Field names on the wire are camelCase (``firstName``, ``dueDate``); the
Python attributes are snake_case.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any

from .errors import ValidationError

TITLE_MAX_LENGTH = 255
EMAIL_MAX_LENGTH = 255
# Largest value a signed 64-bit INTEGER column or OFFSET can hold
SQL_INTEGER_MAX = 2**63 - 1

# API field name -> model attribute used for ORDER BY
SORTABLE_FIELDS = {
    "id": "id",
    "title": "title",
    "description": "description",
    "dueDate": "due_date",
    "due_date": "due_date",
    "completed": "completed",
    "createdAt": "created_at",
    "created_at": "created_at",
}


def _require_body(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping) or not data:
        raise ValidationError("Request body must be JSON")
    return data


def _required_string(data: Mapping[str, Any], field: str, max_length: int | None = None) -> str:
    """Return a stripped, non-blank string field or raise ValidationError."""
    value = data.get(field)
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"'{field}' is required")
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field} must be {max_length} characters or less")
    return value


def _optional_string(data: Mapping[str, Any], field: str) -> str | None:
    value = data.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    return value


def parse_due_date(value: Any) -> date:
    """
    Parse an ISO-8601 calendar date (``YYYY-MM-DD``).

    A full ISO timestamp is accepted as well and reduced to its date.
    Anything else, including trailing text after a valid date, is rejected.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("'dueDate' is required")
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError("Invalid dueDate format. Use ISO format (YYYY-MM-DD)") from None


def parse_bool(value: str, field: str) -> bool:
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValidationError(f"{field} must be 'true' or 'false'")


def _parse_int(args: Mapping[str, Any], field: str, default: int) -> int:
    raw = args.get(field)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer") from None


@dataclass(frozen=True)
class RegisterRequest:
    email: str
    password: str
    first_name: str
    last_name: str

    @classmethod
    def from_json(cls, data: Any) -> RegisterRequest:
        data = _require_body(data)
        email = _required_string(data, "email", EMAIL_MAX_LENGTH)
        if "@" not in email:
            raise ValidationError("email must be a valid email address")
        password = data.get("password")
        if not isinstance(password, str) or not password:
            raise ValidationError("'password' is required")
        return cls(
            email=email,
            password=password,
            first_name=_required_string(data, "firstName", 255),
            last_name=_required_string(data, "lastName", 255),
        )


@dataclass(frozen=True)
class LoginRequest:
    email: str
    password: str

    @classmethod
    def from_json(cls, data: Any) -> LoginRequest:
        data = _require_body(data)
        email = _required_string(data, "email")
        password = data.get("password")
        if not isinstance(password, str) or not password:
            raise ValidationError("'password' is required")
        return cls(email=email, password=password)


@dataclass(frozen=True)
class ProjectRequest:
    title: str
    description: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> ProjectRequest:
        data = _require_body(data)
        return cls(
            title=_required_string(data, "title", TITLE_MAX_LENGTH),
            description=_optional_string(data, "description"),
        )


@dataclass(frozen=True)
class TaskRequest:
    """
    Payload for creating or updating a task.

    There is no ``completed`` field: completion only changes
    through the complete/toggle operations, so a client-supplied value is
    ignored.
    """

    title: str
    due_date: date
    description: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> TaskRequest:
        data = _require_body(data)
        return cls(
            title=_required_string(data, "title", TITLE_MAX_LENGTH),
            description=_optional_string(data, "description"),
            due_date=parse_due_date(data.get("dueDate")),
        )


@dataclass(frozen=True)
class PageRequest:
    """
    Pagination, sorting and filtering parameters for list queries.

    ``page`` is zero-based.  ``sort_field`` holds the model attribute name
    (already translated from the API name).  ``title`` and ``completed``
    are optional filters and only apply to task listings.
    """

    page: int = 0
    size: int = 10
    sort_field: str = "id"
    sort_direction: str = "asc"
    title: str | None = None
    completed: bool | None = None

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def descending(self) -> bool:
        return self.sort_direction == "desc"

    @classmethod
    def from_args(
        cls,
        args: Mapping[str, Any],
        *,
        default_size: int = 10,
        max_size: int = 100,
        with_filters: bool = False,
    ) -> PageRequest:
        """
        Build a page request from query-string arguments.

        Recognises ``page``, ``size``, ``sortBy`` and ``sortDir``, plus
        ``title`` and ``completed`` when *with_filters* is set.
        """
        page = _parse_int(args, "page", 0)
        size = _parse_int(args, "size", default_size)
        if page < 0:
            raise ValidationError("page must not be negative")
        if size < 1 or size > max_size:
            raise ValidationError(f"size must be between 1 and {max_size}")
        if page * size > SQL_INTEGER_MAX:
            raise ValidationError("page is too large")

        sort_by = (args.get("sortBy") or "id").strip()
        if sort_by not in SORTABLE_FIELDS:
            raise ValidationError(
                f"Invalid sortBy. Must be one of: {sorted(set(SORTABLE_FIELDS))}"
            )
        sort_dir = (args.get("sortDir") or "asc").strip().lower()

        title = None
        completed = None
        if with_filters:
            raw_title = args.get("title")
            if raw_title is not None and raw_title.strip():
                title = raw_title
            raw_completed = args.get("completed")
            if raw_completed is not None and raw_completed.strip():
                completed = parse_bool(raw_completed, "completed")

        return cls(
            page=page,
            size=size,
            sort_field=SORTABLE_FIELDS[sort_by],
            sort_direction="desc" if sort_dir == "desc" else "asc",
            title=title,
            completed=completed,
        )


@dataclass(frozen=True)
class Page:
    """One slice of an ordered result set."""

    content: list[Any]
    total_elements: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_elements / self.size) if self.size else 0

    def map(self, func) -> Page:
        """Return a page with *func* applied to every element."""
        return Page(
            content=[func(item) for item in self.content],
            total_elements=self.total_elements,
            page=self.page,
            size=self.size,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": list(self.content),
            "totalElements": self.total_elements,
            "totalPages": self.total_pages,
            "size": self.size,
            "number": self.page,
            "numberOfElements": len(self.content),
            "first": self.page == 0,
            "last": self.page >= self.total_pages - 1,
            "empty": not self.content,
        }


@dataclass(frozen=True)
class ProgressResponse:
    total_tasks: int
    completed_tasks: int
    progress_percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalTasks": self.total_tasks,
            "completedTasks": self.completed_tasks,
            "progressPercentage": self.progress_percentage,
        }
