"""
Domain exceptions and their HTTP rendering.

Services raise the exceptions defined here; the application-level error
handlers registered by :func:`register_error_handlers` turn them into the
``{"error": "..."}`` JSON envelope used by every endpoint.
"""

from __future__ import annotations

import logging

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class TrackerError(Exception):
    """Base class for errors that carry their own HTTP status code."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TrackerError):
    """Request body or query parameters failed validation."""

    status_code = 400


class UnauthorizedError(TrackerError):
    """Credentials were rejected."""

    status_code = 401


class NotFoundError(TrackerError):
    """A user, project or task is absent or not owned by the caller."""

    status_code = 404


class ConflictError(TrackerError):
    """The resource already exists (duplicate email on registration)."""

    status_code = 409


def json_error(message: str, status_code: int) -> tuple[Response, int]:
    """Build the standard ``{"error": message}`` response tuple."""
    return jsonify({"error": message}), status_code


def register_error_handlers(app: Flask) -> None:
    """Render domain, HTTP and unexpected errors as JSON."""

    @app.errorhandler(TrackerError)
    def handle_tracker_error(error: TrackerError) -> tuple[Response, int]:
        return json_error(error.message, error.status_code)

    @app.errorhandler(HTTPException)
    def handle_http_exception(error: HTTPException) -> tuple[Response, int]:
        return json_error(error.description or error.name, error.code or 500)

    @app.errorhandler(Exception)
    def handle_unexpected(error: Exception) -> tuple[Response, int]:
        logger.exception("Internal server error: %s", error)
        return json_error("Internal server error", 500)
