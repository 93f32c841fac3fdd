"""
Authentication endpoints.

Endpoints:
    POST /auth/register -- Create an account and receive a JWT.
    POST /auth/login    -- Exchange email/password for a JWT.
    GET  /auth/me       -- Profile of the authenticated user.
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, current_app, g, jsonify, request

from .. import mappers
from ..auth import require_auth
from ..dto import LoginRequest, RegisterRequest
from ..errors import ConflictError, UnauthorizedError
from ..jwt import create_token
from . import get_services

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__)


def _issue_token(email: str) -> str:
    return create_token(
        email=email,
        private_key=current_app.config["JWT_PRIVATE_KEY"],
        expiry_hours=current_app.config["JWT_EXPIRY_HOURS"],
    )


@auth_bp.route("/login", methods=["POST"])
def login() -> tuple[Response, int]:
    """
    Authenticate a user and issue a JWT.

    The same message is returned for an unknown email and a wrong
    password so the response does not reveal which accounts exist.

    Returns:
        200 with ``token`` and ``email`` on success.
        400 if required fields are missing.
        401 if credentials are incorrect.
    """
    payload = LoginRequest.from_json(request.get_json(silent=True))
    users = get_services().users

    user = users.find_by_email(payload.email)
    if user is None or not users.verify_password(payload.password, user.password_hash):
        logger.warning("Failed login for %s", payload.email)
        raise UnauthorizedError("Invalid email or password")

    return jsonify({"token": _issue_token(user.email), "email": user.email}), 200


@auth_bp.route("/register", methods=["POST"])
def register() -> tuple[Response, int]:
    """
    Register a new account and log it in.

    Returns:
        201 with ``token`` and ``email`` on success.
        400 if the payload is invalid.
        409 if the email is already registered.
    """
    payload = RegisterRequest.from_json(request.get_json(silent=True))
    users = get_services().users

    if users.exists_by_email(payload.email):
        raise ConflictError(f"User with email {payload.email} already exists")

    user = users.register_user(payload)
    return jsonify({"token": _issue_token(user.email), "email": user.email}), 201


@auth_bp.route("/me", methods=["GET"])
@require_auth
def me() -> tuple[Response, int]:
    """Return the profile of the authenticated user."""
    user = get_services().users.get_user(g.user_email)
    return jsonify(mappers.user_to_response(user)), 200
