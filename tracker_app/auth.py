"""
Bearer token verification for protected endpoints.

:func:`verify_token` validates a JWT issued by :func:`tracker_app.jwt.create_token`
and :func:`require_auth` applies it to a view, storing the caller's email on
``flask.g.user_email`` for the rest of the request.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

import jwt
from flask import Response, current_app, g, request

from .errors import json_error
from .jwt import ALGORITHM, REQUIRED_TOKEN_CLAIMS

logger = logging.getLogger(__name__)

DEFAULT_ALLOWED_ALGORITHMS = [ALGORITHM]


def verify_token(
    token: str,
    public_key: str,
    algorithms: list[str] | None = None,
) -> dict[str, Any] | None:
    """
    Decode and validate a JWT, returning the payload on success.

    Checks the signature, ``exp``/``iat``, presence of every required claim,
    and that ``email`` is a non-blank string.  Clock skew tolerance comes
    from ``JWT_CLOCK_SKEW_SECONDS``.

    Returns:
        The decoded payload, or ``None`` if verification fails for any
        reason.
    """
    try:
        decoded = jwt.decode(
            token,
            public_key,
            algorithms=algorithms or DEFAULT_ALLOWED_ALGORITHMS,
            options={"require": REQUIRED_TOKEN_CLAIMS},
            leeway=int(current_app.config.get("JWT_CLOCK_SKEW_SECONDS", 30)),
        )
    except jwt.InvalidTokenError as exc:
        logger.info("Rejected bearer token: %s", exc)
        return None

    email = decoded.get("email")
    if not isinstance(email, str) or not email.strip():
        return None
    return decoded


def _extract_bearer_token() -> str | None:
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header[7:].strip() or None


def require_auth(view_func: Callable[..., tuple[Response, int] | Response]):
    """
    Enforce Bearer-token authentication on a view.

    On success ``g.user_email`` holds the caller's identity; otherwise the
    request is answered with a ``401`` JSON error before the view runs.
    """

    @wraps(view_func)
    def wrapper(*args, **kwargs):
        token = _extract_bearer_token()
        if token is None:
            return json_error("Missing or invalid Authorization header", 401)

        payload = verify_token(
            token,
            current_app.config["JWT_PUBLIC_KEY"],
            algorithms=DEFAULT_ALLOWED_ALGORITHMS,
        )
        if payload is None:
            return json_error("Invalid or expired token", 401)

        g.user_email = payload["email"]
        return view_func(*args, **kwargs)

    return wrapper
