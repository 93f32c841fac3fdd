"""
Unit tests for the ``require_auth`` decorator.

The decorator is applied to a throwaway view and invoked inside a test
request context, so no blueprint or database is involved.
"""

import pytest
from flask import g, jsonify

from tracker_app.auth import require_auth
from tests.helpers import auth_headers, create_test_token


pytestmark = pytest.mark.unit


@require_auth
def _whoami():
    return jsonify({"email": g.user_email}), 200


def _call(app, headers=None):
    with app.test_request_context("/whoami", headers=headers or {}):
        response, status = _whoami()
        return response.get_json(), status


def test_missing_header_returns_401(app):
    body, status = _call(app)

    assert status == 401
    assert body["error"] == "Missing or invalid Authorization header"


@pytest.mark.parametrize("header", ["Token abc", "Basic dXNlcjpwdw==", "Bearer ", "bearer abc"])
def test_malformed_header_returns_401(app, header):
    body, status = _call(app, {"Authorization": header})

    assert status == 401
    assert body["error"] == "Missing or invalid Authorization header"


def test_expired_token_returns_401(app):
    body, status = _call(app, auth_headers(create_test_token(expired=True)))

    assert status == 401
    assert body["error"] == "Invalid or expired token"


def test_valid_token_exposes_email_to_view(app):
    body, status = _call(app, auth_headers(create_test_token(email="ada@example.com")))

    assert status == 200
    assert body == {"email": "ada@example.com"}
