"""
API tests for registration, login and the current-user profile.

Key SDET Concepts Demonstrated:
- Full request/response cycle through the Flask test client
- Status code and error envelope verification
- Using an issued token against a protected endpoint
"""

import pytest

from tracker_app.auth import verify_token
from tests.helpers import TEST_PUBLIC_KEY, auth_headers

pytestmark = pytest.mark.integration


class TestRegister:
    def test_register_returns_token_for_new_user(self, app, client, db_session, registration_data, json_headers):
        # Act
        response = client.post("/auth/register", json=registration_data, headers=json_headers)

        # Assert
        assert response.status_code == 201
        body = response.get_json()
        assert body["email"] == registration_data["email"]
        with app.app_context():
            claims = verify_token(body["token"], TEST_PUBLIC_KEY)
        assert claims["email"] == registration_data["email"]

    def test_duplicate_email_returns_409(self, client, db_session, owner, registration_data):
        registration_data["email"] = owner.email

        response = client.post("/auth/register", json=registration_data)

        assert response.status_code == 409
        assert response.get_json()["error"] == f"User with email {owner.email} already exists"

    @pytest.mark.parametrize("missing", ["email", "password", "firstName", "lastName"])
    def test_missing_field_returns_400(self, client, db_session, registration_data, missing):
        registration_data.pop(missing)

        response = client.post("/auth/register", json=registration_data)

        assert response.status_code == 400
        assert "error" in response.get_json()

    def test_non_json_body_returns_400(self, client, db_session):
        response = client.post("/auth/register", data="plain text", content_type="text/plain")

        assert response.status_code == 400
        assert response.get_json() == {"error": "Request body must be JSON"}


class TestLogin:
    def test_login_with_correct_password(self, client, db_session, owner):
        response = client.post(
            "/auth/login", json={"email": owner.email, "password": "password123"}
        )

        assert response.status_code == 200
        assert response.get_json()["email"] == owner.email
        assert response.get_json()["token"]

    def test_wrong_password_and_unknown_email_look_the_same(self, client, db_session, owner):
        """The response must not reveal which accounts exist."""
        wrong_password = client.post(
            "/auth/login", json={"email": owner.email, "password": "nope"}
        )
        unknown_user = client.post(
            "/auth/login", json={"email": "ghost@example.com", "password": "nope"}
        )

        assert wrong_password.status_code == unknown_user.status_code == 401
        assert wrong_password.get_json() == unknown_user.get_json() == {
            "error": "Invalid email or password"
        }

    def test_registered_user_can_log_in(self, client, db_session, registration_data):
        client.post("/auth/register", json=registration_data)

        response = client.post(
            "/auth/login",
            json={"email": registration_data["email"], "password": registration_data["password"]},
        )

        assert response.status_code == 200


class TestMe:
    def test_returns_profile_without_password(self, client, db_session, owner, owner_headers):
        response = client.get("/auth/me", headers=owner_headers)

        assert response.status_code == 200
        assert response.get_json() == {
            "id": owner.id,
            "email": owner.email,
            "firstName": "Olive",
            "lastName": "Owner",
        }

    def test_token_from_login_works(self, client, db_session, owner):
        token = client.post(
            "/auth/login", json={"email": owner.email, "password": "password123"}
        ).get_json()["token"]

        response = client.get("/auth/me", headers=auth_headers(token))

        assert response.get_json()["email"] == owner.email

    def test_requires_token(self, client, db_session):
        response = client.get("/auth/me")

        assert response.status_code == 401


def test_health_is_public(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.get_json()["status"] == "healthy"


def test_unknown_route_uses_json_envelope(client):
    response = client.get("/no/such/route")

    assert response.status_code == 404
    assert "error" in response.get_json()
