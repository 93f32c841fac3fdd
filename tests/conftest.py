"""
Shared pytest fixtures for the task tracker test suite.

This module contains fixtures that are shared across all test modules.
Fixtures follow the Arrange-Act-Assert (AAA) pattern and ensure
test isolation by providing fresh data for each test.

Key Concepts Demonstrated:
- Fixture scopes (function, session)
- Fixture dependencies
- Test data factories that build the user -> project -> task graph
- Database setup/teardown
- Per-user bearer tokens for multi-tenant scenarios
"""

import os
from datetime import date, timedelta

import pytest
from faker import Faker
from werkzeug.security import generate_password_hash

from tests.helpers import (
    TEST_PRIVATE_KEY,
    TEST_PUBLIC_KEY,
    auth_headers,
    create_test_token,
)

# Set testing environment and signing keys before importing the app
os.environ["FLASK_ENV"] = "testing"
os.environ["TEST_JWT_PRIVATE_KEY"] = TEST_PRIVATE_KEY
os.environ["TEST_JWT_PUBLIC_KEY"] = TEST_PUBLIC_KEY

from tracker_app import create_app, db
from tracker_app.models import Project, Task, User
from tracker_app.services import build_services


# Initialize Faker for generating test data
fake = Faker()

DEFAULT_PASSWORD = "password123"


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture(scope="session")
def app():
    """
    Create application instance for the test session.

    The 'session' scope means the same app instance is reused
    for all tests; every test still gets fresh tables through
    ``db_session``.

    Yields:
        Flask application instance configured for testing.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """
    Create a test client for making HTTP requests.

    Args:
        app: Flask application fixture.

    Yields:
        Flask test client for making HTTP requests.
    """
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture(scope="function")
def db_session(app):
    """
    Create a fresh database for each test.

    This fixture ensures test isolation by:
    1. Creating all tables before the test
    2. Providing the shared Flask-SQLAlchemy handle
    3. Rolling back and dropping every table after the test

    Args:
        app: Flask application fixture.

    Yields:
        The ``db`` extension object.
    """
    with app.app_context():
        db.create_all()
        yield db
        db.session.rollback()
        db.drop_all()


@pytest.fixture
def services(db_session):
    """Provide a service set wired around the test session."""
    return build_services(db_session.session)


# -----------------------------------------------------------------------------
# Test Data Factory Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def user_factory(db_session):
    """
    Factory fixture for creating User instances.

    Passwords are hashed the same way registration hashes them, so the
    created users can log in with ``DEFAULT_PASSWORD``.

    Returns:
        Function that creates and returns User instances.
    """

    def _create_user(
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> User:
        user = User(
            email=email or fake.unique.email(),
            password_hash=generate_password_hash(password),
            first_name=first_name or fake.first_name(),
            last_name=last_name or fake.last_name(),
        )
        db_session.session.add(user)
        db_session.session.commit()
        return user

    return _create_user


@pytest.fixture
def project_factory(db_session):
    """
    Factory fixture for creating Project instances owned by a given user.

    Example:
        def test_something(user_factory, project_factory):
            project = project_factory(user_factory(), title="Roadmap")
    """

    def _create_project(
        owner: User,
        title: str | None = None,
        description: str | None = None,
    ) -> Project:
        project = Project(
            title=title or fake.catch_phrase(),
            description=description or fake.sentence(),
            user=owner,
        )
        db_session.session.add(project)
        db_session.session.commit()
        return project

    return _create_project


@pytest.fixture
def task_factory(db_session):
    """Factory fixture for creating Task instances inside a project."""

    def _create_task(
        project: Project,
        title: str | None = None,
        description: str | None = None,
        due_date: date | None = None,
        completed: bool = False,
    ) -> Task:
        task = Task(
            title=title or fake.sentence(nb_words=4),
            description=description or fake.paragraph(),
            due_date=due_date or date.today() + timedelta(days=7),
            completed=completed,
            project=project,
        )
        db_session.session.add(task)
        db_session.session.commit()
        return task

    return _create_task


# -----------------------------------------------------------------------------
# Identity Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def owner(user_factory) -> User:
    """The user whose data a test exercises."""
    return user_factory(email="owner@example.com", first_name="Olive", last_name="Owner")


@pytest.fixture
def intruder(user_factory) -> User:
    """A second, unrelated user used for tenant-isolation checks."""
    return user_factory(email="intruder@example.com", first_name="Ivan", last_name="Intruder")


@pytest.fixture
def owner_headers(owner) -> dict[str, str]:
    """Bearer headers for ``owner``."""
    return auth_headers(create_test_token(email=owner.email))


@pytest.fixture
def intruder_headers(intruder) -> dict[str, str]:
    """Bearer headers for ``intruder``."""
    return auth_headers(create_test_token(email=intruder.email))


@pytest.fixture
def owned_project(owner, project_factory) -> Project:
    """A project belonging to ``owner``."""
    return project_factory(owner, title="Owner Project", description="Owned by owner")


@pytest.fixture
def owned_tasks(owned_project, task_factory) -> list[Task]:
    """
    Three tasks in ``owned_project`` with varied titles and one completed.

    Useful for filtering, sorting and progress tests.
    """
    today = date.today()
    return [
        task_factory(owned_project, title="Write report", due_date=today + timedelta(days=3)),
        task_factory(owned_project, title="Review REPORT draft", due_date=today + timedelta(days=1), completed=True),
        task_factory(owned_project, title="Book travel", due_date=today + timedelta(days=2)),
    ]


# -----------------------------------------------------------------------------
# Test Data Fixtures
# -----------------------------------------------------------------------------

@pytest.fixture
def valid_task_data() -> dict[str, str]:
    """
    Provide valid task data for POST/PUT requests.

    Returns:
        Dictionary with valid task field values in wire (camelCase) form.
    """
    return {
        "title": "Test Task",
        "description": "This is a test task description",
        "dueDate": (date.today() + timedelta(days=7)).isoformat(),
    }


@pytest.fixture
def registration_data() -> dict[str, str]:
    """Provide a valid registration payload with a unique email."""
    return {
        "email": fake.unique.email(),
        "password": "s3cret-pass",
        "firstName": fake.first_name(),
        "lastName": fake.last_name(),
    }


@pytest.fixture
def json_headers() -> dict[str, str]:
    """Provide common headers for unauthenticated API requests."""
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }
