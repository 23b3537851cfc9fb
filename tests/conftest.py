"""
Shared pytest fixtures for the task tracker test suite.

Provides the Flask application, HTTP client, direct handles on the two
in-memory stores, tokens, and data factories used by the unit and
integration suites.

Key Concepts Demonstrated:
- Session-scoped app with function-scoped state reset for isolation
- Factory-pattern fixtures for flexible test-data creation
- Environment variable overrides for deterministic test configuration
"""

from __future__ import annotations

import os
from collections.abc import Callable

import pytest
from faker import Faker

from shared.test_helpers import TEST_SECRET_KEY, auth_headers, create_test_token

os.environ["FLASK_ENV"] = "testing"
os.environ["TEST_JWT_SECRET"] = TEST_SECRET_KEY

from tracker_app import CREDENTIAL_STORE_KEY, TASK_REPOSITORY_KEY, create_app
from tracker_app.models import CredentialStore, Task, TaskRepository

fake = Faker()


# -----------------------------------------------------------------------------
# Application Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture(scope="session")
def app():
    """
    Provide the Flask application instance for the entire test session.

    Created once with the 'testing' config; the stores it owns are emptied
    before every test by ``clean_stores``.
    """
    application = create_app("testing")
    yield application


@pytest.fixture(scope="function")
def client(app):
    """Provide a Flask test client scoped to a single test function."""
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def credential_store(app) -> CredentialStore:
    return app.extensions[CREDENTIAL_STORE_KEY]


@pytest.fixture
def task_repository(app) -> TaskRepository:
    return app.extensions[TASK_REPOSITORY_KEY]


@pytest.fixture(autouse=True)
def clean_stores(app):
    """
    Empty both stores before and after each test.

    The app is session-scoped, so without this reset identities and tasks
    created by one test would leak into the next and shift task ids.
    """
    app.extensions[CREDENTIAL_STORE_KEY].clear()
    app.extensions[TASK_REPOSITORY_KEY].clear()
    yield
    app.extensions[CREDENTIAL_STORE_KEY].clear()
    app.extensions[TASK_REPOSITORY_KEY].clear()


# -----------------------------------------------------------------------------
# Auth Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def registered_user(client) -> dict[str, str]:
    """
    Register a random user through the API and return its credentials.

    Going through ``/register`` rather than the store keeps the fixture
    honest about what a real client does.
    """
    credentials = {"username": fake.user_name(), "password": fake.password(length=12)}
    response = client.post("/register", json=credentials)
    assert response.status_code == 200
    return credentials


@pytest.fixture
def auth_token(client, registered_user) -> str:
    """Log the registered user in and return the issued bearer token."""
    response = client.post("/login", json=registered_user)
    assert response.status_code == 200
    return response.get_json()["token"]


@pytest.fixture
def api_headers(auth_token) -> dict[str, str]:
    """Authorization + JSON content-type headers for the registered user."""
    return auth_headers(auth_token)


@pytest.fixture
def test_token(app) -> str:
    """A token minted directly with the test secret, no registration needed."""
    return create_test_token(username="user_one", secret=app.config["JWT_SECRET_KEY"])


# -----------------------------------------------------------------------------
# Task Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def task_factory(task_repository) -> Callable[..., Task]:
    """
    Factory fixture that creates tasks directly in the repository.

    Titles and descriptions default to Faker-generated text so tests only
    spell out the values they assert on.
    """

    def _create_task(*, title: str | None = None, description: str | None = None) -> Task:
        return task_repository.create(
            title or fake.sentence(nb_words=4),
            description or fake.paragraph(),
        )

    return _create_task


@pytest.fixture
def sample_task(task_factory) -> Task:
    """A single task with known, predictable values."""
    return task_factory(title="Sample Task", description="This is a sample task for testing")


@pytest.fixture
def multiple_tasks(task_factory) -> list[Task]:
    """Three tasks created in order, holding ids 1, 2 and 3."""
    return [
        task_factory(title="First"),
        task_factory(title="Second"),
        task_factory(title="Third"),
    ]
