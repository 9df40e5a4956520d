"""Pytest configuration and fixtures."""

import os
from unittest.mock import MagicMock

# Must be set before the application reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("JWT_SECRET", "test-secret")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from blog_api import models  # noqa: E402, F401
from blog_api.api.dependencies import get_notifier  # noqa: E402
from blog_api.database import Base, engine, get_db  # noqa: E402
from blog_api.main import app  # noqa: E402
from blog_api.services.notifier import PostNotifier  # noqa: E402

TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class AuthHeaders(dict):
    """Dict subclass that also stores the user's id and email."""

    def __init__(self, *args, user_id: str | None = None, email: str | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id = user_id
        self.email = email


CREATE_USER = """
mutation CreateUser($email: String!, $name: String!, $password: String!) {
  createUser(userInput: {email: $email, name: $name, password: $password}) {
    _id email name status password
  }
}
"""

LOGIN = """
query Login($email: String!, $password: String!) {
  login(email: $email, password: $password) { token userId }
}
"""


def graphql(client, query, variables=None, headers=None):
    """POST a GraphQL operation and return the decoded body."""
    response = client.post(
        "/graphql", json={"query": query, "variables": variables or {}}, headers=headers or {}
    )
    return response.json()


def register_and_login(client, email, name="Test User", password="testpass123"):
    """Create a user and return auth headers for them."""
    body = graphql(client, CREATE_USER, {"email": email, "name": name, "password": password})
    assert "errors" not in body, body
    body = graphql(client, LOGIN, {"email": email, "password": password})
    assert "errors" not in body, body
    data = body["data"]["login"]
    return AuthHeaders(
        {"Authorization": f"Bearer {data['token']}"}, user_id=data["userId"], email=email
    )


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Create test database schema once at the start of the test session."""
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture(scope="function", autouse=True)
def db():
    """Create a fresh database session for each test with cleanup."""
    session = TestingSessionLocal()

    yield session

    # Clean up all data after test
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def notifier():
    """Notifier stand-in that records publishes instead of talking to Redis."""
    return MagicMock(spec=PostNotifier)


@pytest.fixture(scope="function")
def client(db, notifier):
    """Create a test client with database and notifier overrides."""

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Create a user and return auth headers with user info."""
    return register_and_login(client, "test@example.com", name="Test User")


@pytest.fixture
def other_auth_headers(client):
    """A second, unrelated user."""
    return register_and_login(client, "other@example.com", name="Other User")
