"""Pytest configuration and fixtures.

SQLite Handling:
- Tests run against a throwaway SQLite file (aiosqlite driver) created in a
  temp directory, so no database server is needed
- Tables are created before and dropped after every test using the database
- Requests commit for real; the auth middleware looks users up through its
  own sessions and must see what earlier requests wrote
"""

import os
import tempfile
from collections.abc import AsyncGenerator
from dataclasses import replace
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

# Set test environment variables before importing app modules
_test_db_dir = tempfile.mkdtemp(prefix="personal_finance_tests_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_test_db_dir}/test.db"
os.environ["LOGIN_MAX_ATTEMPTS"] = "5"
os.environ["LOGIN_BLOCK_SECONDS"] = "600"

TEST_USER_EMAIL = "alice@example.com"
TEST_USER_PASSWORD = "alice-password"
TEST_USER_NAME = "Alice"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


# --- Database Fixtures ---


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """Create all tables on the application's engine, drop them afterwards."""
    from personal_finance.core import Base, engine
    from personal_finance import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create a database session for service-level tests."""
    from personal_finance.core import async_session_maker

    async with async_session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def app():
    """A fresh application with its own session and login state."""
    from personal_finance.main import create_app

    return create_app()


@pytest_asyncio.fixture(scope="function")
async def async_client(app, db_engine) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client bound to a fresh app."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# --- Test Factories ---


def user_payload(
    email: str = TEST_USER_EMAIL,
    password: str = TEST_USER_PASSWORD,
    name: str = TEST_USER_NAME,
    **overrides: Any,
) -> dict[str, Any]:
    payload = {
        "name": name,
        "email": email,
        "password": password,
        "gender": "FEMALE",
        "family_status": "SINGLE",
        "age": 30,
        "education": "Masters",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def user_factory(async_client):
    """Factory registering users through the public API."""

    async def _create_user(
        email: str = TEST_USER_EMAIL,
        password: str = TEST_USER_PASSWORD,
        name: str = TEST_USER_NAME,
        **overrides: Any,
    ) -> dict[str, Any]:
        response = await async_client.post(
            "/api/users", json=user_payload(email, password, name, **overrides)
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _create_user


@pytest.fixture
def login(async_client):
    """Log in and return the Authorization headers."""

    async def _login(
        email: str = TEST_USER_EMAIL,
        password: str = TEST_USER_PASSWORD,
    ) -> dict[str, str]:
        response = await async_client.post(
            "/auth/login", json={"username": email, "password": password}
        )
        assert response.status_code == 200, response.text
        return {"Authorization": f"Bearer {response.json()['access_token']}"}

    return _login


@pytest_asyncio.fixture
async def test_user(user_factory) -> dict[str, Any]:
    """Registered default user."""
    return await user_factory()


@pytest_asyncio.fixture
async def auth_headers(test_user, login) -> dict[str, str]:
    """Headers with a live session token for the default user."""
    return await login()


ADMIN_EMAIL = "admin@example.com"


class AdminGrantingStore:
    """Identity store wrapper that adds ROLE_ADMIN for chosen emails."""

    def __init__(self, inner, admin_emails: set[str]):
        self.inner = inner
        self.admin_emails = admin_emails

    def _grant(self, identity):
        from personal_finance.security import ADMIN_AUTHORITY

        if identity is None or identity.username not in self.admin_emails:
            return identity
        return replace(identity, authorities=(*identity.authorities, ADMIN_AUTHORITY))

    async def lookup_identity_by_subject(self, subject: str):
        return self._grant(await self.inner.lookup_identity_by_subject(subject))

    async def verify_credentials(self, username: str, password: str):
        return self._grant(await self.inner.verify_credentials(username, password))


@pytest_asyncio.fixture
async def admin_headers(app, user_factory, login) -> dict[str, str]:
    """Headers for a user the app treats as an administrator."""
    await user_factory(email=ADMIN_EMAIL, name="Admin")
    app.state.identity_store = AdminGrantingStore(app.state.identity_store, {ADMIN_EMAIL})
    return await login(ADMIN_EMAIL)


# --- Pytest Hooks for Auto-Marking ---


def pytest_collection_modifyitems(config, items):
    """Mark tests as 'integration' when they touch the database, else 'unit'."""
    integration_fixtures = {"db_session", "db_engine", "async_client"}

    for item in items:
        if any(mark.name in ("unit", "integration") for mark in item.iter_markers()):
            continue
        if integration_fixtures & set(getattr(item, "fixturenames", ())):
            item.add_marker(pytest.mark.integration)
        else:
            item.add_marker(pytest.mark.unit)
