# tests/conftest.py
"""Root pytest configuration and shared fixtures."""

import os

# Must happen before the app settings are imported anywhere
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_TO_FILE"] = "false"
os.environ["ENVIRONMENT"] = "development"
os.environ["API_PREFIX"] = ""

from collections.abc import AsyncGenerator  # noqa: E402

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from app.db import Database  # noqa: E402
from app.main import app  # noqa: E402

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
async def database() -> AsyncGenerator[Database]:
    """Fresh in-memory database with the posts schema."""
    database = Database(TEST_DATABASE_URL, echo=False)
    await database.connect()
    yield database
    await database.close()


@pytest.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession]:
    """Session on the test database; callers commit explicitly."""
    async with database.session_maker() as session:
        yield session


@pytest.fixture
async def client(database: Database) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client bound to the app and the test database."""
    app.state.database = database
    async with AsyncClient(
        base_url="http://test",
        transport=ASGITransport(app=app),
    ) as ac:
        yield ac
    app.dependency_overrides = {}
