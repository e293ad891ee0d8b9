"""
Confession Board — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── settings:        Settings pointing at a throwaway SQLite file
    ├── make_app:        Factory building apps with setting overrides, tables created
    ├── app / client:    Default app and an HTTPX AsyncClient talking to it
    └── sample_user_row: Data matching a `users` row
"""

import os
import tempfile

# Required settings must exist BEFORE any package import: confession_board.main
# builds its module-level app from the environment.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="confession_board_test_"), "import.db"
)
os.environ["PORT"] = "8000"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from confession_board.config import Settings
from confession_board.database import Base
from confession_board.main import create_app


# ══════════════════════════════════════════════════════════════════════════
# Unit-Test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_get(mock_db_session):
            mock_db_session.execute.return_value.scalars.return_value.first.return_value = row
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def sample_user_row():
    return {
        "id": 1,
        "username": "alice",
        "password": "$2b$04$abcdefghijklmnopqrstuu5Yc1fJ7qS6F1c8xqW0mHqN9zJb7lS2e",
    }


# ══════════════════════════════════════════════════════════════════════════
# Application Fixtures (real SQLite database per test)
# ══════════════════════════════════════════════════════════════════════════

def build_settings(database_url: str, **overrides) -> Settings:
    values = {
        "database_url": database_url,
        "port": 8000,
        "log_level": "WARNING",
        # Cheapest bcrypt cost; production default is 10
        "bcrypt_rounds": 4,
        "db_connect_attempts": 1,
        "db_connect_max_wait": 0,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture
def settings(database_url):
    return build_settings(database_url)


@pytest_asyncio.fixture
async def make_app(database_url):
    """
    Factory fixture: `await make_app(strict_not_found=True)` returns an app
    sharing this test's database file, with tables created.
    """
    apps = []

    async def _make(**overrides):
        app = create_app(build_settings(database_url, **overrides))
        async with app.state.database.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        apps.append(app)
        return app

    yield _make

    for app in apps:
        await app.state.database.dispose()


@pytest_asyncio.fixture
async def app(make_app):
    return await make_app()


def client_for(app) -> AsyncClient:
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://test")


@pytest_asyncio.fixture
async def client(app):
    """
    HTTPX AsyncClient routed straight into the app (no server, no lifespan).

    Usage:
        async def test_root(client):
            response = await client.get("/")
    """
    async with client_for(app) as c:
        yield c
