"""
RoboFriends — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (mocked DB session, a real
       SQLite-backed app, HTTP clients).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession (no real DB needed)
    ├── robot_payload:   A complete, valid create body (wire names)
    ├── robots_table:    Creates the robots table, drops it afterwards
    ├── test_client:     HTTPX AsyncClient talking to the FastAPI app
    └── robots_api:      robofriends.client RobotsAPI bound to the same app
"""

import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Override settings BEFORE any robofriends import: the engine is created
# from settings at import time.
_TEST_DB_DIR = tempfile.mkdtemp(prefix="robofriends_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DB_DIR}/test.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["AUTO_CREATE_SCHEMA"] = "false"
os.environ["ROBOFRIENDS_API_URL"] = "http://test"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        async def test_list(mock_db_session):
            mock_db_session.execute.return_value.scalars.return_value.all.return_value = []
            result = await robot_service.list_robots(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def robot_payload():
    """A valid POST /api/robots body using the wire field names."""
    return {
        "name": "Leanne Graham",
        "username": "Bret",
        "email": "Sincere@april.biz",
        "phone": "1-770-736-8031",
        "image": "https://robohash.org/LeanneGraham.png?set=set1",
        "styleType": "Robots",
    }


@pytest_asyncio.fixture
async def robots_table():
    """
    Creates the robots table for one test and drops it afterwards.

    The engine is disposed at the end so pooled aiosqlite connections are not
    reused from another test's event loop.
    """
    from robofriends.database import Base, engine
    from robofriends.models.robot import Robot  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(robots_table):
    """
    HTTPX AsyncClient routed straight into the FastAPI app (no server).

    Usage:
        async def test_root(test_client):
            response = await test_client.get("/")
            assert response.status_code == 200
    """
    from robofriends.main import app
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def robots_api(test_client):
    """RobotsAPI that talks to the in-process app through test_client."""
    from robofriends.client.api import RobotsAPI
    async with RobotsAPI(base_url="http://test", client=test_client) as api:
        yield api
