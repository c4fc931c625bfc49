"""
PostBoard Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── user_store / post_store: empty InMemoryStore with a seeded RNG
    ├── make_ctx: RequestContext builder
    ├── memory_settings / database_settings: explicit Settings instances
    ├── test_client: HTTPX AsyncClient over a fresh in-memory app
    ├── database_app: app on a temporary SQLite file, tables created
    └── database_client: HTTPX AsyncClient over database_app
"""

import os
import random
from typing import Any, Dict, Optional

# Set before any postboard import so the module-level settings and app
# never point at a real database
os.environ["STORE_BACKEND"] = "memory"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./postboard_test.db"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from postboard.config import Settings
from postboard.database import dispose_engine, init_models
from postboard.main import create_app
from postboard.pipeline import RequestContext
from postboard.resources import POSTS, USERS
from postboard.stores import InMemoryStore


@pytest.fixture
def user_store():
    """Empty user store; ids are reproducible thanks to the seeded RNG."""
    return InMemoryStore(USERS, rng=random.Random(1234))


@pytest.fixture
def post_store():
    return InMemoryStore(POSTS, rng=random.Random(4321))


@pytest.fixture
def sample_user() -> Dict[str, str]:
    return {"name": "A", "email": "a@x.com", "phone": "1"}


@pytest.fixture
def make_ctx():
    """
    Build a RequestContext without going through HTTP.

    Usage:
        ctx = make_ctx("PUT", "/users/5", params={"id": "5"}, body={"name": "B"})
    """

    def _make(
        method: str = "GET",
        path: str = "/",
        params: Optional[Dict[str, str]] = None,
        body: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> RequestContext:
        return RequestContext(
            method=method,
            path=path,
            params=dict(params or {}),
            body=body,
            headers=dict(headers or {}),
            state={"request_id": "test-rid"},
        )

    return _make


@pytest.fixture
def memory_settings() -> Settings:
    return Settings(store_backend="memory", seed_demo_data=True, log_level="WARNING")


@pytest.fixture
def database_settings(tmp_path) -> Settings:
    return Settings(
        store_backend="database",
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'postboard.db'}",
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def test_client(memory_settings):
    """
    HTTPX AsyncClient talking to a fresh in-memory app.

    Every test gets new stores, so mutations never leak between tests.
    """
    app = create_app(memory_settings)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def database_app(database_settings):
    # ASGITransport does not run the lifespan, so tables are created here
    app = create_app(database_settings)
    await init_models(app.state.engine)
    yield app
    await dispose_engine(app.state.engine)


@pytest_asyncio.fixture
async def database_client(database_app):
    transport = ASGITransport(app=database_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
