"""
PostBoard Backend: Database Store Tests
=======================================

What:  DatabaseStore against a real temporary SQLite file (aiosqlite).
Why:   The ORM mapping, id generation and merge semantics are easiest to
       trust when exercised for real; failure wrapping uses a mock factory.
"""

import logging
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
from sqlalchemy.exc import OperationalError

from postboard.config import Settings
from postboard.database import build_engine, build_session_factory, dispose_engine, init_models
from postboard.exceptions import UpstreamError, ValidationError
from postboard.models import PostRow, UserRow
from postboard.pipeline import Application, ErrorBoundary, RequestTimestamp
from postboard.resources import POSTS, USERS
from postboard.routes.resources import resource_router
from postboard.services import ResourceHandlers
from postboard.stores import DatabaseStore


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = build_engine(
        Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'store.db'}", log_level="WARNING")
    )
    await init_models(engine)
    yield build_session_factory(engine)
    await dispose_engine(engine)


@pytest.fixture
def users(session_factory):
    return DatabaseStore(USERS, UserRow, session_factory)


@pytest.fixture
def posts(session_factory):
    return DatabaseStore(POSTS, PostRow, session_factory)


class TestDatabaseStoreCrud:
    @pytest.mark.asyncio
    async def test_create_assigns_hex_id(self, users, sample_user):
        created = await users.create(sample_user)

        assert isinstance(created.id, str)
        assert len(created.id) == 32
        int(created.id, 16)
        assert created.model_dump() == {"id": created.id, **sample_user}

    @pytest.mark.asyncio
    async def test_create_then_get(self, users, sample_user):
        created = await users.create(sample_user)
        assert await users.get(created.id) == created

    @pytest.mark.asyncio
    async def test_invalid_create_writes_nothing(self, users):
        with pytest.raises(ValidationError):
            await users.create({"name": "A"})
        assert await users.count() == 0

    @pytest.mark.asyncio
    async def test_list_and_count(self, posts):
        await posts.create({"title": "one", "description": "first"})
        await posts.create({"title": "two", "description": "second"})

        titles = sorted(post.title for post in await posts.list())

        assert titles == ["one", "two"]
        assert await posts.count() == 2

    @pytest.mark.asyncio
    async def test_update_merges(self, users, sample_user):
        created = await users.create(sample_user)

        updated = await users.update(created.id, {"email": "new@x.com"})

        assert updated.model_dump() == {**created.model_dump(), "email": "new@x.com"}
        assert (await users.get(created.id)).email == "new@x.com"

    @pytest.mark.asyncio
    async def test_update_unknown_id(self, users):
        assert await users.update("0" * 32, {"name": "ghost"}) is None

    @pytest.mark.asyncio
    async def test_delete_removes_exactly_one(self, users, sample_user):
        keep = await users.create({**sample_user, "name": "keep"})
        drop = await users.create({**sample_user, "name": "drop"})

        removed = await users.delete(drop.id)

        assert removed == drop
        assert await users.get(drop.id) is None
        assert await users.get(keep.id) == keep
        assert await users.count() == 1

    @pytest.mark.asyncio
    async def test_get_unknown_id(self, users):
        assert await users.get("not-an-id") is None


class TestDatabaseStoreFailures:
    @staticmethod
    def _broken_factory():
        session = MagicMock()
        session.__aenter__.side_effect = OperationalError("SELECT 1", {}, Exception("disk I/O error"))
        return MagicMock(return_value=session)

    @pytest.mark.asyncio
    async def test_create_failure_is_upstream_error(self, sample_user):
        store = DatabaseStore(USERS, UserRow, self._broken_factory())

        with pytest.raises(UpstreamError, match="disk I/O error") as info:
            await store.create(sample_user)

        assert info.value.context == {"resource": "user", "operation": "create"}

    @pytest.mark.asyncio
    async def test_list_failure_is_upstream_error(self):
        store = DatabaseStore(POSTS, PostRow, self._broken_factory())
        with pytest.raises(UpstreamError):
            await store.list()

    @pytest.mark.asyncio
    async def test_failure_through_pipeline_logs_once(self, make_ctx, caplog):
        caplog.set_level(logging.DEBUG, logger="postboard")
        handlers = ResourceHandlers(USERS, DatabaseStore(USERS, UserRow, self._broken_factory()))
        pipeline = Application()
        pipeline.mount("/users", resource_router(handlers, RequestTimestamp()))
        pipeline.use_error_boundary(ErrorBoundary())

        response = await pipeline.handle(make_ctx("GET", "/users"))

        assert response.status_code == 500
        errors = [r for r in caplog.records if r.levelno >= logging.ERROR]
        assert [r.name for r in errors] == ["postboard.pipeline.boundary"]
