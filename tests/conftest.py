"""
Pytest configuration and fixtures.

- Integration fixtures run against an in-memory SQLite database with
  foreign keys enabled, so the real unique/check/foreign-key constraints fire.
- API fixtures drive the FastAPI app through httpx with the session and
  service dependencies overridden.
"""

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from backend.app import app
from backend.api.deps import get_db_session
from backend.db.base import Base
from backend.db.dao import UserDAO
from backend.db import models  # noqa: F401
from backend.services.follow_service import FollowService

ALICE = "11111111-1111-1111-1111-111111111111"
BOB = "22222222-2222-2222-2222-222222222222"
CAROL = "33333333-3333-3333-3333-333333333333"
DIANA = "44444444-4444-4444-4444-444444444444"
EVE = "55555555-5555-5555-5555-555555555555"
MISSING = "99999999-9999-9999-9999-999999999999"

USERS = {
    ALICE: ("alice", "Alice"),
    BOB: ("bob", "Bob"),
    CAROL: ("carol", "Carol"),
    DIANA: ("diana", "Diana"),
    EVE: ("eve", "Eve"),
}


def _enable_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ============ Database Fixtures ============

@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory SQLite engine with the schema created."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(test_engine.sync_engine, "connect", _enable_foreign_keys)

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield test_engine

    await test_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def seeded_users(session_factory):
    """Insert alice, bob, carol, diana and eve."""
    async with session_factory() as session:
        for user_id, (username, display_name) in USERS.items():
            await UserDAO.upsert(session, username=username, display_name=display_name, user_id=user_id)
        await session.commit()
    return dict(USERS)


@pytest_asyncio.fixture
async def session(session_factory, seeded_users):
    async with session_factory() as db_session:
        yield db_session


@pytest.fixture
def service():
    return FollowService(default_page_size=20, max_page_size=100)


# ============ API Fixtures ============

@pytest_asyncio.fixture
async def client(session_factory, seeded_users, service):
    """httpx client bound to the app, using the test database."""

    async def override_get_db_session():
        async with session_factory() as db_session:
            try:
                yield db_session
                await db_session.commit()
            except Exception:
                await db_session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.state.follow_service = service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
