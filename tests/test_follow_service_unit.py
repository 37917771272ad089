"""
Follow service unit tests with the DAOs patched out.

Exercises the integrity-error and store-failure paths that a single
SQLite connection cannot produce on demand.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from backend.db.dao import FollowDAO, UserDAO
from backend.models import ErrorCode, INTERNAL_ERROR_MESSAGE
from backend.services.follow_service import FollowService

pytestmark = pytest.mark.asyncio

FOLLOWER = "11111111-1111-1111-1111-111111111111"
FOLLOWEE = "22222222-2222-2222-2222-222222222222"


class FakeConstraintCause(Exception):
    """Raw driver exception carrying the violated constraint name."""

    def __init__(self, constraint_name):
        super().__init__(constraint_name)
        self.constraint_name = constraint_name


class FakeDriverError(Exception):
    """Stands in for the asyncpg-adapted driver error SQLAlchemy wraps."""

    def __init__(self, message, sqlstate=None, constraint_name=None):
        super().__init__(message)
        self.sqlstate = sqlstate
        if constraint_name is not None:
            self.__cause__ = FakeConstraintCause(constraint_name)


def integrity_error(message, sqlstate=None, constraint_name=None) -> IntegrityError:
    orig = FakeDriverError(message, sqlstate=sqlstate, constraint_name=constraint_name)
    return IntegrityError("INSERT INTO user_follows ...", {}, orig)


@pytest.fixture
def mock_session():
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


@pytest.fixture
def unit_service():
    return FollowService(default_page_size=20, max_page_size=100)


@pytest.fixture
def both_users_exist(monkeypatch):
    async def existing_ids(session, user_ids):
        return set(user_ids)

    monkeypatch.setattr(UserDAO, "existing_ids", staticmethod(existing_ids))


def patch_create(monkeypatch, error):
    create = AsyncMock(side_effect=error)
    monkeypatch.setattr(FollowDAO, "create", create)
    return create


class TestFollowIntegrityErrors:
    async def test_unique_violation_is_duplicate(self, monkeypatch, mock_session, unit_service, both_users_exist):
        patch_create(monkeypatch, integrity_error(
            "duplicate key value violates unique constraint",
            sqlstate="23505",
            constraint_name="uk_follower_followee",
        ))

        result = await unit_service.follow(mock_session, FOLLOWER, FOLLOWEE)

        assert result.code == ErrorCode.DUPLICATE_FOLLOW
        assert result.message == "Already following this user"
        mock_session.rollback.assert_awaited()
        mock_session.commit.assert_not_awaited()

    async def test_foreign_key_violation_is_user_not_found(self, monkeypatch, mock_session, unit_service, both_users_exist):
        patch_create(monkeypatch, integrity_error(
            "insert or update violates foreign key constraint",
            sqlstate="23503",
            constraint_name="user_follows_followee_id_fkey",
        ))

        result = await unit_service.follow(mock_session, FOLLOWER, FOLLOWEE)

        assert result.code == ErrorCode.USER_NOT_FOUND

    async def test_unrelated_unique_violation_is_internal(self, monkeypatch, mock_session, unit_service, both_users_exist):
        patch_create(monkeypatch, integrity_error(
            "duplicate key value violates unique constraint",
            sqlstate="23505",
            constraint_name="user_follows_pkey",
        ))

        result = await unit_service.follow(mock_session, FOLLOWER, FOLLOWEE)

        assert result.code == ErrorCode.INTERNAL_ERROR
        assert result.message == INTERNAL_ERROR_MESSAGE

    async def test_unrecognised_message_is_internal(self, monkeypatch, mock_session, unit_service, both_users_exist):
        patch_create(monkeypatch, integrity_error("something else went wrong"))

        result = await unit_service.follow(mock_session, FOLLOWER, FOLLOWEE)

        assert result.code == ErrorCode.INTERNAL_ERROR

    async def test_unnamed_primary_key_collision_is_internal(self, monkeypatch, mock_session, unit_service, both_users_exist):
        patch_create(monkeypatch, integrity_error(
            'duplicate key value violates unique constraint "user_follows_pkey"',
            sqlstate="23505",
        ))

        result = await unit_service.follow(mock_session, FOLLOWER, FOLLOWEE)

        assert result.code == ErrorCode.INTERNAL_ERROR
        assert result.message == INTERNAL_ERROR_MESSAGE


class TestStoreFailures:
    async def test_unavailable_store_on_read(self, monkeypatch, mock_session, unit_service):
        error = OperationalError("SELECT ...", {}, Exception("connection refused"))
        monkeypatch.setattr(FollowDAO, "is_following", AsyncMock(side_effect=error))

        result = await unit_service.is_following(mock_session, FOLLOWER, FOLLOWEE)

        assert not result.success
        assert result.code == ErrorCode.INTERNAL_ERROR
        assert result.message == INTERNAL_ERROR_MESSAGE
        assert "connection refused" not in result.message
        mock_session.rollback.assert_awaited_once()

    async def test_unavailable_store_on_follow(self, monkeypatch, mock_session, unit_service):
        error = OperationalError("SELECT ...", {}, Exception("timeout"))
        monkeypatch.setattr(UserDAO, "existing_ids", AsyncMock(side_effect=error))

        result = await unit_service.follow(mock_session, FOLLOWER, FOLLOWEE)

        assert result.code == ErrorCode.INTERNAL_ERROR
        assert result.http_status == 500

    async def test_connection_reset_on_unfollow(self, monkeypatch, mock_session, unit_service):
        monkeypatch.setattr(FollowDAO, "delete", AsyncMock(side_effect=ConnectionResetError("reset")))

        result = await unit_service.unfollow(mock_session, FOLLOWER, FOLLOWEE)

        assert result.code == ErrorCode.INTERNAL_ERROR

    async def test_failed_rollback_still_returns_internal(self, monkeypatch, mock_session, unit_service):
        error = OperationalError("SELECT ...", {}, Exception("gone"))
        monkeypatch.setattr(FollowDAO, "count_followers", AsyncMock(side_effect=error))
        monkeypatch.setattr(UserDAO, "exists", AsyncMock(return_value=True))
        mock_session.rollback.side_effect = OperationalError("ROLLBACK", {}, Exception("gone"))

        result = await unit_service.follower_count(mock_session, FOLLOWER)

        assert result.code == ErrorCode.INTERNAL_ERROR

    async def test_self_follow_does_not_touch_store(self, monkeypatch, mock_session, unit_service):
        existing_ids = AsyncMock()
        monkeypatch.setattr(UserDAO, "existing_ids", existing_ids)

        result = await unit_service.follow(mock_session, FOLLOWER, FOLLOWER)

        assert result.code == ErrorCode.SELF_FOLLOW
        existing_ids.assert_not_awaited()
