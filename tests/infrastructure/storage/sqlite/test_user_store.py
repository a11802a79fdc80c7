"""Tests for SQLite user and auth session storage."""

from datetime import timedelta

import pytest

from airos.core.entities.user import AuthSession, User, UserRole
from airos.core.exceptions import DuplicateEmailError
from airos.core.time_utils import utcnow
from airos.infrastructure.storage.sqlite.user_store import SQLiteSessionStore, SQLiteUserStore


@pytest.fixture
def users(sqlite_db) -> SQLiteUserStore:
    return SQLiteUserStore()


@pytest.fixture
def sessions(sqlite_db) -> SQLiteSessionStore:
    return SQLiteSessionStore()


def make_user(**overrides) -> User:
    data = {"name": "Siti", "email": "Siti@Example.com", "password_hash": "x"}
    data.update(overrides)
    return User(**data)


class TestUserStore:
    async def test_create_and_lookup_by_email(self, users):
        created = await users.create_user(make_user())

        loaded = await users.get_user_by_email("SITI@example.com")
        assert loaded is not None
        assert loaded.id == created.id
        assert loaded.role == UserRole.STAFF

    async def test_duplicate_email(self, users):
        await users.create_user(make_user())
        with pytest.raises(DuplicateEmailError):
            await users.create_user(make_user(name="Other"))

    async def test_update_and_record_login(self, users):
        user = await users.create_user(make_user())
        user.role = UserRole.MANAGER
        await users.update_user(user)

        when = utcnow()
        await users.record_login(user.id, when)

        loaded = await users.get_user(user.id)
        assert loaded.role == UserRole.MANAGER
        assert loaded.last_login == when

    async def test_list_count_delete(self, users):
        first = await users.create_user(make_user())
        await users.create_user(make_user(email="rudi@example.com", name="Rudi"))

        assert await users.count_users() == 2
        assert len(await users.list_users()) == 2
        assert await users.delete_user(first.id) is True
        assert await users.delete_user(first.id) is False
        assert await users.count_users() == 1


class TestSessionStore:
    async def test_create_and_revoke(self, users, sessions):
        user = await users.create_user(make_user())
        now = utcnow()
        session = await sessions.create_session(
            AuthSession(user_id=user.id, token_hash="abc", expires_at=now + timedelta(hours=1))
        )

        loaded = await sessions.get_session_by_hash("abc")
        assert loaded.id == session.id
        assert loaded.is_valid(utcnow())

        await sessions.revoke_session(session.id, utcnow())
        assert not (await sessions.get_session_by_hash("abc")).is_valid(utcnow())

    async def test_revoke_user_sessions(self, users, sessions):
        user = await users.create_user(make_user())
        expires = utcnow() + timedelta(hours=1)
        for token_hash in ("a", "b"):
            await sessions.create_session(
                AuthSession(user_id=user.id, token_hash=token_hash, expires_at=expires)
            )

        assert await sessions.revoke_user_sessions(user.id, utcnow()) == 2
        assert await sessions.revoke_user_sessions(user.id, utcnow()) == 0

    async def test_unknown_hash(self, sessions):
        assert await sessions.get_session_by_hash("missing") is None
