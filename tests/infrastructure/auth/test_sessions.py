"""Tests for password hashing and session tokens."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from airos.core.entities.user import AuthSession, User, UserRole
from airos.core.exceptions import InvalidTokenError
from airos.core.time_utils import utcnow
from airos.infrastructure.auth import BcryptPasswordHasher, SessionTokenService, hash_token


class TestBcryptPasswordHasher:
    def test_hash_and_verify(self):
        hasher = BcryptPasswordHasher(rounds=4)
        hashed = hasher.hash_password("secret123")

        assert hashed != "secret123"
        assert hasher.verify_password("secret123", hashed)
        assert not hasher.verify_password("wrong", hashed)

    def test_malformed_hash_is_rejected(self):
        hasher = BcryptPasswordHasher(rounds=4)
        assert hasher.verify_password("secret123", "not-a-hash") is False
        assert hasher.verify_password("secret123", "") is False


@pytest.fixture
def user() -> User:
    return User(id=7, name="Siti", email="siti@example.com", role=UserRole.MANAGER)


@pytest.fixture
def session_store():
    store = AsyncMock()
    store.create_session.side_effect = lambda session: session
    return store


@pytest.fixture
def user_store(user):
    store = AsyncMock()
    store.get_user.return_value = user
    return store


@pytest.fixture
def service(session_store, user_store) -> SessionTokenService:
    return SessionTokenService(session_store=session_store, user_store=user_store, ttl_hours=1)


def _session(token: str, **overrides) -> AuthSession:
    data = {
        "id": 3,
        "user_id": 7,
        "token_hash": hash_token(token),
        "expires_at": utcnow() + timedelta(hours=1),
    }
    data.update(overrides)
    return AuthSession(**data)


class TestSessionTokenService:
    async def test_issue_stores_only_the_hash(self, service, session_store, user):
        token = await service.issue_token(user)

        assert len(token) == 64
        stored = session_store.create_session.call_args.args[0]
        assert stored.token_hash == hash_token(token)
        assert stored.user_id == 7
        assert stored.expires_at - stored.created_at == timedelta(hours=1)

    async def test_verify_resolves_principal(self, service, session_store):
        session_store.get_session_by_hash.return_value = _session("tok")

        principal = await service.verify_token("tok")

        assert principal.user_id == 7
        assert principal.role == UserRole.MANAGER
        assert principal.session_id == 3

    async def test_verify_rejects_unknown_token(self, service, session_store):
        session_store.get_session_by_hash.return_value = None
        with pytest.raises(InvalidTokenError):
            await service.verify_token("tok")

    async def test_verify_rejects_expired_and_revoked(self, service, session_store):
        session_store.get_session_by_hash.return_value = _session(
            "tok", expires_at=utcnow() - timedelta(seconds=1)
        )
        with pytest.raises(InvalidTokenError):
            await service.verify_token("tok")

        session_store.get_session_by_hash.return_value = _session("tok", revoked_at=utcnow())
        with pytest.raises(InvalidTokenError):
            await service.verify_token("tok")

    async def test_verify_rejects_inactive_user(self, service, session_store, user_store, user):
        session_store.get_session_by_hash.return_value = _session("tok")
        user_store.get_user.return_value = user.model_copy(update={"is_active": False})
        with pytest.raises(InvalidTokenError):
            await service.verify_token("tok")

    async def test_verify_rejects_empty_token(self, service):
        with pytest.raises(InvalidTokenError):
            await service.verify_token("")

    async def test_revoke(self, service, session_store):
        session_store.get_session_by_hash.return_value = _session("tok")
        await service.revoke_token("tok")
        session_store.revoke_session.assert_awaited_once()
        assert session_store.revoke_session.call_args.args[0] == 3

    async def test_revoke_unknown_is_noop(self, service, session_store):
        session_store.get_session_by_hash.return_value = None
        await service.revoke_token("tok")
        session_store.revoke_session.assert_not_awaited()
