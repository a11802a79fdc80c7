"""Tests for user and authentication use cases."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from airos.application.dto.requests import LoginRequest, RegisterRequest, UpdateUserRequest
from airos.application.use_cases import (
    AuthenticateUserUseCase,
    DeleteUserUseCase,
    RegisterUserUseCase,
    UpdateUserUseCase,
)
from airos.core.entities.user import User, UserRole
from airos.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    SelfDeletionError,
    UserNotFoundError,
    ValidationError,
)


@pytest.fixture
def mock_user_store():
    store = AsyncMock()
    store.get_user_by_email.return_value = None

    async def _create(user):
        user.id = 5
        return user

    store.create_user.side_effect = _create
    store.update_user.side_effect = lambda user: user
    return store


@pytest.fixture
def mock_hasher():
    hasher = MagicMock()
    hasher.hash_password.side_effect = lambda p: f"hashed:{p}"
    hasher.verify_password.side_effect = lambda p, h: h == f"hashed:{p}"
    return hasher


@pytest.fixture
def mock_issuer():
    issuer = AsyncMock()
    issuer.issue_token.return_value = "a" * 64
    return issuer


def _deps(store, hasher, issuer):
    return {"user_store": store, "password_hasher": hasher, "token_issuer": issuer}


class TestRegister:
    async def test_new_users_are_staff(self, mock_user_store, mock_hasher, mock_issuer):
        use_case = RegisterUserUseCase(**_deps(mock_user_store, mock_hasher, mock_issuer))
        result = await use_case.execute(
            RegisterRequest(name="Sari", email="Sari@Example.com", password="secret1")
        )

        assert result.user.role == UserRole.STAFF
        assert result.user.email == "sari@example.com"
        assert result.user.password_hash == "hashed:secret1"
        assert use_case.to_response(result).token == "a" * 64

    async def test_duplicate_email(self, mock_user_store, mock_hasher, mock_issuer):
        mock_user_store.get_user_by_email.return_value = User(id=1, name="x", email="sari@example.com")
        use_case = RegisterUserUseCase(**_deps(mock_user_store, mock_hasher, mock_issuer))
        with pytest.raises(DuplicateEmailError):
            await use_case.execute(
                RegisterRequest(name="Sari", email="sari@example.com", password="secret1")
            )

    async def test_short_password(self, mock_user_store, mock_hasher, mock_issuer):
        use_case = RegisterUserUseCase(**_deps(mock_user_store, mock_hasher, mock_issuer))
        with pytest.raises(ValidationError):
            await use_case.execute(RegisterRequest(name="Sari", email="s@x.io", password="123"))


class TestAuthenticate:
    async def test_login(self, mock_user_store, mock_hasher, mock_issuer):
        mock_user_store.get_user_by_email.return_value = User(
            id=1, name="Sari", email="sari@example.com", password_hash="hashed:secret1"
        )
        use_case = AuthenticateUserUseCase(**_deps(mock_user_store, mock_hasher, mock_issuer))

        result = await use_case.execute(LoginRequest(email="sari@example.com", password="secret1"))

        assert result.token == "a" * 64
        assert result.user.last_login is not None
        mock_user_store.record_login.assert_awaited_once()

    @pytest.mark.parametrize(
        "stored",
        [
            None,
            User(id=1, name="Sari", email="sari@example.com", password_hash="hashed:other"),
            User(
                id=1,
                name="Sari",
                email="sari@example.com",
                password_hash="hashed:secret1",
                is_active=False,
            ),
        ],
    )
    async def test_rejected(self, mock_user_store, mock_hasher, mock_issuer, stored):
        mock_user_store.get_user_by_email.return_value = stored
        use_case = AuthenticateUserUseCase(**_deps(mock_user_store, mock_hasher, mock_issuer))
        with pytest.raises(InvalidCredentialsError):
            await use_case.execute(LoginRequest(email="sari@example.com", password="secret1"))
        mock_issuer.issue_token.assert_not_called()


class TestAdminOperations:
    async def test_update_role(self, mock_user_store):
        mock_user_store.get_user.return_value = User(id=2, name="Sari", email="sari@example.com")
        updated = await UpdateUserUseCase(user_store=mock_user_store).execute(
            2, UpdateUserRequest(role=UserRole.MANAGER)
        )
        assert updated.role == UserRole.MANAGER

    async def test_update_missing(self, mock_user_store):
        mock_user_store.get_user.return_value = None
        with pytest.raises(UserNotFoundError):
            await UpdateUserUseCase(user_store=mock_user_store).execute(2, UpdateUserRequest())

    async def test_cannot_delete_self(self, mock_user_store):
        with pytest.raises(SelfDeletionError):
            await DeleteUserUseCase(user_store=mock_user_store).execute(actor_id=1, user_id=1)
        mock_user_store.delete_user.assert_not_called()

    async def test_delete_missing(self, mock_user_store):
        mock_user_store.delete_user.return_value = False
        with pytest.raises(UserNotFoundError):
            await DeleteUserUseCase(user_store=mock_user_store).execute(actor_id=1, user_id=2)
