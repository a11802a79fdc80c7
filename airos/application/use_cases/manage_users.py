"""User and authentication use cases."""

from dataclasses import dataclass

from airos.application.dto.mappers import user_to_response
from airos.application.dto.requests import (
    LoginRequest,
    RegisterRequest,
    UpdateProfileRequest,
    UpdateUserRequest,
)
from airos.application.dto.responses import AuthResponse
from airos.config import get_logger, get_settings
from airos.core.entities.user import User, UserRole
from airos.core.exceptions import (
    DuplicateEmailError,
    InvalidCredentialsError,
    SelfDeletionError,
    UserNotFoundError,
    ValidationError,
)
from airos.core.interfaces.auth import IPasswordHasher, ITokenIssuer
from airos.core.interfaces.user_store import IUserStore
from airos.core.time_utils import utcnow

logger = get_logger(__name__)


@dataclass
class AuthResult:
    """A user together with a freshly issued bearer token."""

    user: User
    token: str


def _check_password(password: str) -> None:
    minimum = get_settings().auth.min_password_length
    if len(password) < minimum:
        raise ValidationError(
            "password", f"Password must be at least {minimum} characters long"
        )


class _UserUseCase:
    def __init__(
        self,
        user_store: IUserStore | None = None,
        password_hasher: IPasswordHasher | None = None,
        token_issuer: ITokenIssuer | None = None,
    ):
        self._user_store = user_store
        self._password_hasher = password_hasher
        self._token_issuer = token_issuer

    async def _get_user_store(self) -> IUserStore:
        if self._user_store is None:
            from airos.infrastructure.storage.sqlite import get_user_store

            self._user_store = await get_user_store()
        return self._user_store

    def _get_password_hasher(self) -> IPasswordHasher:
        if self._password_hasher is None:
            from airos.infrastructure.auth import get_password_hasher

            self._password_hasher = get_password_hasher()
        return self._password_hasher

    async def _get_token_issuer(self) -> ITokenIssuer:
        if self._token_issuer is None:
            from airos.infrastructure.auth import get_token_service

            self._token_issuer = await get_token_service()
        return self._token_issuer

    async def _get_or_raise(self, user_id: int) -> User:
        store = await self._get_user_store()
        user = await store.get_user(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def _check_email_free(self, email: str, user_id: int | None = None) -> None:
        store = await self._get_user_store()
        clash = await store.get_user_by_email(email)
        if clash is not None and clash.id != user_id:
            raise DuplicateEmailError(email.strip().lower())

    @staticmethod
    def to_response(result: AuthResult) -> AuthResponse:
        """Convert result to API response."""
        return AuthResponse(token=result.token, user=user_to_response(result.user))


class RegisterUserUseCase(_UserUseCase):
    """Self-registration. New accounts always start as staff."""

    async def execute(self, request: RegisterRequest) -> AuthResult:
        _check_password(request.password)
        await self._check_email_free(request.email)

        store = await self._get_user_store()
        user = await store.create_user(
            User(
                name=request.name,
                email=request.email,
                password_hash=self._get_password_hasher().hash_password(request.password),
                role=UserRole.STAFF,
                department=request.department,
            )
        )
        token = await (await self._get_token_issuer()).issue_token(user)
        logger.info("user_registered", user_id=user.id)
        return AuthResult(user=user, token=token)


class CreateAdminUseCase(_UserUseCase):
    """Bootstrap the admin account; a no-op when the email is taken."""

    async def execute(self, name: str, email: str, password: str, department: str | None) -> User | None:
        store = await self._get_user_store()
        if await store.get_user_by_email(email) is not None:
            logger.info("admin_exists", email=email)
            return None
        return await store.create_user(
            User(
                name=name,
                email=email,
                password_hash=self._get_password_hasher().hash_password(password),
                role=UserRole.ADMIN,
                department=department,
            )
        )


class AuthenticateUserUseCase(_UserUseCase):
    """Email/password login."""

    async def execute(self, request: LoginRequest) -> AuthResult:
        store = await self._get_user_store()
        user = await store.get_user_by_email(request.email)
        if (
            user is None
            or not user.is_active
            or not self._get_password_hasher().verify_password(request.password, user.password_hash)
        ):
            logger.warning("login_failed", email=request.email.strip().lower())
            raise InvalidCredentialsError()

        now = utcnow()
        await store.record_login(user.id, now)  # type: ignore[arg-type]
        user.last_login = now
        token = await (await self._get_token_issuer()).issue_token(user)
        logger.info("login_succeeded", user_id=user.id)
        return AuthResult(user=user, token=token)


class UpdateProfileUseCase(_UserUseCase):
    """A user editing their own account."""

    async def execute(self, user_id: int, request: UpdateProfileRequest) -> User:
        user = await self._get_or_raise(user_id)
        if request.email is not None:
            await self._check_email_free(request.email, user_id)
            user.email = request.email.strip().lower()
        if request.name is not None:
            user.name = request.name
        if "department" in request.model_fields_set:
            user.department = request.department
        if request.password is not None:
            _check_password(request.password)
            user.password_hash = self._get_password_hasher().hash_password(request.password)
        return await (await self._get_user_store()).update_user(user)


class UpdateUserUseCase(_UserUseCase):
    """Admin edit of any user's profile, role or active flag."""

    async def execute(self, user_id: int, request: UpdateUserRequest) -> User:
        user = await self._get_or_raise(user_id)
        changes = request.model_dump(exclude_unset=True)
        if changes.get("email"):
            await self._check_email_free(changes["email"], user_id)

        updated = User.model_validate({**user.model_dump(), **changes})
        store = await self._get_user_store()
        updated = await store.update_user(updated)
        logger.info("user_updated_by_admin", user_id=user_id, fields=sorted(changes))
        return updated


class DeleteUserUseCase(_UserUseCase):
    """Admins cannot delete their own account."""

    async def execute(self, actor_id: int, user_id: int) -> None:
        if actor_id == user_id:
            raise SelfDeletionError(user_id)
        store = await self._get_user_store()
        if not await store.delete_user(user_id):
            raise UserNotFoundError(user_id)
