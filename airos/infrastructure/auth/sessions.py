"""
Opaque bearer tokens backed by the auth_sessions table.

Tokens are 64 hex characters from ``secrets.token_hex``. Only their SHA-256
digest is stored, so a leaked database does not leak usable tokens.
"""

import hashlib
import secrets
from datetime import timedelta

from airos.config import get_logger
from airos.core.entities.user import AuthPrincipal, AuthSession, User
from airos.core.exceptions import InvalidTokenError
from airos.core.interfaces.auth import ITokenIssuer, ITokenVerifier
from airos.core.interfaces.user_store import ISessionStore, IUserStore
from airos.core.time_utils import utcnow

logger = get_logger(__name__)


def generate_token() -> str:
    return secrets.token_hex(32)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class SessionTokenService(ITokenIssuer, ITokenVerifier):
    """Issues, verifies and revokes session tokens."""

    def __init__(
        self,
        session_store: ISessionStore,
        user_store: IUserStore,
        ttl_hours: int = 24,
    ) -> None:
        self._session_store = session_store
        self._user_store = user_store
        self._ttl = timedelta(hours=ttl_hours)

    async def issue_token(self, user: User) -> str:
        token = generate_token()
        now = utcnow()
        await self._session_store.create_session(
            AuthSession(
                user_id=user.id,  # type: ignore[arg-type]
                token_hash=hash_token(token),
                created_at=now,
                expires_at=now + self._ttl,
            )
        )
        return token

    async def verify_token(self, token: str) -> AuthPrincipal:
        """
        Resolve a bearer token to its user.

        Raises:
            InvalidTokenError: unknown, expired or revoked token, or the
                user is gone or deactivated.
        """
        if not token:
            raise InvalidTokenError("Not authorized, no token")

        session = await self._session_store.get_session_by_hash(hash_token(token))
        if session is None or not session.is_valid(utcnow()):
            raise InvalidTokenError()

        user = await self._user_store.get_user(session.user_id)
        if user is None or not user.is_active:
            logger.warning("token_for_inactive_user", user_id=session.user_id)
            raise InvalidTokenError()

        return AuthPrincipal(user_id=user.id, role=user.role, session_id=session.id)  # type: ignore[arg-type]

    async def revoke_token(self, token: str) -> None:
        session = await self._session_store.get_session_by_hash(hash_token(token))
        if session is not None and session.id is not None:
            await self._session_store.revoke_session(session.id, utcnow())
