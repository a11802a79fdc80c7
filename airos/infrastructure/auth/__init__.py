"""Authentication infrastructure: password hashing and session tokens."""

from airos.config import get_settings
from airos.infrastructure.auth.password import BcryptPasswordHasher
from airos.infrastructure.auth.sessions import SessionTokenService, generate_token, hash_token

_password_hasher: BcryptPasswordHasher | None = None


def get_password_hasher() -> BcryptPasswordHasher:
    """Get singleton password hasher configured from settings."""
    global _password_hasher
    if _password_hasher is None:
        _password_hasher = BcryptPasswordHasher(rounds=get_settings().auth.bcrypt_rounds)
    return _password_hasher


async def get_token_service() -> SessionTokenService:
    """Build a token service over the SQLite session and user stores."""
    from airos.infrastructure.storage.sqlite import get_session_store, get_user_store

    return SessionTokenService(
        session_store=await get_session_store(),
        user_store=await get_user_store(),
        ttl_hours=get_settings().auth.session_ttl_hours,
    )


__all__ = [
    "BcryptPasswordHasher",
    "SessionTokenService",
    "generate_token",
    "hash_token",
    "get_password_hasher",
    "get_token_service",
]
