"""Abstract interfaces for authentication collaborators."""

from abc import ABC, abstractmethod

from airos.core.entities.user import AuthPrincipal, User


class ITokenVerifier(ABC):
    """Resolves a bearer token to the identity behind it."""

    @abstractmethod
    async def verify_token(self, token: str) -> AuthPrincipal:
        """Return the principal, or raise InvalidTokenError."""
        pass


class ITokenIssuer(ABC):
    """Issues and revokes bearer tokens."""

    @abstractmethod
    async def issue_token(self, user: User) -> str:
        """Create a session for the user and return its plaintext token."""
        pass

    @abstractmethod
    async def revoke_token(self, token: str) -> None:
        """Revoke the session behind a token."""
        pass


class IPasswordHasher(ABC):
    """Password hashing strategy."""

    @abstractmethod
    def hash_password(self, password: str) -> str:
        pass

    @abstractmethod
    def verify_password(self, password: str, password_hash: str) -> bool:
        pass
