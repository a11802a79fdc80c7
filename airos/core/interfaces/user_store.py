"""Abstract interfaces for user and session storage."""

from abc import ABC, abstractmethod
from datetime import datetime

from airos.core.entities.user import AuthSession, User


class IUserStore(ABC):
    """Interface for user persistence."""

    @abstractmethod
    async def create_user(self, user: User) -> User:
        """Create a user. Raises DuplicateEmailError on email clash."""
        pass

    @abstractmethod
    async def get_user(self, user_id: int) -> User | None:
        """Get user by ID."""
        pass

    @abstractmethod
    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by (lower-cased) email."""
        pass

    @abstractmethod
    async def update_user(self, user: User) -> User:
        """Update a user, including the password hash."""
        pass

    @abstractmethod
    async def delete_user(self, user_id: int) -> bool:
        """Delete a user."""
        pass

    @abstractmethod
    async def list_users(self) -> list[User]:
        """List all users."""
        pass

    @abstractmethod
    async def count_users(self) -> int:
        """Count users."""
        pass

    @abstractmethod
    async def record_login(self, user_id: int, when: datetime) -> None:
        """Stamp the user's last login time."""
        pass


class ISessionStore(ABC):
    """Interface for bearer session persistence."""

    @abstractmethod
    async def create_session(self, session: AuthSession) -> AuthSession:
        """Store a new session."""
        pass

    @abstractmethod
    async def get_session_by_hash(self, token_hash: str) -> AuthSession | None:
        """Look up a session by token hash."""
        pass

    @abstractmethod
    async def revoke_session(self, session_id: int, when: datetime) -> None:
        """Mark a session revoked."""
        pass

    @abstractmethod
    async def revoke_user_sessions(self, user_id: int, when: datetime) -> int:
        """Revoke every open session of a user. Returns how many."""
        pass
