"""User and session domain entities."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from airos.core.time_utils import utcnow


class UserRole(str, Enum):
    """Roles, from most to least privileged."""

    ADMIN = "admin"
    MANAGER = "manager"
    STAFF = "staff"


class User(BaseModel):
    """An application user."""

    id: int | None = None
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3)
    password_hash: str = ""
    role: UserRole = UserRole.STAFF
    department: str | None = None
    is_active: bool = True
    last_login: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.strip().lower()


class AuthSession(BaseModel):
    """A bearer session. Only the SHA-256 hash of the token is stored."""

    id: int | None = None
    user_id: int
    token_hash: str
    expires_at: datetime
    revoked_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)

    def is_valid(self, now: datetime) -> bool:
        return self.revoked_at is None and now < self.expires_at


class AuthPrincipal(BaseModel):
    """Identity resolved from a verified token."""

    user_id: int
    role: UserRole
    session_id: int | None = None
