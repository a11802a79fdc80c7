"""SQLite implementation of user and auth session storage."""

from datetime import datetime

import aiosqlite

from airos.config import get_logger
from airos.core.entities.user import AuthSession, User, UserRole
from airos.core.exceptions import DuplicateEmailError
from airos.core.interfaces.user_store import ISessionStore, IUserStore
from airos.core.time_utils import parse_iso_datetime, utcnow
from airos.infrastructure.storage.sqlite.connection import get_connection, get_transaction
from airos.infrastructure.storage.sqlite.errors import store_operation

logger = get_logger(__name__)


class SQLiteUserStore(IUserStore):
    """SQLite implementation of user storage."""

    @store_operation("create_user")
    async def create_user(self, user: User) -> User:
        """Create a new user."""
        now = utcnow()
        user.created_at = now
        user.updated_at = now
        try:
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    """
                    INSERT INTO users (
                        name, email, password_hash, role, department,
                        is_active, last_login, created_at, updated_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                    """,
                    (
                        user.name,
                        user.email,
                        user.password_hash,
                        user.role.value,
                        user.department,
                        int(user.is_active),
                        user.last_login.isoformat() if user.last_login else None,
                        user.created_at.isoformat(),
                        user.updated_at.isoformat(),
                    ),
                )
                user.id = cursor.lastrowid
        except aiosqlite.IntegrityError as e:
            if "users.email" in str(e):
                raise DuplicateEmailError(user.email) from e
            raise

        logger.info("user_created", user_id=user.id, role=user.role.value)
        return user

    @store_operation("get_user")
    async def get_user(self, user_id: int) -> User | None:
        """Get user by ID."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users WHERE id = ?", (user_id,))
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    @store_operation("get_user_by_email")
    async def get_user_by_email(self, email: str) -> User | None:
        """Get user by email (case-insensitive)."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM users WHERE email = ?", (email.strip().lower(),)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_user(row)

    @store_operation("update_user")
    async def update_user(self, user: User) -> User:
        """Update user profile, role and password hash."""
        user.updated_at = utcnow()
        try:
            async with get_transaction() as conn:
                await conn.execute(
                    """
                    UPDATE users SET
                        name = ?, email = ?, password_hash = ?, role = ?,
                        department = ?, is_active = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (
                        user.name,
                        user.email,
                        user.password_hash,
                        user.role.value,
                        user.department,
                        int(user.is_active),
                        user.updated_at.isoformat(),
                        user.id,
                    ),
                )
        except aiosqlite.IntegrityError as e:
            if "users.email" in str(e):
                raise DuplicateEmailError(user.email) from e
            raise

        logger.info("user_updated", user_id=user.id)
        return user

    @store_operation("delete_user")
    async def delete_user(self, user_id: int) -> bool:
        """Delete a user; their sessions cascade."""
        async with get_transaction() as conn:
            cursor = await conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
            deleted = cursor.rowcount > 0
        if deleted:
            logger.info("user_deleted", user_id=user_id)
        return deleted

    @store_operation("list_users")
    async def list_users(self) -> list[User]:
        """List users, newest first."""
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT * FROM users ORDER BY created_at DESC, id DESC")
            rows = await cursor.fetchall()
            return [self._row_to_user(row) for row in rows]

    @store_operation("count_users")
    async def count_users(self) -> int:
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM users")
            row = await cursor.fetchone()
            return row[0] if row else 0

    @store_operation("record_login")
    async def record_login(self, user_id: int, when: datetime) -> None:
        async with get_transaction() as conn:
            await conn.execute(
                "UPDATE users SET last_login = ? WHERE id = ?",
                (when.isoformat(), user_id),
            )

    @staticmethod
    def _row_to_user(row: aiosqlite.Row) -> User:
        """Convert a database row to a User entity."""
        return User(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            password_hash=row["password_hash"],
            role=UserRole(row["role"]),
            department=row["department"],
            is_active=bool(row["is_active"]),
            last_login=parse_iso_datetime(row["last_login"]),
            created_at=parse_iso_datetime(row["created_at"]) or utcnow(),
            updated_at=parse_iso_datetime(row["updated_at"]) or utcnow(),
        )


class SQLiteSessionStore(ISessionStore):
    """SQLite storage for hashed bearer sessions."""

    @store_operation("create_session")
    async def create_session(self, session: AuthSession) -> AuthSession:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO auth_sessions (
                    user_id, token_hash, created_at, expires_at, revoked_at
                ) VALUES (?, ?, ?, ?, ?)
                """,
                (
                    session.user_id,
                    session.token_hash,
                    session.created_at.isoformat(),
                    session.expires_at.isoformat(),
                    session.revoked_at.isoformat() if session.revoked_at else None,
                ),
            )
            session.id = cursor.lastrowid
        logger.info("auth_session_created", session_id=session.id, user_id=session.user_id)
        return session

    @store_operation("get_session")
    async def get_session_by_hash(self, token_hash: str) -> AuthSession | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM auth_sessions WHERE token_hash = ?", (token_hash,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_session(row)

    @store_operation("revoke_session")
    async def revoke_session(self, session_id: int, when: datetime) -> None:
        async with get_transaction() as conn:
            await conn.execute(
                """
                UPDATE auth_sessions SET revoked_at = ?
                WHERE id = ? AND revoked_at IS NULL
                """,
                (when.isoformat(), session_id),
            )
        logger.info("auth_session_revoked", session_id=session_id)

    @store_operation("revoke_user_sessions")
    async def revoke_user_sessions(self, user_id: int, when: datetime) -> int:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                UPDATE auth_sessions SET revoked_at = ?
                WHERE user_id = ? AND revoked_at IS NULL
                """,
                (when.isoformat(), user_id),
            )
            revoked = cursor.rowcount
        logger.info("auth_sessions_revoked", user_id=user_id, count=revoked)
        return revoked

    @staticmethod
    def _row_to_session(row: aiosqlite.Row) -> AuthSession:
        return AuthSession(
            id=row["id"],
            user_id=row["user_id"],
            token_hash=row["token_hash"],
            created_at=parse_iso_datetime(row["created_at"]) or utcnow(),
            expires_at=parse_iso_datetime(row["expires_at"]) or utcnow(),
            revoked_at=parse_iso_datetime(row["revoked_at"]),
        )
