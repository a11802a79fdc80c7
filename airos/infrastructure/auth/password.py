"""bcrypt password hashing."""

import bcrypt

from airos.core.interfaces.auth import IPasswordHasher


class BcryptPasswordHasher(IPasswordHasher):
    """Salted bcrypt hashes, stored as UTF-8 text."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """Return False for a mismatch or a malformed stored hash."""
        if not password_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            return False
