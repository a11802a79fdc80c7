"""Infrastructure layer implementations."""

from airos.infrastructure import auth, storage

__all__ = ["storage", "auth"]
