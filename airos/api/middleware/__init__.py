"""API middleware."""

from airos.api.middleware.error_handler import ErrorHandlerMiddleware
from airos.api.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware", "ErrorHandlerMiddleware"]
