"""Translation of driver errors into domain storage errors."""

import functools
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import aiosqlite

from airos.config import get_logger
from airos.core.exceptions import StoreUnavailableError

logger = get_logger(__name__)

T = TypeVar("T")


def store_operation(
    operation: str,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Wrap a store coroutine so driver failures surface as StoreUnavailableError.

    Domain errors raised inside the wrapped method pass through untouched.
    Integrity violations that have a domain meaning must be caught by the
    method itself before they reach this wrapper.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except aiosqlite.Error as e:
                logger.error("store_operation_failed", operation=operation, error=str(e))
                raise StoreUnavailableError(operation, str(e)) from e

        return wrapper

    return decorator
