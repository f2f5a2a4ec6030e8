"""
Database decorators for error translation.

Wraps async data access functions so that driver and ORM failures reach the
caller as StorageError.
"""

from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any, TypeVar

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from refnet.utils.exceptions import StorageError


T = TypeVar("T")


def raises_storage_error(
    func: Callable[..., Awaitable[T]],
) -> Callable[..., Awaitable[T]]:
    """
    Decorator that converts SQLAlchemy errors into StorageError.

    Usage:
        @raises_storage_error
        async def credit_balance(self, user_id: int, delta: Decimal):
            ...

    The original exception is chained as __cause__.

    Args:
        func: Async function to wrap

    Returns:
        Wrapped function
    """
    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(
                "Storage failure in {}: {}",
                func.__name__,
                type(e).__name__,
                extra={"operation": func.__name__},
            )
            raise StorageError(
                f"Ledger store failure in {func.__name__}: {e}"
            ) from e

    return wrapper
