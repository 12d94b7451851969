"""Failure contract shared by every cache store operation.

Cache operations always succeed from the caller's point of view: a failing
binding, a corrupt payload or a bad timestamp is logged here and the operation
returns its neutral value (``None`` for reads, nothing for writes and clears).
"""
from __future__ import annotations

import functools
import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


def degrade_on_error(default: Any, message: str) -> Callable:
    """Decorate an async store method so that errors are logged and replaced by ``default``.

    ``message`` is formatted with the method's positional arguments (after ``self``).
    """

    def decorator(func: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(self, *args, **kwargs) -> Any:
            try:
                return await func(self, *args, **kwargs)
            except Exception:
                logger.exception(message.format(*args))
                return default

        return wrapper

    return decorator
