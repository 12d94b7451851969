"""Ambient environment for code that needs the KV binding.

The binding is attached to the running request once, at the edge, so that the
cache factory can resolve it from any depth without it being passed through
every call. The slot is a ContextVar: each asyncio task sees its own value, so
concurrent requests served by the same process do not see each other's
binding.
"""
from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from typing import TYPE_CHECKING, Awaitable, Callable, Iterator, Optional, TypeVar

if TYPE_CHECKING:
    from app.services.cache.kv import KVNamespace

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEnvironment:
    """External bindings injected by the host for one unit of work."""

    github_cache: Optional["KVNamespace"] = None
    cron_secret: Optional[str] = None


_environment_var: ContextVar[Optional[CacheEnvironment]] = ContextVar(
    "cache_environment", default=None
)


def set_environment(env: Optional[CacheEnvironment]) -> None:
    _environment_var.set(env)


def get_environment() -> Optional[CacheEnvironment]:
    return _environment_var.get()


@contextmanager
def environment_scope(env: Optional[CacheEnvironment]) -> Iterator[None]:
    """Populate the environment for the duration of the block.

    The slot is left unset on exit, whether the block returns or raises.
    """
    set_environment(env)
    try:
        yield
    finally:
        set_environment(None)


async def with_environment(env: Optional[CacheEnvironment], fn: Callable[[], Awaitable[T]]) -> T:
    """Await ``fn()`` with ``env`` as the ambient environment."""
    with environment_scope(env):
        return await fn()


def with_environment_sync(env: Optional[CacheEnvironment], fn: Callable[[], T]) -> T:
    with environment_scope(env):
        return fn()
