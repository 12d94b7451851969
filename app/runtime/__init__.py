"""Request-scoped runtime context."""
from .context import (
    CacheEnvironment,
    environment_scope,
    get_environment,
    set_environment,
    with_environment,
    with_environment_sync,
)

__all__ = [
    "CacheEnvironment",
    "environment_scope",
    "get_environment",
    "set_environment",
    "with_environment",
    "with_environment_sync",
]
