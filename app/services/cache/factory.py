"""Select the durable or the no-op cache variant.

The choice is made once, when the service is built: an explicit environment
with a binding wins, then the ambient request environment, and without either
the fallback store is returned. Missing a binding is expected in local
development and never raises.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Protocol

from app.domain.entities import Project
from app.runtime.context import CacheEnvironment, get_environment

from .fallback import NullProjectCacheStore, NullScreenshotCacheStore
from .kv import CacheBackend, KVNamespace
from .project_cache import ProjectCacheStore
from .screenshot_cache import ScreenshotCacheStore

logger = logging.getLogger(__name__)


class CacheService(Protocol):
    backend: CacheBackend

    async def get_cached_projects(self) -> Optional[List[Project]]: ...

    async def set_cached_projects(self, projects: List[Project]) -> None: ...

    async def clear_cache(self) -> None: ...

    async def is_cache_valid(self) -> bool: ...


class ImageCacheService(Protocol):
    backend: CacheBackend

    async def get_cached_screenshots(self, project_name: str) -> Optional[List[str]]: ...

    async def set_cached_screenshots(self, project_name: str, urls: List[str]) -> None: ...

    async def clear_all_screenshots(self) -> None: ...


def resolve_binding(env: Optional[CacheEnvironment] = None) -> Optional[KVNamespace]:
    if env is not None and env.github_cache is not None:
        return env.github_cache
    ambient = get_environment()
    if ambient is not None and ambient.github_cache is not None:
        return ambient.github_cache
    return None


def create_cache_service(env: Optional[CacheEnvironment] = None) -> CacheService:
    kv = resolve_binding(env)
    if kv is None:
        logger.warning("GITHUB_CACHE KV binding not available, using fallback cache service")
        return NullProjectCacheStore()
    return ProjectCacheStore(kv)


def create_image_cache_service(env: Optional[CacheEnvironment] = None) -> ImageCacheService:
    kv = resolve_binding(env)
    if kv is None:
        logger.warning("GITHUB_CACHE KV binding not available, using fallback image cache service")
        return NullScreenshotCacheStore()
    return ScreenshotCacheStore(kv)
