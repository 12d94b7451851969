from __future__ import annotations

from typing import List, Optional

from app.domain.entities import Project

from .kv import CacheBackend


class NullProjectCacheStore:
    """No-op project cache used when no KV binding is configured."""

    backend = CacheBackend.FALLBACK

    async def get_cached_projects(self) -> Optional[List[Project]]:
        return None

    async def set_cached_projects(self, projects: List[Project]) -> None:
        return

    async def clear_cache(self) -> None:
        return

    async def is_cache_valid(self) -> bool:
        return False


class NullScreenshotCacheStore:
    """No-op screenshot cache used when no KV binding is configured."""

    backend = CacheBackend.FALLBACK

    async def get_cached_screenshots(self, project_name: str) -> Optional[List[str]]:
        return None

    async def set_cached_screenshots(self, project_name: str, urls: List[str]) -> None:
        return

    async def clear_all_screenshots(self) -> None:
        return
