"""Durable store for the fetched project collection.

The collection and its write time live under two separate keys. An entry is
only valid when both are present and the timestamp is at most six hours old;
anything else reads as a miss.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

from app.domain.entities import Project, ProjectList

from .cache_policy import CachePolicy
from .guard import degrade_on_error
from .kv import CacheBackend, KVNamespace

logger = logging.getLogger(__name__)

CACHE_TTL = 6 * 60 * 60  # 6 hours in seconds
CACHE_KEY = "github_projects"
CACHE_TIMESTAMP_KEY = "github_projects_timestamp"


class ProjectCacheStore:
    """KV-backed cache of the project list."""

    backend = CacheBackend.KV

    def __init__(self, kv: KVNamespace, policy: Optional[CachePolicy] = None) -> None:
        self._kv = kv
        self._policy = policy or CachePolicy(CACHE_TTL)

    @degrade_on_error(None, "Error retrieving cached projects")
    async def get_cached_projects(self) -> Optional[List[Project]]:
        projects_data, timestamp_data = await asyncio.gather(
            self._kv.get(CACHE_KEY),
            self._kv.get(CACHE_TIMESTAMP_KEY),
        )
        if not projects_data or not timestamp_data:
            return None

        timestamp = CachePolicy.parse_timestamp(timestamp_data)
        if timestamp is None:
            logger.warning(f"Ignoring cached projects with unparseable timestamp {timestamp_data!r}")
            return None
        if not self._policy.is_fresh(timestamp):
            return None

        return ProjectList.validate_json(projects_data)

    @degrade_on_error(None, "Error caching projects")
    async def set_cached_projects(self, projects: List[Project]) -> None:
        timestamp = self._policy.now()
        payload = ProjectList.dump_json(projects).decode("utf-8")
        # No ordering between the two writes; a lone key reads as a miss
        await asyncio.gather(
            self._kv.put(CACHE_KEY, payload),
            self._kv.put(CACHE_TIMESTAMP_KEY, str(timestamp)),
        )

    @degrade_on_error(None, "Error clearing cache")
    async def clear_cache(self) -> None:
        await asyncio.gather(
            self._kv.delete(CACHE_KEY),
            self._kv.delete(CACHE_TIMESTAMP_KEY),
        )

    @degrade_on_error(False, "Error checking cache validity")
    async def is_cache_valid(self) -> bool:
        timestamp = CachePolicy.parse_timestamp(await self._kv.get(CACHE_TIMESTAMP_KEY))
        if timestamp is None:
            return False
        return self._policy.is_fresh(timestamp)
