"""Per-project screenshot URL cache.

All projects share one KV document, ``{name: {"urls": [...], "timestamp": n}}``,
so clearing it drops every project's screenshots at once. Writes are a plain
read-modify-write of that document: two concurrent writers for different
projects race and the last one wins, losing the other's sub-entry until the
next fetch repopulates it.
"""
from __future__ import annotations

import json
import logging
from typing import Dict, List, Optional

from app.domain.entities import ScreenshotEntry

from .cache_policy import CachePolicy
from .guard import degrade_on_error
from .kv import CacheBackend, KVNamespace

logger = logging.getLogger(__name__)

SCREENSHOT_CACHE_TTL = 24 * 60 * 60  # 24 hours for screenshot URLs
SCREENSHOT_CACHE_KEY = "screenshot_cache"


class ScreenshotCacheStore:
    """KV-backed cache of screenshot URLs keyed by project name."""

    backend = CacheBackend.KV

    def __init__(self, kv: KVNamespace, policy: Optional[CachePolicy] = None) -> None:
        self._kv = kv
        self._policy = policy or CachePolicy(SCREENSHOT_CACHE_TTL)

    async def _load(self) -> Dict[str, ScreenshotEntry]:
        raw = await self._kv.get(SCREENSHOT_CACHE_KEY)
        if not raw:
            return {}
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise ValueError("Screenshot cache document is not a mapping")
        return data

    @degrade_on_error(None, "Error retrieving cached screenshots for {0}")
    async def get_cached_screenshots(self, project_name: str) -> Optional[List[str]]:
        cache = await self._load()
        entry = cache.get(project_name)
        if not entry:
            return None
        if not self._policy.is_fresh(int(entry["timestamp"])):
            return None
        return list(entry["urls"])

    @degrade_on_error(None, "Error caching screenshots for {0}")
    async def set_cached_screenshots(self, project_name: str, urls: List[str]) -> None:
        try:
            cache = await self._load()
        except Exception as e:
            logger.warning(f"Screenshot cache unreadable, starting empty: {e}")
            cache = {}

        cache[project_name] = {"urls": list(urls), "timestamp": self._policy.now()}
        await self._kv.put(SCREENSHOT_CACHE_KEY, json.dumps(cache))

    @degrade_on_error(None, "Error clearing screenshot caches")
    async def clear_all_screenshots(self) -> None:
        await self._kv.delete(SCREENSHOT_CACHE_KEY)
