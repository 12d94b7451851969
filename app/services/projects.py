"""
Project read and refresh orchestration.

`get_projects` is cache-aside and never fails: it degrades to an uncached
fetch, and to an empty list if GitHub is unreachable too. `refresh_projects`
never raises either; every failure collapses into one structured result.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from app.domain.entities import Project, RefreshResult
from app.domain.errors import NotFoundError
from app.runtime.context import CacheEnvironment
from app.services.cache.factory import create_cache_service, create_image_cache_service
from app.services.github import GitHubClient, fetch_github_projects

logger = logging.getLogger(__name__)

REFRESH_FAILED_MESSAGE = "Failed to refresh projects"


async def get_projects(
    env: Optional[CacheEnvironment] = None,
    client: Optional[GitHubClient] = None,
) -> List[Project]:
    try:
        cache_service = create_cache_service(env)
        image_cache_service = create_image_cache_service(env)

        cached_projects = await cache_service.get_cached_projects()
        if cached_projects is not None:
            return cached_projects

        # Miss: the fetch layer writes both caches on the way out
        return await fetch_github_projects(cache_service, image_cache_service, client=client)
    except Exception:
        logger.exception("Error with cache service, falling back to direct fetch")

    try:
        return await fetch_github_projects(None, create_image_cache_service(env), client=client)
    except Exception:
        logger.exception("Direct fetch of GitHub projects failed, serving an empty list")
        return []


async def refresh_projects(
    env: Optional[CacheEnvironment] = None,
    client: Optional[GitHubClient] = None,
) -> RefreshResult:
    try:
        cache_service = create_cache_service(env)
        image_cache_service = create_image_cache_service(env)

        await cache_service.clear_cache()
        await image_cache_service.clear_all_screenshots()

        projects = await fetch_github_projects(cache_service, image_cache_service, client=client)
        return {
            "success": True,
            "message": f"Successfully refreshed {len(projects)} projects",
        }
    except Exception:
        logger.exception("Error refreshing projects")
        return {"success": False, "message": REFRESH_FAILED_MESSAGE}


async def find_project(
    name: str,
    env: Optional[CacheEnvironment] = None,
    client: Optional[GitHubClient] = None,
) -> Project:
    """Look a project up by repository name."""
    for project in await get_projects(env, client=client):
        if project.name == name:
            return project
    raise NotFoundError(f"Project not found: {name}")
