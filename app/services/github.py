"""
GitHub fetch layer.

Lists the owner's public repositories, maps them to `Project` entities, enriches
the most recent ones with screenshot URLs (through the screenshot cache) and
writes the finished collection back through the project cache.

Only the repository listing is allowed to fail loudly; screenshot lookups and
embeddability probes degrade to "nothing found".
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import httpx

from app.config import settings
from app.domain.entities import NO_DESCRIPTION, GitHubRepoPayload, Project
from app.domain.errors import GitHubAPIError
from app.services.cache.factory import CacheService, ImageCacheService
from app.services.youtube import is_youtube_url

logger = logging.getLogger(__name__)

GITHUB_API_VERSION = "2022-11-28"
SCREENSHOT_PATHS = (
    "docs/screenshot.png",
    "public/screenshot.png",
)
FETCH_FAILED_MESSAGE = "Failed to fetch projects from GitHub"

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


def _parse_github_datetime(value: Optional[str]) -> datetime:
    if not value:
        return _EPOCH
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def repo_to_project(repo: GitHubRepoPayload) -> Project:
    """Translate one GitHub repository payload into a `Project`."""
    homepage = repo.get("homepage") or None
    youtube_url = None
    if is_youtube_url(homepage):
        youtube_url, homepage = homepage, None

    return Project(
        id=str(repo["id"]),
        name=repo["name"],
        full_name=repo["full_name"],
        description=repo.get("description") or NO_DESCRIPTION,
        homepage_url=homepage,
        youtube_url=youtube_url,
        html_url=repo["html_url"],
        topics=list(repo.get("topics") or []),
        language=repo.get("language") or None,
        stargazers_count=repo.get("stargazers_count") or 0,
        forks_count=repo.get("forks_count") or 0,
        updated_at=repo["updated_at"],
        created_at=repo["created_at"],
    )


def build_projects(repos: List[GitHubRepoPayload]) -> List[Project]:
    """Drop private repositories, order by last update and flag the newest one."""
    projects = [repo_to_project(repo) for repo in repos if not repo.get("private")]
    projects.sort(key=lambda project: _parse_github_datetime(project.updated_at), reverse=True)
    if projects:
        projects[0] = projects[0].model_copy(update={"is_currently_working": True})
    return projects


class GitHubClient:
    """Async client for the parts of the GitHub REST API the site needs.

    A transport can be injected so tests run against `httpx.MockTransport`.
    """

    def __init__(
        self,
        username: str,
        token: Optional[str] = None,
        api_base: str = "https://api.github.com",
        user_agent: str = "tre-website",
        screenshot_limit: int = 3,
        request_delay: float = 0.1,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.username = username
        # Trim invisible whitespace pasted into .env files
        self._token = token.strip() if token and token.strip() else None
        self.api_base = api_base.rstrip("/")
        self.user_agent = user_agent
        self.screenshot_limit = screenshot_limit
        self.request_delay = request_delay
        self._transport = transport

    @classmethod
    def from_settings(cls, transport: Optional[httpx.AsyncBaseTransport] = None) -> "GitHubClient":
        return cls(
            username=settings.GITHUB_USERNAME,
            token=settings.GITHUB_TOKEN,
            api_base=settings.GITHUB_API_BASE,
            user_agent=settings.GITHUB_USER_AGENT,
            screenshot_limit=settings.SCREENSHOT_PROJECT_LIMIT,
            request_delay=settings.SCREENSHOT_REQUEST_DELAY,
            transport=transport,
        )

    # --------------- Internal helpers ---------------
    def _base_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": GITHUB_API_VERSION,
            "User-Agent": self.user_agent,
        }

    def _auth_headers(self, scheme: str = "token") -> Dict[str, str]:
        headers = self._base_headers()
        if self._token:
            headers["Authorization"] = f"{scheme} {self._token}"
        return headers

    def _http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.api_base, transport=self._transport)

    async def _list_repos(self, http: httpx.AsyncClient) -> httpx.Response:
        path = f"/users/{self.username}/repos"
        params = {"sort": "updated", "per_page": 100}

        response = await http.get(path, params=params, headers=self._auth_headers())
        if response.status_code != 401 or not self._token:
            return response

        # Some environments only accept the Bearer scheme
        bearer_response = None
        try:
            bearer_response = await http.get(path, params=params, headers=self._auth_headers("Bearer"))
        except httpx.RequestError:
            pass
        if bearer_response is not None and bearer_response.is_success:
            return bearer_response

        logger.error(
            "GitHub API returned 401 with provided token. Falling back to unauthenticated request. "
            "Ensure GITHUB_TOKEN is valid/authorized."
        )
        return await http.get(path, params=params, headers=self._base_headers())

    async def _fetch_screenshots(self, http: httpx.AsyncClient, project_name: str) -> List[str]:
        urls: List[str] = []
        for path in SCREENSHOT_PATHS:
            try:
                response = await http.get(
                    f"/repos/{self.username}/{project_name}/contents/{path}",
                    headers=self._auth_headers(),
                )
                if not response.is_success:
                    continue
                content = response.json()
            except (httpx.HTTPError, ValueError):
                continue
            if isinstance(content, dict) and content.get("download_url"):
                urls.append(content["download_url"])
        return urls

    async def _screenshots_for(
        self,
        http: httpx.AsyncClient,
        project_name: str,
        image_cache_service: Optional[ImageCacheService],
    ) -> List[str]:
        if image_cache_service is not None:
            cached = await image_cache_service.get_cached_screenshots(project_name)
            if cached is not None:
                return cached

        urls = await self._fetch_screenshots(http, project_name)
        if image_cache_service is not None:
            await image_cache_service.set_cached_screenshots(project_name, urls)
        return urls

    async def _attach_screenshots(
        self,
        http: httpx.AsyncClient,
        projects: List[Project],
        image_cache_service: Optional[ImageCacheService],
    ) -> List[Project]:
        enriched = list(projects)
        # Sequential on purpose: stay well inside the unauthenticated rate limit
        targets = enriched[: max(self.screenshot_limit, 0)]
        for index, project in enumerate(targets):
            try:
                urls = await self._screenshots_for(http, project.name, image_cache_service)
                if urls:
                    enriched[index] = project.model_copy(update={"screenshot_url": urls[0]})
            except Exception as e:
                logger.warning(f"Could not fetch screenshot for {project.name}: {e}")
            if self.request_delay and index < len(targets) - 1:
                await asyncio.sleep(self.request_delay)
        return enriched

    # --------------- Public API ---------------
    async def fetch_projects(
        self,
        cache_service: Optional[CacheService] = None,
        image_cache_service: Optional[ImageCacheService] = None,
    ) -> List[Project]:
        """
        Fetch, transform and cache the owner's public repositories.

        Args:
            cache_service: Project cache to populate with the result, if any
            image_cache_service: Screenshot cache consulted before hitting GitHub

        Returns:
            Projects ordered by last update, newest first

        Raises:
            GitHubAPIError: The repository listing failed or was unreadable
        """
        async with self._http() as http:
            try:
                response = await self._list_repos(http)
            except httpx.RequestError as e:
                logger.error(f"Error fetching GitHub projects: {e}")
                raise GitHubAPIError(FETCH_FAILED_MESSAGE) from e

            if not response.is_success:
                if response.status_code == 403:
                    logger.warning("GitHub API rate limit reached. Consider setting GITHUB_TOKEN.")
                raise GitHubAPIError(f"GitHub API error: {response.status_code} {response.reason_phrase}")

            try:
                repos: Any = response.json()
                if not isinstance(repos, list):
                    raise ValueError("Expected a list of repositories")
                projects = build_projects(repos)
            except (ValueError, TypeError, KeyError) as e:
                logger.error(f"Error parsing GitHub projects: {e}")
                raise GitHubAPIError(FETCH_FAILED_MESSAGE) from e

            projects = await self._attach_screenshots(http, projects, image_cache_service)

        if cache_service is not None:
            await cache_service.set_cached_projects(projects)
        return projects

    async def fetch_project_screenshots(self, project_name: str) -> List[str]:
        """Return the download URLs of the known screenshot paths that exist."""
        async with self._http() as http:
            return await self._fetch_screenshots(http, project_name)

    async def check_iframe_embeddable(self, url: str) -> bool:
        """Probe a homepage's framing headers; unreachable or malformed sites count as not embeddable."""
        try:
            async with httpx.AsyncClient(transport=self._transport, follow_redirects=True) as http:
                response = await http.head(url)
        # Homepages are free text; httpx.InvalidURL is not an HTTPError
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Error checking iframe embeddability for {url}: {e}")
            return False

        x_frame_options = response.headers.get("x-frame-options", "").strip().upper()
        if x_frame_options in ("DENY", "SAMEORIGIN"):
            return False

        content_security_policy = response.headers.get("content-security-policy")
        if content_security_policy and "frame-ancestors 'none'" in content_security_policy:
            return False

        return True


async def fetch_github_projects(
    cache_service: Optional[CacheService] = None,
    image_cache_service: Optional[ImageCacheService] = None,
    client: Optional[GitHubClient] = None,
) -> List[Project]:
    client = client or GitHubClient.from_settings()
    return await client.fetch_projects(cache_service, image_cache_service)
