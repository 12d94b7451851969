"""
Test configuration and fixtures for folio-api tests.
"""
from typing import Dict, List, Optional, Tuple

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.dependencies import get_github_client
from app.main import app
from app.runtime.context import CacheEnvironment, set_environment
from app.services.cache.kv import InMemoryKVNamespace
from app.services.github import GitHubClient

GITHUB_USERNAME = "octo"
GITHUB_API_BASE = "https://api.github.test"


class FrozenClock:
    """Callable clock returning a controllable Unix time."""

    def __init__(self, now: float = 1_700_000_000) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingKV(InMemoryKVNamespace):
    """In-memory binding that records writes and deletes."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        super().__init__(initial)
        self.puts: List[Tuple[str, str]] = []
        self.deletes: List[str] = []

    async def put(self, key: str, value: str) -> None:
        self.puts.append((key, value))
        await super().put(key, value)

    async def delete(self, key: str) -> None:
        self.deletes.append(key)
        await super().delete(key)

    def put_count(self, key: str) -> int:
        return sum(1 for written, _ in self.puts if written == key)


class BrokenKV:
    """Binding whose every call fails, like an unreachable KV service."""

    async def get(self, key: str) -> Optional[str]:
        raise ConnectionError("KV unavailable")

    async def put(self, key: str, value: str) -> None:
        raise ConnectionError("KV unavailable")

    async def delete(self, key: str) -> None:
        raise ConnectionError("KV unavailable")


def make_repo(repo_id: int, name: str, updated_at: str, **overrides) -> dict:
    repo = {
        "id": repo_id,
        "name": name,
        "full_name": f"{GITHUB_USERNAME}/{name}",
        "description": f"{name} description",
        "homepage": None,
        "html_url": f"https://github.com/{GITHUB_USERNAME}/{name}",
        "topics": ["python"],
        "language": "Python",
        "updated_at": updated_at,
        "created_at": "2022-06-01T00:00:00Z",
        "private": False,
        "stargazers_count": 1,
        "forks_count": 0,
    }
    repo.update(overrides)
    return repo


class FakeGitHub:
    """Programmable stand-in for the GitHub REST API (and probed homepages)."""

    def __init__(self) -> None:
        self.repos: object = []
        self.repos_status = 200
        self.repos_status_by_auth: Dict[Optional[str], int] = {}
        self.screenshots: Dict[Tuple[str, str], str] = {}
        self.failing_paths: set = set()
        self.head_headers: Dict[str, Dict[str, str]] = {}
        self.unreachable_hosts: set = set()
        self.requests: List[httpx.Request] = []

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def requests_to(self, suffix: str) -> List[httpx.Request]:
        return [request for request in self.requests if request.url.path.endswith(suffix)]

    @property
    def repo_list_calls(self) -> int:
        return len(self.requests_to(f"/users/{GITHUB_USERNAME}/repos"))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        if host in self.unreachable_hosts:
            raise httpx.ConnectError("unreachable", request=request)

        if request.method == "HEAD":
            return httpx.Response(200, headers=self.head_headers.get(host, {}))

        path = request.url.path
        if path == f"/users/{GITHUB_USERNAME}/repos":
            auth = request.headers.get("authorization")
            status = self.repos_status_by_auth.get(auth, self.repos_status)
            if status != 200:
                return httpx.Response(status, json={"message": "error"})
            if isinstance(self.repos, str):
                return httpx.Response(200, content=self.repos.encode("utf-8"))
            return httpx.Response(200, json=self.repos)

        prefix = f"/repos/{GITHUB_USERNAME}/"
        if path.startswith(prefix) and "/contents/" in path:
            project, content_path = path[len(prefix):].split("/contents/", 1)
            if (project, content_path) in self.failing_paths:
                raise httpx.ReadTimeout("timed out", request=request)
            url = self.screenshots.get((project, content_path))
            if url is None:
                return httpx.Response(404, json={"message": "Not Found"})
            return httpx.Response(200, json={"download_url": url})

        return httpx.Response(404, json={"message": "Not Found"})


@pytest.fixture(autouse=True)
def test_settings(monkeypatch):
    """Override settings for testing."""
    monkeypatch.setattr(settings, "CRON_SECRET", None)
    monkeypatch.setattr(settings, "KV_BACKEND", "none")
    monkeypatch.setattr(settings, "SCREENSHOT_REQUEST_DELAY", 0.0)
    yield settings


@pytest.fixture(autouse=True)
def clean_environment():
    """Make sure no test leaks an ambient environment into the next."""
    set_environment(None)
    yield
    set_environment(None)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def kv():
    return RecordingKV()


@pytest.fixture
def env(kv):
    return CacheEnvironment(github_cache=kv)


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest.fixture
def two_repos():
    """Two public repositories, A updated after B."""
    return [
        make_repo(1, "A", "2023-01-02T00:00:00Z"),
        make_repo(2, "B", "2023-01-01T00:00:00Z"),
    ]


@pytest.fixture
def github_client(fake_github):
    return GitHubClient(
        username=GITHUB_USERNAME,
        api_base=GITHUB_API_BASE,
        request_delay=0,
        transport=fake_github.transport,
    )


@pytest.fixture
def client(env, github_client):
    """Create test client wired to the in-memory KV binding and the fake GitHub."""
    app.state.environment = env
    app.dependency_overrides[get_github_client] = lambda: github_client
    yield TestClient(app)
    app.dependency_overrides.clear()
    del app.state.environment
