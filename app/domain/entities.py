"""Internal domain entities.

`Project` is a pydantic model because it round-trips through the KV cache as
JSON; the raw shapes exchanged with GitHub and the cache are TypedDicts.
"""
from __future__ import annotations

from typing import List, Optional, TypedDict

from pydantic import BaseModel, Field, TypeAdapter

NO_DESCRIPTION = "No description available"


class Project(BaseModel):
    id: str = Field(..., description="GitHub repository id, as a string")
    name: str
    full_name: str
    description: str = NO_DESCRIPTION
    homepage_url: Optional[str] = None
    youtube_url: Optional[str] = None
    html_url: str
    topics: List[str] = Field(default_factory=list)
    language: Optional[str] = None
    stargazers_count: int = 0
    forks_count: int = 0
    updated_at: str
    created_at: str
    screenshot_url: Optional[str] = None
    is_currently_working: bool = False


ProjectList = TypeAdapter(List[Project])


class GitHubRepoPayload(TypedDict, total=False):
    id: int
    name: str
    full_name: str
    description: Optional[str]
    homepage: Optional[str]
    html_url: str
    topics: List[str]
    language: Optional[str]
    updated_at: str
    created_at: str
    private: bool
    stargazers_count: int
    forks_count: int


class ScreenshotEntry(TypedDict):
    urls: List[str]
    timestamp: int


class RefreshResult(TypedDict):
    success: bool
    message: str
