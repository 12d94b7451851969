"""Domain error hierarchy for clean exception handling."""
from __future__ import annotations


class DomainError(Exception):
    """Base for all domain errors."""


class NotFoundError(DomainError):
    """Resource not found."""


class GitHubAPIError(DomainError):
    """The repository listing could not be fetched from GitHub."""

