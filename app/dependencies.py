from __future__ import annotations

from pathlib import Path
from typing import Optional

import boto3
from app.config import settings

from app.runtime.context import CacheEnvironment
from app.services.cache.kv import FileKVNamespace, InMemoryKVNamespace, KVNamespace
from app.services.cache.s3_gateway import S3KVNamespace
from app.services.github import GitHubClient


def build_kv_binding() -> Optional[KVNamespace]:
    """Create the KV binding selected by ``KV_BACKEND``; ``none`` means no binding."""
    backend = settings.KV_BACKEND.lower()

    if backend == "none":
        return None
    if backend == "memory":
        return InMemoryKVNamespace()
    if backend == "filesystem":
        return FileKVNamespace(Path(settings.KV_CACHE_DIR))
    if backend == "s3":
        if not settings.S3_BUCKET:
            raise ValueError("S3_BUCKET must be set when using the s3 KV backend")
        s3_client = boto3.client(
            's3',
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID or None,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY or None,
            region_name=settings.AWS_REGION
        )
        return S3KVNamespace(s3_client, settings.S3_BUCKET, settings.S3_PREFIX)

    raise ValueError(f"Unknown KV_BACKEND: {settings.KV_BACKEND}")


def build_environment(cron_secret: Optional[str] = None) -> CacheEnvironment:
    """Bindings the app runs every request with.

    ``cron_secret`` is for hosts (and tests) that inject the refresh secret
    directly; it takes precedence over ``settings.CRON_SECRET``. The app's own
    startup passes none, so the process environment applies.
    """
    return CacheEnvironment(github_cache=build_kv_binding(), cron_secret=cron_secret or None)


def get_github_client() -> GitHubClient:
    return GitHubClient.from_settings()
