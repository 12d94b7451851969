"""Cache service component package."""
from .cache_policy import CachePolicy
from .factory import (
    CacheService,
    ImageCacheService,
    create_cache_service,
    create_image_cache_service,
)
from .fallback import NullProjectCacheStore, NullScreenshotCacheStore
from .kv import CacheBackend, FileKVNamespace, InMemoryKVNamespace, KVNamespace
from .project_cache import ProjectCacheStore
from .s3_gateway import S3KVNamespace
from .screenshot_cache import ScreenshotCacheStore

__all__ = [
    "CacheBackend",
    "CachePolicy",
    "CacheService",
    "ImageCacheService",
    "KVNamespace",
    "InMemoryKVNamespace",
    "FileKVNamespace",
    "S3KVNamespace",
    "ProjectCacheStore",
    "ScreenshotCacheStore",
    "NullProjectCacheStore",
    "NullScreenshotCacheStore",
    "create_cache_service",
    "create_image_cache_service",
]
