"""
Health check endpoints for the API.
"""
from fastapi import APIRouter
from typing import Dict, Any
from datetime import datetime

from app.config import settings
from app.services.cache.factory import create_cache_service

router = APIRouter()

@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic health check endpoint.
    Returns API status and version information.
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT
    }

@router.get("/health/cache")
async def cache_health() -> Dict[str, Any]:
    """
    Check the project cache.
    Reports which cache variant is active and whether the cached list is fresh.
    """
    cache_service = create_cache_service()
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "kv_backend": settings.KV_BACKEND,
        "cache_backend": cache_service.backend.value,
        "projects_cache_valid": await cache_service.is_cache_valid(),
    }
