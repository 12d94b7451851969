"""Bearer-secret check for the scheduled refresh trigger."""
from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass
from typing import Optional

from app.config import settings
from app.runtime.context import CacheEnvironment, get_environment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CronAuthResult:
    is_valid: bool
    status: int
    error: Optional[str] = None
    details: Optional[str] = None


def resolve_cron_secret(env: Optional[CacheEnvironment] = None) -> Optional[str]:
    """An injected secret takes precedence over the process environment."""
    env = env if env is not None else get_environment()
    if env is not None and env.cron_secret:
        return env.cron_secret
    return settings.CRON_SECRET or None


def validate_cron_auth(authorization: Optional[str], env: Optional[CacheEnvironment] = None) -> CronAuthResult:
    cron_secret = resolve_cron_secret(env)

    if not cron_secret:
        logger.error("CRON_SECRET not configured in environment variables")
        return CronAuthResult(
            is_valid=False,
            status=500,
            error="CRON_SECRET not configured",
            details="Please add CRON_SECRET to your environment variables",
        )

    expected = f"Bearer {cron_secret}"
    if not authorization or not hmac.compare_digest(authorization.encode("utf-8"), expected.encode("utf-8")):
        logger.error("Cron job authentication failed: Authorization header does not match CRON_SECRET")
        return CronAuthResult(
            is_valid=False,
            status=401,
            error="Unauthorized",
            details="Invalid or missing Authorization header. Check CRON_SECRET configuration.",
        )

    return CronAuthResult(is_valid=True, status=200)
