import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse

from app.dependencies import get_github_client
from app.schemas.api_schemas import CronErrorResponse, RefreshResponse
from app.security.cron_auth import validate_cron_auth
from app.services.github import GitHubClient
from app.services.projects import refresh_projects

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get(
    "/api/cron",
    response_model=RefreshResponse,
    responses={401: {"model": CronErrorResponse}, 500: {"model": CronErrorResponse}},
)
async def run_refresh(
    authorization: Optional[str] = Header(None),
    client: GitHubClient = Depends(get_github_client)
):
    """
    Scheduled trigger: clear both caches and repopulate them from GitHub.
    Requires `Authorization: Bearer <CRON_SECRET>`.
    """
    auth_result = validate_cron_auth(authorization)
    if not auth_result.is_valid:
        return JSONResponse(
            status_code=auth_result.status,
            content={"error": auth_result.error, "details": auth_result.details},
        )

    try:
        result = await refresh_projects(client=client)
    except Exception:
        logger.exception("Error in cron job")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    return RefreshResponse(**result)
