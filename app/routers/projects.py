from fastapi import APIRouter, Depends, Path
from typing import List

from app.dependencies import get_github_client
from app.domain.entities import Project
from app.schemas.api_schemas import EmbeddableResponse
from app.services.github import GitHubClient
from app.services.projects import find_project, get_projects

router = APIRouter()

@router.get("/api/projects", response_model=List[Project])
async def list_projects(client: GitHubClient = Depends(get_github_client)):
    """
    Retrieve all public projects, newest first, from cache when fresh.
    """
    return await get_projects(client=client)

@router.get("/api/projects/{name}", response_model=Project)
async def get_project(
    name: str = Path(..., title="The repository name of the project"),
    client: GitHubClient = Depends(get_github_client)
):
    """
    Get a single project by repository name.
    """
    return await find_project(name, client=client)

@router.get("/api/projects/{name}/embeddable", response_model=EmbeddableResponse)
async def get_project_embeddable(
    name: str = Path(..., title="The repository name of the project"),
    client: GitHubClient = Depends(get_github_client)
):
    """
    Report whether the project's homepage allows being framed.
    """
    project = await find_project(name, client=client)
    embeddable = False
    if project.homepage_url:
        embeddable = await client.check_iframe_embeddable(project.homepage_url)
    return EmbeddableResponse(name=project.name, homepage_url=project.homepage_url, embeddable=embeddable)
