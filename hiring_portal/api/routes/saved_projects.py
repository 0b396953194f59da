"""
Saved Projects API
Managers bookmark projects; saving clears the project's "new" flag
"""

from typing import List

from fastapi import APIRouter, Depends, status

from hiring_portal.api.deps import get_repository, require_permission
from hiring_portal.core.security import Identity, Permission
from hiring_portal.schemas.project import MessageResponse, ProjectWithSubmitterResponse, SaveProjectRequest
from hiring_portal.services import project_service
from hiring_portal.services.repository import Repository

router = APIRouter()


@router.post("/saved-projects", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def save_project(
    request: SaveProjectRequest,
    manager: Identity = Depends(require_permission(Permission.PROJECTS_SAVE)),
    repository: Repository = Depends(get_repository),
):
    """
    Save/bookmark a project

    **Auth**: Manager (JWT required)

    Saving the same project twice stores two bookmarks.
    """
    project_service.save_project(repository, request.project_id, manager)
    return MessageResponse(message="Project saved")


@router.get("/saved-projects", response_model=List[ProjectWithSubmitterResponse])
async def list_saved_projects(
    manager: Identity = Depends(require_permission(Permission.SAVED_PROJECTS_READ)),
    repository: Repository = Depends(get_repository),
):
    """
    List the calling manager's saved projects

    **Auth**: Manager (JWT required)
    """
    return project_service.list_saved_projects(repository, manager)
