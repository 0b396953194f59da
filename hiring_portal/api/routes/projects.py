"""
Projects API
Candidates submit projects; managers browse them
"""

from typing import List

from fastapi import APIRouter, Depends, status

from hiring_portal.api.deps import get_repository, require_permission
from hiring_portal.core.security import Identity, Permission
from hiring_portal.schemas.project import (
    ProjectSubmitRequest,
    ProjectWithSubmitterResponse,
    SubmitProjectResponse,
)
from hiring_portal.services import project_service
from hiring_portal.services.hydration import project_response
from hiring_portal.services.repository import Repository

router = APIRouter()


@router.post("/projects", response_model=SubmitProjectResponse, status_code=status.HTTP_201_CREATED)
async def submit_project(
    submission: ProjectSubmitRequest,
    repository: Repository = Depends(get_repository),
):
    """
    Submit a project

    **Auth**: none. A candidate account is created for an unknown email.
    """
    project = project_service.submit_project(repository, submission)
    return SubmitProjectResponse(message="Project submitted", project=project_response(project))


@router.get("/projects", response_model=List[ProjectWithSubmitterResponse])
async def list_projects(
    manager: Identity = Depends(require_permission(Permission.PROJECTS_READ)),
    repository: Repository = Depends(get_repository),
):
    """
    List every submitted project with its submitter

    **Auth**: Manager (JWT required)
    """
    return project_service.list_projects(repository, manager)
