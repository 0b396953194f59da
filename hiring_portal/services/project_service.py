"""Project submission and manager bookmarks."""

from typing import List

import structlog

from hiring_portal.config import settings
from hiring_portal.core.exceptions import NotFound
from hiring_portal.core.security import Identity, Role, get_password_hash
from hiring_portal.models import Project, SavedProject
from hiring_portal.schemas.project import ProjectSubmitRequest, ProjectWithSubmitterResponse
from hiring_portal.services.hydration import hydrate_project
from hiring_portal.services.repository import Repository

logger = structlog.get_logger(__name__)


def submit_project(repository: Repository, submission: ProjectSubmitRequest) -> Project:
    """
    Store a submission, provisioning a candidate account for a new email.

    The submission has already been validated, so nothing is written unless
    every required field is present.
    """
    user = repository.find_user(email=submission.email)
    if user is None:
        user = repository.create_user(
            email=submission.email,
            password_hash=get_password_hash(settings.DEFAULT_CANDIDATE_PASSWORD),
            role=Role.CANDIDATE.value,
        )
        logger.info("candidate_provisioned", email=submission.email, user_id=user.id)

    project = repository.create_project(
        full_name=submission.full_name,
        email=submission.email,
        industry_role=submission.industry_role,
        title=submission.title,
        description=submission.description,
        project_link=submission.project_link,
        repository_link=submission.repository_link,
        submitted_by=user.id,
    )
    logger.info("project_submitted", project_id=project.id, title=project.title, full_name=project.full_name)
    return project


def list_projects(repository: Repository, manager: Identity) -> List[ProjectWithSubmitterResponse]:
    projects = [hydrate_project(repository, p) for p in repository.list_projects()]
    logger.info("projects_listed", manager=manager.email, count=len(projects))
    return projects


def save_project(repository: Repository, project_id: str, manager: Identity) -> SavedProject:
    """
    Bookmark a project for a manager and clear its "new" flag.

    Saving the same project again stores another link.
    """
    if repository.find_project_by_id(project_id) is None:
        raise NotFound("Project not found")

    link = repository.create_saved_link(project_id, manager.id)
    project = repository.mark_project_seen(project_id)
    logger.info("project_saved", project_id=project_id, title=project.title, manager=manager.email)
    return link


def list_saved_projects(repository: Repository, manager: Identity) -> List[ProjectWithSubmitterResponse]:
    saved = []
    for link in repository.list_saved_links_for_manager(manager.id):
        project = repository.find_project_by_id(link.project_id)
        if project is not None:
            saved.append(hydrate_project(repository, project))
    logger.info("saved_projects_listed", manager=manager.email, count=len(saved))
    return saved
