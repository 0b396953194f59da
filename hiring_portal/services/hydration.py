"""
Hydration: stored references -> presentation views.

Stored entities only ever hold ids; these helpers resolve them against the
repository at the boundary and never write the hydrated form back.
"""

from typing import Optional

from hiring_portal.models import Message, Project, User
from hiring_portal.schemas.analytics import ScoredProjectResponse
from hiring_portal.schemas.message import MessageView
from hiring_portal.schemas.project import ProjectResponse, ProjectWithSubmitterResponse
from hiring_portal.schemas.user import UserView
from hiring_portal.services.repository import Repository


def user_view(user: Optional[User]) -> Optional[UserView]:
    if user is None:
        return None
    return UserView(id=user.id, email=user.email, role=user.role)


def _project_fields(project: Project) -> dict:
    return dict(
        id=project.id,
        full_name=project.full_name,
        email=project.email,
        industry_role=project.industry_role,
        title=project.title,
        description=project.description,
        project_link=project.project_link,
        repository_link=project.repository_link,
        submission_date=project.submission_date,
        is_new=project.is_new,
    )


def project_response(project: Project) -> ProjectResponse:
    return ProjectResponse(submitted_by=project.submitted_by, **_project_fields(project))


def scored_project_response(project: Project, score: float) -> ScoredProjectResponse:
    return ScoredProjectResponse(submitted_by=project.submitted_by, score=score, **_project_fields(project))


def hydrate_project(repository: Repository, project: Project) -> ProjectWithSubmitterResponse:
    submitter = repository.find_user(id=project.submitted_by)
    return ProjectWithSubmitterResponse(submitted_by=user_view(submitter), **_project_fields(project))


def hydrate_message(repository: Repository, message: Message, sender: User = None) -> MessageView:
    if sender is None:
        sender = repository.find_user(id=message.sender_id)
    return MessageView(
        id=message.id,
        project_id=message.project_id,
        sender=user_view(sender),
        body=message.body,
        timestamp=message.timestamp,
    )
