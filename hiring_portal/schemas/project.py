"""
Pydantic schemas for project submissions and saved projects.

Wire names are camelCase (fullName, projectTitle, githubLink, ...) to match
the existing web client; Python code uses the snake_case field names.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hiring_portal.schemas.user import UserView
from hiring_portal.utils.validators import optional_text, require_text, validate_email


class ProjectSubmitRequest(BaseModel):
    """Project submission. Everything but the repository link is required."""

    model_config = ConfigDict(populate_by_name=True)

    full_name: str = Field(..., alias="fullName", max_length=200)
    email: str = Field(..., max_length=255)
    industry_role: str = Field(..., alias="industryRole", max_length=200)
    title: str = Field(..., alias="projectTitle", max_length=300)
    description: str = Field(..., alias="projectDescription")
    project_link: str = Field(..., alias="projectLink", max_length=1000)
    repository_link: Optional[str] = Field(None, alias="githubLink", max_length=1000)

    @field_validator("full_name", "industry_role", "title", "description", "project_link")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return require_text(v)

    @field_validator("email")
    @classmethod
    def check_email(cls, v: str) -> str:
        require_text(v)
        if not validate_email(v):
            raise ValueError("invalid email address")
        return v

    @field_validator("repository_link")
    @classmethod
    def blank_link_is_missing(cls, v: Optional[str]) -> Optional[str]:
        return optional_text(v)


class ProjectResponse(BaseModel):
    """A project as stored; `submittedBy` is the submitter's user id."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    full_name: str = Field(..., alias="fullName")
    email: str
    industry_role: str = Field(..., alias="industryRole")
    title: str = Field(..., alias="projectTitle")
    description: str = Field(..., alias="projectDescription")
    project_link: str = Field(..., alias="projectLink")
    repository_link: Optional[str] = Field(None, alias="githubLink")
    submission_date: datetime = Field(..., alias="submissionDate")
    is_new: bool = Field(..., alias="isNew")
    submitted_by: str = Field(..., alias="submittedBy")


class ProjectWithSubmitterResponse(ProjectResponse):
    """A project with `submittedBy` hydrated into the submitter's user view."""

    submitted_by: Optional[UserView] = Field(None, alias="submittedBy")


class SubmitProjectResponse(BaseModel):
    message: str
    project: ProjectResponse


class SaveProjectRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    project_id: str = Field(..., alias="projectId", min_length=1)


class MessageResponse(BaseModel):
    message: str
