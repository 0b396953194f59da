"""Project submission model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Project:
    """
    A candidate's project submission.

    `is_new` is the "unseen" flag: true until a manager saves the project.
    `email` is the submitter's email and groups projects per candidate.
    """

    id: str
    full_name: str
    email: str
    industry_role: str
    title: str
    description: str
    project_link: str
    repository_link: Optional[str]
    submission_date: datetime
    submitted_by: str
    is_new: bool = True

    def __repr__(self):
        return f"<Project {self.id} '{self.title}' by {self.email}>"
