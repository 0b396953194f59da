"""Domain models."""

from hiring_portal.models.message import Message
from hiring_portal.models.project import Project
from hiring_portal.models.saved_project import SavedProject
from hiring_portal.models.user import User

__all__ = ["Message", "Project", "SavedProject", "User"]
