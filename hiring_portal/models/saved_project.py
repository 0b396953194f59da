"""Saved (bookmarked) project model."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class SavedProject:
    """
    A manager's bookmark of a project.

    The (project_id, manager_id) pair is not unique: saving twice stores two links.
    """

    id: str
    project_id: str
    manager_id: str
    saved_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<SavedProject(manager_id={self.manager_id}, project_id={self.project_id})>"
