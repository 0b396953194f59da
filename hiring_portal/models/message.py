"""Chat message model."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Message:
    """A chat message in a project room. Immutable once created."""

    id: str
    project_id: str
    sender_id: str
    body: str
    timestamp: datetime
