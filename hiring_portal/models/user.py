"""User model."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class User:
    """Manager or candidate identity."""

    id: str
    email: str
    password_hash: str
    role: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __repr__(self):
        return f"<User {self.email} ({self.role})>"
