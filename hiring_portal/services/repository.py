"""
Repository contract and in-memory backend.

The repository is pure data access: no role checks, no hydration. Every
operation runs under one re-entrant lock so readers never observe a
half-applied write, and lookups on missing ids return None instead of raising.
Writes that would break a reference (message -> project, project -> user,
saved link -> project) raise InvalidReference and leave the store untouched.
"""

import threading
from abc import ABC, abstractmethod
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional
from uuid import uuid4

from hiring_portal.core.exceptions import EmailAlreadyExists, InvalidReference
from hiring_portal.models import Message, Project, SavedProject, User

TIMESTAMP_STEP = timedelta(microseconds=1)


def generate_id() -> str:
    return uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(last: Optional[datetime]) -> datetime:
    """Current time, nudged forward so timestamps strictly increase per room."""
    now = utcnow()
    if last is not None and now <= last:
        return last + TIMESTAMP_STEP
    return now


class Repository(ABC):
    """Storage contract shared by the hub, the analytics engine and the API."""

    # Users
    @abstractmethod
    def create_user(self, email: str, password_hash: str, role: str, user_id: str = None) -> User:
        ...

    @abstractmethod
    def find_user(self, **criteria) -> Optional[User]:
        """First user whose attributes equal every given criterion."""

    # Projects
    @abstractmethod
    def create_project(
        self,
        full_name: str,
        email: str,
        industry_role: str,
        title: str,
        description: str,
        project_link: str,
        repository_link: Optional[str],
        submitted_by: str,
        project_id: str = None,
        submission_date: datetime = None,
    ) -> Project:
        ...

    @abstractmethod
    def find_project_by_id(self, project_id: str) -> Optional[Project]:
        ...

    @abstractmethod
    def list_projects(self) -> List[Project]:
        """Snapshot copies of every project, in submission order."""

    @abstractmethod
    def list_projects_by_email(self, email: str) -> List[Project]:
        ...

    @abstractmethod
    def mark_project_seen(self, project_id: str) -> Optional[Project]:
        ...

    # Saved projects
    @abstractmethod
    def create_saved_link(self, project_id: str, manager_id: str) -> SavedProject:
        ...

    @abstractmethod
    def list_saved_links_for_manager(self, manager_id: str) -> List[SavedProject]:
        ...

    # Messages
    @abstractmethod
    def create_message(self, project_id: str, sender_id: str, body: str) -> Message:
        ...

    @abstractmethod
    def list_messages_for_project(self, project_id: str) -> List[Message]:
        ...

    def stats(self) -> Dict[str, int]:
        return {}


class InMemoryRepository(Repository):
    """Process-local store backed by plain lists."""

    def __init__(self):
        self._lock = threading.RLock()
        self._users: List[User] = []
        self._projects: List[Project] = []
        self._saved: List[SavedProject] = []
        self._messages: List[Message] = []
        self._last_message_at: Dict[str, datetime] = {}

    def create_user(self, email, password_hash, role, user_id=None):
        with self._lock:
            if self._find_user(email=email) is not None:
                raise EmailAlreadyExists()
            user = User(id=user_id or generate_id(), email=email, password_hash=password_hash, role=role)
            self._users.append(user)
            return replace(user)

    def find_user(self, **criteria):
        with self._lock:
            user = self._find_user(**criteria)
            return replace(user) if user else None

    def _find_user(self, **criteria) -> Optional[User]:
        for user in self._users:
            if all(getattr(user, key, None) == value for key, value in criteria.items()):
                return user
        return None

    def create_project(
        self,
        full_name,
        email,
        industry_role,
        title,
        description,
        project_link,
        repository_link,
        submitted_by,
        project_id=None,
        submission_date=None,
    ):
        with self._lock:
            if self._find_user(id=submitted_by) is None:
                raise InvalidReference(f"User {submitted_by} does not exist")
            project = Project(
                id=project_id or generate_id(),
                full_name=full_name,
                email=email,
                industry_role=industry_role,
                title=title,
                description=description,
                project_link=project_link,
                repository_link=repository_link,
                submission_date=submission_date or utcnow(),
                submitted_by=submitted_by,
            )
            self._projects.append(project)
            return replace(project)

    def find_project_by_id(self, project_id):
        with self._lock:
            project = self._find_project(project_id)
            return replace(project) if project else None

    def _find_project(self, project_id: str) -> Optional[Project]:
        for project in self._projects:
            if project.id == project_id:
                return project
        return None

    def list_projects(self):
        with self._lock:
            return [replace(p) for p in self._projects]

    def list_projects_by_email(self, email):
        with self._lock:
            return [replace(p) for p in self._projects if p.email == email]

    def mark_project_seen(self, project_id):
        with self._lock:
            project = self._find_project(project_id)
            if project is None:
                return None
            project.is_new = False
            return replace(project)

    def create_saved_link(self, project_id, manager_id):
        with self._lock:
            if self._find_project(project_id) is None:
                raise InvalidReference(f"Project {project_id} does not exist")
            link = SavedProject(id=generate_id(), project_id=project_id, manager_id=manager_id)
            self._saved.append(link)
            return replace(link)

    def list_saved_links_for_manager(self, manager_id):
        with self._lock:
            return [replace(s) for s in self._saved if s.manager_id == manager_id]

    def create_message(self, project_id, sender_id, body):
        with self._lock:
            if self._find_project(project_id) is None:
                raise InvalidReference(f"Project {project_id} does not exist")
            timestamp = next_timestamp(self._last_message_at.get(project_id))
            message = Message(
                id=generate_id(),
                project_id=project_id,
                sender_id=sender_id,
                body=body,
                timestamp=timestamp,
            )
            self._messages.append(message)
            self._last_message_at[project_id] = timestamp
            return message

    def list_messages_for_project(self, project_id):
        with self._lock:
            return [m for m in self._messages if m.project_id == project_id]

    def stats(self):
        with self._lock:
            return {
                "users": len(self._users),
                "projects": len(self._projects),
                "saved_projects": len(self._saved),
                "messages": len(self._messages),
            }
