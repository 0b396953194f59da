"""
SQLAlchemy-backed repository.

Same contract as InMemoryRepository; rows are converted to the domain
dataclasses on the way out so callers never hold a live ORM object.
"""

import threading
from datetime import datetime, timezone
from typing import Optional

import structlog
from sqlalchemy import func, select
from sqlalchemy.engine import Engine

from hiring_portal.core.exceptions import EmailAlreadyExists, InvalidReference
from hiring_portal.db.session import build_engine, build_session_factory, init_db, session_scope
from hiring_portal.db.tables import MessageRow, ProjectRow, SavedProjectRow, UserRow
from hiring_portal.models import Message, Project, SavedProject, User
from hiring_portal.services.repository import Repository, generate_id, next_timestamp, utcnow

logger = structlog.get_logger(__name__)


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite drops tzinfo; everything is stored as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _user(row: UserRow) -> User:
    return User(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        role=row.role,
        created_at=_aware(row.created_at),
    )


def _project(row: ProjectRow) -> Project:
    return Project(
        id=row.id,
        full_name=row.full_name,
        email=row.email,
        industry_role=row.industry_role,
        title=row.title,
        description=row.description,
        project_link=row.project_link,
        repository_link=row.repository_link,
        submission_date=_aware(row.submission_date),
        submitted_by=row.submitted_by,
        is_new=row.is_new,
    )


def _saved(row: SavedProjectRow) -> SavedProject:
    return SavedProject(
        id=row.id,
        project_id=row.project_id,
        manager_id=row.manager_id,
        saved_at=_aware(row.created_at),
    )


def _message(row: MessageRow) -> Message:
    return Message(
        id=row.id,
        project_id=row.project_id,
        sender_id=row.sender_id,
        body=row.body,
        timestamp=_aware(row.timestamp),
    )


class SQLRepository(Repository):
    """Repository over a synchronous SQLAlchemy engine."""

    def __init__(self, database_url: str = None, engine: Engine = None):
        self.engine = engine or build_engine(database_url)
        self._session_factory = build_session_factory(self.engine)
        self._lock = threading.RLock()
        init_db(self.engine)
        logger.info("sql_repository_ready", url=str(self.engine.url))

    def _session(self):
        return session_scope(self._session_factory)

    def create_user(self, email, password_hash, role, user_id=None):
        with self._lock, self._session() as db:
            existing = db.execute(select(UserRow).where(UserRow.email == email)).scalar_one_or_none()
            if existing is not None:
                raise EmailAlreadyExists()
            row = UserRow(id=user_id or generate_id(), email=email, password_hash=password_hash, role=role)
            db.add(row)
            db.flush()
            return _user(row)

    def find_user(self, **criteria):
        with self._lock, self._session() as db:
            query = select(UserRow).order_by(UserRow.pk)
            for key, value in criteria.items():
                column = getattr(UserRow, key, None)
                if column is None:
                    return None
                query = query.where(column == value)
            row = db.execute(query.limit(1)).scalar_one_or_none()
            return _user(row) if row else None

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
        with self._lock, self._session() as db:
            owner = db.execute(select(UserRow.pk).where(UserRow.id == submitted_by)).first()
            if owner is None:
                raise InvalidReference(f"User {submitted_by} does not exist")
            row = ProjectRow(
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
                is_new=True,
            )
            db.add(row)
            db.flush()
            return _project(row)

    def _project_row(self, db, project_id) -> Optional[ProjectRow]:
        return db.execute(select(ProjectRow).where(ProjectRow.id == project_id)).scalar_one_or_none()

    def find_project_by_id(self, project_id):
        with self._lock, self._session() as db:
            row = self._project_row(db, project_id)
            return _project(row) if row else None

    def list_projects(self):
        with self._lock, self._session() as db:
            rows = db.execute(select(ProjectRow).order_by(ProjectRow.pk)).scalars().all()
            return [_project(r) for r in rows]

    def list_projects_by_email(self, email):
        with self._lock, self._session() as db:
            rows = db.execute(
                select(ProjectRow).where(ProjectRow.email == email).order_by(ProjectRow.pk)
            ).scalars().all()
            return [_project(r) for r in rows]

    def mark_project_seen(self, project_id):
        with self._lock, self._session() as db:
            row = self._project_row(db, project_id)
            if row is None:
                return None
            row.is_new = False
            db.flush()
            return _project(row)

    def create_saved_link(self, project_id, manager_id):
        with self._lock, self._session() as db:
            if self._project_row(db, project_id) is None:
                raise InvalidReference(f"Project {project_id} does not exist")
            row = SavedProjectRow(id=generate_id(), project_id=project_id, manager_id=manager_id)
            db.add(row)
            db.flush()
            return _saved(row)

    def list_saved_links_for_manager(self, manager_id):
        with self._lock, self._session() as db:
            rows = db.execute(
                select(SavedProjectRow)
                .where(SavedProjectRow.manager_id == manager_id)
                .order_by(SavedProjectRow.pk)
            ).scalars().all()
            return [_saved(r) for r in rows]

    def create_message(self, project_id, sender_id, body):
        with self._lock, self._session() as db:
            if self._project_row(db, project_id) is None:
                raise InvalidReference(f"Project {project_id} does not exist")
            last = db.execute(
                select(func.max(MessageRow.timestamp)).where(MessageRow.project_id == project_id)
            ).scalar()
            row = MessageRow(
                id=generate_id(),
                project_id=project_id,
                sender_id=sender_id,
                body=body,
                timestamp=next_timestamp(_aware(last)),
            )
            db.add(row)
            db.flush()
            return _message(row)

    def list_messages_for_project(self, project_id):
        with self._lock, self._session() as db:
            rows = db.execute(
                select(MessageRow)
                .where(MessageRow.project_id == project_id)
                .order_by(MessageRow.timestamp, MessageRow.pk)
            ).scalars().all()
            return [_message(r) for r in rows]

    def stats(self):
        with self._lock, self._session() as db:
            return {
                "users": db.execute(select(func.count(UserRow.pk))).scalar(),
                "projects": db.execute(select(func.count(ProjectRow.pk))).scalar(),
                "saved_projects": db.execute(select(func.count(SavedProjectRow.pk))).scalar(),
                "messages": db.execute(select(func.count(MessageRow.pk))).scalar(),
            }
