"""SQL tables backing SQLRepository."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, String, Text

from hiring_portal.db.base import Base


class UserRow(Base):
    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)


class ProjectRow(Base):
    __tablename__ = "projects"

    full_name = Column(String(200), nullable=False)
    email = Column(String(255), index=True, nullable=False)
    industry_role = Column(String(200), nullable=False)
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=False)
    project_link = Column(String(1000), nullable=False)
    repository_link = Column(String(1000), nullable=True)
    submission_date = Column(DateTime(timezone=True), nullable=False)
    is_new = Column(Boolean, default=True, nullable=False)
    submitted_by = Column(String(64), ForeignKey("users.id"), nullable=False)


class SavedProjectRow(Base):
    __tablename__ = "saved_projects"

    project_id = Column(String(64), ForeignKey("projects.id"), nullable=False)
    manager_id = Column(String(64), nullable=False)

    # No unique constraint on (manager_id, project_id): duplicate saves are kept
    __table_args__ = (Index("idx_saved_projects_manager", "manager_id"),)


class MessageRow(Base):
    __tablename__ = "messages"

    project_id = Column(String(64), ForeignKey("projects.id"), nullable=False)
    sender_id = Column(String(64), nullable=False)
    body = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (Index("idx_messages_project_timestamp", "project_id", "timestamp"),)
