"""Database engine and session configuration."""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from hiring_portal.config import settings
from hiring_portal.db.base import Base


def build_engine(database_url: str = None) -> Engine:
    """Create a synchronous engine; in-memory SQLite shares one connection."""
    url = database_url or settings.DATABASE_URL
    kwargs = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    return create_engine(url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        engine,
        class_=Session,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


def init_db(engine: Engine) -> None:
    """Create tables (in production, use migrations)."""
    from hiring_portal.db import tables  # noqa: F401  registers the tables

    Base.metadata.create_all(engine)


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """Transactional scope: commit on success, roll back on error."""
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
