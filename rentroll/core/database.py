"""Database configuration and session management."""

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker
from sqlalchemy.pool import StaticPool

from rentroll.core.config import settings


def is_memory_url(url: str) -> bool:
    """Check whether a database URL points at an in-memory SQLite database."""
    return url in ("sqlite://", "sqlite:///:memory:")


def build_engine(url: str) -> Engine:
    """Create an engine for the given store profile.

    The in-memory profile shares a single connection so every session sees
    the same data for the lifetime of the process.
    """
    if is_memory_url(url):
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.startswith("sqlite"):
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(url, pool_pre_ping=True)


engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


def get_db():
    """Dependency for getting database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
