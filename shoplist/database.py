"""Database configuration and session management."""

import uuid
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine, or_
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shoplist.config import get_settings

settings = get_settings()

if settings.uses_sqlite:
    engine = create_engine(settings.database_url, connect_args={"check_same_thread": False})
else:
    engine = create_engine(
        settings.database_url,
        pool_pre_ping=True,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Initialize the database by creating all tables."""
    # Import all models here so they are registered with Base.metadata
    from shoplist import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def generate_id() -> str:
    """Create a new opaque document id."""
    return uuid.uuid4().hex


def canonical_id(raw_id: str) -> str | None:
    """Return the canonical hex form of a UUID-shaped id, or None."""
    try:
        return uuid.UUID(raw_id).hex
    except (ValueError, AttributeError, TypeError):
        return None


def id_filter(column, raw_id: str):
    """Build a filter matching an id by canonical encoding, falling back to string equality."""
    canonical = canonical_id(raw_id)
    if canonical is None or canonical == raw_id:
        return column == raw_id
    return or_(column == canonical, column == raw_id)


def normalize_id(raw_id: str) -> str:
    """UUID hex for UUID-shaped ids, the raw string for anything else."""
    return canonical_id(raw_id) or raw_id


def ids_match(left: str, right: str) -> bool:
    """Compare two ids, treating different spellings of the same UUID as equal."""
    return normalize_id(left) == normalize_id(right)
