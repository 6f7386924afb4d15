"""
Database schema and connection management.

Uses SQLite with SQLAlchemy as a local job store for the import pipeline.
"""

import uuid
from datetime import datetime, timezone
from pathlib import Path
from sqlalchemy import create_engine, Boolean, Column, DateTime, JSON, String, Text
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def _new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Naive UTC timestamp; SQLite columns hold naive UTC datetimes."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class Job(Base):
    """Job posting model."""

    __tablename__ = "jobs"

    id = Column(String, primary_key=True, default=_new_id)
    title = Column(String, nullable=False)
    company = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    skills = Column(JSON, nullable=False, default=list)
    location = Column(String, nullable=True)
    location_type = Column(String, nullable=False, default="Remote")  # Remote, Hybrid, On-site
    content_hash = Column(String(64), nullable=False, unique=True, index=True)
    source = Column(String, nullable=True)
    source_url = Column(String, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    posted_at = Column(DateTime, nullable=True)
    expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)
    engine.dispose()


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
