"""
Tests for database.py - SQLite database operations.
"""

import pytest
from datetime import datetime, timedelta, timezone
from sqlalchemy.exc import IntegrityError

from jobmatch.database import Job, init_database, get_session, to_naive_utc


class TestDatabaseInit:
    """Test database initialization."""

    def test_init_creates_database_file(self, tmp_path):
        """Test that init_database creates the database file."""
        db_path = tmp_path / "test.db"
        assert not db_path.exists()

        init_database(db_path)

        assert db_path.exists()

    def test_init_creates_tables(self, tmp_path):
        """Test that init_database creates the jobs table."""
        db_path = tmp_path / "test.db"
        init_database(db_path)

        session = get_session(db_path)
        assert session.query(Job).count() == 0
        session.close()

    def test_init_creates_parent_directories(self, tmp_path):
        """Test that init_database creates parent directories if missing."""
        db_path = tmp_path / "nested" / "dir" / "test.db"
        assert not db_path.parent.exists()

        init_database(db_path)

        assert db_path.exists()

    def test_init_is_idempotent(self, tmp_path):
        db_path = tmp_path / "test.db"
        init_database(db_path)
        init_database(db_path)
        assert db_path.exists()


class TestJobCRUD:
    """Test CRUD operations on Job model."""

    @pytest.fixture
    def db_session(self, tmp_path):
        """Create a temporary database and return a session."""
        db_path = tmp_path / "test.db"
        init_database(db_path)
        session = get_session(db_path)
        yield session
        session.close()

    def _job(self, content_hash="a" * 64, **overrides):
        fields = dict(
            title="Software Engineer",
            company="Acme Corp",
            description="We are looking for...",
            skills=["python", "docker"],
            location="Austin, TX",
            location_type="On-site",
            content_hash=content_hash,
        )
        fields.update(overrides)
        return Job(**fields)

    def test_create_job_with_defaults(self, db_session):
        db_session.add(self._job())
        db_session.commit()

        result = db_session.query(Job).filter_by(content_hash="a" * 64).first()
        assert result is not None
        assert len(result.id) == 36
        assert result.is_active is True
        assert result.skills == ["python", "docker"]
        assert result.created_at is not None
        assert result.posted_at is None

    def test_content_hash_is_unique(self, db_session):
        db_session.add(self._job())
        db_session.commit()

        db_session.add(self._job(title="Another title"))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_required_fields(self, db_session):
        db_session.add(Job(title="Only a title", content_hash="b" * 64))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_query_active_jobs(self, db_session):
        db_session.add(self._job(content_hash="a" * 64))
        db_session.add(self._job(content_hash="b" * 64, is_active=False))
        db_session.commit()

        assert db_session.query(Job).filter_by(is_active=True).count() == 1

    def test_timestamps_round_trip(self, db_session):
        expires = datetime(2024, 7, 1, 9, 30)
        db_session.add(self._job(expires_at=expires))
        db_session.commit()

        result = db_session.query(Job).first()
        assert result.expires_at == expires


class TestToNaiveUtc:
    def test_naive_passthrough(self):
        value = datetime(2024, 1, 1, 12)
        assert to_naive_utc(value) is value

    def test_aware_converted(self):
        value = datetime(2024, 1, 1, 12, tzinfo=timezone(timedelta(hours=2)))
        assert to_naive_utc(value) == datetime(2024, 1, 1, 10)
