"""
Jobs repository.

CRUD helpers over the SQLite job store. No deduplication or scoring
decisions live here.
"""

from datetime import datetime
from pathlib import Path
from typing import List, Optional

from .database import Job, get_session, init_database, to_naive_utc, utcnow
from .models import JobContent, JobRecord, LocationType
from .normalize import normalize_company


def find_by_hash(session, content_hash: str) -> Optional[Job]:
    return session.query(Job).filter_by(content_hash=content_hash).first()


def active_jobs_for_company(session, company: str) -> List[Job]:
    """Active jobs whose normalized company name equals that of ``company``."""
    target = normalize_company(company)
    return [
        job for job in session.query(Job).filter_by(is_active=True).all()
        if normalize_company(job.company) == target
    ]


def job_content(job: Job) -> JobContent:
    return JobContent(title=job.title, company=job.company, description=job.description)


def to_record(job: Job) -> JobRecord:
    return JobRecord(
        skills=list(job.skills or []),
        location=job.location,
        location_type=LocationType.parse(job.location_type),
        posted_at=job.posted_at,
        id=job.id,
        title=job.title,
        company=job.company,
        description=job.description,
    )


def load_job_records(db_path: Path, active_only: bool = True) -> List[JobRecord]:
    """Load stored jobs as matching records, newest first."""
    if not db_path.exists():
        return []
    session = get_session(db_path)
    try:
        query = session.query(Job)
        if active_only:
            query = query.filter_by(is_active=True)
        jobs = query.order_by(Job.posted_at.desc()).all()
        return [to_record(job) for job in jobs]
    finally:
        session.close()


def count_jobs(db_path: Path, active_only: bool = False) -> int:
    if not db_path.exists():
        return 0
    session = get_session(db_path)
    try:
        query = session.query(Job)
        if active_only:
            query = query.filter_by(is_active=True)
        return query.count()
    finally:
        session.close()


def deactivate_expired(db_path: Path, now: Optional[datetime] = None) -> int:
    """
    Mark active jobs whose expires_at has passed as inactive.

    Returns:
        Number of jobs deactivated
    """
    now = to_naive_utc(now) if now else utcnow()
    init_database(db_path)
    session = get_session(db_path)
    try:
        updated = (
            session.query(Job)
            .filter(Job.is_active.is_(True))
            .filter(Job.expires_at.isnot(None))
            .filter(Job.expires_at < now)
            .update({Job.is_active: False}, synchronize_session=False)
        )
        session.commit()
        return updated
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
