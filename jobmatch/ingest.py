"""
Bulk import of job postings with deduplication.

Each row is validated, hashed and checked against the store before insert.
Row failures are collected into the result instead of aborting the batch.
"""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from .config import Settings
from .database import Job, get_session, init_database, to_naive_utc, utcnow
from .dedup import content_hash, find_duplicate
from .logger import get_logger
from .models import JobContent, LocationType, parse_datetime
from .schema import validate_import
from .storage import active_jobs_for_company, find_by_hash, job_content

logger = get_logger()


@dataclass
class ImportResult:
    total: int = 0
    inserted: int = 0
    deduplicated: int = 0
    errors: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "inserted": self.inserted,
            "deduplicated": self.deduplicated,
            "errors": self.errors,
        }


def _build_job(row: Dict[str, Any], digest: str, now: datetime) -> Job:
    posted_at = parse_datetime(row.get("posted_at"))
    expires_at = parse_datetime(row.get("expires_at"))
    return Job(
        title=row["title"],
        company=row["company_name"],
        description=row["description"],
        skills=list(row.get("skills") or []),
        location=row.get("location"),
        location_type=LocationType.parse(row.get("location_type")).value,
        content_hash=digest,
        source=row.get("source"),
        source_url=row.get("source_url"),
        is_active=True,
        posted_at=to_naive_utc(posted_at) if posted_at else now,
        expires_at=to_naive_utc(expires_at) if expires_at else None,
    )


def bulk_import(
    rows: Iterable[Dict[str, Any]],
    db_path: Path,
    fuzzy: bool = False,
    settings: Optional[Settings] = None,
    now: Optional[datetime] = None,
) -> ImportResult:
    """
    Import postings into the job store, skipping duplicates.

    Args:
        rows: Import rows (title, company_name, description, ...)
        db_path: Path to SQLite database file
        fuzzy: Also skip rows that fuzzy match an active job of the same company
        settings: Threshold and description prefix (default: built-in defaults)
        now: Timestamp used for rows without posted_at (default: current UTC)

    Returns:
        ImportResult with per-row error messages ("Row N: ...")
    """
    settings = settings or Settings()
    now = to_naive_utc(now) if now else utcnow()
    rows = list(rows)
    result = ImportResult(total=len(rows))

    init_database(db_path)
    session = get_session(db_path)
    try:
        for index, row in enumerate(rows, start=1):
            logger.record_row()
            errors = validate_import(row)
            if errors:
                logger.record_failure("ValidationError")
                result.errors.append(f"Row {index}: {'; '.join(errors)}")
                continue

            content = JobContent(
                title=row["title"],
                company=row["company_name"],
                description=row["description"],
            )
            digest = content_hash(content, settings.description_prefix)

            if find_by_hash(session, digest) is not None:
                logger.record_duplicate()
                logger.debug("Skipping duplicate (hash)", row=index, content_hash=digest)
                result.deduplicated += 1
                continue

            if fuzzy:
                existing = [job_content(j) for j in active_jobs_for_company(session, content.company)]
                match = find_duplicate(
                    content,
                    existing,
                    settings.fuzzy_threshold,
                    settings.description_prefix,
                )
                if match is not None:
                    logger.record_duplicate(fuzzy=True)
                    logger.debug(
                        "Skipping duplicate (fuzzy title)",
                        row=index,
                        title=content.title,
                        existing_title=match.title,
                    )
                    result.deduplicated += 1
                    continue

            try:
                session.add(_build_job(row, digest, now))
                session.commit()
            except IntegrityError:
                # Another writer stored the same hash first
                session.rollback()
                logger.record_duplicate()
                result.deduplicated += 1
                continue
            except (SQLAlchemyError, ValueError) as e:
                session.rollback()
                logger.record_failure(type(e).__name__)
                logger.error("Failed to insert row", row=index, error=str(e))
                result.errors.append(f"Row {index}: {e}")
                continue

            logger.record_insert()
            result.inserted += 1
    finally:
        session.close()

    logger.info(
        f"Import complete: {result.inserted} inserted, {result.deduplicated} deduplicated",
        total=result.total,
        errors=len(result.errors),
    )
    return result
