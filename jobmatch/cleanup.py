"""
Cleanup module for retiring expired job postings.

Expired jobs (expires_at in the past) are flagged inactive rather than
deleted, so their content hashes keep blocking re-imports of the same posting.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from .storage import count_jobs, deactivate_expired
from .logger import get_logger

logger = get_logger()


def deactivate_expired_jobs(db_path: Path, now: Optional[datetime] = None) -> int:
    """
    Flag active job postings whose expiry date has passed as inactive.

    Args:
        db_path: Path to SQLite database file
        now: Reference time (default: current UTC time)

    Returns:
        Number of jobs deactivated

    Raises:
        SQLAlchemyError: If the store cannot be updated
    """
    try:
        deactivated = deactivate_expired(db_path, now=now)
    except SQLAlchemyError as e:
        logger.error(f"Cleanup failed: {e}", error=str(e), db_path=str(db_path))
        raise

    logger.info(
        f"Cleanup complete: {deactivated} deactivated",
        jobs_deactivated=deactivated,
        jobs_active=count_jobs(db_path, active_only=True),
    )
    return deactivated
