"""
Pytest configuration and shared fixtures.
"""

import pytest
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List

from jobmatch.models import JobRecord, LocationType, ProfileRecord

NOW = datetime(2024, 6, 30, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def fixed_now() -> datetime:
    """Reference 'current time' for recency calculations."""
    return NOW


@pytest.fixture
def import_row() -> Dict[str, Any]:
    """Valid bulk import row."""
    return {
        "title": "Software Engineer",
        "company_name": "Acme Corp",
        "description": "We are looking for a talented software engineer to join our platform team.",
        "skills": ["python", "docker"],
        "location": "Austin, TX",
        "location_type": "On-site",
        "source": "greenhouse",
        "source_url": "https://boards.greenhouse.io/acme/jobs/12345",
    }


@pytest.fixture
def import_rows(import_row) -> List[Dict[str, Any]]:
    """Two distinct postings from different companies."""
    second = {
        "title": "Product Manager",
        "company_name": "Beta Labs",
        "description": "Join our product team and own the roadmap.",
        "skills": ["agile", "scrum"],
        "location": "Remote",
        "location_type": "Remote",
    }
    return [import_row, second]


@pytest.fixture
def austin_profile() -> ProfileRecord:
    return ProfileRecord(
        id="p1",
        username="dev-austin",
        bio="Experienced in Python and Kubernetes, based in Austin",
        location="Austin",
    )


@pytest.fixture
def austin_job() -> JobRecord:
    return JobRecord(
        id="j1",
        title="Backend Engineer",
        company="Acme Corp",
        skills=["python", "docker"],
        location="Austin, TX",
        location_type=LocationType.ON_SITE,
    )


@pytest.fixture
def db_path(tmp_path) -> Path:
    return tmp_path / "jobs.db"


@pytest.fixture
def write_json(tmp_path):
    """Write data to a JSON file under tmp_path and return its path."""
    def _write(name: str, data: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path
    return _write
