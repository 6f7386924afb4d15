from typing import Any, Dict, List
from urllib.parse import urlparse

from .models import LocationType, parse_datetime

REQUIRED_STR_FIELDS = ["title", "company_name", "description"]
OPTIONAL_STR_FIELDS = [
    "location",
    "location_type",
    "source",
    "source_url",
    "apply_url",
    "posted_at",
    "expires_at",
]
URL_FIELDS = ["source_url", "apply_url"]
DATE_FIELDS = ["posted_at", "expires_at"]


def _is_non_empty_str(v: Any) -> bool:
    return isinstance(v, str) and v.strip() != ""


def _valid_url(v: str) -> bool:
    p = urlparse(v)
    return bool(p.scheme and p.netloc)


def validate_import(data: Dict[str, Any]) -> List[str]:
    """
    Returns a list of validation error messages for one import row.
    Empty list means valid.
    """
    if not isinstance(data, dict):
        return ["Row must be a JSON object"]

    errors: List[str] = []

    # Required string fields
    for f in REQUIRED_STR_FIELDS:
        if f not in data:
            errors.append(f"Missing required field: {f}")
        elif not _is_non_empty_str(data[f]):
            errors.append(f"Field '{f}' must be a non-empty string")

    # Optional strings: if present, must be strings
    for f in OPTIONAL_STR_FIELDS:
        if data.get(f) is not None and not isinstance(data[f], str):
            errors.append(f"Field '{f}' must be a string if provided")

    skills = data.get("skills")
    if skills is not None:
        if not isinstance(skills, list) or not all(isinstance(s, str) for s in skills):
            errors.append("Field 'skills' must be a list of strings")

    location_type = data.get("location_type")
    if _is_non_empty_str(location_type) and not LocationType.is_known(location_type):
        errors.append(f"Field 'location_type' must be Remote, Hybrid or On-site, got '{location_type}'")

    for f in DATE_FIELDS:
        if _is_non_empty_str(data.get(f)):
            try:
                parse_datetime(data[f])
            except ValueError:
                errors.append(f"Field '{f}' must be an ISO 8601 timestamp")

    # URL shape if present
    for f in URL_FIELDS:
        if _is_non_empty_str(data.get(f)) and not _valid_url(data[f]):
            errors.append(f"Field '{f}' must be a valid absolute URL (scheme + host)")

    return errors
