"""
Records consumed and produced by the deduplication and matching engines.

The engines never persist these; they are built per call from whatever the
caller loaded (JSON input, database rows).
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, NamedTuple, Optional

from .normalize import normalize_location


class LocationType(Enum):
    """Work arrangement of a posting."""
    REMOTE = "Remote"
    HYBRID = "Hybrid"
    ON_SITE = "On-site"

    @classmethod
    def parse(cls, value: Optional[str], default: "LocationType" = None) -> "LocationType":
        """Map free text ("onsite", "Fully Remote", "On-site") to a LocationType.

        Unknown or empty text falls back to ``default`` (REMOTE unless given).
        """
        if default is None:
            default = cls.REMOTE
        if not value:
            return default
        loc = normalize_location(value)
        if loc == "remote":
            return cls.REMOTE
        if loc == "hybrid":
            return cls.HYBRID
        if loc == "onsite":
            return cls.ON_SITE
        return default

    @classmethod
    def is_known(cls, value: str) -> bool:
        return normalize_location(value) in {"remote", "hybrid", "onsite"}


def parse_datetime(value: Any) -> Optional[datetime]:
    if value is None or isinstance(value, datetime):
        return value
    if isinstance(value, str) and value.strip():
        # fromisoformat doesn't accept a trailing Z before 3.11
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    return None


@dataclass(frozen=True)
class JobContent:
    """The fields of a posting that its content hash is built from."""
    title: str
    company: str
    description: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobContent":
        return cls(
            title=data.get("title") or "",
            company=data.get("company") or data.get("company_name") or "",
            description=data.get("description") or "",
        )


@dataclass
class JobRecord:
    """A job posting as seen by the matching engine."""
    skills: List[str] = field(default_factory=list)
    location: Optional[str] = None
    location_type: LocationType = LocationType.REMOTE
    posted_at: Optional[datetime] = None
    id: Optional[str] = None
    title: str = ""
    company: str = ""
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobRecord":
        job_id = data.get("id")
        skills = data.get("skills") or []
        if isinstance(skills, str):
            skills = [skills]
        return cls(
            skills=list(skills),
            location=data.get("location"),
            location_type=LocationType.parse(data.get("location_type") or data.get("locationType")),
            posted_at=parse_datetime(data.get("posted_at") or data.get("postedAt")),
            id=str(job_id) if job_id is not None else None,
            title=data.get("title") or "",
            company=data.get("company") or data.get("company_name") or "",
            description=data.get("description") or "",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "skills": self.skills,
            "location": self.location,
            "location_type": self.location_type.value,
            "posted_at": self.posted_at.isoformat() if self.posted_at else None,
        }


@dataclass
class ProfileRecord:
    """A developer profile as seen by the matching engine."""
    bio: Optional[str] = None
    location: Optional[str] = None
    id: Optional[str] = None
    username: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProfileRecord":
        profile_id = data.get("id")
        return cls(
            bio=data.get("bio"),
            location=data.get("location"),
            id=str(profile_id) if profile_id is not None else None,
            username=data.get("username") or "",
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "bio": self.bio,
            "location": self.location,
        }


class JobMatch(NamedTuple):
    job: JobRecord
    score: float


class CandidateMatch(NamedTuple):
    profile: ProfileRecord
    score: float


@dataclass
class MatchBreakdown:
    """Per-factor scores behind a combined match score."""
    skills_score: float = 0.0
    location_score: float = 0.0
    experience_score: float = 0.0
    recency_score: float = 0.0
    overall_score: float = 0.0
    matched_skills: List[str] = field(default_factory=list)
    reasons: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "overall_score": round(self.overall_score, 4),
            "skills_score": round(self.skills_score, 4),
            "location_score": round(self.location_score, 4),
            "experience_score": round(self.experience_score, 4),
            "recency_score": round(self.recency_score, 4),
            "matched_skills": self.matched_skills,
            "reasons": self.reasons,
        }
