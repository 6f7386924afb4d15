"""
Job <-> profile matching.

Calculates a single compatibility score in [0, 1] from four factors:
- Skills: share of the job's skills found in the profile bio
- Location: remote / same place / hybrid / on-site fit
- Experience: fixed placeholder until profiles carry experience data
- Recency: newer postings score higher

and ranks jobs for a profile, or profiles for a job.
"""

from datetime import datetime, timezone
from typing import Callable, Iterable, List, Sequence

from .config import DEFAULT_MATCH_LIMIT
from .models import (
    CandidateMatch,
    JobMatch,
    JobRecord,
    LocationType,
    MatchBreakdown,
    ProfileRecord,
)
from .normalize import normalize_skill
from .skills import DEFAULT_SKILL_VOCABULARY, extract_skills

# Weights for overall score calculation; must sum to 1.0
WEIGHTS = {
    "skills": 0.50,
    "location": 0.20,
    "experience": 0.15,
    "recency": 0.15,
}

NEUTRAL_SCORE = 0.5
EXPERIENCE_SCORE = 0.7
RECENCY_FRESH_DAYS = 7
RECENCY_STALE_DAYS = 30
RECENCY_FLOOR = 0.3


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _clamp(value: float) -> float:
    return min(1.0, max(0.0, value))


class MatchingEngine:
    """Scores profiles against jobs.

    Holds only configuration (skill vocabulary, clock); every method is a
    pure function of its arguments and is safe to share across threads.
    """

    def __init__(
        self,
        vocabulary: Iterable[str] = DEFAULT_SKILL_VOCABULARY,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.vocabulary = tuple(vocabulary)
        self.now = now

    def calculate_job_match_score(self, profile: ProfileRecord, job: JobRecord) -> float:
        """Calculate the weighted match score between a profile and a job (0.0-1.0)."""
        return self.explain_match(profile, job).overall_score

    def explain_match(self, profile: ProfileRecord, job: JobRecord) -> MatchBreakdown:
        """Calculate every factor score and the combined score."""
        breakdown = MatchBreakdown()

        breakdown.skills_score = self.skills_score(profile, job)
        breakdown.location_score = self.location_score(profile, job)
        breakdown.experience_score = self.experience_score(profile, job)
        breakdown.recency_score = self.recency_score(job)

        breakdown.overall_score = _clamp(
            breakdown.skills_score * WEIGHTS["skills"] +
            breakdown.location_score * WEIGHTS["location"] +
            breakdown.experience_score * WEIGHTS["experience"] +
            breakdown.recency_score * WEIGHTS["recency"]
        )

        job_skills = {normalize_skill(s) for s in job.skills}
        breakdown.matched_skills = sorted(
            extract_skills(profile.bio or "", self.vocabulary) & job_skills
        )
        breakdown.reasons = self._match_reasons(breakdown.overall_score, job)
        return breakdown

    # Individual scores

    def skills_score(self, profile: ProfileRecord, job: JobRecord) -> float:
        """Fraction of the job's skills that show up in the profile bio.

        Extra profile skills are not penalized. A job without listed skills
        scores neutral.
        """
        job_skills = {normalize_skill(s) for s in job.skills}
        if not job_skills:
            return NEUTRAL_SCORE

        profile_skills = extract_skills(profile.bio or "", self.vocabulary)
        return len(profile_skills & job_skills) / len(job_skills)

    def location_score(self, profile: ProfileRecord, job: JobRecord) -> float:
        # Remote jobs fit everyone
        if job.location_type == LocationType.REMOTE:
            return 1.0

        if profile.location and job.location:
            profile_loc = profile.location.lower()
            job_loc = job.location.lower()
            if profile_loc in job_loc or job_loc in profile_loc:
                return 1.0

        if job.location_type == LocationType.HYBRID:
            return 0.5
        if job.location_type == LocationType.ON_SITE:
            return 0.2
        return NEUTRAL_SCORE

    def experience_score(self, profile: ProfileRecord, job: JobRecord) -> float:
        # TODO: score against an experience level once profiles store one
        return EXPERIENCE_SCORE

    def recency_score(self, job: JobRecord) -> float:
        """Full score under a week old, linear decay to 0.5 at 30 days, 0.3 after."""
        if job.posted_at is None:
            return NEUTRAL_SCORE

        posted_at = job.posted_at
        if posted_at.tzinfo is None:
            posted_at = posted_at.replace(tzinfo=timezone.utc)
        days = max(0, (self.now() - posted_at).days)

        if days < RECENCY_FRESH_DAYS:
            return 1.0
        if days < RECENCY_STALE_DAYS:
            span = RECENCY_STALE_DAYS - RECENCY_FRESH_DAYS
            return 1.0 - ((days - RECENCY_FRESH_DAYS) / span) * 0.5
        return RECENCY_FLOOR

    def _match_reasons(self, score: float, job: JobRecord) -> List[str]:
        reasons = []
        if score >= 0.8:
            reasons.append("Excellent skill match")
        elif score >= 0.6:
            reasons.append("Good skill match")
        if job.location_type == LocationType.REMOTE:
            reasons.append("Remote position")
        return reasons

    # Batch matching

    def find_best_matches(
        self,
        profile: ProfileRecord,
        jobs: Sequence[JobRecord],
        limit: int = DEFAULT_MATCH_LIMIT,
    ) -> List[JobMatch]:
        """
        Rank jobs for a profile.

        Args:
            profile: Candidate profile
            jobs: Jobs to score
            limit: Maximum number of results

        Returns:
            Up to ``limit`` (job, score) pairs, best first. Equal scores keep
            their input order.
        """
        if limit <= 0:
            return []
        scored = [JobMatch(job, self.calculate_job_match_score(profile, job)) for job in jobs]
        scored.sort(key=lambda m: m.score, reverse=True)
        return scored[:limit]

    def find_best_candidates(
        self,
        job: JobRecord,
        profiles: Sequence[ProfileRecord],
        limit: int = DEFAULT_MATCH_LIMIT,
    ) -> List[CandidateMatch]:
        """Rank profiles for a job; same ordering rules as find_best_matches."""
        if limit <= 0:
            return []
        scored = [
            CandidateMatch(profile, self.calculate_job_match_score(profile, job))
            for profile in profiles
        ]
        scored.sort(key=lambda m: m.score, reverse=True)
        return scored[:limit]


_default_engine = MatchingEngine()


def calculate_job_match_score(profile: ProfileRecord, job: JobRecord) -> float:
    return _default_engine.calculate_job_match_score(profile, job)


def explain_match(profile: ProfileRecord, job: JobRecord) -> MatchBreakdown:
    return _default_engine.explain_match(profile, job)


def find_best_matches(
    profile: ProfileRecord,
    jobs: Sequence[JobRecord],
    limit: int = DEFAULT_MATCH_LIMIT,
) -> List[JobMatch]:
    return _default_engine.find_best_matches(profile, jobs, limit)


def find_best_candidates(
    job: JobRecord,
    profiles: Sequence[ProfileRecord],
    limit: int = DEFAULT_MATCH_LIMIT,
) -> List[CandidateMatch]:
    return _default_engine.find_best_candidates(job, profiles, limit)
