"""
Duplicate detection for job postings.

Two postings are treated as the same listing when their content hashes
match, or when they come from the same (normalized) company and their
normalized titles are nearly identical.

Nothing here touches the job store.
"""

import hashlib
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULT_DESCRIPTION_PREFIX, DEFAULT_FUZZY_THRESHOLD
from .logger import get_logger
from .models import JobContent
from .normalize import graphemes, normalize_company, normalize_text, normalize_title
from .similarity import similarity_ratio

logger = get_logger()

HASH_SEPARATOR = "|"


def generate_hash(
    title: str,
    company: str,
    description: str,
    description_prefix: int = DEFAULT_DESCRIPTION_PREFIX,
) -> str:
    """
    Return the SHA-256 content hash (64 lowercase hex chars) of a posting.

    The description is cut to its first ``description_prefix`` graphemes
    before it is normalized, so edits past that point don't change the hash.
    Normalization removes every "|", which keeps the joined fields unambiguous.
    """
    content = HASH_SEPARATOR.join([
        normalize_title(title),
        normalize_company(company),
        normalize_text("".join(graphemes(description)[:description_prefix])),
    ])
    return hashlib.sha256(content.encode("utf-8")).hexdigest()


def content_hash(job: JobContent, description_prefix: int = DEFAULT_DESCRIPTION_PREFIX) -> str:
    return generate_hash(job.title, job.company, job.description, description_prefix)


def are_likely_duplicates(
    job1: JobContent,
    job2: JobContent,
    threshold: float = DEFAULT_FUZZY_THRESHOLD,
    description_prefix: int = DEFAULT_DESCRIPTION_PREFIX,
) -> bool:
    """
    Decide whether two postings describe the same listing.

    Args:
        job1: First posting
        job2: Second posting
        threshold: Title similarity a same-company pair must exceed
        description_prefix: Description characters that feed the hash

    Returns:
        True on an exact content hash match, or same company with title
        similarity strictly above ``threshold``. Postings from different
        companies are never fuzzy matched.
    """
    if content_hash(job1, description_prefix) == content_hash(job2, description_prefix):
        return True

    if normalize_company(job1.company) != normalize_company(job2.company):
        return False

    similarity = similarity_ratio(normalize_title(job1.title), normalize_title(job2.title))
    if similarity > threshold:
        logger.debug(
            "Fuzzy title match",
            company=job1.company,
            title1=job1.title,
            title2=job2.title,
            similarity=round(similarity, 3),
        )
        return True

    return False


def find_duplicate(
    job: JobContent,
    existing: Iterable[JobContent],
    threshold: float = DEFAULT_FUZZY_THRESHOLD,
    description_prefix: int = DEFAULT_DESCRIPTION_PREFIX,
) -> Optional[JobContent]:
    """Return the first posting in ``existing`` that duplicates ``job``, or None."""
    for candidate in existing:
        if are_likely_duplicates(job, candidate, threshold, description_prefix):
            return candidate
    return None


def deduplicate(
    jobs: Iterable[JobContent],
    threshold: float = DEFAULT_FUZZY_THRESHOLD,
    description_prefix: int = DEFAULT_DESCRIPTION_PREFIX,
) -> Tuple[List[JobContent], List[JobContent]]:
    """
    Split postings into (unique, duplicates), keeping the first of each group.

    Order is preserved in both lists.
    """
    unique: List[JobContent] = []
    duplicates: List[JobContent] = []
    seen_hashes = set()

    for job in jobs:
        h = content_hash(job, description_prefix)
        if h in seen_hashes:
            duplicates.append(job)
            continue
        if find_duplicate(job, unique, threshold, description_prefix) is not None:
            duplicates.append(job)
            continue
        seen_hashes.add(h)
        unique.append(job)

    return unique, duplicates
