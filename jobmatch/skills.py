"""Skill keyword extraction from free-text profile bios."""

from typing import Iterable, Set

DEFAULT_SKILL_VOCABULARY = (
    "swift", "ios", "swiftui", "uikit", "objective-c",
    "python", "javascript", "typescript", "react", "vue", "svelte",
    "node", "nodejs", "java", "kotlin", "android",
    "aws", "gcp", "azure", "docker", "kubernetes",
    "postgresql", "mysql", "mongodb", "redis",
    "git", "ci/cd", "agile", "scrum",
    "machine learning", "ml", "ai", "data science",
    "graphql", "rest", "api",
)


def extract_skills(text: str, vocabulary: Iterable[str] = DEFAULT_SKILL_VOCABULARY) -> Set[str]:
    """
    Return the vocabulary entries that occur in ``text``.

    Plain case-insensitive substring search, so "ai" also hits "maintain"
    and "java" hits "javascript".
    """
    if not text:
        return set()
    lowered = text.lower()
    return {skill.lower() for skill in vocabulary if skill.lower() in lowered}
