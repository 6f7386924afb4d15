from typing import List

import regex

# One extended grapheme cluster per match
_GRAPHEME = regex.compile(r"\X")


def graphemes(s: str) -> List[str]:
    """Split text into user-perceived characters ("e" + U+0301 is one)."""
    return _GRAPHEME.findall(s)


def _keep_grapheme(g: str) -> bool:
    # Judged by the base character; combining marks ride along with it
    return g[0].isalnum() or g[0].isspace()


def normalize_text(s: str) -> str:
    """Lowercase, collapse whitespace, then drop anything that isn't a letter, digit or space.

    Whitespace is collapsed before punctuation is stripped, so "a - b" keeps
    two spaces ("a  b"). Filtering works on whole graphemes, so accents
    written as combining marks stay on their letter.
    """
    collapsed = " ".join(s.lower().split())
    return "".join(g for g in graphemes(collapsed) if _keep_grapheme(g))


def normalize_title(title: str) -> str:
    return normalize_text(title)


def normalize_company(company: str) -> str:
    return normalize_text(company)


def normalize_skill(skill: str) -> str:
    return skill.strip().lower()


REMOTE_SYNS = {"remote", "remote - us", "remote - usa", "fully remote"}
HYBRID_SYNS = {"hybrid", "flexible", "part-remote"}
ONSITE_SYNS = {"onsite", "on-site", "on site", "in office", "in-office"}


def normalize_location(location: str) -> str:
    loc = " ".join(location.strip().lower().split())
    if loc in REMOTE_SYNS:
        return "remote"
    if loc in HYBRID_SYNS:
        return "hybrid"
    if loc in ONSITE_SYNS:
        return "onsite"
    return loc
