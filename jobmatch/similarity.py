"""String similarity helpers used for fuzzy duplicate detection.

Distances count graphemes, so a letter plus its combining accent is one
character.
"""

from .normalize import graphemes


def levenshtein_distance(a: str, b: str) -> int:
    """
    Classic Levenshtein distance (insert, delete, substitute all cost 1).

    Fills the full (len(a)+1) x (len(b)+1) table; the fuzzy duplicate
    threshold is calibrated against the exact distance.
    """
    a, b = graphemes(a), graphemes(b)
    matrix = [[0] * (len(b) + 1) for _ in range(len(a) + 1)]

    for i in range(len(a) + 1):
        matrix[i][0] = i
    for j in range(len(b) + 1):
        matrix[0][j] = j

    for i in range(1, len(a) + 1):
        for j in range(1, len(b) + 1):
            cost = 0 if a[i - 1] == b[j - 1] else 1
            matrix[i][j] = min(
                matrix[i - 1][j] + 1,         # deletion
                matrix[i][j - 1] + 1,         # insertion
                matrix[i - 1][j - 1] + cost,  # substitution
            )

    return matrix[len(a)][len(b)]


def similarity_ratio(a: str, b: str) -> float:
    """Return 1 - distance / longest length, in [0.0, 1.0]. Two empty strings are identical."""
    max_len = max(len(graphemes(a)), len(graphemes(b)))
    if max_len == 0:
        return 1.0
    return 1.0 - (levenshtein_distance(a, b) / max_len)
