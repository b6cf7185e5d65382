"""
String similarity scoring for libscout.

Classic Levenshtein edit distance turned into a 0..1 similarity score,
plus the ranking helper every fuzzy lookup and suggestion list uses.

Close enough counts. "yb-avatr" is obviously "yb-avatar" and we both know it.
"""

from typing import Any, Dict, Iterable, List, Tuple

# Minimum score for a fuzzy hit to be returned as "found"
FUZZY_ACCEPT_THRESHOLD = 0.5

# Minimum score for a near miss to be offered as a suggestion
SUGGESTION_THRESHOLD = 0.3

MAX_SUGGESTIONS = 5


def levenshtein(a: str, b: str) -> int:
    """Edit distance between two strings using the full DP matrix."""
    rows = len(b) + 1
    cols = len(a) + 1
    matrix = [[0] * cols for _ in range(rows)]

    for i in range(rows):
        matrix[i][0] = i
    for j in range(cols):
        matrix[0][j] = j

    for i in range(1, rows):
        for j in range(1, cols):
            if b[i - 1] == a[j - 1]:
                matrix[i][j] = matrix[i - 1][j - 1]
            else:
                matrix[i][j] = min(
                    matrix[i - 1][j - 1] + 1,
                    matrix[i][j - 1] + 1,
                    matrix[i - 1][j] + 1,
                )

    return matrix[rows - 1][cols - 1]


def similarity(a: str, b: str) -> float:
    """Case-insensitive similarity in [0, 1]; two empty strings score 1."""
    a = a.lower()
    b = b.lower()
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 1.0
    return (max_len - levenshtein(a, b)) / max_len


def best_match(
    query: str,
    candidates: Iterable[Tuple[str, Any]],
    threshold: float = FUZZY_ACCEPT_THRESHOLD,
) -> Any:
    """Return the payload of the highest-scoring candidate above threshold.

    Ties keep the earliest candidate. Returns None when nothing qualifies.
    """
    best = None
    best_score = 0.0
    for name, payload in candidates:
        score = similarity(query, name)
        if score > best_score and score > threshold:
            best_score = score
            best = payload
    return best


def rank_suggestions(
    query: str,
    candidates: Iterable[Tuple[str, Dict[str, Any]]],
    threshold: float = SUGGESTION_THRESHOLD,
    limit: int = MAX_SUGGESTIONS,
) -> List[Dict[str, Any]]:
    """Rank near misses by descending similarity.

    Args:
        query: The name that failed to resolve.
        candidates: (name, suggestion dict) pairs to score.
        threshold: Scores must be strictly greater than this.
        limit: Maximum number of suggestions returned.

    Returns:
        The suggestion dicts of the top-scoring candidates.
    """
    scored = []
    for name, suggestion in candidates:
        score = similarity(query, name)
        if score > threshold:
            scored.append((score, suggestion))

    # sorted() is stable, so equal scores keep index order
    scored = sorted(scored, key=lambda item: item[0], reverse=True)
    return [suggestion for _, suggestion in scored[:limit]]
