"""Edit-distance based string similarity."""

from collections.abc import Iterable

from rapidfuzz.distance import Levenshtein


def edit_distance(a: str, b: str) -> int:
    """Unit-cost Levenshtein distance (insert, delete, substitute)."""
    return Levenshtein.distance(a, b)


def similarity(a: str, b: str) -> float:
    """Normalized edit-distance similarity in [0, 1].

    ``(max_len - distance) / max_len``. Two empty strings are identical (1.0);
    exactly one empty string gives 0.0.
    """
    if not a:
        return 1.0 if not b else 0.0
    if not b:
        return 0.0

    max_len = max(len(a), len(b))
    return (max_len - edit_distance(a, b)) / max_len


def jaccard_similarity(left: Iterable[str], right: Iterable[str]) -> float:
    """Overlap of two token sets (intersection over union)."""
    left_set = set(left)
    right_set = set(right)
    union = left_set | right_set
    if not union:
        return 0.0
    return len(left_set & right_set) / len(union)
