"""Per-dimension sub-scores for a learner answer (each 0-100)."""

from collections.abc import Callable

from dictation_scorer.assessment.similarity import similarity
from dictation_scorer.assessment.text import extract_punctuation


def compute_word_order_score(
    user_words: list[str],
    correct_words: list[str],
    is_exact: Callable[[str, str], bool],
    is_similar: Callable[[str, str], bool],
    tolerant_credit: float = 0.7,
) -> float:
    """Score positional agreement between the two token sequences.

    Args:
        user_words: Normalized learner tokens.
        correct_words: Normalized reference tokens.
        is_exact: Exact-match predicate.
        is_similar: Tolerant-match predicate.
        tolerant_credit: Credit for a tolerant match at the same position.

    Returns:
        Mean positional credit over the compared positions, scaled to 0-100.
        0.0 when either sequence is empty.
    """
    compared = min(len(user_words), len(correct_words))
    if compared == 0:
        return 0.0

    credit = 0.0
    for user_word, correct_word in zip(user_words, correct_words):
        if is_exact(user_word, correct_word):
            credit += 1.0
        elif is_similar(user_word, correct_word):
            credit += tolerant_credit

    return credit / compared * 100


def compute_spelling_score(user_words: list[str], correct_words: list[str]) -> float:
    """Average positional similarity over the reference tokens.

    A reference position with no learner token counts as similarity 0.

    Returns:
        Score 0-100; 100.0 when there are no reference tokens.
    """
    if not correct_words:
        return 100.0

    total = 0.0
    for index, correct_word in enumerate(correct_words):
        user_word = user_words[index] if index < len(user_words) else ""
        total += similarity(user_word, correct_word)

    return total / len(correct_words) * 100


def compute_completeness_score(user_words: list[str], correct_words: list[str]) -> float:
    """Share of the reference length covered by the learner's answer."""
    if not correct_words:
        return 100.0
    return min(len(user_words), len(correct_words)) / len(correct_words) * 100


def compute_punctuation_score(user_text: str, correct_text: str) -> float:
    """Positional agreement of punctuation marks in the raw texts.

    Args:
        user_text: Raw (unnormalized) learner answer.
        correct_text: Raw reference sentence.

    Returns:
        Matching marks over the reference's mark count, scaled to 0-100.
        100.0 when the reference has no punctuation.
    """
    user_marks = extract_punctuation(user_text)
    correct_marks = extract_punctuation(correct_text)
    if not correct_marks:
        return 100.0

    matches = sum(1 for user, correct in zip(user_marks, correct_marks) if user == correct)
    return matches / len(correct_marks) * 100
