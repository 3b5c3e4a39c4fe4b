"""Greedy word alignment between a learner answer and the reference."""

from pydantic import BaseModel, ConfigDict

from dictation_scorer.assessment.lexicon import expand_contraction, is_known_misspelling
from dictation_scorer.assessment.similarity import similarity
from dictation_scorer.models.scoring import MisspelledWord, ScoringConfig


class MatchResult(BaseModel):
    """Classification of reference and learner tokens after alignment."""

    model_config = ConfigDict(frozen=True)

    exact_matches: int = 0
    partial_matches: int = 0
    missing_words: tuple[str, ...] = ()
    extra_words: tuple[str, ...] = ()
    misspelled_words: tuple[MisspelledWord, ...] = ()


def is_exact_match(user_word: str, correct_word: str) -> bool:
    """Equal verbatim, or equal once contractions are expanded."""
    if user_word == correct_word:
        return True
    return expand_contraction(user_word) == expand_contraction(correct_word)


class WordMatcher:
    """Aligns learner tokens to reference tokens.

    Two greedy passes over the reference, in order: exact matches first, then
    tolerant matches among what is left. Each pass takes the first unused
    learner token that qualifies, so ties go to the lowest index. The result
    is deterministic but not a globally optimal alignment.

    Args:
        config: Scoring configuration (spelling tolerance is read from it).
    """

    def __init__(self, config: ScoringConfig):
        self.config = config

    def is_similar(self, user_word: str, correct_word: str) -> bool:
        """Tolerant match: exact, a listed misspelling, or within tolerance."""
        if is_exact_match(user_word, correct_word):
            return True
        if is_known_misspelling(user_word, correct_word):
            return True
        return similarity(user_word, correct_word) >= 1 - self.config.spelling_tolerance

    def match(self, user_words: list[str], correct_words: list[str]) -> MatchResult:
        """Classify every reference token as exact, partial, or missing.

        Args:
            user_words: Normalized learner tokens.
            correct_words: Normalized reference tokens.

        Returns:
            MatchResult with counts, missing/extra words and the tolerant pairs.
        """
        used_user: set[int] = set()
        used_correct: set[int] = set()
        exact_matches = 0
        misspelled: list[MisspelledWord] = []

        for correct_index, correct_word in enumerate(correct_words):
            user_index = self._first_unused(
                user_words, used_user, lambda w, c=correct_word: is_exact_match(w, c)
            )
            if user_index is not None:
                exact_matches += 1
                used_user.add(user_index)
                used_correct.add(correct_index)

        for correct_index, correct_word in enumerate(correct_words):
            if correct_index in used_correct:
                continue
            user_index = self._first_unused(
                user_words, used_user, lambda w, c=correct_word: self.is_similar(w, c)
            )
            if user_index is not None:
                user_word = user_words[user_index]
                misspelled.append(
                    MisspelledWord(
                        correct=correct_word,
                        user=user_word,
                        similarity=similarity(user_word, correct_word),
                    )
                )
                used_user.add(user_index)
                used_correct.add(correct_index)

        return MatchResult(
            exact_matches=exact_matches,
            partial_matches=len(misspelled),
            missing_words=tuple(
                word for i, word in enumerate(correct_words) if i not in used_correct
            ),
            extra_words=tuple(
                word for i, word in enumerate(user_words) if i not in used_user
            ),
            misspelled_words=tuple(misspelled),
        )

    @staticmethod
    def _first_unused(words: list[str], used: set[int], predicate) -> int | None:
        for index, word in enumerate(words):
            if index not in used and predicate(word):
                return index
        return None
