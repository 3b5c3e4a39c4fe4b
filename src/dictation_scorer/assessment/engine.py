"""Dictation answer scoring engine."""

from collections.abc import Mapping
from typing import Any

import structlog

from dictation_scorer.analysis.feedback import (
    ERROR_FEEDBACK,
    NO_ANSWER_FEEDBACK,
    PERFECT_ANSWER_FEEDBACK,
    FeedbackGenerator,
)
from dictation_scorer.assessment.calibration import calibrate_composite_score
from dictation_scorer.assessment.matching import WordMatcher, is_exact_match
from dictation_scorer.assessment.metrics import (
    compute_completeness_score,
    compute_punctuation_score,
    compute_spelling_score,
    compute_word_order_score,
)
from dictation_scorer.assessment.similarity import jaccard_similarity
from dictation_scorer.assessment.text import canonical_text, normalize_text, tokenize
from dictation_scorer.models.scoring import (
    AnalysisResult,
    Difficulty,
    ScoreResult,
    ScoringConfig,
)

logger = structlog.get_logger()


class ScoringEngine:
    """Scores a typed transcription against the reference sentence.

    The engine is stateless apart from its immutable configuration, so one
    instance can score answers from many threads at once.

    Args:
        config: Scoring configuration, or a flat option map. Defaults apply
            when omitted.
    """

    def __init__(self, config: ScoringConfig | Mapping[str, Any] | None = None):
        if config is None or isinstance(config, Mapping):
            config = ScoringConfig.from_options(config)
        self.config = config
        self.matcher = WordMatcher(self.config)
        self.feedback = FeedbackGenerator()

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "ScoringEngine":
        """Build an engine from a flat option map (camelCase or snake_case keys).

        Raises:
            ScoringConfigError: If the options are invalid.
        """
        return cls(ScoringConfig.from_options(options))

    def with_options(self, **changes: Any) -> "ScoringEngine":
        """Return a new engine whose configuration has ``changes`` applied."""
        return type(self)(self.config.merged(changes))

    def score(
        self,
        user_answer: str,
        correct_answer: str,
        difficulty: str | None = Difficulty.MEDIUM,
    ) -> ScoreResult:
        """Score a learner answer.

        Never raises for answer input: unexpected failures come back as a
        zero score with ``error`` set.

        Args:
            user_answer: Raw text typed by the learner.
            correct_answer: Raw reference sentence.
            difficulty: Question difficulty ("easy", "medium", "hard").

        Returns:
            ScoreResult with score, correctness, feedback and analysis.
        """
        try:
            result = self._score(user_answer, correct_answer, difficulty)
        except Exception as e:
            logger.exception("scoring_failed", difficulty=str(difficulty))
            return ScoreResult(score=0, is_correct=False, feedback=ERROR_FEEDBACK, error=str(e))

        logger.debug(
            "answer_scored",
            score=result.score,
            is_correct=result.is_correct,
            difficulty=str(difficulty),
        )
        return result

    def _score(
        self, user_answer: str, correct_answer: str, difficulty: str | None
    ) -> ScoreResult:
        processed_user = normalize_text(user_answer, self.config)
        processed_correct = normalize_text(correct_answer, self.config)

        if not processed_user:
            return ScoreResult(
                score=0,
                is_correct=False,
                feedback=NO_ANSWER_FEEDBACK,
                analysis=self.empty_analysis(correct_answer),
            )

        if processed_user == processed_correct or (
            canonical_text(user_answer, self.config)
            == canonical_text(correct_answer, self.config)
        ):
            return ScoreResult(
                score=100,
                is_correct=True,
                feedback=PERFECT_ANSWER_FEEDBACK,
                analysis=self.perfect_analysis(user_answer, correct_answer),
            )

        analysis = self.analyze(user_answer, correct_answer)
        final_score = calibrate_composite_score(analysis, self.config, difficulty)

        return ScoreResult(
            score=final_score,
            is_correct=final_score == 100,
            feedback=self.feedback.generate(analysis, final_score),
            analysis=analysis,
        )

    def analyze(self, user_answer: str, correct_answer: str) -> AnalysisResult:
        """Run the full word-level analysis on two raw strings."""
        user_words = tokenize(normalize_text(user_answer, self.config))
        correct_words = tokenize(normalize_text(correct_answer, self.config))

        matches = self.matcher.match(user_words, correct_words)

        punctuation_score = 0.0
        if self.config.strict_punctuation:
            punctuation_score = compute_punctuation_score(user_answer, correct_answer)

        return AnalysisResult(
            user_words=tuple(user_words),
            correct_words=tuple(correct_words),
            total_words=len(correct_words),
            user_word_count=len(user_words),
            exact_matches=matches.exact_matches,
            partial_matches=matches.partial_matches,
            missing_words=matches.missing_words,
            extra_words=matches.extra_words,
            misspelled_words=matches.misspelled_words,
            word_order_score=compute_word_order_score(
                user_words,
                correct_words,
                is_exact=is_exact_match,
                is_similar=self.matcher.is_similar,
                tolerant_credit=self.config.tolerant_order_credit,
            ),
            spelling_score=compute_spelling_score(user_words, correct_words),
            completeness_score=compute_completeness_score(user_words, correct_words),
            punctuation_score=punctuation_score,
        )

    def empty_analysis(self, correct_answer: str) -> AnalysisResult:
        """Analysis for a blank answer: every reference word is missing."""
        correct_words = tuple(tokenize(normalize_text(correct_answer, self.config)))
        return AnalysisResult(
            correct_words=correct_words,
            total_words=len(correct_words),
            missing_words=correct_words,
        )

    def perfect_analysis(self, user_answer: str, correct_answer: str) -> AnalysisResult:
        """Analysis for an answer equal to the reference.

        The learner tokens are kept as typed, so an answer accepted through
        contraction expansion ("I am" for "I'm") reports its own words.
        """
        user_words = tuple(tokenize(normalize_text(user_answer, self.config)))
        correct_words = tuple(tokenize(normalize_text(correct_answer, self.config)))
        return AnalysisResult(
            user_words=user_words,
            correct_words=correct_words,
            total_words=len(correct_words),
            user_word_count=len(user_words),
            exact_matches=len(correct_words),
            word_order_score=100.0,
            spelling_score=100.0,
            completeness_score=100.0,
            punctuation_score=100.0,
        )

    def semantic_similarity(self, user_answer: str, correct_answer: str) -> float:
        """Word-set overlap (Jaccard) of the two normalized answers, 0-1."""
        user_words = tokenize(normalize_text(user_answer, self.config))
        correct_words = tokenize(normalize_text(correct_answer, self.config))
        return jaccard_similarity(user_words, correct_words)
