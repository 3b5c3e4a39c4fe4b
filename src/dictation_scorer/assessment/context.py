"""Context-aware scoring on top of the base engine."""

from collections.abc import Mapping
from typing import Any

import structlog

from dictation_scorer.assessment.engine import ScoringEngine
from dictation_scorer.models.scoring import ScoreResult, ScoringContext

logger = structlog.get_logger()

STRUGGLING_AVERAGE = 60
STRUGGLING_BONUS = 2
LATE_QUESTION_PROGRESS = 0.7
LATE_QUESTION_BONUS = 1
RECENT_SCORES_WINDOW = 3


def calculate_context_bonus(context: ScoringContext) -> int:
    """Bonus points earned from session history.

    +2 when the last (up to) three scores average below 60, and +1 once the
    learner is past 70% of the test.
    """
    bonus = 0

    if context.previous_scores:
        recent = context.previous_scores[-RECENT_SCORES_WINDOW:]
        if sum(recent) / len(recent) < STRUGGLING_AVERAGE:
            bonus += STRUGGLING_BONUS

    if context.question_index > 0 and context.total_questions > 0:
        progress = context.question_index / context.total_questions
        if progress > LATE_QUESTION_PROGRESS:
            bonus += LATE_QUESTION_BONUS

    return bonus


class ContextAwareScorer:
    """Adds a small history-based bonus to the base engine's result.

    Wraps a ScoringEngine rather than extending it; the analysis of the
    base result is passed through unchanged.

    Args:
        engine: Base scoring engine.
        context_aware: When False, results are returned without a bonus.
    """

    def __init__(self, engine: ScoringEngine | None = None, context_aware: bool = True):
        self.engine = engine or ScoringEngine()
        self.context_aware = context_aware

    def score_with_context(
        self,
        user_answer: str,
        correct_answer: str,
        context: ScoringContext | Mapping[str, Any] | None = None,
    ) -> ScoreResult:
        """Score an answer and apply the context bonus.

        Args:
            user_answer: Raw learner answer.
            correct_answer: Raw reference sentence.
            context: Session history; a mapping may use camelCase or
                snake_case keys.

        Returns:
            The base result, with score and feedback bumped when a bonus applies.
        """
        if context is None:
            context = ScoringContext()
        elif not isinstance(context, ScoringContext):
            context = ScoringContext.model_validate(
                {key: value for key, value in context.items() if value is not None}
            )

        result = self.engine.score(user_answer, correct_answer, context.difficulty)
        if not self.context_aware or result.error is not None:
            return result

        return self.apply_bonus(result, calculate_context_bonus(context))

    @staticmethod
    def apply_bonus(result: ScoreResult, bonus: int) -> ScoreResult:
        """Add ``bonus`` points to a result, capped at 100."""
        if bonus <= 0:
            return result

        score = min(100, result.score + bonus)
        logger.debug("context_bonus_applied", bonus=bonus, score=score)
        return result.model_copy(
            update={
                "score": score,
                "is_correct": score == 100,
                "feedback": f"{result.feedback} (Context bonus: +{bonus} points)",
                "context_bonus": bonus,
            }
        )
