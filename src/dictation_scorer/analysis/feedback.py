"""Deterministic learner feedback for a scored answer."""

from dictation_scorer.models.scoring import AnalysisResult

NO_ANSWER_FEEDBACK = "No answer provided."
PERFECT_ANSWER_FEEDBACK = "Perfect answer!"
ERROR_FEEDBACK = "An error occurred while scoring the answer."
CELEBRATION_FEEDBACK = "Perfect answer! Excellent work! 🎉"

# (minimum score, message), checked top-down
SCORE_TIERS: list[tuple[int, str]] = [
    (90, "Almost perfect! Great listening skills! 👏"),
    (80, "Well done! A little more care and it will be perfect."),
    (70, "Good answer. Try to concentrate a little more."),
    (60, "Partly correct. Listen to the sentence once more."),
    (40, "Some parts are correct. Listen to the sentence again slowly."),
]
LOWEST_TIER_FEEDBACK = "Try again. Listen carefully."

MAX_MISSING_SHOWN = 3
MAX_MISSPELLED_SHOWN = 2
MAX_EXTRA_SHOWN = 2
WORD_ORDER_HINT_THRESHOLD = 70.0


def tier_message(score: int) -> str:
    """Stock message for a score band."""
    if score == 100:
        return CELEBRATION_FEEDBACK
    for threshold, message in SCORE_TIERS:
        if score >= threshold:
            return message
    return LOWEST_TIER_FEEDBACK


class FeedbackGenerator:
    """Builds the feedback string from a score and its analysis.

    Fragments are appended in a fixed order: tier message, missing words,
    spelling pairs, extra words, word-order hint.
    """

    def generate(self, analysis: AnalysisResult, score: int) -> str:
        """Generate feedback for a scored answer.

        Args:
            analysis: Word-level analysis of the answer.
            score: Final score 0-100.

        Returns:
            Space-joined feedback fragments.
        """
        if score == 100:
            return CELEBRATION_FEEDBACK

        fragments = [tier_message(score)]

        if analysis.missing_words:
            shown = ", ".join(analysis.missing_words[:MAX_MISSING_SHOWN])
            more = " and more" if len(analysis.missing_words) > MAX_MISSING_SHOWN else ""
            fragments.append(f"Missing words: {shown}{more}")

        if analysis.misspelled_words:
            pairs = ", ".join(
                f"'{m.user}' → '{m.correct}'"
                for m in analysis.misspelled_words[:MAX_MISSPELLED_SHOWN]
            )
            fragments.append(f"Check spelling: {pairs}")

        if analysis.extra_words:
            shown = ", ".join(analysis.extra_words[:MAX_EXTRA_SHOWN])
            fragments.append(f"Unnecessary words included: {shown}")

        if analysis.word_order_score < WORD_ORDER_HINT_THRESHOLD:
            fragments.append("Check the word order.")

        return " ".join(fragments)
