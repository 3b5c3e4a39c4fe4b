"""Statistics over a series of score results."""

import math
from collections.abc import Sequence

from dictation_scorer.assessment.calibration import round_half_up
from dictation_scorer.models.scoring import ScoreResult
from dictation_scorer.models.statistics import (
    DISTRIBUTION_BUCKETS,
    HistoryAnalysis,
    PerformanceMetrics,
    QuizScore,
    ScoreComparison,
    ScoreStatistics,
    ScoreTrend,
    SettingSuggestion,
    StreakSummary,
)

TREND_THRESHOLD = 5.0
LOW_AVERAGE = 60
HIGH_AVERAGE = 85


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def score_distribution(scores: Sequence[int]) -> dict[str, int]:
    """Count scores per band (90-100, 80-89, 70-79, 60-69, 0-59).

    Args:
        scores: Integer scores 0-100.

    Returns:
        Dict of band label -> count, every band present.
    """
    distribution = {label: 0 for label, _ in DISTRIBUTION_BUCKETS}
    for score in scores:
        for label, lower in DISTRIBUTION_BUCKETS:
            if score >= lower:
                distribution[label] += 1
                break
    return distribution


def generate_statistics(results: Sequence[ScoreResult]) -> ScoreStatistics | None:
    """Summarise a batch of results; None when there are none."""
    if not results:
        return None

    scores = [r.score for r in results]
    correct = sum(1 for r in results if r.is_correct)

    return ScoreStatistics(
        total_questions=len(results),
        correct_answers=correct,
        accuracy=round_half_up(correct / len(results) * 100),
        average_score=round_half_up(_mean(scores)),
        highest_score=max(scores),
        lowest_score=min(scores),
        score_distribution=score_distribution(scores),
    )


def compare_results(first: ScoreResult, second: ScoreResult) -> ScoreComparison:
    """How the second attempt differs from the first."""
    return ScoreComparison(
        score_difference=second.score - first.score,
        accuracy_changed=second.is_correct != first.is_correct,
        improved=second.score > first.score,
    )


def calculate_trend(scores: Sequence[int]) -> ScoreTrend:
    """Compare the mean of the later half of the scores with the earlier half."""
    if len(scores) < 2:
        return ScoreTrend.INSUFFICIENT_DATA

    middle = len(scores) // 2
    difference = _mean(scores[middle:]) - _mean(scores[:middle])

    if difference > TREND_THRESHOLD:
        return ScoreTrend.IMPROVING
    if difference < -TREND_THRESHOLD:
        return ScoreTrend.DECLINING
    return ScoreTrend.STABLE


def calculate_consistency(scores: Sequence[int]) -> float:
    """100 minus twice the population standard deviation, floored at 0."""
    if len(scores) < 2:
        return 100.0

    mean = _mean(scores)
    variance = sum((s - mean) ** 2 for s in scores) / len(scores)
    return max(0.0, 100 - math.sqrt(variance) * 2)


def find_streaks(results: Sequence[ScoreResult]) -> StreakSummary:
    """Longest and trailing runs of correct / incorrect answers."""
    max_correct = max_incorrect = 0
    current_correct = current_incorrect = 0

    for result in results:
        if result.is_correct:
            current_correct += 1
            current_incorrect = 0
            max_correct = max(max_correct, current_correct)
        else:
            current_incorrect += 1
            current_correct = 0
            max_incorrect = max(max_incorrect, current_incorrect)

    return StreakSummary(
        max_correct_streak=max_correct,
        max_incorrect_streak=max_incorrect,
        current_correct_streak=current_correct,
        current_incorrect_streak=current_incorrect,
    )


def analyze_history(results: Sequence[ScoreResult]) -> HistoryAnalysis | None:
    """Trend, consistency and streaks of a learner's results, oldest first."""
    if not results:
        return None

    scores = [r.score for r in results]
    return HistoryAnalysis(
        average_score=_mean(scores),
        trend=calculate_trend(scores),
        consistency=calculate_consistency(scores),
        improvement=scores[-1] - scores[0],
        streaks=find_streaks(results),
    )


def suggest_optimal_settings(results: Sequence[ScoreResult]) -> list[SettingSuggestion]:
    """Suggest option changes from the average score of past results.

    Low averages get gentler grading; high averages get strict punctuation.
    """
    suggestions: list[SettingSuggestion] = []
    if not results:
        return suggestions

    average = _mean([r.score for r in results])

    if average < LOW_AVERAGE:
        suggestions.append(SettingSuggestion(
            setting="allowPartialCredit",
            value=True,
            reason="Allow partial credit to keep learners motivated.",
        ))
        suggestions.append(SettingSuggestion(
            setting="spellingTolerance",
            value=0.2,
            reason="Widen the spelling tolerance.",
        ))

    if average > HIGH_AVERAGE:
        suggestions.append(SettingSuggestion(
            setting="strictPunctuation",
            value=True,
            reason="Grade punctuation strictly to raise the challenge.",
        ))

    return suggestions


def performance_metrics(
    results: Sequence[ScoreResult],
    time_spent: Sequence[float] = (),
) -> PerformanceMetrics:
    """Accuracy, efficiency, consistency and improvement of a result series.

    Args:
        results: Score results, oldest first.
        time_spent: Seconds spent per question. Efficiency (average score per
            minute) is only computed when it lines up with ``results``.

    Returns:
        PerformanceMetrics; all zero for an empty series.
    """
    if not results:
        return PerformanceMetrics()

    scores = [r.score for r in results]
    correct = sum(1 for r in results if r.is_correct)

    efficiency = 0.0
    if time_spent and len(time_spent) == len(scores):
        average_minutes = _mean(time_spent) / 60
        efficiency = _mean(scores) / max(1.0, average_minutes)

    return PerformanceMetrics(
        accuracy=correct / len(results) * 100,
        efficiency=efficiency,
        consistency=calculate_consistency(scores),
        improvement=scores[-1] - scores[0] if len(scores) >= 2 else 0,
    )


def calculate_quiz_score(
    results: Sequence[ScoreResult | None],
    total_questions: int | None = None,
) -> QuizScore:
    """Overall quiz score: mean over all questions, unanswered ones scoring 0.

    Args:
        results: One entry per question; None for an unanswered question.
        total_questions: Number of questions in the quiz. Defaults to
            ``len(results)``.

    Returns:
        QuizScore with the rounded mean and the number of correct answers.
    """
    total = total_questions if total_questions is not None else len(results)
    answered = [r for r in results if r is not None]
    if not answered or total <= 0:
        return QuizScore(final_score=0, correct_count=0)

    return QuizScore(
        final_score=round_half_up(sum(r.score for r in answered) / total),
        correct_count=sum(1 for r in answered if r.is_correct),
    )
