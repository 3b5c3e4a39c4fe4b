"""Composite score calibration: weights, penalties and difficulty."""

import math

from dictation_scorer.models.scoring import AnalysisResult, ScoringConfig


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves rounded up."""
    return math.floor(value + 0.5)


def clamp_score(value: float) -> int:
    """Clamp to [0, 100] and round to an integer."""
    return round_half_up(max(0.0, min(100.0, value)))


def apply_difficulty_adjustment(
    score: float, difficulty: str | None, config: ScoringConfig
) -> float:
    """Scale a raw score by the configured multiplier for ``difficulty``.

    Unrecognised difficulties leave the score unchanged.
    """
    return score * config.multiplier_for(difficulty)


def calibrate_composite_score(
    analysis: AnalysisResult,
    config: ScoringConfig,
    difficulty: str | None = "medium",
) -> int:
    """Blend the analysis into a final 0-100 score.

    Args:
        analysis: Full word-level analysis.
        config: Scoring configuration providing weights and switches.
        difficulty: Question difficulty label.

    Returns:
        Final integer score.
    """
    total = analysis.total_words
    if total == 0:
        # Empty reference: every learner word is extra
        return 0

    base = analysis.exact_matches / total * 100

    if config.allow_partial_credit and analysis.partial_matches > 0:
        base += analysis.partial_matches / total * 100 * config.partial_credit_ratio

    # Order bonus, at most order_bonus_points
    order_ratio = analysis.word_order_score / 100
    base += order_ratio * config.word_order_importance * config.order_bonus_points

    weight = config.completeness_weight
    base = base * (1 - weight) + analysis.completeness_score * weight

    if config.strict_punctuation:
        weight = config.punctuation_weight
        base = base * (1 - weight) + analysis.punctuation_score * weight

    if config.penalize_extra_words and analysis.extra_words:
        base -= len(analysis.extra_words) / total * config.extra_word_penalty

    if config.penalize_missing_words and analysis.missing_words:
        base -= len(analysis.missing_words) / total * config.missing_word_penalty

    base = apply_difficulty_adjustment(base, difficulty, config)

    return clamp_score(base)
