"""Aggregate models derived from a series of score results."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ScoreTrend(StrEnum):
    """Direction of a learner's scores over time."""

    IMPROVING = "improving"
    DECLINING = "declining"
    STABLE = "stable"
    INSUFFICIENT_DATA = "insufficient_data"


# Bucket label -> inclusive lower bound, highest first
DISTRIBUTION_BUCKETS: list[tuple[str, int]] = [
    ("90-100", 90),
    ("80-89", 80),
    ("70-79", 70),
    ("60-69", 60),
    ("0-59", 0),
]


class ScoreStatistics(BaseModel):
    """Summary of a batch of scored answers."""

    model_config = ConfigDict(frozen=True)

    total_questions: int
    correct_answers: int
    accuracy: int
    average_score: int
    highest_score: int
    lowest_score: int
    score_distribution: dict[str, int] = Field(default_factory=dict)


class ScoreComparison(BaseModel):
    """Difference between two attempts."""

    model_config = ConfigDict(frozen=True)

    score_difference: int
    accuracy_changed: bool
    improved: bool


class StreakSummary(BaseModel):
    """Longest and current runs of correct and incorrect answers."""

    model_config = ConfigDict(frozen=True)

    max_correct_streak: int = 0
    max_incorrect_streak: int = 0
    current_correct_streak: int = 0
    current_incorrect_streak: int = 0


class HistoryAnalysis(BaseModel):
    """Trend analysis over a learner's score history."""

    model_config = ConfigDict(frozen=True)

    average_score: float
    trend: ScoreTrend
    consistency: float
    improvement: int
    streaks: StreakSummary


class SettingSuggestion(BaseModel):
    """A recommended scoring option change."""

    model_config = ConfigDict(frozen=True)

    setting: str
    value: Any
    reason: str


class PerformanceMetrics(BaseModel):
    model_config = ConfigDict(frozen=True)

    accuracy: float = 0.0
    efficiency: float = 0.0
    consistency: float = 0.0
    improvement: int = 0


class QuizScore(BaseModel):
    """Final result of a whole dictation quiz."""

    model_config = ConfigDict(frozen=True)

    final_score: int
    correct_count: int
