"""Smoke tests for Pydantic models."""

from datetime import datetime

import pytest
from pydantic import ValidationError

from dictation_scorer.models.scoring import (
    AnalysisResult,
    Difficulty,
    ScoreResult,
    ScoringConfig,
    ScoringContext,
)
from dictation_scorer.models.statistics import QuizScore, ScoreTrend


class TestScoringConfig:
    def test_default_values(self):
        config = ScoringConfig()
        assert config.case_sensitive is False
        assert config.strict_punctuation is False
        assert config.allow_partial_credit is True
        assert config.penalize_extra_words is True
        assert config.penalize_missing_words is True
        assert config.word_order_importance == 0.8
        assert config.punctuation_weight == 0.1
        assert config.spelling_tolerance == 0.15
        assert config.difficulty_multipliers == {"easy": 1.05, "medium": 1.0, "hard": 0.95}

    def test_camel_case_dump(self):
        data = ScoringConfig().model_dump(by_alias=True)
        assert data["spellingTolerance"] == 0.15
        assert "caseSensitive" in data

    def test_frozen(self):
        config = ScoringConfig()
        with pytest.raises(ValidationError):
            config.case_sensitive = True

    def test_rejects_non_positive_multiplier(self):
        with pytest.raises(ValidationError):
            ScoringConfig(difficulty_multipliers={"hard": 0})

    def test_multipliers_read_only(self):
        config = ScoringConfig(difficulty_multipliers={"easy": 1.2})
        with pytest.raises(TypeError):
            config.difficulty_multipliers["easy"] = 0.1  # type: ignore[index]
        assert config.multiplier_for("easy") == 1.2

    def test_multipliers_dump_round_trip(self):
        config = ScoringConfig(difficulty_multipliers={"easy": 1.2})
        data = config.model_dump(by_alias=True)
        assert data["difficultyMultipliers"] == {"easy": 1.2}
        assert type(data["difficultyMultipliers"]) is dict
        assert ScoringConfig.model_validate(data) == config
        assert config.merged({"spellingTolerance": 0.2}).difficulty_multipliers == {"easy": 1.2}

    def test_multiplier_for(self):
        config = ScoringConfig()
        assert config.multiplier_for(Difficulty.EASY) == 1.05
        assert config.multiplier_for("unknown") == 1.0
        assert config.multiplier_for(None) == 1.0


class TestScoreResult:
    def test_default_instantiation(self):
        result = ScoreResult(score=80, is_correct=False, feedback="Well done!")
        assert isinstance(result.timestamp, datetime)
        assert result.analysis is None
        assert result.error is None
        assert result.context_bonus == 0

    def test_score_bounds(self):
        with pytest.raises(ValidationError):
            ScoreResult(score=101, is_correct=True, feedback="")
        with pytest.raises(ValidationError):
            ScoreResult(score=-1, is_correct=False, feedback="")

    def test_json_dump(self):
        result = ScoreResult(
            score=100,
            is_correct=True,
            feedback="Perfect answer!",
            analysis=AnalysisResult(correct_words=("hi",), total_words=1),
        )
        data = result.model_dump(mode="json")
        assert data["analysis"]["correct_words"] == ["hi"]
        assert isinstance(data["timestamp"], str)


class TestScoringContext:
    def test_defaults(self):
        context = ScoringContext()
        assert context.difficulty == "medium"
        assert context.previous_scores == ()
        assert context.question_index == 0

    def test_camel_case_input(self):
        context = ScoringContext.model_validate(
            {"previousScores": [70, 80], "questionIndex": 3, "totalQuestions": 5}
        )
        assert context.previous_scores == (70, 80)
        assert context.total_questions == 5


class TestEnums:
    def test_values(self):
        assert Difficulty.HARD == "hard"
        assert ScoreTrend.INSUFFICIENT_DATA == "insufficient_data"

    def test_quiz_score(self):
        assert QuizScore(final_score=90, correct_count=3).model_dump() == {
            "final_score": 90,
            "correct_count": 3,
        }
