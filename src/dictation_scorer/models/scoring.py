"""Scoring configuration and result models."""

from collections.abc import Mapping
from datetime import datetime
from enum import StrEnum
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)
from pydantic.alias_generators import to_camel


class ScoringConfigError(ValueError):
    """Raised when a scoring configuration is rejected."""


class Difficulty(StrEnum):
    """Question difficulty levels recognised by the difficulty adjustment."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


DEFAULT_DIFFICULTY_MULTIPLIERS: MappingProxyType[str, float] = MappingProxyType({
    "easy": 1.05,
    "medium": 1.0,
    "hard": 0.95,
})


class ScoringConfig(BaseModel):
    """Immutable scoring options.

    Accepts the flat camelCase option keys (``caseSensitive``,
    ``spellingTolerance``, ...) as well as the snake_case field names.
    Unknown keys and out-of-range values are rejected.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    case_sensitive: bool = False
    strict_punctuation: bool = False
    allow_partial_credit: bool = True
    penalize_extra_words: bool = True
    penalize_missing_words: bool = True
    word_order_importance: float = Field(default=0.8, ge=0.0, le=1.0)
    punctuation_weight: float = Field(default=0.1, ge=0.0, le=1.0)
    spelling_tolerance: float = Field(default=0.15, ge=0.0, le=1.0)

    # Composite weights
    partial_credit_ratio: float = Field(default=0.5, ge=0.0, le=1.0)
    order_bonus_points: float = Field(default=10.0, ge=0.0)
    completeness_weight: float = Field(default=0.3, ge=0.0, le=1.0)
    extra_word_penalty: float = Field(default=10.0, ge=0.0)
    missing_word_penalty: float = Field(default=15.0, ge=0.0)
    tolerant_order_credit: float = Field(default=0.7, ge=0.0, le=1.0)
    # Read-only after validation
    difficulty_multipliers: Mapping[str, float] = Field(
        default_factory=lambda: dict(DEFAULT_DIFFICULTY_MULTIPLIERS),
        validate_default=True,
    )

    @field_validator("difficulty_multipliers")
    @classmethod
    def _check_multipliers(cls, value: Mapping[str, float]) -> Mapping[str, float]:
        for name, multiplier in value.items():
            if multiplier <= 0:
                raise ValueError(f"difficulty multiplier for {name!r} must be positive")
        return MappingProxyType(dict(value))

    @field_serializer("difficulty_multipliers")
    def _dump_multipliers(self, value: Mapping[str, float]) -> dict[str, float]:
        return dict(value)

    @classmethod
    def from_options(cls, options: Mapping[str, Any] | None = None) -> "ScoringConfig":
        """Overlay a partial option map onto the defaults.

        Raises:
            ScoringConfigError: If a key is unknown or a value is out of range.
        """
        try:
            return cls.model_validate(dict(options or {}))
        except ValidationError as e:
            raise ScoringConfigError(str(e)) from e

    def merged(self, changes: Mapping[str, Any]) -> "ScoringConfig":
        """Return a new configuration with ``changes`` applied on top of this one."""
        current = self.model_dump()
        try:
            return type(self).model_validate({**current, **_to_field_names(changes)})
        except ValidationError as e:
            raise ScoringConfigError(str(e)) from e

    def multiplier_for(self, difficulty: str | None) -> float:
        if difficulty is None:
            return 1.0
        return self.difficulty_multipliers.get(str(difficulty), 1.0)


def _to_field_names(options: Mapping[str, Any]) -> dict[str, Any]:
    aliases = {
        field.alias: name
        for name, field in ScoringConfig.model_fields.items()
        if field.alias
    }
    return {aliases.get(key, key): value for key, value in options.items()}


class MisspelledWord(BaseModel):
    """A reference word matched by a tolerant (near) match."""

    model_config = ConfigDict(frozen=True)

    correct: str
    user: str
    similarity: float


class AnalysisResult(BaseModel):
    """Word-level comparison of a learner answer against the reference."""

    model_config = ConfigDict(frozen=True)

    user_words: tuple[str, ...] = ()
    correct_words: tuple[str, ...] = ()
    total_words: int = 0
    user_word_count: int = 0
    exact_matches: int = 0
    partial_matches: int = 0
    missing_words: tuple[str, ...] = ()
    extra_words: tuple[str, ...] = ()
    misspelled_words: tuple[MisspelledWord, ...] = ()
    word_order_score: float = 0.0
    spelling_score: float = 0.0
    completeness_score: float = 0.0
    punctuation_score: float = 0.0


class ScoreResult(BaseModel):
    """Final outcome of scoring one answer."""

    model_config = ConfigDict(frozen=True)

    score: int = Field(ge=0, le=100)
    is_correct: bool
    feedback: str
    analysis: AnalysisResult | None = None
    timestamp: datetime = Field(default_factory=datetime.now)
    error: str | None = None
    context_bonus: int = 0


class ScoringContext(BaseModel):
    """Session history used by context-aware scoring."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    difficulty: str = Difficulty.MEDIUM
    previous_scores: tuple[int, ...] = ()
    question_index: int = 0
    total_questions: int = 0
