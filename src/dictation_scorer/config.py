"""Application configuration using pydantic-settings."""

import functools
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from dictation_scorer.assessment.context import ContextAwareScorer
from dictation_scorer.assessment.engine import ScoringEngine
from dictation_scorer.models.scoring import ScoringConfig


def _find_project_root() -> Path:
    """Find project root by locating pyproject.toml."""
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return Path.cwd()


class YamlSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from config/settings.yaml."""

    def get_field_value(self, field_name: str) -> tuple[Any, str, bool]:
        """Not used - we implement __call__ instead."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load settings from YAML file."""
        yaml_path = _find_project_root() / "config" / "settings.yaml"
        if not yaml_path.exists():
            return {}

        with open(yaml_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        # Flatten nested structure to match Settings field names
        flattened: dict[str, Any] = {}
        logging_section = data.get("logging") or {}
        flattened["log_level"] = logging_section.get("level")
        flattened["log_format"] = logging_section.get("format")

        if data.get("scoring"):
            scoring = dict(data["scoring"])
            flattened["default_difficulty"] = scoring.pop("default_difficulty", None)
            flattened["context_aware"] = scoring.pop("context_aware", None)
            flattened["scoring"] = scoring or None

        return {k: v for k, v in flattened.items() if v is not None}


class Settings(BaseSettings):
    """Application settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_prefix="DICTATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: Literal["console", "json"] = Field(default="console")

    # Scoring
    default_difficulty: str = Field(default="medium")
    context_aware: bool = Field(default=True)
    scoring: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customise settings sources to include YAML file.

        Priority order (highest to lowest):
        1. init_settings (arguments passed to Settings())
        2. env_settings (environment variables)
        3. dotenv_settings (.env file)
        4. YamlSettingsSource (settings.yaml)
        5. file_secret_settings
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlSettingsSource(settings_cls),
            file_secret_settings,
        )

    def scoring_config(self) -> ScoringConfig:
        """Validated scoring configuration from the ``scoring`` option map.

        Raises:
            ScoringConfigError: If an option is unknown or out of range.
        """
        return ScoringConfig.from_options(self.scoring)


@functools.lru_cache
def get_settings() -> Settings:
    """Get application settings singleton."""
    return Settings()


def build_engine(
    settings: Settings | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ScoringEngine:
    """Construct a scoring engine from settings, with optional option overrides."""
    settings = settings or get_settings()
    engine = ScoringEngine(settings.scoring_config())
    if overrides:
        engine = engine.with_options(**overrides)
    return engine


def build_context_scorer(
    settings: Settings | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> ContextAwareScorer:
    """Construct a context-aware scorer from settings."""
    settings = settings or get_settings()
    return ContextAwareScorer(
        build_engine(settings, overrides), context_aware=settings.context_aware
    )
