"""Tests for settings loading and engine construction."""

import pytest

from dictation_scorer.assessment.context import ContextAwareScorer
from dictation_scorer.config import Settings, build_context_scorer, build_engine, get_settings
from dictation_scorer.models.scoring import ScoringConfig, ScoringConfigError

SETTINGS_YAML = """\
logging:
  level: DEBUG
  format: json

scoring:
  default_difficulty: hard
  context_aware: false
  spellingTolerance: 0.3
  strictPunctuation: true
"""


class TestSettings:
    def test_defaults_without_yaml(self, project_root):
        settings = Settings()
        assert settings.log_level == "INFO"
        assert settings.log_format == "console"
        assert settings.default_difficulty == "medium"
        assert settings.context_aware is True
        assert settings.scoring == {}
        assert settings.scoring_config() == ScoringConfig()

    def test_yaml_file(self, write_settings):
        write_settings(SETTINGS_YAML)
        settings = Settings()
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
        assert settings.default_difficulty == "hard"
        assert settings.context_aware is False
        assert settings.scoring == {"spellingTolerance": 0.3, "strictPunctuation": True}

        config = settings.scoring_config()
        assert config.spelling_tolerance == 0.3
        assert config.strict_punctuation

    def test_env_overrides_yaml(self, write_settings, monkeypatch):
        write_settings(SETTINGS_YAML)
        monkeypatch.setenv("DICTATION_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("DICTATION_DEFAULT_DIFFICULTY", "easy")
        settings = Settings()
        assert settings.log_level == "WARNING"
        assert settings.default_difficulty == "easy"

    def test_init_overrides_env(self, project_root, monkeypatch):
        monkeypatch.setenv("DICTATION_DEFAULT_DIFFICULTY", "easy")
        assert Settings(default_difficulty="hard").default_difficulty == "hard"

    def test_invalid_scoring_options(self, project_root):
        settings = Settings(scoring={"spellingTolerance": 5})
        with pytest.raises(ScoringConfigError):
            settings.scoring_config()

    def test_empty_yaml_sections(self, write_settings):
        write_settings("logging:\nscoring:\n")
        settings = Settings()
        assert settings.log_level == "INFO"
        assert settings.scoring == {}

    def test_get_settings_is_cached(self, project_root):
        assert get_settings() is get_settings()


class TestBuilders:
    def test_build_engine_from_settings(self, project_root):
        engine = build_engine(Settings(scoring={"spellingTolerance": 0.25}))
        assert engine.config.spelling_tolerance == 0.25

    def test_overrides_win(self, project_root):
        settings = Settings(scoring={"spellingTolerance": 0.25})
        engine = build_engine(settings, {"spellingTolerance": 0.1, "caseSensitive": True})
        assert engine.config.spelling_tolerance == 0.1
        assert engine.config.case_sensitive

    def test_invalid_override(self, project_root):
        with pytest.raises(ScoringConfigError):
            build_engine(Settings(), {"wordOrderImportance": 3})

    def test_build_engine_uses_yaml(self, write_settings):
        write_settings(SETTINGS_YAML)
        engine = build_engine()
        assert engine.config.strict_punctuation

    def test_build_context_scorer(self, project_root):
        scorer = build_context_scorer(Settings(context_aware=False))
        assert isinstance(scorer, ContextAwareScorer)
        assert scorer.context_aware is False
