"""Shared fixtures."""

from pathlib import Path

import pytest
import structlog

from dictation_scorer import config as config_module

ENV_VARS = (
    "DICTATION_LOG_LEVEL",
    "DICTATION_LOG_FORMAT",
    "DICTATION_DEFAULT_DIFFICULTY",
    "DICTATION_CONTEXT_AWARE",
    "DICTATION_SCORING",
    "ENV",
)


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """An empty project root: no settings.yaml, no .env, no DICTATION_ env vars."""
    monkeypatch.setattr(config_module, "_find_project_root", lambda: tmp_path)
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config_module.get_settings.cache_clear()
    yield tmp_path
    config_module.get_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def write_settings(project_root: Path):
    """Write config/settings.yaml under the isolated project root."""

    def _write(text: str) -> Path:
        path = project_root / "config" / "settings.yaml"
        path.parent.mkdir(exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
