"""Tests for settings loading and validation."""

import pytest
from pydantic import ValidationError

from rag_support.config import ConfigurationMissing, Settings


def test_defaults(monkeypatch):
    monkeypatch.delenv("TAVILY_API_KEY", raising=False)

    settings = Settings(_env_file=None)

    assert settings.tavily_api_key == ""
    assert settings.rate_limit_anonymous_daily == 3
    assert settings.rate_limit_authenticated_daily == 5
    assert settings.max_rag_header_chars == 6000
    assert settings.search_timeout == 30.0


def test_loads_from_environment(monkeypatch):
    monkeypatch.setenv("TAVILY_API_KEY", "tvly-env")
    monkeypatch.setenv("RATE_LIMIT_AUTHENTICATED_DAILY", "12")

    settings = Settings(_env_file=None)

    assert settings.tavily_api_key == "tvly-env"
    assert settings.rate_limit_authenticated_daily == 12


def test_loads_from_env_file(tmp_path, monkeypatch):
    monkeypatch.delenv("TAVILY_API_KEY", raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("TAVILY_API_KEY=tvly-file\nMAX_RAG_HEADER_CHARS=2048\n")

    settings = Settings(_env_file=env_file)

    assert settings.tavily_api_key == "tvly-file"
    assert settings.max_rag_header_chars == 2048


def test_rate_limit_must_be_positive():
    with pytest.raises(ValidationError):
        Settings(_env_file=None, rate_limit_anonymous_daily=0)


def test_validate_required_reports_missing_key(unconfigured_settings: Settings):
    with pytest.raises(ConfigurationMissing) as exc_info:
        unconfigured_settings.validate_required()

    assert exc_info.value.missing_fields == ["tavily_api_key"]


def test_validate_required_passes(settings: Settings):
    settings.validate_required()
