"""Unit tests for envie.config."""

import pytest
from pydantic import ValidationError

from envie.config import Settings, get_settings


def _settings(**kwargs) -> Settings:
    return Settings(**kwargs)


# --- Settings ---

class TestSettings:
    def test_defaults(self):
        s = _settings()
        assert s.env_filename == ".env"
        assert s.encoding == "utf-8"
        assert s.file_mode == 0o600
        assert s.strict_parsing is False
        assert s.persist_environment is False

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("ENVIE_ENV_FILENAME", "local.env")
        monkeypatch.setenv("ENVIE_STRICT_PARSING", "true")
        monkeypatch.setenv("ENVIE_FILE_MODE", "416")
        s = _settings()
        assert s.env_filename == "local.env"
        assert s.strict_parsing is True
        assert s.file_mode == 0o640

    def test_rejects_out_of_range_mode(self):
        with pytest.raises(ValidationError):
            _settings(file_mode=0o1000)

    def test_rejects_empty_filename(self):
        with pytest.raises(ValidationError):
            _settings(env_filename="")


# --- get_settings ---

class TestGetSettings:
    def test_cached(self):
        assert get_settings() is get_settings()

    def test_cache_clear_rereads_environment(self, monkeypatch):
        get_settings()
        monkeypatch.setenv("ENVIE_PERSIST_ENVIRONMENT", "1")
        assert get_settings().persist_environment is False
        get_settings.cache_clear()
        assert get_settings().persist_environment is True
