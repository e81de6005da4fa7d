"""Tests for the environment configuration."""

import pytest

from src.real_estate_catalog.core.config import Settings
from src.real_estate_catalog.core.exceptions import ConfigurationError


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("DATABASE_URL", "PORT", "APP_ENV", "API_BASE_URL", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    """Tests for Settings.from_env."""

    def test_defaults(self, clean_env) -> None:
        settings = Settings.from_env()

        assert settings.database_url == "sqlite:///./real_estate.db"
        assert settings.port == 7000
        assert settings.app_env == "development"
        assert settings.api_base_url == "http://localhost:7000/api"
        assert settings.log_level == "INFO"
        assert settings.serve_client is False

    def test_custom_values(self, clean_env) -> None:
        clean_env.setenv("DATABASE_URL", "postgresql://user:pass@db:5432/estate")
        clean_env.setenv("PORT", "8080")
        clean_env.setenv("APP_ENV", "Production")
        clean_env.setenv("LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.database_url == "postgresql://user:pass@db:5432/estate"
        assert settings.port == 8080
        assert settings.api_base_url == "http://localhost:8080/api"
        assert settings.log_level == "DEBUG"
        assert settings.serve_client is True

    def test_invalid_port(self, clean_env) -> None:
        clean_env.setenv("PORT", "seven thousand")

        with pytest.raises(ConfigurationError, match="PORT"):
            Settings.from_env()

    def test_unknown_environment(self, clean_env) -> None:
        clean_env.setenv("APP_ENV", "staging")

        with pytest.raises(ConfigurationError, match="APP_ENV"):
            Settings.from_env()
