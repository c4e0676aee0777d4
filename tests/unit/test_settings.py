"""Tests for settings loading and environment validation"""

import logging

import pytest

from openapi_mcp.config import Settings, get_settings, validate_environment


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reload settings for every test"""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestSettings:
    """Tests for Settings class"""

    def test_defaults(self) -> None:
        """Test defaults without environment configuration"""
        settings = Settings(_env_file=None)
        assert settings.auth_type == "none"
        assert settings.http_timeout == 30.0
        assert settings.schema_max_depth == 32
        assert settings.oauth1_signature_method == "HMAC-SHA1"

    def test_only_consumed_fields_are_declared(self) -> None:
        """Test settings carry no informational fields nothing reads"""
        assert "environment" not in Settings.model_fields
        assert "log_level" not in Settings.model_fields

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test values come from environment variables, case-insensitively"""
        monkeypatch.setenv("AUTH_TYPE", "oauth2")
        monkeypatch.setenv("oauth2_token_url", "https://auth.example.com/token")
        monkeypatch.setenv("HTTP_TIMEOUT", "5")

        settings = Settings(_env_file=None)

        assert settings.auth_type == "oauth2"
        assert settings.oauth2_token_url == "https://auth.example.com/token"
        assert settings.http_timeout == 5.0

    def test_get_settings_is_cached(self) -> None:
        """Test the same instance is returned until the cache is cleared"""
        assert get_settings() is get_settings()


class TestValidateEnvironment:
    """Tests for validate_environment function"""

    def test_warns_about_missing_values(self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
        """Test missing OAuth settings are reported"""
        monkeypatch.delenv("TESTING", raising=False)
        monkeypatch.setenv("AUTH_TYPE", "oauth1")
        monkeypatch.setenv("OAUTH_CLIENT_ID", "key")

        with caplog.at_level(logging.WARNING):
            validate_environment()

        assert "OAUTH_CLIENT_SECRET" in caplog.text
        assert "OAUTH1_REQUEST_TOKEN_URL" in caplog.text
        assert "OAUTH1_ACCESS_TOKEN_URL" in caplog.text
        assert "OAUTH_CLIENT_ID" not in caplog.text.replace("OAUTH_CLIENT_SECRET", "")

    def test_skipped_in_test_mode(self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture) -> None:
        """Test validation is skipped when TESTING is set"""
        monkeypatch.setenv("TESTING", "true")
        monkeypatch.setenv("AUTH_TYPE", "oauth2")

        with caplog.at_level(logging.WARNING):
            validate_environment()

        assert caplog.text == ""
