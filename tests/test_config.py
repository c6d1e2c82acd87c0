"""Test configuration and settings."""

import pytest
from pydantic import ValidationError

from binance_relay.core.config import Settings


class TestSettings:
    """Test configuration settings."""

    def test_default_settings(self):
        """Test that default settings are loaded correctly."""
        settings = Settings()

        assert settings.HOST == "0.0.0.0"
        assert settings.PORT == 3000
        assert settings.DEBUG is False
        assert settings.LOG_LEVEL == "INFO"
        assert settings.LOG_FORMAT == "json"
        assert settings.UPSTREAM_BASE_URL == "https://api.binance.com"
        assert settings.UPSTREAM_API_KEY_HEADER == "X-MBX-APIKEY"
        assert settings.UPSTREAM_USER_AGENT == "BinanceProxy/1.0"
        assert settings.cors_origins == [
            "http://localhost:5173",
            "https://invest.zionenterprise.com.co",
        ]

    def test_settings_from_env(self, monkeypatch):
        """Test that settings can be loaded from environment variables."""
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("CORS_ORIGINS", '["https://app.example.com"]')
        monkeypatch.setenv("UPSTREAM_TIMEOUT", "2.5")

        settings = Settings()

        assert settings.PORT == 9000
        assert settings.DEBUG is True
        assert settings.cors_origins == ["https://app.example.com"]
        assert settings.UPSTREAM_TIMEOUT == 2.5

    def test_log_level_is_normalized(self):
        assert Settings(LOG_LEVEL="debug").LOG_LEVEL == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError, match="Log level must be one of"):
            Settings(LOG_LEVEL="verbose")

    def test_invalid_log_format_rejected(self):
        with pytest.raises(ValidationError, match="Log format must be one of"):
            Settings(LOG_FORMAT="xml")

    def test_upstream_base_url_trailing_slash_stripped(self):
        settings = Settings(UPSTREAM_BASE_URL="https://testnet.binance.vision/")

        assert settings.UPSTREAM_BASE_URL == "https://testnet.binance.vision"
