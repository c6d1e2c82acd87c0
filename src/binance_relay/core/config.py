"""Configuration management for the Binance relay."""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings for the relay server and its upstream."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Server configuration
    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=3000, description="Server port")
    DEBUG: bool = Field(default=False, description="Debug mode")

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Logging format: json or text")

    # Security settings
    CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "https://invest.zionenterprise.com.co",
        ],
        description="CORS allowed origins"
    )

    # Upstream exchange API
    UPSTREAM_BASE_URL: str = Field(
        default="https://api.binance.com",
        description="Base URL of the upstream REST API"
    )
    UPSTREAM_API_KEY_HEADER: str = Field(
        default="X-MBX-APIKEY",
        description="Header carrying the caller's API key upstream"
    )
    UPSTREAM_USER_AGENT: str = Field(default="BinanceProxy/1.0", description="User-Agent sent upstream")
    UPSTREAM_TIMEOUT: Optional[float] = Field(
        default=10.0,
        gt=0,
        description="Upstream call timeout in seconds (None disables it)"
    )

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level"""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()

    @field_validator('LOG_FORMAT')
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format"""
        valid_formats = ['json', 'text']
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of {valid_formats}")
        return v.lower()

    @field_validator('UPSTREAM_BASE_URL')
    @classmethod
    def strip_trailing_slash(cls, v):
        return v.rstrip('/')

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS allowed origins."""
        return self.CORS_ORIGINS


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings (for dependency injection)"""
    return settings
