"""12-factor configuration adapter using environment variables."""

import logging
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from client_ip_demo.domain.models import AccessPolicy

DEFAULT_ALLOWED_IPS = "127.0.0.1,::1,IP not available"
DEFAULT_ALLOWED_COUNTRIES = "US,CA,AU"


def parse_csv_list(value: str) -> tuple[str, ...]:
    """Split a comma-separated list, trimming entries and dropping empty ones."""
    return tuple(item.strip() for item in value.split(",") if item.strip())


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Host to bind the server to")
    port: int = Field(default=8000, description="Port to bind the server to")
    proxy_headers: bool = Field(
        default=False,
        description="Trust X-Forwarded-For/X-Forwarded-Proto when populating the client address",
    )
    forwarded_allow_ips: str = Field(
        default="127.0.0.1",
        description="Comma-separated proxy addresses whose X-Forwarded-* headers are trusted",
    )
    log_level: str = Field(default="info", description="Log level for the application and uvicorn")

    # Access control configuration
    # Comma-separated lists; kept as raw strings so plain "a,b" env values are accepted
    allowed_ips: str = Field(
        default=DEFAULT_ALLOWED_IPS,
        description="Comma-separated IP literals admitted to the protected route",
    )
    allowed_countries: str = Field(
        default=DEFAULT_ALLOWED_COUNTRIES,
        description="Comma-separated country codes admitted to the protected route",
    )

    # Rate limiting configuration
    rate_limit_per_minute: int = Field(
        default=0,
        description="Maximum number of requests allowed per IP address per minute (0 disables)",
    )

    @field_validator("allowed_ips")
    @classmethod
    def default_blank_allowed_ips(cls, v: str) -> str:
        """Fall back to the default IP allow-list when the value is blank."""
        return v if v.strip() else DEFAULT_ALLOWED_IPS

    @field_validator("allowed_countries")
    @classmethod
    def default_blank_allowed_countries(cls, v: str) -> str:
        """Fall back to the default country allow-list when the value is blank."""
        return v if v.strip() else DEFAULT_ALLOWED_COUNTRIES

    @field_validator("rate_limit_per_minute")
    @classmethod
    def validate_rate_limit(cls, v: int) -> int:
        """Validate the rate limit is not negative."""
        if v < 0:
            raise ValueError("rate_limit_per_minute must be zero or positive")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one the logging module knows."""
        if not isinstance(logging.getLevelName(v.upper()), int):
            raise ValueError(f"log_level must be a logging level name, got {v!r}")
        return v.lower()

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Create a config that ignores any ``.env`` file, with explicit overrides."""
        return cls(_env_file=None, **overrides)

    def to_access_policy(self) -> AccessPolicy:
        """Build the immutable access policy from the configured allow-lists."""
        return AccessPolicy(
            allowed_ips=parse_csv_list(self.allowed_ips),
            allowed_countries=parse_csv_list(self.allowed_countries),
        )
