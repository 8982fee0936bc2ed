"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from environment
variables (and an optional ``.env`` file in the working directory).

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic
- Session policy values here are the tenant defaults; per-tenant rows in the
  session store override them

Usage:
    from src.core.config import settings

    # Access config
    db_url = settings.database_url
    idle = settings.session_max_idle_minutes

    # Environment detection
    if settings.is_development:
        # Dev-specific behavior
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.core.enums import Environment

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Main application settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. ``.env`` file (if present)
        3. Default values

    Returns:
        Settings: Application configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    log_json: bool = Field(
        default=False,
        description="Render log lines as JSON instead of console output",
    )

    # Database
    database_url: str = Field(
        default="sqlite+aiosqlite:///./sessions.db",
        description="Async SQLAlchemy database URL",
    )
    db_echo: bool = Field(
        default=False,
        description="Echo SQL statements (development only)",
    )

    # Session store
    session_store: Literal["database", "memory"] = Field(
        default="database",
        description="Session store backend (database or in-process memory)",
    )
    session_gateway_timeout_seconds: float = Field(
        default=5.0,
        description="Upper bound on every session store call",
    )

    # Default session policy (used when a tenant has no policy of its own)
    session_max_concurrent_per_device: int = Field(
        default=1,
        description="Active sessions allowed per user, tenant and device",
    )
    session_max_concurrent_total: int | None = Field(
        default=None,
        description="Active sessions allowed per user and tenant (unset = unlimited)",
    )
    session_max_idle_minutes: int = Field(
        default=30,
        description="Minutes of inactivity before a session expires",
    )
    session_max_hours: int = Field(
        default=8,
        description="Absolute session lifetime in hours",
    )
    revocation_reason_max_length: int = Field(
        default=200,
        description="Maximum length of a revocation reason",
    )

    # Notifications
    notifier_timeout_seconds: float = Field(
        default=2.0,
        description="Upper bound on each audit/alert notification",
    )

    # Client context
    geoip_db_path: str | None = Field(
        default=None,
        description="Path to a GeoLite2-City database (unset disables lookups)",
    )
    geolocation_timeout_seconds: float = Field(
        default=1.0,
        description="Upper bound on a geolocation lookup",
    )
    trust_forwarded_ip: bool = Field(
        default=False,
        description="Use X-Forwarded-For for the client IP (behind a trusted proxy)",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Normalize and validate the log level name.

        Args:
            v: Log level name.

        Returns:
            str: Upper-cased log level.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = v.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level

    @field_validator(
        "session_max_concurrent_per_device",
        "session_max_idle_minutes",
        "session_max_hours",
        "revocation_reason_max_length",
    )
    @classmethod
    def validate_positive_int(cls, v: int) -> int:
        """Reject zero or negative limits."""
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("session_max_concurrent_total")
    @classmethod
    def validate_total_cap(cls, v: int | None) -> int | None:
        """Reject a zero or negative total cap (None means unlimited)."""
        if v is not None and v <= 0:
            raise ValueError("must be positive when set")
        return v

    @field_validator(
        "session_gateway_timeout_seconds",
        "notifier_timeout_seconds",
        "geolocation_timeout_seconds",
    )
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Reject non-positive timeouts."""
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """
        Check if running in testing environment.

        Returns:
            bool: True if environment is TESTING, False otherwise.
        """
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()


# Global settings instance (singleton pattern)
settings = get_settings()
