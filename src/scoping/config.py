"""
Application configuration with environment-driven settings.
"""

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "dashboard-scoping-survey"
    app_env: Literal["dev", "qa", "uat", "prod"] = "dev"
    debug: bool = False
    log_level: str = "INFO"
    api_prefix: str = Field(
        default="",
        description="Optional path prefix mounted in front of every route",
    )

    # CORS
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins",
    )

    # Resend (transactional email provider)
    resend_api_key: str | None = Field(
        default=None,
        description="Resend API key, expected to start with 're_'",
    )
    resend_from_email: str | None = Field(
        default=None,
        description="Sender address; falls back to the onboarding address when unset or malformed",
    )
    resend_from_name: str | None = Field(
        default=None,
        description="Sender display name",
    )
    resend_base_url: str = Field(
        default="https://api.resend.com",
        description="Resend API base URL",
    )
    email_timeout_seconds: float = Field(default=30.0, gt=0)

    # Notification routing
    admin_email: str = Field(
        default="anthony.osborn@cobry.co.uk",
        description="Fixed recipient of every submission notification",
    )
    user_copy_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Pause before the submitter copy to respect the provider rate limit",
    )

    # Storage
    store_backend: Literal["database", "memory"] = "database"
    database_url: str = Field(
        default="sqlite+aiosqlite:///./scoping_submissions.db",
        description=(
            "SQLAlchemy async database URL for the key-value store; "
            "postgresql+asyncpg:// URLs need the postgres extra"
        ),
    )

    @field_validator("api_prefix", mode="before")
    @classmethod
    def normalize_prefix(cls, v: str | None) -> str:
        """Ensure the prefix is either empty or '/segment' without trailing slash."""
        if not v:
            return ""
        v = "/" + v.strip().strip("/")
        return "" if v == "/" else v

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def _get_settings_cached() -> Settings:
    return Settings()


def get_settings() -> Settings:
    # Under pytest the environment changes between tests, so never hand back
    # a frozen instance there.
    if os.environ.get("PYTEST_CURRENT_TEST"):
        return Settings()
    return _get_settings_cached()
