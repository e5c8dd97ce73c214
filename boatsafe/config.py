"""Configuration management for the BoatSafe dashboard."""

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

DISCUSSION_PROXY_PATH = "/.netlify/functions/forecast-discussion"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Site / discussion source
    site_origin: str = Field(default="http://localhost:8000")
    discussion_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DISCUSSION_URL", "FORECAST_DISCUSSION_URL"),
        description="Full URL of the forecast discussion proxy; derived from "
        "site_origin when unset",
    )
    default_office: str = Field(default="AJK")
    discussion_cache_ttl: int = Field(default=30)
    drop_stale_discussions: bool = Field(
        default=True,
        description="Discard responses from superseded discussion loads",
    )
    display_timezone: str = Field(default="America/Anchorage")

    # HTTP Client Defaults
    http_timeout_seconds: float = Field(default=15.0)
    http_retries: int = Field(default=3)
    http_backoff: float = Field(default=0.5)

    # Production Settings
    environment: str = Field(default="development")  # development, staging, production

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False, description="Emit logs as JSON lines")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment.lower() == "production"

    def resolve_discussion_url(self, origin: Optional[str] = None) -> str:
        """Return the discussion endpoint for the given site origin."""
        if self.discussion_url:
            return self.discussion_url
        base = (origin or self.site_origin).rstrip("/")
        return f"{base}{DISCUSSION_PROXY_PATH}"


# Global settings instance
settings = Settings()
