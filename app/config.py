# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# Loads configuration from environment variables (and an optional .env file)
# using pydantic-settings.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()
# =============================================================================

from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Only the port and the shared API secret matter for normal operation; the
    environment controls whether stack traces are echoed in error responses.
    """

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    # Unset means every mutating route answers 401
    API_KEY: Optional[str] = Field(
        default=None,
        description="Shared secret expected in the X-API-Key header"
    )

    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    # -------------------------------------------------------------------------
    # Application
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment; anything but production echoes stack traces"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable verbose logging"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def api_key_configured(self) -> bool:
        return bool(self.API_KEY)


@lru_cache
def get_settings() -> Settings:
    """Parse the environment once per process."""
    return Settings()
