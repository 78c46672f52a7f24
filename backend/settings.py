"""
Centralized settings configuration using Pydantic BaseSettings.

All environment variables are defined here with types, defaults, and validation.
Use get_settings() for dependency injection compatibility in FastAPI.

Usage:
    from backend.settings import get_settings, Settings

    # In FastAPI endpoints (dependency injection)
    @app.get("/")
    def read_root(settings: Settings = Depends(get_settings)):
        return {"environment": settings.environment}

    # Direct access (module-level)
    settings = get_settings()
    print(settings.mapper_api_url)
"""

from functools import lru_cache
from typing import Optional

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

    # -------------------------------------------------------------------------
    # Core Environment
    # -------------------------------------------------------------------------
    environment: str = Field(
        default="development",
        description="Runtime environment: development, staging, production",
    )

    port: int = Field(
        default=8001,
        description="Port for `python -m backend`",
    )
    cors_allowed_origins: str = Field(
        default="",
        description="Comma-separated extra CORS origins",
    )

    @property
    def cors_allowed_origins_list(self) -> list[str]:
        """Parse extra CORS origins into a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]

    # -------------------------------------------------------------------------
    # External Services - Mapping / Validation
    # -------------------------------------------------------------------------
    mapper_api_url: str = Field(
        default="http://mapper-api:8001",
        description="Base URL of the exercise mapping/validation service",
    )
    validation_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout for re-validation requests",
    )

    # -------------------------------------------------------------------------
    # Reconciliation / Export
    # -------------------------------------------------------------------------
    applied_mapping_confidence: float = Field(
        default=0.95,
        ge=0,
        le=1,
        description="Confidence assigned to user-applied or confirmed mappings",
    )
    traceable_devices: str = Field(
        default="garmin",
        description="Comma-separated device ids whose exports keep original names in notes",
    )

    @property
    def traceable_devices_list(self) -> list[str]:
        """Parse traceable devices into a list."""
        return [d.strip().lower() for d in self.traceable_devices.split(",") if d.strip()]

    # -------------------------------------------------------------------------
    # Observability - Sentry
    # -------------------------------------------------------------------------
    sentry_dsn: Optional[str] = Field(
        default=None,
        description="Sentry DSN for error tracking",
    )

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is a valid value."""
        valid_environments = {"development", "staging", "production", "test"}
        if v.lower() not in valid_environments:
            raise ValueError(
                f"Invalid environment '{v}'. Must be one of: {valid_environments}"
            )
        return v.lower()

    # -------------------------------------------------------------------------
    # Helper Properties
    # -------------------------------------------------------------------------
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    For testing, you can clear the cache with get_settings.cache_clear().

    Returns:
        Settings: Application settings instance
    """
    return Settings()
