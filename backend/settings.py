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
    print(settings.store_backend)
"""

import pathlib
from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from infrastructure.catalog import DEFAULT_CATALOG_PATH


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
    log_level: str = Field(
        default="INFO",
        description="Root logging level",
    )

    # -------------------------------------------------------------------------
    # Workout Store
    # -------------------------------------------------------------------------
    store_backend: Literal["file", "supabase"] = Field(
        default="file",
        description="Workout store adapter: local JSON file or Supabase",
    )
    data_dir: pathlib.Path = Field(
        default=pathlib.Path("data"),
        description="Directory holding workouts.json for the file store",
    )

    # -------------------------------------------------------------------------
    # Supabase Database
    # -------------------------------------------------------------------------
    supabase_url: Optional[str] = Field(
        default=None,
        description="Supabase project URL",
    )
    supabase_service_role_key: Optional[str] = Field(
        default=None,
        description="Supabase service role key (full access)",
    )
    supabase_anon_key: Optional[str] = Field(
        default=None,
        description="Supabase anonymous key (limited access)",
    )

    @property
    def supabase_key(self) -> Optional[str]:
        """Get the best available Supabase key (service role preferred)."""
        return self.supabase_service_role_key or self.supabase_anon_key

    # -------------------------------------------------------------------------
    # Exercise Catalog
    # -------------------------------------------------------------------------
    exercise_catalog_path: pathlib.Path = Field(
        default=DEFAULT_CATALOG_PATH,
        description="YAML exercise catalog loaded at startup",
    )

    # -------------------------------------------------------------------------
    # Session Core
    # -------------------------------------------------------------------------
    fast_tick_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Interval of the duration refresh tick",
    )
    slow_tick_seconds: float = Field(
        default=5.0,
        gt=0,
        description="Interval of the live status broadcast tick",
    )
    recovery_policy: Literal["resume", "finalize", "discard"] = Field(
        default="resume",
        description="What to do with an active workout found at startup",
    )
    replace_active_on_start: bool = Field(
        default=True,
        description="End the active workout when a new one is started",
    )

    # -------------------------------------------------------------------------
    # Live Status Broadcaster
    # -------------------------------------------------------------------------
    live_status_enabled: bool = Field(
        default=False,
        description="Push session snapshots to a live activity relay",
    )
    live_status_url: Optional[str] = Field(
        default=None,
        description="Base URL of the live activity relay",
    )
    broadcast_timeout_seconds: float = Field(
        default=2.0,
        gt=0,
        description="Upper bound on any single broadcaster call",
    )

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

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid log level '{v}'. Must be one of: {valid_levels}")
        return v.upper()

    @model_validator(mode="after")
    def validate_supabase_backend(self) -> "Settings":
        """The Supabase store needs a URL and a key."""
        if self.store_backend == "supabase" and not (self.supabase_url and self.supabase_key):
            raise ValueError(
                "STORE_BACKEND=supabase requires SUPABASE_URL and a Supabase key"
            )
        return self

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
