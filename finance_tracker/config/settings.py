"""
Configuration Management for Household Finance Tracker

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
This makes it easy to see what external dependencies exist and
ensures all required configuration is validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FirebaseSettings(BaseSettings):
    """
    Firebase (Authentication + Firestore) configuration.

    Credentials are looked up from several sources; the first one that
    exists wins. See services/clients.py for the resolution order.
    """

    model_config = SettingsConfigDict(
        env_prefix="FIREBASE_",
        populate_by_name=True,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    application_credentials: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_APPLICATION_CREDENTIALS"),
        description="Path used by Google application default credentials"
    )
    service_account: Optional[str] = Field(
        default=None,
        description="Service account key as an inline JSON string"
    )
    project_id: Optional[str] = Field(
        default=None,
        description="Firebase project ID (optional, read from credentials otherwise)"
    )
    key_search_dir: str = Field(
        default=".",
        description="Directory scanned for serviceAccountKey.json / *firebase*adminsdk*.json"
    )

    @field_validator("application_credentials", "service_account", "project_id")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty environment variables as unset."""
        if v is not None and not v.strip():
            return None
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level"
    )

    # HTTP server
    host: str = Field(
        default="0.0.0.0",
        description="Interface uvicorn binds to"
    )
    port: int = Field(
        default=3001,
        ge=1,
        le=65535,
        description="Port uvicorn listens on"
    )
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # Client bundle
    static_dir: str = Field(
        default="client/dist",
        description="Directory holding the built single-page client"
    )
    serve_static: Optional[bool] = Field(
        default=None,
        description="Serve the client bundle (defaults to on in production)"
    )

    # Persistence
    storage_backend: Literal["firestore", "memory"] = Field(
        default="firestore",
        description="Document store implementation"
    )

    @property
    def cors_origins_list(self) -> list[str]:
        """Get allowed origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def should_serve_static(self) -> bool:
        if self.serve_static is not None:
            return self.serve_static
        return self.app_environment == "production"

    @property
    def static_path(self) -> Path:
        return Path(self.static_dir)


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are loaded lazily to allow partial configuration

    @property
    def firebase(self) -> FirebaseSettings:
        return FirebaseSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings(settings: Optional[Settings] = None) -> dict[str, object]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus {setting_name}_error
    holding the message for each section that failed. create_app runs
    this at startup and logs the failures.
    """
    results: dict[str, object] = {}

    settings = settings or get_settings()

    try:
        _ = settings.firebase
        results["firebase"] = True
    except ValidationError as e:
        results["firebase"] = False
        results["firebase_error"] = str(e)

    try:
        _ = settings.app
        results["app"] = True
    except ValidationError as e:
        results["app"] = False
        results["app_error"] = str(e)

    return results
