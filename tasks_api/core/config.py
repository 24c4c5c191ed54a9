"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Nothing here is required at load time: a missing
Firestore credential is reported by the startup connection, not by
validation, so the process can start and serve without a database.
"""

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "tasks-api"
    app_version: str = "1.0.0"
    debug: bool = False
    welcome_message: str = "Welcome to the tasks API"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # API
    api_prefix: str = "/api"

    # Firestore: use key (env) or path (file). Either one is the connection credential.
    firebase_service_account_key: SecretStr | None = None
    firebase_service_account_path: str | None = None  # Path to JSON file
    tasks_collection: str = "tasks"

    # Cross-origin headers set on every response
    allowed_origins: str = "*"
    allowed_headers: str = "Origin, X-Requested-With, Content-Type, Accept"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @field_validator("api_prefix")
    @classmethod
    def normalize_api_prefix(cls, value: str) -> str:
        """Leading slash, no trailing slash ("/" becomes "")."""
        value = value.strip().rstrip("/")
        if value and not value.startswith("/"):
            value = f"/{value}"
        return value

    @field_validator("tasks_collection")
    @classmethod
    def validate_tasks_collection(cls, value: str) -> str:
        if not value or "/" in value:
            raise ValueError(
                "TASKS_COLLECTION must be a non-empty collection id without '/'"
            )
        return value


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    In tests, call get_settings.cache_clear() before overriding env vars so
    the next get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
