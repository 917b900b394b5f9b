"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. SECRET_KEY is validated at load time; DATABASE_URL is
checked lazily when a session is first requested.
"""

from functools import lru_cache

from pydantic import SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.domain.value_objects.upload import ACCEPTED_FILE_TYPES, MAX_FILE_SIZE


class Settings(BaseSettings):
    """Application settings loaded from environment and .env."""

    # App
    app_name: str = "customer-journey"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (Postgres via SQLAlchemy async + asyncpg; schema via Alembic)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # Security (tokens are issued elsewhere; this service only verifies them)
    secret_key: SecretStr = SecretStr("")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 480  # 8 hours

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Storage
    storage_backend: str = "local"
    storage_root: str = "/var/customer-journey/storage"
    storage_base_url: str | None = None
    max_upload_size: int = MAX_FILE_SIZE
    allowed_mime_types: str = ",".join(ACCEPTED_FILE_TYPES)

    # Requirement generation (external workflow)
    generation_webhook_url: str | None = None
    generation_callback_url: str = "http://localhost:8000/api/v1/callbacks/generation"
    generation_callback_secret: SecretStr | None = None
    generation_dispatch_timeout_seconds: float = 30.0
    generation_timeout_minutes: int = 10

    # Client behaviour (polling and autosave)
    job_poll_interval_seconds: float = 5.0
    autosave_debounce_seconds: float = 1.5

    # Request / middleware
    request_timeout_seconds: int = 60
    request_id_header: str = "X-Request-ID"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_required_and_storage(self) -> "Settings":
        """Validate required env and storage backend."""
        if not self.secret_key.get_secret_value():
            raise ValueError(
                "SECRET_KEY is required. Generate with: openssl rand -hex 32."
            )
        if self.storage_backend != "local":
            raise ValueError(
                f"Invalid storage_backend '{self.storage_backend}'. Must be: 'local'"
            )
        if self.max_upload_size <= 0:
            raise ValueError("MAX_UPLOAD_SIZE must be positive")
        return self

    @property
    def accepted_mime_types(self) -> frozenset[str]:
        return frozenset(t.strip() for t in self.allowed_mime_types.split(",") if t.strip())


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (single instance per process).

    Validation runs on first call, not at import time. In tests, call
    get_settings.cache_clear() before overriding env vars so the next
    get_settings() uses the new values.

    Returns:
        Loaded and validated Settings instance.
    """
    return Settings()
