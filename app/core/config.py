"""Application configuration (settings and environment).

Single source of truth for all configuration. Uses pydantic-settings
with .env support. Nothing is required at load time: the database is
checked lazily when a session is first needed.
"""

from functools import lru_cache

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment and .env.

    All settings are optional with defaults. An empty database_url means
    SQL is not configured; endpoints that need it answer 503.
    """

    # App
    app_name: str = "flowsense"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database (SQLAlchemy + asyncpg; schema managed by Alembic)
    database_url: str = ""
    database_echo: bool = False
    # Optional pool/driver overrides (None = use defaults in database.py)
    db_pool_size: int | None = None
    db_max_overflow: int | None = None
    db_command_timeout: int | None = None

    # CORS
    allowed_origins: str = "http://localhost:3000,http://localhost:8080"

    # Organization scoping
    organization_header_name: str = "X-Organization-ID"

    # Request / middleware
    request_id_header: str = "X-Request-ID"

    # Default TAT calendar for organizations without a stored config
    default_office_start_hour: int = 9
    default_office_end_hour: int = 17
    default_timezone: str = "Asia/Kolkata"
    default_skip_weekends: bool = True

    # Flow engine limits
    walker_max_depth: int = 100
    bulk_rule_limit: int = 100
    schedule_max_steps: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    @model_validator(mode="after")
    def validate_limits(self) -> "Settings":
        """Reject limits that would make the flow engine unusable."""
        for name in ("walker_max_depth", "bulk_rule_limit", "schedule_max_steps"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1")
        return self

    @property
    def database_configured(self) -> bool:
        return bool(self.database_url)


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
