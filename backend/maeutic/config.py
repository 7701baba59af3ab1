"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in production)
    - message_encryption_key is exactly 32 bytes (AES-256)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://maeutic:maeutic@db:5432/maeutic"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Private messages (AES-256-GCM)
    message_encryption_key: str = "0123456789abcdef0123456789abcdef"

    @field_validator("message_encryption_key")
    @classmethod
    def check_key_length(cls, v: str) -> str:
        if len(v.encode("utf-8")) != 32:
            raise ValueError("message_encryption_key must be exactly 32 bytes")
        return v

    # Auth
    jwt_secret: str = "change-me-change-me-change-me-change-me"
    jwt_algorithm: str = "HS256"
    jwt_expiry_seconds: int = 3600

    # Recommendations
    recommendation_limit: int = 40
    map_max_users: int = 100
    map_recommendations: int = 40

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
