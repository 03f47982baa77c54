"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - MONGODB_URI has no default; a missing value fails Settings() validation
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # MongoDB
    mongodb_uri: str
    mongodb_database: str = "showroom"
    mongodb_server_selection_timeout_ms: int = Field(5000, gt=0)
    mongodb_health_timeout_ms: int = Field(1000, gt=0)

    @field_validator("mongodb_uri")
    @classmethod
    def require_mongodb_scheme(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("mongodb://", "mongodb+srv://")):
            raise ValueError(
                "MONGODB_URI must start with mongodb:// or mongodb+srv://",
            )
        return v

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # API
    cors_origins: list[str] = ["*"]
    max_body_bytes: int = Field(10 * 1024 * 1024, gt=0)

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
