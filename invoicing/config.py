"""Settings — everything deployment-specific, read from the environment or .env.

Invariants:
    - get_settings() returns one cached Settings per process
    - database_url always names an async driver (postgresql:// is rewritten)

Design Decisions:
    - The bulk target limit is a domain constant (core/bulk_operations.py), not a setting
    - identity_header names the header the upstream auth gateway sets after it
      verified the caller
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://invoicing:invoicing@db:5432/invoicing"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Identity — header set by the upstream auth gateway after it verified the caller
    identity_header: str = "X-User-Id"

    # Dashboard
    recent_invoices_limit: int = 10

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
