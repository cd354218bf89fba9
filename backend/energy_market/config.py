"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - store_backend is either "memory" or "sql"

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for every setting: works out-of-the-box with the memory store
    - port reads PORT like most container platforms
"""

from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Ledger store
    store_backend: Literal["memory", "sql"] = "memory"

    # Database (store_backend == "sql")
    database_url: str = "sqlite:///./energy_market.db"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms hand out postgres:// or postgresql://, psycopg needs postgresql+psycopg://."""
        if not isinstance(v, str):
            return v
        for prefix in ("postgres://", "postgresql://"):
            if v.startswith(prefix):
                return v.replace(prefix, "postgresql+psycopg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_create_tables: bool = True

    # API
    cors_origins: list[str] = ["http://localhost:5173"]
    host: str = "0.0.0.0"
    port: int = 3000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
