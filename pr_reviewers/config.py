"""Configuration — service settings from the environment (and an optional .env).

Invariants:
    - get_settings() is cached: one Settings instance per process
    - database_url always names an async driver (postgresql:// is rewritten)
    - merged_status_value is the terminal status the merge workflow writes and detects

Design Decisions:
    - Pool defaults mirror a small service: 15 connections, recycled every 10 minutes
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Server
    host: str = "0.0.0.0"
    port: int = 8080

    # Database
    database_url: str = "postgresql+asyncpg://reviewers:reviewers@db:5432/reviewers"
    database_pool_size: int = 15
    database_max_overflow: int = 5
    database_pool_recycle: int = 600

    # Merge workflow
    merged_status_value: str = "MERGED"

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("database_url", mode="before")
    @classmethod
    def use_asyncpg_driver(cls, v: str) -> str:
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
