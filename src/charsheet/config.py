"""Application configuration for the character sheet manager."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from charsheet.domain.enums import StorageBackend


class Settings(BaseSettings):
    """Runtime settings, read from ``CHARSHEET_*`` environment variables or ``.env``."""

    model_config = SettingsConfigDict(
        env_prefix="CHARSHEET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///data/charsheet.db",
        description="SQLAlchemy URL of the relational store",
    )
    database_echo: bool = Field(default=False, description="Log every SQL statement")
    storage_backend: StorageBackend = Field(
        default=StorageBackend.SQL,
        description="Where character records live: the relational store or JSON snapshots",
    )
    data_dir: Path = Field(
        default=Path("data/characters"),
        description="Directory for JSON snapshots when the json backend is selected",
    )
    slug_max_attempts: int = Field(
        default=3,
        ge=1,
        description="Slug suffixes tried before giving up on a name; 1 disables retrying",
    )
    srd_api_base: str = Field(
        default="https://www.dnd5eapi.co/api/spells",
        description="Spell list endpoint of the SRD API",
    )
    srd_timeout_seconds: float = Field(
        default=10.0, gt=0.0, description="Timeout for each SRD API request"
    )
    log_level: str = Field(default="INFO", description="Root log level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://127.0.0.1:5173"],
        description="Origins allowed to call the HTTP API",
    )


@lru_cache
def get_settings() -> Settings:
    """Return a cached Settings instance."""

    return Settings()
