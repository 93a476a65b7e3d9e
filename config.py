"""
Configuration settings for CodeTrack.

Uses Pydantic Settings for environment variable management with .env file support.
All variables use the CODETRACK_ prefix (e.g. CODETRACK_DATA_DIR).
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="CODETRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage
    # ========================================
    data_dir: Path = Field(
        default=Path.home() / ".codetrack",
        description="Directory holding the progress file and backups",
    )
    storage_key: str = Field(
        default="leetcode-progress-v2",
        description="Name of the persisted progress document",
    )

    # ========================================
    # Catalog
    # ========================================
    catalog_dir: Path | None = Field(
        default=None,
        description="Directory of problem list JSON files (None for the bundled lists)",
    )
    default_list: str = Field(
        default="Blind 75",
        description="List used when a command is given no --list",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    @property
    def progress_file(self) -> Path:
        """Path of the persisted progress document."""
        return self.data_dir / f"{self.storage_key}.json"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
