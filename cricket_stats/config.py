"""Configuration management using Pydantic Settings.

This module provides centralized configuration for the cricket stats
application, supporting environment variables and .env file loading.

Example:
    >>> from cricket_stats.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.data_path)
    'data/cricket_stats.json'
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables take precedence over .env file values.

    Attributes:
        data_path: Path to the Record Store JSON snapshot.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Directory for log files.
        leaderboard_limit: Number of rows shown in each leaderboard.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Record Store
    data_path: str = Field(
        default="data/cricket_stats.json",
        alias="CRICKET_DATA_PATH",
        description="Path to the JSON snapshot of players, matches and tournaments",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level",
    )
    log_dir: str = Field(
        default="logs",
        alias="LOG_DIR",
        description="Directory for log files",
    )

    # Leaderboards
    leaderboard_limit: int = Field(
        default=10,
        alias="LEADERBOARD_LIMIT",
        ge=1,
        le=100,
        description="Rows shown per leaderboard table",
    )

    @field_validator("data_path", "log_dir")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Ensure path strings are valid."""
        if not v or v.isspace():
            raise ValueError("Path cannot be empty or whitespace")
        return v

    @property
    def data_path_obj(self) -> Path:
        """Return snapshot path as Path object."""
        return Path(self.data_path)

    @property
    def log_dir_obj(self) -> Path:
        """Return log directory as Path object."""
        return Path(self.log_dir)


# Singleton pattern for settings
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the application settings singleton.

    Returns:
        Settings instance loaded from environment.

    Example:
        >>> settings = get_settings()
        >>> print(settings.leaderboard_limit)
        10
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
