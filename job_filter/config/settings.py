"""Configuration settings for Job Filter."""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Process-wide settings for the CLI.

    Read from the environment (no prefix) and an optional `.env` file in the
    working directory. Scoring knobs live on `ScoringConfig` instead.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    claims_path: Path = Field(
        default=Path("./data/claims.json"),
        description="Claims ledger snapshot used when a command gets no explicit file",
    )
    output_dir: Path = Field(
        default=Path("./artifacts"),
        description="Root for per-run folders holding score and review exports",
    )
    log_level: str = Field(
        default="INFO",
        description=f"One of {', '.join(LOG_LEVELS)}",
    )
    log_file: Path | None = Field(
        default=None,
        description="Optional file that mirrors console logging",
    )

    @field_validator("claims_path", "output_dir", "log_file", mode="after")
    @classmethod
    def expand_home(cls, v: Path | None) -> Path | None:
        """Allow `~/...` paths in the environment."""
        return v.expanduser() if v is not None else None

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Upper-case the level and reject unknown names."""
        level = str(v).strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Invalid log level: {v}. Must be one of {', '.join(LOG_LEVELS)}")
        return level


_settings: Settings | None = None


def get_settings() -> Settings:
    """Return the shared Settings, loading them on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the shared Settings so the next call reloads them."""
    global _settings
    _settings = None
