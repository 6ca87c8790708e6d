"""
Configuration — typed, validated settings loaded from environment/.env.

Uses pydantic-settings to:
  - Load from environment variables (12-factor app)
  - Fall back to a .env file
  - Validate types and constraints at startup

Only AppSettings is a BaseSettings instance. ServerSettings is a plain
BaseModel populated via env_nested_delimiter="__", so SERVER__PORT maps to
server.port.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve the .env file relative to the project root (two levels above this file),
# so settings load correctly regardless of the working directory at runtime.
_ENV_FILE = Path(__file__).parent.parent.parent / ".env"

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


class ServerSettings(BaseModel):
    """Where uvicorn listens."""

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=8080, ge=1, le=65535, description="Bind port")


class AppSettings(BaseSettings):
    """
    Root application settings.

    Load order (highest priority first):
      1. Environment variables
      2. .env file
      3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_ENV_FILE,
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )

    server: ServerSettings = Field(default_factory=lambda: ServerSettings())

    log_level: str = Field(default="INFO")
    max_submission_bytes: int = Field(
        default=64 * 1024,
        ge=1,
        description="Largest certificate text accepted before decoding",
    )
    parse_failure_status: int = Field(
        default=400,
        ge=400,
        le=599,
        description="HTTP status for certificates that decode from PEM but fail to parse",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Accept only levels both logging and uvicorn understand."""
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return level
