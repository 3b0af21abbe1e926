"""
Configuration management for schemaport.

Environment-based settings using Pydantic BaseSettings. Variables carry the
SCHEMAPORT_ prefix (e.g. SCHEMAPORT_PLATFORM=oracle); LOG_LEVEL is read
without prefix so it can be shared with the host application.
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("SCHEMAPORT_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    ``platform`` names the platform handed out by the registry when callers
    do not ask for one explicitly; the ``detect_renamed_*`` switches feed the
    default comparator configuration.
    """

    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )
    log_to_file: bool = Field(default=False, description="Also write logs to a rotating file")
    log_file_dir: str = Field(default="logs", description="Directory for log files")

    platform: str = Field(
        default="postgresql",
        description="Default platform name (oracle, postgresql, mysql)",
    )
    detect_renamed_columns: bool = Field(
        default=True,
        description="Pair identical removed/added columns as renames when diffing",
    )
    detect_renamed_indexes: bool = Field(
        default=True,
        description="Render renamed indexes as renames where the platform supports it",
    )

    model_config = SettingsConfigDict(
        env_prefix="SCHEMAPORT_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("platform")
    @classmethod
    def _normalize_platform(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings instance.

    Tests that change the environment should call ``get_settings.cache_clear()``.

    Returns:
        Configured Settings instance
    """
    return Settings()
