"""tidydir Settings Configuration Model.

Main Settings class that consolidates the organizer and logging domains.
Values come from (highest priority first) a TOML file or explicit
arguments, ``TIDYDIR_`` environment variables, and the defaults below.
"""

from __future__ import annotations

import logging
from pathlib import Path

import toml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tidydir.shared.constants import Logging, Organize

logger = logging.getLogger(__name__)


class OrganizeSettings(BaseModel):
    """Organizer behaviour."""

    noext_category: str = Field(
        default=Organize.NOEXT_CATEGORY,
        description="Folder name for files without an extension",
    )
    include_hidden: bool = Field(
        default=True,
        description="Organize dot-files instead of skipping them",
    )
    journal: bool = Field(
        default=True,
        description="Write an operation journal so runs can be rolled back",
    )

    @field_validator("noext_category")
    @classmethod
    def _check_category(cls, value: str) -> str:
        if not value or value in {".", ".."} or "/" in value or "\\" in value:
            msg = f"noext_category must be a single folder name, got {value!r}"
            raise ValueError(msg)
        return value


class LoggingSettings(BaseModel):
    """Logging configuration.

    Level, format, file output and console output settings.
    """

    level: str = Field(default=Logging.DEFAULT_LEVEL, description="Logging level")
    format_string: str = Field(
        default=Logging.DEFAULT_FORMAT,
        description="Log format string",
        alias="format",
    )
    file: str = Field(
        default=Logging.DEFAULT_FILE_PATH,
        description="Log file path; empty disables file logging",
    )
    max_bytes: int = Field(
        default=Logging.MAX_BYTES,
        description="Maximum log file size in bytes",
        gt=0,
    )
    backup_count: int = Field(
        default=Logging.BACKUP_COUNT,
        description="Number of backup log files to keep",
        ge=0,
    )
    console_output: bool = Field(default=True, description="Enable console logging")

    model_config = {"populate_by_name": True}

    @field_validator("level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown logging level: {value}"
            raise ValueError(msg)
        return level


class Settings(BaseSettings):
    """Unified configuration access for tidydir."""

    model_config = SettingsConfigDict(
        env_prefix="TIDYDIR_",
        env_nested_delimiter="__",
        env_ignore_empty=True,
        extra="ignore",
    )

    organize: OrganizeSettings = Field(default_factory=OrganizeSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @classmethod
    def from_toml_file(cls, file_path: str | Path) -> Settings:
        """Load settings from a TOML file; keys it omits fall back to the environment."""

        file_path = Path(file_path)
        if not file_path.exists():
            msg = f"Configuration file not found: {file_path}"
            raise FileNotFoundError(msg)

        raw_config = toml.load(file_path)
        return cls(**raw_config)

    def to_toml_file(self, file_path: str | Path) -> None:
        """Save settings to TOML file."""

        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with file_path.open("w", encoding="utf-8") as f:
            toml.dump(self.model_dump(by_alias=True), f)
        logger.debug("Saved settings to %s", file_path)


__all__ = ["LoggingSettings", "OrganizeSettings", "Settings"]
