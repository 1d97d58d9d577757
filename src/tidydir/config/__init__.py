"""Configuration loading for tidydir."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import toml
from pydantic import ValidationError

from tidydir.config.settings import LoggingSettings, OrganizeSettings, Settings
from tidydir.shared.constants import CLIDefaults
from tidydir.shared.errors import create_config_error

logger = logging.getLogger(__name__)


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from ``config_path``, ``$TIDYDIR_CONFIG`` or the environment.

    Args:
        config_path: Optional TOML file. When omitted, the file named by the
            ``TIDYDIR_CONFIG`` environment variable is used if set.

    Returns:
        Validated Settings instance.

    Raises:
        ConfigError: If the file is missing, unparsable or fails validation.
    """
    path_value = config_path or os.environ.get(CLIDefaults.CONFIG_ENV)

    try:
        if path_value:
            settings = Settings.from_toml_file(path_value)
            logger.debug("Loaded settings from %s", path_value)
        else:
            settings = Settings()
    except FileNotFoundError as e:
        raise create_config_error(
            f"Configuration file not found: {path_value}",
            file_path=str(path_value),
        ) from e
    except (toml.TomlDecodeError, ValidationError) as e:
        raise create_config_error(
            f"Invalid configuration: {e}",
            file_path=str(path_value) if path_value else None,
            original_error=e,
        ) from e

    return settings


__all__ = ["LoggingSettings", "OrganizeSettings", "Settings", "load_settings"]
