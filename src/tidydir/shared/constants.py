"""
tidydir Constants

Single source of truth for names, defaults and messages shared between
the core, configuration and CLI layers.
"""

from __future__ import annotations


class Application:
    """Application metadata."""

    NAME = "tidydir"
    VERSION = "0.1.0"
    DESCRIPTION = "tidydir - group a directory's files into per-extension folders"


class Organize:
    """Organizer defaults and outcome reasons."""

    NOEXT_CATEGORY = "_noext"
    STATE_DIR = ".tidydir"
    LOGS_DIR = "logs"
    JOURNAL_PREFIX = "organize-"
    JOURNAL_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"

    REASON_IS_DIRECTORY = "is a directory"
    REASON_ALREADY_ORGANIZED = "already organized"
    REASON_COLLISION = "destination collision"
    REASON_DRY_RUN = "dry run"
    REASON_HIDDEN = "hidden"


class Logging:
    """Logging defaults."""

    DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
    DEFAULT_FILE_PATH = "logs/tidydir.log"
    MAX_BYTES = 10 * 1024 * 1024
    BACKUP_COUNT = 5
    DEFAULT_LEVEL = "INFO"


class CLIDefaults:
    """CLI exit codes and environment names."""

    EXIT_SUCCESS = 0
    EXIT_PARTIAL_FAILURE = 1
    EXIT_ERROR = 2
    ENV_PREFIX = "TIDYDIR_"
    CONFIG_ENV = "TIDYDIR_CONFIG"


class CLICommands:
    """CLI command names."""

    ORGANIZE = "organize"
    ROLLBACK = "rollback"
    LOG = "log"
