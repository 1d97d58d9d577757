"""
Operation journal management for tidydir.

This module saves and loads operation journals: the list of moves a real
organize run performed, which is what rollback reads to undo a run.
"""

from __future__ import annotations

import json
from datetime import datetime
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from tidydir.shared.constants import Organize
from tidydir.shared.errors import (
    ErrorCode,
    ErrorContext,
    InfrastructureError,
    create_validation_error,
)

from .models import JournalEntry

_JOURNAL_ADAPTER = TypeAdapter(list[JournalEntry])


class LogFileNotFoundError(InfrastructureError):
    """Raised when a requested journal file cannot be found."""

    def __init__(self, log_path: Path) -> None:
        self.log_path = log_path
        super().__init__(
            ErrorCode.LOG_FILE_NOT_FOUND,
            f"Log file not found: {log_path}",
            ErrorContext(file_path=str(log_path), operation="load_journal"),
        )


class LogFileCorruptedError(InfrastructureError):
    """Raised when a journal file exists but cannot be parsed."""

    def __init__(self, log_path: Path, reason: str) -> None:
        self.log_path = log_path
        self.reason = reason
        super().__init__(
            ErrorCode.LOG_FILE_CORRUPTED,
            f"Log file corrupted: {log_path} - {reason}",
            ErrorContext(file_path=str(log_path), operation="load_journal"),
        )


class OperationLogManager:
    """
    Manages operation journals for one organized directory.

    Journals are timestamped JSON files within ``<root>/.tidydir/logs``.
    """

    def __init__(self, root_path: Path) -> None:
        """
        Args:
            root_path: Directory whose ``.tidydir`` folder holds the journals.
        """
        self.root_path = Path(root_path)
        self.logs_dir = self.root_path / Organize.STATE_DIR / Organize.LOGS_DIR

    def save_journal(self, entries: list[JournalEntry]) -> Path:
        """
        Save completed moves to a new timestamped journal file.

        Returns:
            Path to the created journal file.

        Raises:
            InfrastructureError: If the journal cannot be written.
        """
        timestamp = datetime.now().strftime(Organize.JOURNAL_TIMESTAMP_FORMAT)
        log_path = self.logs_dir / f"{Organize.JOURNAL_PREFIX}{timestamp}.json"
        counter = 1
        while log_path.exists():
            log_path = self.logs_dir / f"{Organize.JOURNAL_PREFIX}{timestamp}-{counter}.json"
            counter += 1

        try:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            payload = _JOURNAL_ADAPTER.dump_python(entries, mode="json")
            with log_path.open("w", encoding="utf-8") as f:
                json.dump(payload, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise InfrastructureError(
                ErrorCode.LOG_WRITE_FAILED,
                f"Failed to save operation journal to {log_path}: {e}",
                ErrorContext(file_path=str(log_path), operation="save_journal"),
                e,
            ) from e

        return log_path

    def load_journal(self, log_path: Path) -> list[JournalEntry]:
        """
        Load completed moves from a journal file.

        Raises:
            LogFileNotFoundError: If the journal file does not exist.
            LogFileCorruptedError: If the journal file cannot be parsed.
        """
        log_path = Path(log_path)
        try:
            with log_path.open("r", encoding="utf-8") as f:
                payload = json.load(f)
        except FileNotFoundError as e:
            raise LogFileNotFoundError(log_path) from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise LogFileCorruptedError(log_path, str(e)) from e

        try:
            return _JOURNAL_ADAPTER.validate_python(payload)
        except ValidationError as e:
            raise LogFileCorruptedError(log_path, str(e)) from e

    def list_logs(self) -> list[Path]:
        """
        List all journal files, newest first.
        """
        if not self.logs_dir.exists():
            return []

        log_files = [
            path
            for path in self.logs_dir.glob(f"{Organize.JOURNAL_PREFIX}*.json")
            if path.is_file()
        ]
        # Names embed a sortable timestamp.
        return sorted(log_files, key=lambda p: p.stem, reverse=True)

    def get_log_by_id(self, log_id: str) -> Path:
        """
        Find a journal by its ID (timestamp part, e.g. "20231027-153000").

        Raises:
            DomainError: If the ID is not a plain file name part.
            LogFileNotFoundError: If no journal with the given ID exists.
        """
        if Path(log_id).name != log_id:
            raise create_validation_error(
                f"Invalid journal ID: {log_id!r}",
                field="log_id",
                operation="get_log_by_id",
            )
        log_path = self.logs_dir / f"{Organize.JOURNAL_PREFIX}{log_id}.json"
        if not log_path.exists():
            raise LogFileNotFoundError(log_path)
        return log_path

    def latest_log(self) -> Path:
        """Return the newest journal.

        Raises:
            LogFileNotFoundError: If no journal exists yet.
        """
        logs = self.list_logs()
        if not logs:
            raise LogFileNotFoundError(self.logs_dir)
        return logs[0]


__all__ = ["LogFileCorruptedError", "LogFileNotFoundError", "OperationLogManager"]
