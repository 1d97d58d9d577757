"""Directory organization engine for tidydir.

This package provides the DirectoryOrganizer and its collaborators:
the file-system provider, reporting sinks, operation journal and rollback.
"""

from __future__ import annotations

from .classifier import category_for
from .filesystem import FileSystemProvider, LocalFileSystem
from .log_manager import OperationLogManager
from .models import (
    DirectoryEntry,
    EntryOutcome,
    JournalEntry,
    MoveOperation,
    OrganizeReport,
    Outcome,
)
from .organizer import DirectoryOrganizer, organize_directory
from .reporting import CompositeReportSink, LoggingReportSink, NullReportSink, ReportSink
from .rollback_manager import RollbackManager

__all__ = [
    "CompositeReportSink",
    "DirectoryEntry",
    "DirectoryOrganizer",
    "EntryOutcome",
    "FileSystemProvider",
    "JournalEntry",
    "LocalFileSystem",
    "LoggingReportSink",
    "MoveOperation",
    "NullReportSink",
    "OperationLogManager",
    "OrganizeReport",
    "Outcome",
    "ReportSink",
    "RollbackManager",
    "category_for",
    "organize_directory",
]
