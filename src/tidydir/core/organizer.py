"""Directory organization engine.

This module provides the DirectoryOrganizer, which regroups the immediate
files of a directory into per-extension subdirectories. Each entry is
handled independently: a failure on one entry is recorded in the report
and never aborts the batch.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tidydir.core.classifier import category_for, validate_category
from tidydir.core.filesystem import FileSystemProvider, LocalFileSystem
from tidydir.core.log_manager import OperationLogManager
from tidydir.core.models import (
    DirectoryEntry,
    EntryOutcome,
    JournalEntry,
    MoveOperation,
    OrganizeReport,
    Outcome,
)
from tidydir.core.reporting import LoggingReportSink, ReportSink
from tidydir.shared.constants import Organize
from tidydir.shared.errors import DirectoryNotFoundError, InfrastructureError

logger = logging.getLogger(__name__)


class DirectoryOrganizer:
    """Groups the files of a directory into per-extension folders.

    The organizer holds no state between invocations; every call to
    ``organize`` or ``plan`` scans the directory afresh.

    Responsibilities:
    - Classify each immediate file entry by its extension
    - Ensure the category folder exists (idempotently)
    - Move the file unless the destination name is already taken
    - Record exactly one outcome per scanned entry

    Attributes:
        file_system: Provider used for every read and write
        sink: Observer notified of each outcome and of the final report
        noext_category: Category used for names without an extension
        include_hidden: Whether dot-files are organized or skipped
        log_manager: Optional journal writer for completed moves
    """

    def __init__(
        self,
        file_system: FileSystemProvider | None = None,
        sink: ReportSink | None = None,
        *,
        noext_category: str = Organize.NOEXT_CATEGORY,
        include_hidden: bool = True,
        log_manager: OperationLogManager | None = None,
    ) -> None:
        self.file_system = file_system or LocalFileSystem()
        self.sink = sink or LoggingReportSink()
        self.noext_category = validate_category(noext_category)
        self.include_hidden = include_hidden
        self.log_manager = log_manager

    def organize(self, directory_path: Path | str) -> OrganizeReport:
        """Move every immediate file of ``directory_path`` into its category folder.

        Args:
            directory_path: Directory to organize

        Returns:
            OrganizeReport with one outcome per entry, in processing order

        Raises:
            DirectoryNotFoundError: If the path is missing, not a directory
                or cannot be listed

        Example:
            >>> report = DirectoryOrganizer().organize("~/Downloads")
            >>> print(report.counts())
        """
        return self._run(Path(directory_path), dry_run=False)

    def plan(self, directory_path: Path | str) -> OrganizeReport:
        """Report what ``organize`` would do without touching the file system.

        Entries that would be moved are reported as skipped with reason
        "dry run"; collisions are reported as failures, as a real run would.
        """
        return self._run(Path(directory_path), dry_run=True)

    def _run(self, directory: Path, *, dry_run: bool) -> OrganizeReport:
        entries = self._scan(directory)
        directory_name = directory.resolve().name
        report = OrganizeReport(directory=directory, dry_run=dry_run)
        journal: list[JournalEntry] = []
        vacated: set[Path] = set()

        logger.debug(
            "Organizing %d entries in %s (dry_run=%s)", len(entries), directory, dry_run
        )

        for entry in self._processing_order(entries):
            outcome = self._handle_entry(
                directory,
                directory_name,
                entry,
                dry_run=dry_run,
                journal=journal,
                vacated=vacated,
            )
            report.add(outcome)
            self.sink.entry_processed(outcome)

        if journal and self.log_manager is not None:
            report.journal_path = self._save_journal(self.log_manager, journal)

        self.sink.report_completed(report)
        return report

    def _scan(self, directory: Path) -> list[DirectoryEntry]:
        if not self.file_system.is_directory(directory):
            raise DirectoryNotFoundError(directory, operation="organize")
        try:
            return self.file_system.list_entries(directory)
        except OSError as e:
            raise DirectoryNotFoundError(
                directory, operation="organize", original_error=e
            ) from e

    def _processing_order(self, entries: list[DirectoryEntry]) -> list[DirectoryEntry]:
        """Put files named like a category of this scan first.

        Such a file occupies the path its category folder needs, so it has to
        move out of the way before the files of that category are handled.
        The order is otherwise lexicographic.
        """
        categories = {
            category_for(entry.name, self.noext_category)
            for entry in entries
            if not entry.is_directory
        }
        return sorted(
            entries,
            key=lambda entry: (entry.is_directory or entry.name not in categories, entry.name),
        )

    def _handle_entry(
        self,
        directory: Path,
        directory_name: str,
        entry: DirectoryEntry,
        *,
        dry_run: bool,
        journal: list[JournalEntry],
        vacated: set[Path],
    ) -> EntryOutcome:
        if entry.is_directory:
            return EntryOutcome(
                entry.name, "", Outcome.SKIPPED, Organize.REASON_IS_DIRECTORY
            )

        category = category_for(entry.name, self.noext_category)

        if not self.include_hidden and entry.name.startswith("."):
            return EntryOutcome(entry.name, category, Outcome.SKIPPED, Organize.REASON_HIDDEN)

        if directory_name == category:
            return EntryOutcome(
                entry.name, category, Outcome.SKIPPED, Organize.REASON_ALREADY_ORGANIZED
            )

        operation = MoveOperation(
            source=directory / entry.name,
            destination_dir=directory / category,
            category=category,
        )

        if dry_run:
            outcome = self._preview(entry, operation, vacated)
            if outcome.outcome is Outcome.SKIPPED:
                vacated.add(operation.source)
            return outcome

        try:
            self.file_system.make_directory(operation.destination_dir, recursive=True)
        except OSError as e:
            logger.error(
                "Failed to create directory %s: %s", operation.destination_dir, e
            )
            return EntryOutcome(entry.name, category, Outcome.FAILED, str(e))

        if self.file_system.exists(operation.destination_path):
            return EntryOutcome(entry.name, category, Outcome.FAILED, Organize.REASON_COLLISION)

        try:
            self.file_system.move(operation.source, operation.destination_path)
        except FileExistsError:
            # Destination appeared between the check and the move.
            return EntryOutcome(entry.name, category, Outcome.FAILED, Organize.REASON_COLLISION)
        except OSError as e:
            logger.error("Filesystem error for operation %s: %s", operation, e)
            return EntryOutcome(entry.name, category, Outcome.FAILED, str(e))

        journal.append(
            JournalEntry(
                source_path=operation.source.absolute(),
                destination_path=operation.destination_path.absolute(),
            )
        )
        return EntryOutcome(entry.name, category, Outcome.MOVED)

    def _preview(
        self, entry: DirectoryEntry, operation: MoveOperation, vacated: set[Path]
    ) -> EntryOutcome:
        category = operation.category
        destination_dir = operation.destination_dir
        # A file this plan already moved away no longer blocks the folder.
        if destination_dir in vacated:
            return EntryOutcome(entry.name, category, Outcome.SKIPPED, Organize.REASON_DRY_RUN)
        if self.file_system.exists(destination_dir) and not self.file_system.is_directory(
            destination_dir
        ):
            return EntryOutcome(
                entry.name,
                category,
                Outcome.FAILED,
                f"Destination is not a directory: {destination_dir}",
            )
        if self.file_system.exists(operation.destination_path):
            return EntryOutcome(entry.name, category, Outcome.FAILED, Organize.REASON_COLLISION)
        return EntryOutcome(entry.name, category, Outcome.SKIPPED, Organize.REASON_DRY_RUN)

    def _save_journal(
        self, log_manager: OperationLogManager, journal: list[JournalEntry]
    ) -> Path | None:
        try:
            log_path = log_manager.save_journal(journal)
        except InfrastructureError as e:
            logger.warning("Moves completed but the journal could not be saved: %s", e)
            return None
        logger.debug("Journaled %d moves to %s", len(journal), log_path)
        return log_path


def organize_directory(
    directory_path: Path | str,
    *,
    dry_run: bool = False,
    journal: bool = True,
    sink: ReportSink | None = None,
    noext_category: str = Organize.NOEXT_CATEGORY,
    include_hidden: bool = True,
) -> OrganizeReport:
    """Organize ``directory_path`` with the local file system.

    Convenience wrapper used by the CLI; journals are written under the
    organized directory itself when ``journal`` is True.
    """
    directory = Path(directory_path)
    organizer = DirectoryOrganizer(
        sink=sink,
        noext_category=noext_category,
        include_hidden=include_hidden,
        log_manager=OperationLogManager(directory) if journal else None,
    )
    if dry_run:
        return organizer.plan(directory)
    return organizer.organize(directory)


__all__ = ["DirectoryOrganizer", "organize_directory"]
