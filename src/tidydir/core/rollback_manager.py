"""
Rollback management for tidydir.

This module turns an operation journal into a rollback plan and executes
it, moving organized files back to where they were before the run.
"""

from __future__ import annotations

import logging
from pathlib import Path

from tidydir.shared.constants import Organize

from .filesystem import FileSystemProvider, LocalFileSystem
from .log_manager import OperationLogManager
from .models import EntryOutcome, JournalEntry, OrganizeReport, Outcome
from .reporting import LoggingReportSink, ReportSink

logger = logging.getLogger(__name__)

REASON_SOURCE_MISSING = "organized file no longer exists"


class RollbackManager:
    """
    Generates and executes rollback plans from operation journals.

    A rollback plan swaps source and destination of every journaled move
    and reverses their order, so the last move is undone first.
    """

    def __init__(
        self,
        log_manager: OperationLogManager,
        file_system: FileSystemProvider | None = None,
        sink: ReportSink | None = None,
    ) -> None:
        """
        Args:
            log_manager: OperationLogManager used to load journals.
            file_system: Provider used to move files back.
            sink: Observer notified of each restored entry.
        """
        self.log_manager = log_manager
        self.file_system = file_system or LocalFileSystem()
        self.sink = sink or LoggingReportSink()

    def generate_rollback_plan(self, log_path: Path | str) -> list[JournalEntry]:
        """
        Generate a rollback plan from a journal file.

        Raises:
            LogFileNotFoundError: If the journal does not exist.
            LogFileCorruptedError: If the journal cannot be parsed.
        """
        entries = self.log_manager.load_journal(Path(log_path))
        rollback_plan = [
            JournalEntry(
                source_path=entry.destination_path,
                destination_path=entry.source_path,
            )
            for entry in entries
        ]
        rollback_plan.reverse()
        return rollback_plan

    def rollback(self, log_path: Path | str, *, dry_run: bool = False) -> OrganizeReport:
        """
        Undo the moves recorded in ``log_path``.

        Follows the organizer's rules: a file is never moved over an
        existing one, and a failure on one entry does not stop the others.

        Returns:
            OrganizeReport with one outcome per journaled move.
        """
        plan = self.generate_rollback_plan(log_path)
        report = OrganizeReport(directory=self.log_manager.root_path, dry_run=dry_run)

        for operation in plan:
            outcome = self._restore(operation, dry_run=dry_run)
            report.add(outcome)
            self.sink.entry_processed(outcome)

        self.sink.report_completed(report)
        return report

    def _restore(self, operation: JournalEntry, *, dry_run: bool) -> EntryOutcome:
        name = operation.destination_path.name
        category = operation.source_path.parent.name

        if not self.file_system.exists(operation.source_path):
            return EntryOutcome(name, category, Outcome.FAILED, REASON_SOURCE_MISSING)
        if self.file_system.exists(operation.destination_path):
            return EntryOutcome(name, category, Outcome.FAILED, Organize.REASON_COLLISION)
        if dry_run:
            return EntryOutcome(name, category, Outcome.SKIPPED, Organize.REASON_DRY_RUN)

        try:
            self.file_system.make_directory(operation.destination_path.parent)
            self.file_system.move(operation.source_path, operation.destination_path)
        except FileExistsError:
            return EntryOutcome(name, category, Outcome.FAILED, Organize.REASON_COLLISION)
        except OSError as e:
            logger.error(
                "Rollback failed for '%s' -> '%s': %s",
                operation.source_path,
                operation.destination_path,
                e,
            )
            return EntryOutcome(name, category, Outcome.FAILED, str(e))

        return EntryOutcome(name, category, Outcome.MOVED)


__all__ = ["RollbackManager"]
