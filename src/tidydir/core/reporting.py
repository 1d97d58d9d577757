"""Reporting sinks for organizer outcomes.

Sinks are purely observational: they receive each EntryOutcome as it is
recorded and the final OrganizeReport, and never influence the organizer.
"""

from __future__ import annotations

import logging
from typing import Iterable, Protocol

from tidydir.core.models import EntryOutcome, OrganizeReport, Outcome

logger = logging.getLogger(__name__)


class ReportSink(Protocol):
    """Protocol for consumers of organizer outcomes."""

    def entry_processed(self, outcome: EntryOutcome) -> None:
        """Called once per entry, in processing order."""

    def report_completed(self, report: OrganizeReport) -> None:
        """Called once after every entry has been processed."""


class NullReportSink:
    """Sink that ignores everything."""

    def entry_processed(self, outcome: EntryOutcome) -> None:
        return None

    def report_completed(self, report: OrganizeReport) -> None:
        return None


class LoggingReportSink:
    """Sink that writes outcomes to a logger.

    Moves are logged at INFO, skips at DEBUG and failures at WARNING.
    """

    def __init__(self, sink_logger: logging.Logger | None = None) -> None:
        self.logger = sink_logger or logger

    def entry_processed(self, outcome: EntryOutcome) -> None:
        if outcome.outcome is Outcome.MOVED:
            self.logger.info("Moved '%s' into '%s'", outcome.entry_name, outcome.category)
        elif outcome.outcome is Outcome.SKIPPED:
            self.logger.debug("Skipped '%s': %s", outcome.entry_name, outcome.reason)
        else:
            self.logger.warning(
                "Failed to move '%s' into '%s': %s",
                outcome.entry_name,
                outcome.category,
                outcome.reason,
            )

    def report_completed(self, report: OrganizeReport) -> None:
        counts = report.counts()
        self.logger.info(
            "Organized %s: %d moved, %d skipped, %d failed (%d entries)",
            report.directory,
            counts["moved"],
            counts["skipped"],
            counts["failed"],
            counts["total"],
        )


class CompositeReportSink:
    """Fan out every notification to several sinks."""

    def __init__(self, sinks: Iterable[ReportSink]) -> None:
        self.sinks = list(sinks)

    def entry_processed(self, outcome: EntryOutcome) -> None:
        for sink in self.sinks:
            sink.entry_processed(outcome)

    def report_completed(self, report: OrganizeReport) -> None:
        for sink in self.sinks:
            sink.report_completed(report)


__all__ = [
    "CompositeReportSink",
    "LoggingReportSink",
    "NullReportSink",
    "ReportSink",
]
