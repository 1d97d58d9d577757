"""
Data models for tidydir core operations.

This module defines the fundamental data structures used by the
DirectoryOrganizer: scanned entries, planned moves, per-entry outcomes
and the report returned to the caller.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any


class Outcome(str, Enum):
    """Result of handling a single directory entry."""

    MOVED = "Moved"
    SKIPPED = "Skipped"
    FAILED = "Failed"


@dataclass(frozen=True)
class DirectoryEntry:
    """An immediate child of the directory being organized."""

    name: str
    is_directory: bool = False


@dataclass(frozen=True)
class MoveOperation:
    """
    A single planned move of a file into its category folder.

    Built by the organizer, executed against the file-system provider and
    discarded afterwards; only the resulting EntryOutcome is kept.
    """

    source: Path
    destination_dir: Path
    category: str

    @property
    def destination_path(self) -> Path:
        return self.destination_dir / self.source.name

    def __str__(self) -> str:
        return f"move: {self.source} -> {self.destination_path}"


@dataclass(frozen=True)
class JournalEntry:
    """A completed move as persisted in an operation journal."""

    source_path: Path
    destination_path: Path


@dataclass(frozen=True)
class EntryOutcome:
    """Outcome recorded for one entry of the scanned directory.

    Attributes:
        entry_name: Name of the entry as listed at scan time
        category: Category key the entry classified to ("" for directories)
        outcome: Moved, Skipped or Failed
        reason: Why the entry was skipped or failed, None when moved
    """

    entry_name: str
    category: str
    outcome: Outcome
    reason: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "entry_name": self.entry_name,
            "category": self.category,
            "outcome": self.outcome.value,
            "reason": self.reason,
        }


@dataclass
class OrganizeReport:
    """
    Ordered per-entry outcomes of one organize (or rollback) invocation.

    Every entry seen at scan time appears exactly once.
    """

    directory: Path
    entries: list[EntryOutcome] = field(default_factory=list)
    dry_run: bool = False
    journal_path: Path | None = None

    def add(self, outcome: EntryOutcome) -> None:
        self.entries.append(outcome)

    def _with_outcome(self, outcome: Outcome) -> list[EntryOutcome]:
        return [entry for entry in self.entries if entry.outcome is outcome]

    @property
    def moved(self) -> list[EntryOutcome]:
        return self._with_outcome(Outcome.MOVED)

    @property
    def skipped(self) -> list[EntryOutcome]:
        return self._with_outcome(Outcome.SKIPPED)

    @property
    def failed(self) -> list[EntryOutcome]:
        return self._with_outcome(Outcome.FAILED)

    @property
    def has_failures(self) -> bool:
        return any(entry.outcome is Outcome.FAILED for entry in self.entries)

    def counts(self) -> dict[str, int]:
        """Return the summary counts keyed by lowercase outcome name."""
        tally = Counter(entry.outcome for entry in self.entries)
        return {
            "moved": tally[Outcome.MOVED],
            "skipped": tally[Outcome.SKIPPED],
            "failed": tally[Outcome.FAILED],
            "total": len(self.entries),
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "directory": str(self.directory),
            "dry_run": self.dry_run,
            "journal": str(self.journal_path) if self.journal_path else None,
            "entries": [entry.to_dict() for entry in self.entries],
            "summary": self.counts(),
        }

    def __len__(self) -> int:
        return len(self.entries)


__all__ = [
    "DirectoryEntry",
    "EntryOutcome",
    "JournalEntry",
    "MoveOperation",
    "OrganizeReport",
    "Outcome",
]
