"""Unit tests for DirectoryOrganizer.

Covers classification into category folders, idempotence, collision
safety, per-entry failure handling, dry runs and journaling.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import Mock

import pytest

from tidydir.core.filesystem import LocalFileSystem
from tidydir.core.log_manager import OperationLogManager
from tidydir.core.models import DirectoryEntry, Outcome
from tidydir.core.organizer import DirectoryOrganizer, organize_directory
from tidydir.core.reporting import NullReportSink
from tidydir.shared.constants import Organize
from tidydir.shared.errors import (
    DirectoryNotFoundError,
    DomainError,
    ErrorCode,
    InfrastructureError,
)

# ============================================================================
# Fixtures
# ============================================================================


class FailingFileSystem(LocalFileSystem):
    """LocalFileSystem whose move fails for selected file names."""

    def __init__(self, failing_names: set[str], error: OSError | None = None) -> None:
        self.failing_names = failing_names
        self.error = error or OSError("simulated disk failure")

    def move(self, source: Path, destination: Path) -> None:
        if source.name in self.failing_names:
            raise self.error
        super().move(source, destination)


@pytest.fixture
def organizer(null_sink: NullReportSink) -> DirectoryOrganizer:
    return DirectoryOrganizer(sink=null_sink)


# ============================================================================
# Basic organization
# ============================================================================


class TestOrganize:
    def test_end_to_end_scenario(self, organizer, tmp_path, make_files) -> None:
        make_files(tmp_path, ["a.txt", "b.jpg", "c.txt", "notes"])

        report = organizer.organize(tmp_path)

        assert (tmp_path / "txt" / "a.txt").read_text() == "content of a.txt"
        assert (tmp_path / "txt" / "c.txt").exists()
        assert (tmp_path / "jpg" / "b.jpg").exists()
        assert (tmp_path / "_noext" / "notes").exists()
        assert sorted(p.name for p in tmp_path.iterdir()) == ["_noext", "jpg", "txt"]
        assert report.counts() == {"moved": 4, "skipped": 0, "failed": 0, "total": 4}
        assert [(e.entry_name, e.category) for e in report.entries] == [
            ("a.txt", "txt"),
            ("b.jpg", "jpg"),
            ("c.txt", "txt"),
            ("notes", "_noext"),
        ]

    def test_case_insensitive_grouping(self, organizer, tmp_path, make_files) -> None:
        make_files(tmp_path, ["a.TXT", "b.txt", "c.Txt"])

        report = organizer.organize(tmp_path)

        assert {e.category for e in report.entries} == {"txt"}
        assert sorted(p.name for p in (tmp_path / "txt").iterdir()) == [
            "a.TXT",
            "b.txt",
            "c.Txt",
        ]

    def test_no_extension_bucket(self, organizer, tmp_path, make_files) -> None:
        make_files(tmp_path, ["README"])

        report = organizer.organize(tmp_path)

        assert report.entries[0].category == Organize.NOEXT_CATEGORY
        assert report.entries[0].outcome is Outcome.MOVED
        assert (tmp_path / "_noext" / "README").exists()

    def test_custom_noext_category(self, null_sink, tmp_path, make_files) -> None:
        make_files(tmp_path, ["Makefile"])

        DirectoryOrganizer(sink=null_sink, noext_category="misc").organize(tmp_path)

        assert (tmp_path / "misc" / "Makefile").exists()

    def test_invalid_noext_category_rejected(self) -> None:
        with pytest.raises(DomainError):
            DirectoryOrganizer(noext_category="../up")

    def test_entries_processed_in_lexicographic_order(
        self, organizer, tmp_path, make_files
    ) -> None:
        make_files(tmp_path, ["z.md", "m.md", "a.md"])

        report = organizer.organize(tmp_path)

        assert [e.entry_name for e in report.entries] == ["a.md", "m.md", "z.md"]

    def test_accepts_string_path(self, organizer, tmp_path, make_files) -> None:
        make_files(tmp_path, ["a.txt"])

        report = organizer.organize(str(tmp_path))

        assert report.moved[0].entry_name == "a.txt"


# ============================================================================
# Directories, idempotence and already-organized entries
# ============================================================================


class TestSkips:
    def test_directories_untouched(self, organizer, tmp_path, make_files) -> None:
        (tmp_path / "images").mkdir()
        make_files(tmp_path, ["images/cat.png", "a.txt"])

        report = organizer.organize(tmp_path)

        images = next(e for e in report.entries if e.entry_name == "images")
        assert images.outcome is Outcome.SKIPPED
        assert images.reason == Organize.REASON_IS_DIRECTORY
        assert (tmp_path / "images" / "cat.png").exists()
        assert not (tmp_path / "png").exists()

    def test_second_run_moves_nothing(self, organizer, tmp_path, make_files) -> None:
        make_files(tmp_path, ["a.txt", "b.jpg", "c.TXT", "notes"])

        first = organizer.organize(tmp_path)
        second = organizer.organize(tmp_path)

        assert len(first.moved) == 4
        assert second.moved == []
        assert second.failed == []
        assert {e.reason for e in second.entries} == {Organize.REASON_IS_DIRECTORY}

    def test_file_named_like_a_category_moves_out_of_the_way_first(
        self, organizer, tmp_path, make_files
    ) -> None:
        make_files(tmp_path, ["a.txt", "txt"])

        first = organizer.organize(tmp_path)
        second = organizer.organize(tmp_path)

        assert [(e.entry_name, e.outcome) for e in first.entries] == [
            ("txt", Outcome.MOVED),
            ("a.txt", Outcome.MOVED),
        ]
        assert (tmp_path / "_noext" / "txt").read_text() == "content of txt"
        assert (tmp_path / "txt" / "a.txt").read_text() == "content of a.txt"
        assert second.moved == []
        assert second.failed == []

    def test_already_organized_when_directory_is_the_category(
        self, organizer, tmp_path, make_files
    ) -> None:
        txt_dir = tmp_path / "txt"
        make_files(txt_dir, ["a.txt", "b.jpg"])

        report = organizer.organize(txt_dir)

        a_txt, b_jpg = report.entries
        assert a_txt.outcome is Outcome.SKIPPED
        assert a_txt.reason == Organize.REASON_ALREADY_ORGANIZED
        assert (txt_dir / "a.txt").exists()
        assert not (txt_dir / "txt").exists()
        assert b_jpg.outcome is Outcome.MOVED

    def test_hidden_files_skipped_when_excluded(
        self, null_sink, tmp_path, make_files
    ) -> None:
        make_files(tmp_path, [".env", "a.txt"])

        report = DirectoryOrganizer(sink=null_sink, include_hidden=False).organize(tmp_path)

        env = report.entries[0]
        assert env.entry_name == ".env"
        assert env.outcome is Outcome.SKIPPED
        assert env.reason == Organize.REASON_HIDDEN
        assert (tmp_path / ".env").exists()

    def test_hidden_files_organized_by_default(self, organizer, tmp_path, make_files) -> None:
        make_files(tmp_path, [".bashrc"])

        organizer.organize(tmp_path)

        assert (tmp_path / "_noext" / ".bashrc").exists()


# ============================================================================
# Collisions and failures
# ============================================================================


class TestFailures:
    def test_destination_collision_keeps_both_files(
        self, organizer, tmp_path, make_files
    ) -> None:
        make_files(tmp_path, ["b.txt"])
        existing = tmp_path / "txt" / "b.txt"
        existing.parent.mkdir()
        existing.write_text("already here")

        report = organizer.organize(tmp_path)

        b_txt = next(e for e in report.entries if e.entry_name == "b.txt")
        assert b_txt.outcome is Outcome.FAILED
        assert b_txt.reason == Organize.REASON_COLLISION
        assert (tmp_path / "b.txt").read_text() == "content of b.txt"
        assert existing.read_text() == "already here"

    def test_forced_move_failure_leaves_source_and_continues(
        self, null_sink, tmp_path, make_files
    ) -> None:
        make_files(tmp_path, ["a.txt", "b.txt"])
        organizer = DirectoryOrganizer(
            file_system=FailingFileSystem({"a.txt"}), sink=null_sink
        )

        report = organizer.organize(tmp_path)

        a_txt, b_txt = report.entries
        assert a_txt.outcome is Outcome.FAILED
        assert a_txt.reason == "simulated disk failure"
        assert (tmp_path / "a.txt").exists()
        assert b_txt.outcome is Outcome.MOVED
        assert (tmp_path / "txt" / "b.txt").exists()

    def test_move_reporting_exists_is_a_collision(
        self, null_sink, tmp_path, make_files
    ) -> None:
        make_files(tmp_path, ["a.txt"])
        file_system = FailingFileSystem({"a.txt"}, FileExistsError("raced"))

        report = DirectoryOrganizer(file_system=file_system, sink=null_sink).organize(
            tmp_path
        )

        assert report.entries[0].reason == Organize.REASON_COLLISION

    def test_mkdir_failure_is_recorded_per_entry(
        self, organizer, tmp_path, make_files
    ) -> None:
        # A plain file named "_noext" blocks its own folder, so it cannot move.
        make_files(tmp_path, ["_noext", "notes"])

        report = organizer.organize(tmp_path)

        assert [(e.entry_name, e.outcome) for e in report.entries] == [
            ("_noext", Outcome.FAILED),
            ("notes", Outcome.FAILED),
        ]
        assert all(e.reason for e in report.entries)
        assert (tmp_path / "_noext").read_text() == "content of _noext"
        assert (tmp_path / "notes").exists()

    def test_every_entry_reported_exactly_once(
        self, null_sink, tmp_path, make_files
    ) -> None:
        (tmp_path / "docs").mkdir()
        make_files(tmp_path, ["a.txt", "b.txt", "c", "d.png"])
        (tmp_path / "txt").mkdir()
        (tmp_path / "txt" / "b.txt").write_text("old")
        organizer = DirectoryOrganizer(
            file_system=FailingFileSystem({"d.png"}), sink=null_sink
        )

        report = organizer.organize(tmp_path)

        names = [e.entry_name for e in report.entries]
        assert sorted(names) == ["a.txt", "b.txt", "c", "d.png", "docs", "txt"]
        assert len(names) == len(set(names))
        assert report.counts() == {"moved": 2, "skipped": 2, "failed": 2, "total": 6}


# ============================================================================
# Fatal errors
# ============================================================================


class TestDirectoryNotFound:
    def test_missing_directory(self, organizer, tmp_path) -> None:
        missing = tmp_path / "missing"

        with pytest.raises(DirectoryNotFoundError) as exc_info:
            organizer.organize(missing)

        assert exc_info.value.code == ErrorCode.DIRECTORY_NOT_FOUND
        assert exc_info.value.directory == missing

    def test_path_is_a_file(self, organizer, tmp_path, make_files) -> None:
        (file_path,) = make_files(tmp_path, ["a.txt"])

        with pytest.raises(DirectoryNotFoundError):
            organizer.organize(file_path)

    def test_unreadable_directory(self, null_sink, tmp_path) -> None:
        file_system = Mock(spec=LocalFileSystem)
        file_system.is_directory.return_value = True
        file_system.list_entries.side_effect = PermissionError("denied")

        with pytest.raises(DirectoryNotFoundError) as exc_info:
            DirectoryOrganizer(file_system=file_system, sink=null_sink).organize(tmp_path)

        assert isinstance(exc_info.value.original_error, PermissionError)
        file_system.move.assert_not_called()


# ============================================================================
# Collaborators: provider, sink, journal
# ============================================================================


class TestCollaborators:
    def test_uses_provider_for_all_io(self, null_sink, tmp_path) -> None:
        file_system = Mock(spec=LocalFileSystem)
        file_system.is_directory.return_value = True
        file_system.list_entries.return_value = [
            DirectoryEntry("b.jpg"),
            DirectoryEntry("a.txt"),
            DirectoryEntry("sub", is_directory=True),
        ]
        file_system.exists.return_value = False

        report = DirectoryOrganizer(file_system=file_system, sink=null_sink).organize(
            tmp_path
        )

        assert [e.outcome for e in report.entries] == [
            Outcome.MOVED,
            Outcome.MOVED,
            Outcome.SKIPPED,
        ]
        file_system.make_directory.assert_any_call(tmp_path / "txt", recursive=True)
        file_system.move.assert_any_call(tmp_path / "a.txt", tmp_path / "txt" / "a.txt")
        assert file_system.move.call_count == 2

    def test_sink_notified_per_entry_and_once_at_end(self, tmp_path, make_files) -> None:
        make_files(tmp_path, ["a.txt", "b.jpg"])
        sink = Mock()

        report = DirectoryOrganizer(sink=sink).organize(tmp_path)

        assert sink.entry_processed.call_count == 2
        sink.report_completed.assert_called_once_with(report)

    def test_journal_written_for_moves(self, null_sink, tmp_path, make_files) -> None:
        make_files(tmp_path, ["a.txt", "b"])
        log_manager = OperationLogManager(tmp_path)

        report = DirectoryOrganizer(sink=null_sink, log_manager=log_manager).organize(
            tmp_path
        )

        assert report.journal_path is not None
        entries = log_manager.load_journal(report.journal_path)
        assert [e.destination_path for e in entries] == [
            (tmp_path / "txt" / "a.txt").absolute(),
            (tmp_path / "_noext" / "b").absolute(),
        ]

    def test_no_journal_without_moves(self, null_sink, tmp_path) -> None:
        (tmp_path / "sub").mkdir()
        log_manager = OperationLogManager(tmp_path)

        report = DirectoryOrganizer(sink=null_sink, log_manager=log_manager).organize(
            tmp_path
        )

        assert report.journal_path is None
        assert log_manager.list_logs() == []

    def test_journal_failure_does_not_change_outcomes(
        self, null_sink, tmp_path, make_files
    ) -> None:
        make_files(tmp_path, ["a.txt"])
        log_manager = Mock(spec=OperationLogManager)
        log_manager.save_journal.side_effect = InfrastructureError(
            ErrorCode.LOG_WRITE_FAILED, "read-only"
        )

        report = DirectoryOrganizer(sink=null_sink, log_manager=log_manager).organize(
            tmp_path
        )

        assert report.journal_path is None
        assert report.moved[0].entry_name == "a.txt"


# ============================================================================
# Dry run
# ============================================================================


class TestPlan:
    def test_plan_touches_nothing(self, organizer, tmp_path, make_files) -> None:
        make_files(tmp_path, ["a.txt", "b.jpg"])

        report = organizer.plan(tmp_path)

        assert report.dry_run is True
        assert sorted(p.name for p in tmp_path.iterdir()) == ["a.txt", "b.jpg"]
        assert [(e.category, e.outcome, e.reason) for e in report.entries] == [
            ("txt", Outcome.SKIPPED, Organize.REASON_DRY_RUN),
            ("jpg", Outcome.SKIPPED, Organize.REASON_DRY_RUN),
        ]

    def test_plan_reports_collisions(self, organizer, tmp_path, make_files) -> None:
        make_files(tmp_path, ["a.txt", "txt/a.txt"])

        report = organizer.plan(tmp_path)

        a_txt = report.entries[0]
        assert a_txt.outcome is Outcome.FAILED
        assert a_txt.reason == Organize.REASON_COLLISION

    def test_plan_reports_blocked_category_folder(
        self, organizer, tmp_path, make_files
    ) -> None:
        make_files(tmp_path, ["_noext", "notes"])

        report = organizer.plan(tmp_path)

        assert report.failed == report.entries
        assert "not a directory" in report.entries[0].reason

    def test_plan_matches_run_when_file_is_named_like_a_category(
        self, organizer, tmp_path, make_files
    ) -> None:
        make_files(tmp_path, ["a.txt", "txt"])

        report = organizer.plan(tmp_path)

        assert [(e.entry_name, e.outcome, e.reason) for e in report.entries] == [
            ("txt", Outcome.SKIPPED, Organize.REASON_DRY_RUN),
            ("a.txt", Outcome.SKIPPED, Organize.REASON_DRY_RUN),
        ]
        assert (tmp_path / "txt").is_file()


def test_organize_directory_writes_journal(tmp_path, make_files) -> None:
    make_files(tmp_path, ["a.txt"])

    report = organize_directory(tmp_path, sink=NullReportSink())

    assert report.journal_path is not None
    assert report.journal_path.parent == tmp_path / ".tidydir" / "logs"


def test_organize_directory_dry_run_without_journal(tmp_path, make_files) -> None:
    make_files(tmp_path, ["a.txt"])

    report = organize_directory(tmp_path, dry_run=True, journal=False, sink=NullReportSink())

    assert report.journal_path is None
    assert (tmp_path / "a.txt").exists()
    assert not (tmp_path / ".tidydir").exists()
