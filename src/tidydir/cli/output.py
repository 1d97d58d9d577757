"""Rich rendering of organize and rollback reports."""

from __future__ import annotations

from pathlib import Path

from rich.console import Console
from rich.table import Table

from tidydir.core.models import OrganizeReport, Outcome

_OUTCOME_STYLES = {
    Outcome.MOVED: "green",
    Outcome.SKIPPED: "yellow",
    Outcome.FAILED: "red",
}


def build_report_table(report: OrganizeReport, title: str) -> Table:
    """Build a per-entry table; every entry of the report gets a row."""
    table = Table(title=title, show_lines=False)
    table.add_column("Entry", overflow="fold")
    table.add_column("Category")
    table.add_column("Outcome")
    table.add_column("Reason", overflow="fold")

    for entry in report.entries:
        style = _OUTCOME_STYLES[entry.outcome]
        table.add_row(
            entry.entry_name,
            entry.category or "-",
            f"[{style}]{entry.outcome.value}[/{style}]",
            entry.reason or "",
        )
    return table


def format_summary(report: OrganizeReport) -> str:
    counts = report.counts()
    return (
        f"{counts['moved']} moved, {counts['skipped']} skipped, "
        f"{counts['failed']} failed ({counts['total']} entries)"
    )


def render_report(report: OrganizeReport, console: Console, *, title: str) -> None:
    """Print the report table followed by the count summary."""
    if report.dry_run:
        title = f"{title} (dry run)"

    if report.entries:
        console.print(build_report_table(report, title))
    else:
        console.print(f"[yellow]Nothing to do in {report.directory}[/yellow]")

    summary_style = "red" if report.has_failures else "green"
    console.print(f"[{summary_style}]{format_summary(report)}[/{summary_style}]")

    if report.journal_path is not None:
        console.print(f"Journal: {report.journal_path}", highlight=False)


def render_journals(logs: list[Path], console: Console) -> None:
    """Print the available journals, newest first."""
    if not logs:
        console.print("[yellow]No journals found[/yellow]")
        return

    table = Table(title="Operation journals")
    table.add_column("ID")
    table.add_column("Path", overflow="fold")
    for log_path in logs:
        table.add_row(journal_id(log_path), str(log_path))
    console.print(table)


def journal_id(log_path: Path) -> str:
    """Return the ID part of a journal file name (``organize-<id>.json``)."""
    return log_path.stem.split("-", 1)[1] if "-" in log_path.stem else log_path.stem
