"""Organize command handler for tidydir CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from tidydir.cli.common.context import CliContext, get_cli_context
from tidydir.cli.common.error_handler import format_json_output, handle_cli_error
from tidydir.cli.common.options import (
    directory_argument,
    dry_run_option,
    json_output_option,
)
from tidydir.cli.output import render_report
from tidydir.core.models import OrganizeReport
from tidydir.core.organizer import organize_directory
from tidydir.shared.constants import CLICommands, CLIDefaults
from tidydir.shared.errors import TidyDirError

logger = logging.getLogger(__name__)


def exit_code_for(report: OrganizeReport) -> int:
    """0 when nothing failed, 1 when at least one entry failed."""
    if report.has_failures:
        return CLIDefaults.EXIT_PARTIAL_FAILURE
    return CLIDefaults.EXIT_SUCCESS


def handle_organize_command(
    directory: Path,
    context: CliContext,
    *,
    dry_run: bool = False,
    journal: bool = True,
    skip_hidden: bool = False,
    console: Console | None = None,
) -> int:
    """Run the organizer on ``directory`` and print its report.

    Returns:
        Exit code (0 success, 1 partial failure, 2 fatal error)
    """
    console = console or Console()
    options = context.settings.organize

    logger.info("Organizing %s (dry_run=%s)", directory, dry_run)
    try:
        report = organize_directory(
            directory,
            dry_run=dry_run,
            journal=journal and options.journal,
            noext_category=options.noext_category,
            include_hidden=options.include_hidden and not skip_hidden,
        )
    except (TidyDirError, OSError) as e:
        return handle_cli_error(e, CLICommands.ORGANIZE, json_output=context.json_output)

    if context.json_output:
        typer.echo(
            format_json_output(
                CLICommands.ORGANIZE,
                success=not report.has_failures,
                data=report.to_dict(),
            )
        )
    else:
        render_report(report, console, title=f"Organize {directory}")

    return exit_code_for(report)


def organize_command(
    directory: Annotated[Path, directory_argument],
    dry_run: Annotated[bool, dry_run_option] = False,
    no_journal: Annotated[
        bool,
        typer.Option("--no-journal", help="Do not write an operation journal."),
    ] = False,
    skip_hidden: Annotated[
        bool,
        typer.Option("--skip-hidden", help="Leave dot-files where they are."),
    ] = False,
    json_output: Annotated[bool, json_output_option] = False,
) -> None:
    """Group the files of DIRECTORY into one folder per extension.

    Examples:
        tidydir organize ~/Downloads
        tidydir organize ~/Downloads --dry-run
    """
    context = get_cli_context()
    if json_output:
        context = context.model_copy(update={"json_output": True})

    exit_code = handle_organize_command(
        directory,
        context,
        dry_run=dry_run,
        journal=not no_journal,
        skip_hidden=skip_hidden,
    )
    if exit_code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(exit_code)
