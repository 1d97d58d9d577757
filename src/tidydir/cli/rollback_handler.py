"""Rollback command handler for tidydir CLI."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console

from tidydir.cli.common.context import CliContext, get_cli_context
from tidydir.cli.common.error_handler import format_json_output, handle_cli_error
from tidydir.cli.common.options import (
    directory_argument,
    dry_run_option,
    json_output_option,
)
from tidydir.cli.organize_handler import exit_code_for
from tidydir.cli.output import render_report
from tidydir.core.log_manager import OperationLogManager
from tidydir.core.rollback_manager import RollbackManager
from tidydir.shared.constants import CLICommands, CLIDefaults
from tidydir.shared.errors import DirectoryNotFoundError, TidyDirError

logger = logging.getLogger(__name__)


def handle_rollback_command(
    directory: Path,
    context: CliContext,
    *,
    log_id: str | None = None,
    dry_run: bool = False,
    console: Console | None = None,
) -> int:
    """Undo the journaled moves of ``directory``.

    Uses the journal named by ``log_id`` or the most recent one.

    Returns:
        Exit code (0 success, 1 partial failure, 2 fatal error)
    """
    console = console or Console()

    try:
        if not directory.is_dir():
            raise DirectoryNotFoundError(directory, operation="rollback")
        log_manager = OperationLogManager(directory)
        log_path = (
            log_manager.get_log_by_id(log_id) if log_id else log_manager.latest_log()
        )
        logger.info("Rolling back %s (dry_run=%s)", log_path, dry_run)
        report = RollbackManager(log_manager).rollback(log_path, dry_run=dry_run)
    except (TidyDirError, OSError) as e:
        return handle_cli_error(e, CLICommands.ROLLBACK, json_output=context.json_output)

    if context.json_output:
        data = report.to_dict()
        data["journal"] = str(log_path)
        typer.echo(
            format_json_output(
                CLICommands.ROLLBACK,
                success=not report.has_failures,
                data=data,
            )
        )
    else:
        render_report(report, console, title=f"Rollback {log_path.name}")

    return exit_code_for(report)


def rollback_command(
    directory: Annotated[Path, directory_argument],
    log_id: Annotated[
        Optional[str],
        typer.Argument(help="Journal ID to undo (default: the most recent)."),
    ] = None,
    dry_run: Annotated[bool, dry_run_option] = False,
    json_output: Annotated[bool, json_output_option] = False,
) -> None:
    """Move files organized by a previous run back to where they were."""
    context = get_cli_context()
    if json_output:
        context = context.model_copy(update={"json_output": True})

    exit_code = handle_rollback_command(
        directory,
        context,
        log_id=log_id,
        dry_run=dry_run,
    )
    if exit_code != CLIDefaults.EXIT_SUCCESS:
        raise typer.Exit(exit_code)
