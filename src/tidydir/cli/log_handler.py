"""Log command handler: lists the operation journals of a directory."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from tidydir.cli.common.context import get_cli_context
from tidydir.cli.common.error_handler import format_json_output, handle_cli_error
from tidydir.cli.common.options import directory_argument, json_output_option
from tidydir.cli.output import journal_id, render_journals
from tidydir.core.log_manager import OperationLogManager
from tidydir.shared.constants import CLICommands
from tidydir.shared.errors import DirectoryNotFoundError


def log_command(
    directory: Annotated[Path, directory_argument],
    json_output: Annotated[bool, json_output_option] = False,
) -> None:
    """List the operation journals recorded for DIRECTORY, newest first."""
    context = get_cli_context()
    json_output = json_output or context.json_output

    if not directory.is_dir():
        exit_code = handle_cli_error(
            DirectoryNotFoundError(directory, operation=CLICommands.LOG),
            CLICommands.LOG,
            json_output=json_output,
        )
        raise typer.Exit(exit_code)

    logs = OperationLogManager(directory).list_logs()

    if json_output:
        typer.echo(
            format_json_output(
                CLICommands.LOG,
                success=True,
                data={
                    "journals": [
                        {"id": journal_id(path), "path": str(path)} for path in logs
                    ]
                },
            )
        )
        return

    render_journals(logs, Console())
