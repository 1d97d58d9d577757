"""
CLI Error Handling Utilities

Consistent error handling across CLI commands: exception to exit-code
mapping, logging, and human or JSON error output.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import typer
from rich.console import Console

from tidydir.shared.constants import CLIDefaults
from tidydir.shared.errors import CliError, ErrorCode, TidyDirError, create_cli_error

logger = logging.getLogger(__name__)


def format_json_output(
    command: str,
    *,
    success: bool,
    errors: list[str] | None = None,
    data: dict[str, Any] | None = None,
) -> str:
    """Format a command result as a JSON document."""
    output: dict[str, Any] = {
        "success": success,
        "command": command,
    }

    if errors:
        output["errors"] = errors

    if data is not None:
        output["data"] = data

    return json.dumps(output, indent=2, ensure_ascii=False)


def handle_cli_error(
    error: Exception,
    command: str,
    *,
    json_output: bool = False,
) -> int:
    """Handle CLI errors with consistent formatting and logging.

    Returns:
        Exit code for the CLI command
    """
    cli_error = _map_error_to_cli_error(error, command)

    if isinstance(error, TidyDirError):
        logger.error("%s failed: %s", command, error, extra={"error": error.to_dict()})
    else:
        logger.exception("Unexpected error in %s", command)

    if json_output:
        data = error.to_dict() if isinstance(error, TidyDirError) else None
        typer.echo(
            format_json_output(
                command,
                success=False,
                errors=[cli_error.message],
                data=data,
            )
        )
    else:
        Console(stderr=True).print(f"[red]Error:[/red] {cli_error.message}", highlight=False)

    return cli_error.exit_code


def _map_error_to_cli_error(error: Exception, command: str) -> CliError:
    """Map specific exception types to CLI errors."""
    if isinstance(error, CliError):
        return error

    if isinstance(error, TidyDirError):
        return create_cli_error(
            message=error.message,
            command=command,
            code=error.code,
            exit_code=CLIDefaults.EXIT_ERROR,
            original_error=error,
        )

    if isinstance(error, OSError):
        return create_cli_error(
            message=f"File system error: {error}",
            command=command,
            code=ErrorCode.PERMISSION_DENIED
            if isinstance(error, PermissionError)
            else ErrorCode.CLI_UNEXPECTED_ERROR,
            exit_code=CLIDefaults.EXIT_ERROR,
            original_error=error,
        )

    return create_cli_error(
        message=f"Unexpected error: {error}",
        command=command,
        exit_code=CLIDefaults.EXIT_ERROR,
        original_error=error,
    )
