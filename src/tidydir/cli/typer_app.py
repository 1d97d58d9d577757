"""
tidydir Typer CLI Application

This is the Typer-based command-line interface for tidydir. The main
callback parses the global options, loads settings, configures logging
and stores everything in the CLI context for the commands to read.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from tidydir.cli.common.context import CliContext, LogLevel, set_cli_context
from tidydir.cli.common.error_handler import handle_cli_error
from tidydir.cli.common.options import (
    config_option,
    json_output_option,
    log_level_option,
    verbose_option,
    version_option,
)
from tidydir.cli.log_handler import log_command
from tidydir.cli.organize_handler import organize_command
from tidydir.cli.rollback_handler import rollback_command
from tidydir.config import load_settings
from tidydir.core.logging import setup_logging
from tidydir.shared.constants import Application, CLICommands
from tidydir.shared.errors import ConfigError

__version__ = Application.VERSION


def version_callback(value: bool) -> None:
    """Print version information and exit."""
    if value:
        typer.echo(f"{Application.NAME} {__version__}")
        raise typer.Exit


def main_callback(
    verbose: int,
    log_level: LogLevel,
    json_output: bool,
    version: bool,
    config: Path | None = None,
) -> None:
    """
    Process the common options and set up the global CLI context.

    Raises:
        ConfigError: If the configuration file cannot be loaded
    """
    if version:
        version_callback(value=True)

    settings = load_settings(config)
    context = CliContext(
        verbose=verbose,
        log_level=log_level,
        json_output=json_output,
        settings=settings,
    )
    set_cli_context(context)

    # An explicit --log-level or -v wins over the configured level.
    level = (
        context.get_effective_log_level()
        if verbose or log_level is not LogLevel.INFO
        else settings.logging.level
    )
    setup_logging(settings.logging, log_level=level)


app = typer.Typer(
    name=Application.NAME,
    help=Application.DESCRIPTION,
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
    invoke_without_command=True,
)


@app.callback()
def main(
    verbose: Annotated[int, verbose_option] = 0,
    log_level: Annotated[LogLevel, log_level_option] = LogLevel.INFO,
    json_output: Annotated[bool, json_output_option] = False,
    version: Annotated[bool, version_option] = False,
    config: Annotated[Optional[Path], config_option] = None,
) -> None:
    """tidydir - group a directory's files into per-extension folders."""
    try:
        main_callback(verbose, log_level, json_output, version, config)
    except ConfigError as e:
        exit_code = handle_cli_error(e, "main-callback", json_output=json_output)
        raise typer.Exit(exit_code) from e


app.command(CLICommands.ORGANIZE)(organize_command)
app.command(CLICommands.ROLLBACK)(rollback_command)
app.command(CLICommands.LOG)(log_command)
