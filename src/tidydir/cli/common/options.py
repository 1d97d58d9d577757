"""
Reusable Typer Options Module

Common option definitions shared by the main callback and the commands.
Use them as ``Annotated[<type>, <option>]`` parameter metadata.
"""

from __future__ import annotations

import typer

# Verbose option - count-based for multiple -v flags
verbose_option = typer.Option(
    "--verbose",
    "-v",
    count=True,
    help="Enable verbose output (equivalent to --log-level DEBUG).",
)

# Log level option - enum-based with case-insensitive choices
log_level_option = typer.Option(
    "--log-level",
    case_sensitive=False,
    help="Set the logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Default: INFO.",
)

# JSON output option - flag-based
json_output_option = typer.Option(
    "--json",
    help="Enable machine-readable JSON output instead of a table.",
)

# Config file option - for main app only
config_option = typer.Option(
    "--config",
    "-c",
    help="TOML configuration file (default: $TIDYDIR_CONFIG).",
    dir_okay=False,
)

# Version option - for main app only
version_option = typer.Option(
    "--version",
    "-V",
    help="Show version information and exit.",
    is_eager=True,
)

# Dry-run option - shared by organize and rollback
dry_run_option = typer.Option(
    "--dry-run",
    help="Show what would happen without moving any file.",
)

# Directory argument - shared by every command
directory_argument = typer.Argument(
    help="Directory whose files are organized.",
)
