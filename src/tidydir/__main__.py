"""
tidydir Package Main Entry Point

Runs the CLI when the package is executed with ``python -m tidydir``.
"""

import logging
import sys

from tidydir.cli.common.error_handler import handle_cli_error
from tidydir.cli.typer_app import app
from tidydir.shared.constants import CLIDefaults

logger = logging.getLogger(__name__)


def main() -> None:
    """Console-script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        logger.info("Command interrupted by user")
        sys.exit(CLIDefaults.EXIT_ERROR)
    except SystemExit:  # pylint: disable=try-except-raise
        raise
    except Exception as e:  # noqa: BLE001
        exit_code = handle_cli_error(e, "tidydir-main")
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
