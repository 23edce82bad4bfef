"""
Logging setup for CLI commands.

Library diagnostics go through the standard logging module; the CLI routes
them to a Rich console on stderr so they never mix with command output.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

err_console = Console(stderr=True)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """
    Route droconv log records to stderr.

    Args:
        verbose: Include debug records and source locations
        quiet: Only show errors
    """
    if quiet:
        level = logging.ERROR
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=verbose,
        markup=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)
