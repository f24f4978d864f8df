"""
Logging setup for the command-line interface.

The library only creates module loggers; applications decide where the
records go. The CLI routes them through Rich.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "docextract"


def configure_logging(level: str = "WARNING", console: Console | None = None) -> logging.Logger:
    """
    Attach a Rich handler to the package logger.

    Args:
        level: Log level name.
        console: Console to write to. Defaults to stderr.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
