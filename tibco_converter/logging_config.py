"""
Logging configuration for the converter.

Modules obtain loggers through ``get_logger`` and never configure handlers
themselves; the CLI calls ``setup_logging`` once at startup.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "tibco_converter"

_configured = False


def setup_logging(
    level: int = logging.WARNING,
    verbose: bool = False,
    console: Optional[Console] = None,
) -> logging.Logger:
    """
    Install a rich handler on the package logger.

    Args:
        level: Base logging level
        verbose: Force DEBUG level and show file paths
        console: Console to log to (defaults to stderr)

    Returns:
        The configured package logger
    """
    global _configured

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else level)

    if _configured:
        return logger

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=verbose,
        show_path=verbose,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    _configured = True

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a logger in the package namespace."""
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
