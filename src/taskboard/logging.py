"""Logging configuration for taskboard."""

import logging
import sys
from pathlib import Path

LOGGER_NAME = "taskboard"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def log_level(verbose: int) -> int:
    """Map the ``-v`` count to a logging level (0=WARNING, 1=INFO, 2+=DEBUG)."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def setup_logging(verbose: int = 0, log_file: Path | None = None, tui: bool = False) -> None:
    """Configure the ``taskboard`` logger.

    Console output goes to stderr for the command line tools. While the TUI
    runs it owns the terminal, so console records are handed to Textual's
    log instead (visible with ``textual console``). Rollback and stale-move
    warnings are always kept; ``-v`` adds move traffic, ``-vv`` reconciliation
    detail. Calling this again replaces the handlers of the previous call.

    Args:
        verbose: Verbosity level (0=warnings, 1=INFO, 2+=DEBUG)
        log_file: Optional path to also write logs to
        tui: Route console output through Textual
    """
    level = log_level(verbose)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console: logging.Handler
    if tui:
        from textual.logging import TextualHandler

        console = TextualHandler()
    else:
        console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    console.setFormatter(formatter)
    logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # The app's own handlers decide what is shown
    logger.propagate = False
    logger.debug("Logging configured: level=%s tui=%s", logging.getLevelName(level), tui)
