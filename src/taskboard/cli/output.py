"""Colored CLI output for the non-interactive commands."""

import sys
from typing import TextIO

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
RED = "\033[31m"
RESET = "\033[0m"

CHECK = "✓"  # ✓
BULLET = "•"  # •
CROSS = "✗"  # ✗


def _is_tty(stream: TextIO) -> bool:
    return hasattr(stream, "isatty") and stream.isatty()


def _emit(symbol: str, color: str, message: str, stream: TextIO) -> None:
    if _is_tty(stream):
        symbol = f"{color}{symbol}{RESET}"
    print(f"{symbol} {message}", file=stream)


def success(message: str) -> None:
    """Green check mark on stdout."""
    _emit(CHECK, GREEN, message, sys.stdout)


def info(message: str) -> None:
    """Yellow bullet on stdout."""
    _emit(BULLET, YELLOW, message, sys.stdout)


def error(message: str) -> None:
    """Red cross on stderr."""
    _emit(CROSS, RED, message, sys.stderr)
