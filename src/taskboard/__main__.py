"""CLI entry point for taskboard."""

import argparse
from pathlib import Path

from . import __version__
from .config import Settings
from .logging import setup_logging


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="taskboard",
        description="Keyboard-accessible kanban board with optimistic reordering",
    )
    parser.add_argument(
        "--board-file",
        type=Path,
        default=None,
        help="Path to board.yml seeding the board (default: ./board.yml)",
    )
    parser.add_argument(
        "--generate",
        action="store_true",
        help="Generate a default board.yml and exit",
    )
    parser.add_argument(
        "--latency",
        type=float,
        default=None,
        help="Simulated persistence latency in seconds",
    )
    parser.add_argument(
        "--failure-rate",
        type=float,
        default=None,
        help="Fraction of moves the simulated backend rejects (0-1)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase logging verbosity (-v for INFO, -vv for DEBUG)",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Path to write logs to file",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> Settings:
    """Settings from environment, overridden by CLI arguments."""
    settings_kwargs: dict = {}
    if args.board_file:
        settings_kwargs["board_file"] = args.board_file
    if args.verbose:
        settings_kwargs["verbose"] = args.verbose
    if args.log_file:
        settings_kwargs["log_file"] = args.log_file
    if args.latency is not None:
        settings_kwargs["simulated_latency"] = args.latency
    if args.failure_rate is not None:
        settings_kwargs["failure_rate"] = args.failure_rate
    return Settings(**settings_kwargs)


def main() -> None:
    """Main entry point."""
    args = parse_args()
    settings = build_settings(args)

    setup_logging(settings.verbose, settings.log_file, tui=not args.generate)

    if args.generate:
        from .cli.generate import run_generate

        raise SystemExit(run_generate(settings.board_file))

    # Import here so --generate does not pull in Textual
    from .app import run

    run(settings)


if __name__ == "__main__":
    main()
