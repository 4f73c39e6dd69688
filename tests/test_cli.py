"""Tests for command line parsing and settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from taskboard.__main__ import build_settings, parse_args
from taskboard.config import Settings


class TestParseArgs:
    """Tests for parse_args."""

    def test_defaults(self):
        args = parse_args([])

        assert args.board_file is None
        assert not args.generate
        assert args.verbose == 0

    def test_all_options(self):
        args = parse_args(
            [
                "--board-file",
                "boards/team.yml",
                "--latency",
                "0.5",
                "--failure-rate",
                "0.25",
                "-vv",
                "--log-file",
                "taskboard.log",
            ]
        )

        assert args.board_file == Path("boards/team.yml")
        assert args.latency == 0.5
        assert args.failure_rate == 0.25
        assert args.verbose == 2
        assert args.log_file == Path("taskboard.log")


class TestBuildSettings:
    """Tests for merging CLI arguments into settings."""

    def test_cli_overrides(self):
        settings = build_settings(parse_args(["--board-file", "x.yml", "--latency", "0"]))

        assert settings.board_file == Path("x.yml")
        assert settings.simulated_latency == 0

    def test_environment_is_used(self, monkeypatch):
        monkeypatch.setenv("TASKBOARD_FAILURE_RATE", "0.5")
        monkeypatch.setenv("TASKBOARD_MOVE_TIMEOUT", "3")

        settings = build_settings(parse_args([]))

        assert settings.failure_rate == 0.5
        assert settings.move_timeout == 3

    def test_cli_beats_environment(self, monkeypatch):
        monkeypatch.setenv("TASKBOARD_FAILURE_RATE", "0.5")
        settings = build_settings(parse_args(["--failure-rate", "0.1"]))
        assert settings.failure_rate == 0.1

    def test_invalid_failure_rate_rejected(self):
        with pytest.raises(ValidationError):
            build_settings(parse_args(["--failure-rate", "2"]))

    def test_settings_defaults(self):
        settings = Settings()
        assert settings.board_file == Path("board.yml")
        assert settings.announcement_delay == 1.0
