"""Tests for ConfigService."""

from pathlib import Path

import pytest

from taskboard.services import ConfigService


@pytest.fixture
def board_file(tmp_path: Path) -> Path:
    return tmp_path / "board.yml"


class TestConfigServiceLoading:
    """Tests for ConfigService file loading."""

    def test_default_on_missing_file(self, board_file: Path):
        """Missing board.yml returns the default board."""
        service = ConfigService(board_file)
        config = service.get_config()

        assert [col.id for col in config.columns] == ["todo", "in_progress", "done"]
        assert not service.has_config_error

    def test_load_valid_board(self, board_file: Path):
        board_file.write_text(
            """
version: 1
board_id: sprint-7
columns:
  - id: backlog
    name: "Backlog"
  - id: done
    name: "Done"
    color: "#00ff00"
tasks:
  - id: login
    column: backlog
    title: Fix login bug
    priority: high
    due_date: 2024-05-01
  - id: docs
    column: done
    title: Write docs
    status: completed
"""
        )

        service = ConfigService(board_file)
        snapshot = service.get_snapshot()

        assert snapshot.board_id == "sprint-7"
        assert snapshot.column_ids == ["backlog", "done"]
        assert snapshot.order == {"backlog": ("login",), "done": ("docs",)}
        assert snapshot.tasks["login"].priority.value == "high"
        assert not service.has_config_error

    def test_empty_file_uses_default(self, board_file: Path):
        board_file.write_text("")

        service = ConfigService(board_file)
        config = service.get_config()

        assert len(config.columns) == 3
        assert service.has_config_error
        assert "empty" in service.config_error

    def test_invalid_yaml_uses_default(self, board_file: Path):
        board_file.write_text("columns: [unclosed")

        service = ConfigService(board_file)
        service.get_config()

        assert service.has_config_error
        assert "Invalid YAML" in service.config_error

    def test_validation_error_uses_default(self, board_file: Path, caplog):
        board_file.write_text(
            """
columns:
  - id: todo
    name: To Do
tasks:
  - id: a
    column: nowhere
    title: A
"""
        )

        service = ConfigService(board_file)
        with caplog.at_level("WARNING", logger="taskboard"):
            config = service.get_config()

        assert [col.id for col in config.columns] == ["todo", "in_progress", "done"]
        assert "unknown column" in service.config_error
        assert any("board.yml" in r.message for r in caplog.records)

    def test_non_mapping_yaml_uses_default(self, board_file: Path):
        board_file.write_text("- just\n- a list\n")

        service = ConfigService(board_file)
        service.get_config()

        assert service.has_config_error

    def test_config_is_cached(self, board_file: Path):
        service = ConfigService(board_file)
        first = service.get_config()
        assert service.get_config() is first

        board_file.write_text("columns:\n  - id: only\n    name: Only\n")
        assert service.get_config() is first
