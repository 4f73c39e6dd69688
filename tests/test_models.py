"""Tests for data models."""

from datetime import date

import pytest
from pydantic import ValidationError

from taskboard.models import BoardFile, Column, MoveGesture, Priority, Task, TaskStatus
from taskboard.models.board_file import ColumnEntry, TaskEntry


class TestTask:
    """Tests for Task model."""

    def test_defaults(self):
        task = Task(id="a", column_id="todo", title="A")
        assert task.priority == Priority.MEDIUM
        assert task.status == TaskStatus.ACTIVE
        assert task.position == 0

    def test_is_frozen(self):
        task = Task(id="a", column_id="todo", title="A")
        with pytest.raises(ValidationError):
            task.title = "B"

    def test_negative_hours_rejected(self):
        with pytest.raises(ValidationError):
            Task(id="a", column_id="todo", title="A", estimated_hours=-1)

    def test_is_overdue(self):
        task = Task(id="a", column_id="todo", title="A", due_date=date(2024, 1, 1))
        assert task.is_overdue(date(2024, 1, 2))
        assert not task.is_overdue(date(2024, 1, 1))

    def test_completed_task_is_not_overdue(self):
        task = Task(
            id="a",
            column_id="todo",
            title="A",
            due_date=date(2024, 1, 1),
            status=TaskStatus.COMPLETED,
        )
        assert not task.is_overdue(date(2025, 1, 1))

    def test_accessible_label(self):
        task = Task(
            id="a",
            column_id="todo",
            title="Fix login",
            priority=Priority.HIGH,
            due_date=date(2024, 3, 1),
            assignee="sam",
        )
        assert task.accessible_label() == (
            "Fix login. Priority: high. Status: active. Due: 2024-03-01. Assigned to: sam."
        )

    def test_accessible_label_fallbacks(self):
        label = Task(id="a", column_id="todo", title="A").accessible_label()
        assert "Due: No due date." in label
        assert "Assigned to: Unassigned." in label

    def test_accessible_hint_mentions_keys(self):
        task = Task(id="a", column_id="todo", title="A", ticket_key="PROJ-1")
        hint = task.accessible_hint()
        assert "Ticket: PROJ-1." in hint
        assert "Shift+arrows" in hint


class TestColumn:
    """Tests for Column model."""

    def test_hex_color_accepted(self):
        assert Column(id="a", name="A", color="#fff").color == "#fff"

    @pytest.mark.parametrize("color", ["#ff", "#gggggg"])
    def test_invalid_hex_color_rejected(self, color):
        with pytest.raises(ValidationError):
            Column(id="a", name="A", color=color)


class TestMoveGesture:
    """Tests for MoveGesture."""

    def test_cross_column(self):
        within = MoveGesture(
            task_id="a",
            source_column_id="todo",
            source_position=1,
            target_column_id="todo",
            target_position=1,
        )
        across = within.model_copy(update={"target_column_id": "done"})

        assert not within.is_cross_column
        assert across.is_cross_column

    def test_negative_source_position_rejected(self):
        with pytest.raises(ValidationError):
            MoveGesture(
                task_id="a",
                source_column_id="todo",
                source_position=-1,
                target_column_id="todo",
                target_position=0,
            )


class TestBoardFile:
    """Tests for the board.yml model."""

    def test_default_board(self):
        board = BoardFile.default()
        assert [col.id for col in board.columns] == ["todo", "in_progress", "done"]
        assert len(board.tasks) == 2

    def test_to_snapshot_uses_file_order(self):
        board = BoardFile(
            columns=[
                ColumnEntry(id="backlog", name="Backlog"),
                ColumnEntry(id="done", name="Done"),
            ],
            tasks=[
                TaskEntry(id="b", column="backlog", title="B"),
                TaskEntry(id="d", column="done", title="D"),
                TaskEntry(id="a", column="backlog", title="A"),
            ],
        )

        snapshot = board.to_snapshot()

        assert snapshot.column_ids == ["backlog", "done"]
        assert snapshot.order["backlog"] == ("b", "a")
        assert snapshot.tasks["a"].position == 1

    def test_requires_a_column(self):
        with pytest.raises(ValidationError):
            BoardFile(columns=[])

    def test_duplicate_column_ids_rejected(self):
        with pytest.raises(ValidationError, match="unique"):
            BoardFile(
                columns=[ColumnEntry(id="a", name="A"), ColumnEntry(id="a", name="Again")]
            )

    def test_unknown_task_column_rejected(self):
        with pytest.raises(ValidationError, match="unknown column"):
            BoardFile(
                columns=[ColumnEntry(id="todo", name="To Do")],
                tasks=[TaskEntry(id="x", column="nope", title="X")],
            )

    def test_duplicate_task_ids_rejected(self):
        with pytest.raises(ValidationError, match="Duplicate task ID"):
            BoardFile(
                columns=[ColumnEntry(id="todo", name="To Do")],
                tasks=[
                    TaskEntry(id="x", column="todo", title="X"),
                    TaskEntry(id="x", column="todo", title="Y"),
                ],
            )

    @pytest.mark.parametrize("column_id", ["Todo", "1st", "in progress"])
    def test_invalid_column_id_rejected(self, column_id):
        with pytest.raises(ValidationError):
            ColumnEntry(id=column_id, name="X")
