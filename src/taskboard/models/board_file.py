"""Models for the board.yml seed file."""

from datetime import date

from pydantic import BaseModel, Field, field_validator, model_validator

from .board import BoardSnapshot
from .column import Column
from .enums import Priority, TaskStatus
from .task import Task


def _validate_identifier(value: str, name: str = "ID") -> str:
    """Validate an identifier is lowercase alphanumeric with underscores or hyphens."""
    if not value:
        raise ValueError(f"{name} cannot be empty")
    if not value[0].isalpha():
        raise ValueError(f"{name} must start with a letter")
    if not all(c.isalnum() or c in "_-" for c in value):
        raise ValueError(f"{name} must be alphanumeric with underscores or hyphens only")
    if value != value.lower():
        raise ValueError(f"{name} must be lowercase")
    return value


class ColumnEntry(BaseModel):
    """A column as written in board.yml. Order in the file is the sort order."""

    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    color: str = "white"
    description: str | None = None

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate column ID is lowercase with underscores only."""
        return _validate_identifier(v, "Column ID")


class TaskEntry(BaseModel):
    """A task as written in board.yml. Order in the file is the position."""

    id: str = Field(..., min_length=1)
    column: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str | None = None
    ticket_key: str | None = None
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.ACTIVE
    due_date: date | None = None
    assignee: str | None = None
    estimated_hours: float | None = None
    actual_hours: float | None = None


class BoardFile(BaseModel):
    """Root model of board.yml."""

    version: int = 1
    board_id: str = "default"
    title: str = "Task Board"
    columns: list[ColumnEntry] = Field(..., min_length=1)
    tasks: list[TaskEntry] = Field(default_factory=list)

    @field_validator("columns")
    @classmethod
    def validate_columns(cls, v: list[ColumnEntry]) -> list[ColumnEntry]:
        """Validate column IDs are unique."""
        ids = [col.id for col in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Column IDs must be unique")
        return v

    @model_validator(mode="after")
    def validate_tasks(self) -> "BoardFile":
        """Every task must reference a known column and have a unique ID."""
        column_ids = {col.id for col in self.columns}
        task_ids: set[str] = set()
        for task in self.tasks:
            if task.column not in column_ids:
                raise ValueError(f"Task '{task.id}' references unknown column '{task.column}'")
            if task.id in task_ids:
                raise ValueError(f"Duplicate task ID '{task.id}'")
            task_ids.add(task.id)
        return self

    def to_snapshot(self) -> BoardSnapshot:
        """Build the initial board snapshot described by this file."""
        columns = [
            Column(
                id=entry.id,
                name=entry.name,
                color=entry.color,
                description=entry.description,
                sort_order=index,
            )
            for index, entry in enumerate(self.columns)
        ]

        positions: dict[str, int] = {}
        tasks: list[Task] = []
        for entry in self.tasks:
            position = positions.get(entry.column, 0)
            positions[entry.column] = position + 1
            tasks.append(
                Task(
                    id=entry.id,
                    column_id=entry.column,
                    title=entry.title,
                    description=entry.description,
                    ticket_key=entry.ticket_key,
                    priority=entry.priority,
                    status=entry.status,
                    due_date=entry.due_date,
                    assignee=entry.assignee,
                    estimated_hours=entry.estimated_hours,
                    actual_hours=entry.actual_hours,
                    position=position,
                )
            )

        return BoardSnapshot.from_records(columns, tasks, board_id=self.board_id)

    @classmethod
    def default(cls) -> "BoardFile":
        """Return a default 3-column board with a couple of sample tasks."""
        return cls(
            columns=[
                ColumnEntry(id="todo", name="To Do", color="blue"),
                ColumnEntry(id="in_progress", name="In Progress", color="yellow"),
                ColumnEntry(id="done", name="Done", color="green"),
            ],
            tasks=[
                TaskEntry(id="welcome", column="todo", title="Welcome to taskboard"),
                TaskEntry(
                    id="try-moving",
                    column="todo",
                    title="Move me with Shift+arrows",
                    description="Moves are saved in the background",
                ),
            ],
        )
