"""Board snapshot model."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

from pydantic import BaseModel, Field, model_validator

from ..errors import InvalidMoveError
from .column import Column
from .enums import TaskStatus
from .move import MoveGesture
from .task import Task

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ColumnStats:
    """Derived statistics for a single column."""

    task_count: int = 0
    completed_count: int = 0
    overdue_count: int = 0
    estimated_hours: float = 0.0
    actual_hours: float = 0.0


@dataclass(frozen=True)
class BoardStats:
    """Derived statistics for the whole board."""

    total: int = 0
    completed: int = 0
    in_progress: int = 0
    overdue: int = 0


class BoardSnapshot(BaseModel):
    """Immutable point-in-time view of all columns and their task ordering.

    Invariants (checked on construction):
    - every task belongs to exactly one column order
    - positions inside a column are dense 0..n-1
    - every id in a column order exists in ``tasks`` and points back to
      that column
    """

    model_config = {"frozen": True}

    board_id: str = "default"
    columns: tuple[Column, ...] = ()
    order: dict[str, tuple[str, ...]] = Field(default_factory=dict)
    tasks: dict[str, Task] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_invariants(self) -> BoardSnapshot:
        column_ids = [col.id for col in self.columns]
        if len(column_ids) != len(set(column_ids)):
            raise ValueError("Column IDs must be unique")

        sort_orders = [col.sort_order for col in self.columns]
        if len(sort_orders) != len(set(sort_orders)):
            raise ValueError("Column sort_order values must be unique")

        if set(self.order) != set(column_ids):
            raise ValueError("Column order keys must match the board's columns")

        seen: set[str] = set()
        for column_id, task_ids in self.order.items():
            for position, task_id in enumerate(task_ids):
                if task_id in seen:
                    raise ValueError(f"Task '{task_id}' appears in more than one slot")
                seen.add(task_id)

                task = self.tasks.get(task_id)
                if task is None:
                    raise ValueError(f"Task '{task_id}' is ordered but missing from lookup")
                if task.column_id != column_id:
                    raise ValueError(
                        f"Task '{task_id}' is ordered in '{column_id}' "
                        f"but owned by '{task.column_id}'"
                    )
                if task.position != position:
                    raise ValueError(
                        f"Task '{task_id}' has position {task.position}, expected {position}"
                    )

        unordered = set(self.tasks) - seen
        if unordered:
            raise ValueError(f"Tasks not placed in any column: {sorted(unordered)}")

        return self

    @classmethod
    def empty(cls, board_id: str = "default") -> BoardSnapshot:
        return cls(board_id=board_id)

    @classmethod
    def from_records(
        cls,
        columns: Iterable[Column],
        tasks: Iterable[Task],
        board_id: str = "default",
    ) -> BoardSnapshot:
        """
        Build a snapshot from loose column and task records.

        Columns are sorted by ``sort_order``. Tasks are grouped by column and
        ranked by their stored position (ties broken by id), then renumbered
        densely. Tasks whose column is unknown are placed at the end of the
        first column.
        """
        ordered_columns = tuple(sorted(columns, key=lambda c: c.sort_order))
        grouped: dict[str, list[Task]] = {col.id: [] for col in ordered_columns}

        for task in tasks:
            if task.column_id in grouped:
                grouped[task.column_id].append(task)
            elif ordered_columns:
                first_col = ordered_columns[0].id
                logger.debug(
                    "Task %s references unknown column %s, placing in %s",
                    task.id,
                    task.column_id,
                    first_col,
                )
                grouped[first_col].append(
                    task.model_copy(update={"column_id": first_col, "position": 10**9})
                )
            else:
                raise ValueError(f"Task '{task.id}' cannot be placed: board has no columns")

        order: dict[str, tuple[str, ...]] = {}
        lookup: dict[str, Task] = {}
        for column_id, column_tasks in grouped.items():
            column_tasks.sort(key=lambda t: (t.position, t.id))
            order[column_id] = tuple(t.id for t in column_tasks)
            for position, task in enumerate(column_tasks):
                if task.position != position:
                    task = task.model_copy(update={"position": position})
                lookup[task.id] = task

        return cls(board_id=board_id, columns=ordered_columns, order=order, tasks=lookup)

    # --- Lookups ---

    @property
    def column_ids(self) -> list[str]:
        """Column IDs in display order."""
        return [col.id for col in self.columns]

    def get_column(self, column_id: str) -> Column | None:
        for col in self.columns:
            if col.id == column_id:
                return col
        return None

    def column_name(self, column_id: str) -> str:
        """Display name for a column, falling back to its ID."""
        column = self.get_column(column_id)
        return column.name if column else column_id

    def get_task(self, task_id: str) -> Task | None:
        return self.tasks.get(task_id)

    def get_column_tasks(self, column_id: str) -> tuple[Task, ...]:
        """Tasks of a column by position ascending. Unknown column yields ()."""
        return tuple(self.tasks[task_id] for task_id in self.order.get(column_id, ()))

    def all_tasks(self) -> list[Task]:
        """Every task, columns in display order, positions ascending."""
        result: list[Task] = []
        for column_id in self.column_ids:
            result.extend(self.get_column_tasks(column_id))
        return result

    def locate(self, task_id: str) -> tuple[str, int] | None:
        """(column_id, position) of a task, or None if it is not on the board."""
        task = self.tasks.get(task_id)
        if task is None:
            return None
        return (task.column_id, task.position)

    # --- Moves ---

    def landing_position(self, move: MoveGesture) -> int:
        """Where the task ends up once the target position is clamped."""
        target_length = len(self.order.get(move.target_column_id, ()))
        if not move.is_cross_column:
            target_length -= 1
        return max(0, min(move.target_position, target_length))

    def apply_move(self, move: MoveGesture) -> BoardSnapshot:
        """
        Return a new snapshot with the move applied.

        The task is taken out of the source column at ``source_position`` and
        inserted into the target column at ``target_position`` clamped to
        ``[0, len(target)]``. Both columns are renumbered densely. Moving a
        task onto its own position returns this snapshot unchanged.

        Raises:
            InvalidMoveError: the task is not at the stated source location or
                the target column does not exist.
        """
        if move.target_column_id not in self.order:
            raise InvalidMoveError(f"Unknown target column: {move.target_column_id}")

        source = self.order.get(move.source_column_id)
        if (
            source is None
            or move.source_position >= len(source)
            or source[move.source_position] != move.task_id
        ):
            raise InvalidMoveError(
                f"Task {move.task_id} is not at {move.source_column_id}[{move.source_position}]"
            )

        insert_at = self.landing_position(move)
        if not move.is_cross_column and insert_at == move.source_position:
            return self

        remaining = list(source)
        remaining.pop(move.source_position)

        order = dict(self.order)
        if move.is_cross_column:
            target = list(order[move.target_column_id])
            order[move.source_column_id] = tuple(remaining)
        else:
            target = remaining
        target.insert(insert_at, move.task_id)
        order[move.target_column_id] = tuple(target)

        tasks = dict(self.tasks)
        for column_id in {move.source_column_id, move.target_column_id}:
            for position, task_id in enumerate(order[column_id]):
                task = tasks[task_id]
                if task.column_id != column_id or task.position != position:
                    tasks[task_id] = task.model_copy(
                        update={"column_id": column_id, "position": position}
                    )

        return BoardSnapshot(
            board_id=self.board_id,
            columns=self.columns,
            order=order,
            tasks=tasks,
        )

    # --- Statistics ---

    def column_stats(self, column_id: str, today: date | None = None) -> ColumnStats:
        """Counts and hour totals for one column."""
        today = today or date.today()
        tasks = self.get_column_tasks(column_id)
        return ColumnStats(
            task_count=len(tasks),
            completed_count=sum(1 for t in tasks if t.is_completed),
            overdue_count=sum(1 for t in tasks if t.is_overdue(today)),
            estimated_hours=sum(t.estimated_hours or 0.0 for t in tasks),
            actual_hours=sum(t.actual_hours or 0.0 for t in tasks),
        )

    def board_stats(self, today: date | None = None) -> BoardStats:
        """Board-wide totals. Archived tasks are not counted."""
        today = today or date.today()
        tasks = [t for t in self.tasks.values() if t.status != TaskStatus.ARCHIVED]
        return BoardStats(
            total=len(tasks),
            completed=sum(1 for t in tasks if t.is_completed),
            in_progress=sum(1 for t in tasks if t.status == TaskStatus.ACTIVE),
            overdue=sum(1 for t in tasks if t.is_overdue(today)),
        )
