"""Data models."""

from .board import BoardSnapshot, BoardStats, ColumnStats
from .board_file import BoardFile
from .column import Column
from .enums import Politeness, Priority, TaskStatus, ViewMode
from .move import MoveGesture, MoveOutcome, MoveState, PendingMove
from .task import Task

__all__ = [
    "BoardFile",
    "BoardSnapshot",
    "BoardStats",
    "Column",
    "ColumnStats",
    "MoveGesture",
    "MoveOutcome",
    "MoveState",
    "PendingMove",
    "Politeness",
    "Priority",
    "Task",
    "TaskStatus",
    "ViewMode",
]
