"""Move gesture and pending move models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

from ..errors import FailureKind

if TYPE_CHECKING:
    from .board import BoardSnapshot


class MoveGesture(BaseModel):
    """A completed drag/drop or keyboard move.

    Pointer tracking lives in the host; it only has to produce this shape.
    ``target_position`` is the index in the target column after the task has
    been taken out of its source column.
    """

    model_config = {"frozen": True}

    task_id: str
    source_column_id: str
    source_position: int = Field(..., ge=0)
    target_column_id: str
    target_position: int

    @property
    def is_cross_column(self) -> bool:
        return self.source_column_id != self.target_column_id


class MoveState(str, Enum):
    """Lifecycle of a single move in the reorder engine."""

    IDLE = "idle"
    APPLYING = "applying"
    PERSISTING = "persisting"
    CONFIRMED = "confirmed"
    ROLLED_BACK = "rolled_back"
    SUPERSEDED = "superseded"  # A later move of the same task took over
    SKIPPED = "skipped"  # Rollback suppressed, newer local state
    NOOP = "noop"  # Dropped on its own position
    REJECTED = "rejected"  # Gesture did not fit the current board


@dataclass
class PendingMove:
    """A move whose persistence call has not been reconciled yet."""

    gesture: MoveGesture
    snapshot_before: BoardSnapshot  # Board the move was applied to
    snapshot_after: BoardSnapshot  # What the optimistic apply published
    landed_position: int  # Clamped target position the task ended at
    restore_column_id: str  # Where a rollback puts the task
    restore_position: int
    sequence: int
    state: MoveState = MoveState.IDLE
    supersedes: int | None = None  # Sequence of the move this one took over from

    @property
    def task_id(self) -> str:
        return self.gesture.task_id

    @property
    def source_column_id(self) -> str:
        return self.gesture.source_column_id

    @property
    def source_position(self) -> int:
        return self.gesture.source_position

    @property
    def target_column_id(self) -> str:
        return self.gesture.target_column_id

    @property
    def target_position(self) -> int:
        return self.gesture.target_position

    @property
    def superseded(self) -> bool:
        return self.state == MoveState.SUPERSEDED


@dataclass
class MoveOutcome:
    """Result of running a move through the engine."""

    task_id: str
    state: MoveState
    failure_kind: FailureKind | None = None
    reason: str | None = None
    announcements: list[str] = field(default_factory=list)

    @property
    def confirmed(self) -> bool:
        return self.state == MoveState.CONFIRMED

    @property
    def rolled_back(self) -> bool:
        return self.state == MoveState.ROLLED_BACK
