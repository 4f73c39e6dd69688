"""Persistence protocol consumed by the reorder engine."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from ..errors import FailureKind
from ..models import BoardSnapshot


@dataclass(frozen=True)
class MoveResult:
    """Answer of the persistence API to a move command."""

    success: bool
    kind: FailureKind | None = None
    reason: str | None = None

    @classmethod
    def ok(cls) -> MoveResult:
        return cls(success=True)

    @classmethod
    def failed(cls, kind: FailureKind, reason: str) -> MoveResult:
        return cls(success=False, kind=kind, reason=reason)


class PersistenceProtocol(Protocol):
    """Interface for board persistence backends.

    The board core only issues move commands and fetches whole boards.
    Column/task edits and archive/delete go through the host's own forms.
    """

    async def submit_move(
        self, task_id: str, target_column_id: str, target_position: int
    ) -> MoveResult:
        """Persist a task move.

        Args:
            task_id: Task being moved
            target_column_id: Column the task ends up in
            target_position: Position within the target column

        Returns:
            ``MoveResult.ok()`` or ``MoveResult.failed(kind, reason)``.
            Backends may also raise ``PersistenceError`` (or ``OSError`` for
            transport problems); the engine treats both as failures.
        """
        ...

    async def fetch_board(self, board_id: str) -> BoardSnapshot:
        """Load the authoritative board.

        Args:
            board_id: Identifier of the board to fetch.

        Returns:
            A fresh snapshot; it replaces whatever the client holds.
        """
        ...
