"""Service for board state management."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..models import BoardSnapshot, MoveGesture, Task

if TYPE_CHECKING:
    from ..repositories import PersistenceProtocol

logger = logging.getLogger(__name__)

BoardListener = Callable[[BoardSnapshot], None]


class BoardService:
    """
    Holds the authoritative client-side board.

    The current snapshot is replaced wholesale on every change, so a reader
    holding a snapshot never observes a half-applied move. Listeners are
    called synchronously after each replacement.
    """

    def __init__(
        self,
        persistence: PersistenceProtocol,
        snapshot: BoardSnapshot | None = None,
    ) -> None:
        self.persistence = persistence
        self._snapshot = snapshot or BoardSnapshot.empty()
        self._listeners: list[BoardListener] = []

    @property
    def snapshot(self) -> BoardSnapshot:
        """The current board."""
        return self._snapshot

    def subscribe(self, listener: BoardListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def get_column_tasks(self, column_id: str) -> tuple[Task, ...]:
        """Tasks of a column by position. Unknown column yields ()."""
        return self._snapshot.get_column_tasks(column_id)

    def apply_move(self, move: MoveGesture) -> BoardSnapshot:
        """Apply a move to the current board and publish the result."""
        new_snapshot = self._snapshot.apply_move(move)
        self._publish(new_snapshot)
        return new_snapshot

    def restore_snapshot(self, snapshot: BoardSnapshot) -> None:
        """Replace the current board wholesale (used for rollback and refetch)."""
        self._publish(snapshot)

    async def load(self, board_id: str | None = None) -> BoardSnapshot:
        """Fetch the board from persistence and make it current."""
        board_id = board_id or self._snapshot.board_id
        snapshot = await self.persistence.fetch_board(board_id)
        logger.info(
            "Board loaded: %s (%d columns, %d tasks)",
            board_id,
            len(snapshot.columns),
            len(snapshot.tasks),
        )
        self.restore_snapshot(snapshot)
        return snapshot

    def _publish(self, snapshot: BoardSnapshot) -> None:
        if snapshot is self._snapshot:
            return
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)
