"""In-memory persistence backend used by the demo app and tests."""

from __future__ import annotations

import asyncio
import logging
import random
from collections import deque

from ..errors import FailureKind, InvalidMoveError, PersistenceError
from ..models import BoardSnapshot, MoveGesture
from .protocol import MoveResult

logger = logging.getLogger(__name__)


class InMemoryPersistence:
    """
    Persistence backend that keeps the "server" board in memory.

    Supports simulated latency and failure injection so the optimistic
    update path can be exercised without a real server.
    """

    def __init__(
        self,
        snapshot: BoardSnapshot,
        latency: float = 0.0,
        failure_rate: float = 0.0,
        rng: random.Random | None = None,
    ) -> None:
        self._snapshot = snapshot
        self.latency = latency
        self.failure_rate = failure_rate
        self._rng = rng or random.Random()
        self._scripted: deque[MoveResult | PersistenceError] = deque()
        self.calls: list[tuple[str, str, int]] = []

    @property
    def snapshot(self) -> BoardSnapshot:
        """The board as the backend currently stores it."""
        return self._snapshot

    def fail_next(self, kind: FailureKind, reason: str = "Rejected") -> None:
        """Make the next submit_move return a failure."""
        self._scripted.append(MoveResult.failed(kind, reason))

    def raise_next(self, error: PersistenceError) -> None:
        """Make the next submit_move raise ``error``."""
        self._scripted.append(error)

    async def submit_move(
        self, task_id: str, target_column_id: str, target_position: int
    ) -> MoveResult:
        self.calls.append((task_id, target_column_id, target_position))
        if self.latency > 0:
            await asyncio.sleep(self.latency)

        if self._scripted:
            scripted = self._scripted.popleft()
            if isinstance(scripted, PersistenceError):
                raise scripted
            return scripted

        if self.failure_rate > 0 and self._rng.random() < self.failure_rate:
            logger.debug("Simulated failure for move of %s", task_id)
            return MoveResult.failed(FailureKind.SERVER, "Simulated server error")

        location = self._snapshot.locate(task_id)
        if location is None:
            return MoveResult.failed(FailureKind.VALIDATION, f"Unknown task {task_id}")

        column_id, position = location
        gesture = MoveGesture(
            task_id=task_id,
            source_column_id=column_id,
            source_position=position,
            target_column_id=target_column_id,
            target_position=target_position,
        )
        try:
            self._snapshot = self._snapshot.apply_move(gesture)
        except InvalidMoveError as e:
            return MoveResult.failed(FailureKind.VALIDATION, str(e))

        logger.debug("Stored move: %s -> %s[%d]", task_id, target_column_id, target_position)
        return MoveResult.ok()

    async def fetch_board(self, board_id: str) -> BoardSnapshot:
        if self.latency > 0:
            await asyncio.sleep(self.latency)
        if board_id != self._snapshot.board_id:
            raise PersistenceError(f"Board not found: {board_id}")
        return self._snapshot
