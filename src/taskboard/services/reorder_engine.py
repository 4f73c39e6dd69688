"""Optimistic task moves with reconciliation against the persistence API."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from ..errors import FailureKind, InvalidMoveError, PersistenceError
from ..models import BoardSnapshot, MoveGesture, MoveOutcome, MoveState, PendingMove, Politeness
from ..repositories import MoveResult

if TYPE_CHECKING:
    from ..a11y import Announcer
    from ..repositories import PersistenceProtocol
    from .board_service import BoardService

logger = logging.getLogger(__name__)


class ReorderEngine:
    """
    Drives a move through ``IDLE -> APPLYING -> PERSISTING -> CONFIRMED |
    ROLLED_BACK``.

    The optimistic apply happens synchronously in ``start`` so moves take
    effect in the order their gestures complete. Persistence results may
    arrive in any order. Pending moves are kept in a log keyed by task id: a
    second move of the same task supersedes the first and inherits its
    restore location.

    Every applied move is also journaled in sequence order until it and all
    moves before it have settled. A failed move is undone by rebuilding the
    board from the oldest journaled base and replaying every other journaled
    move, so overlapping failures leave the board as if the failed moves had
    never been made.
    """

    def __init__(
        self,
        board: BoardService,
        persistence: PersistenceProtocol,
        announcer: Announcer | None = None,
        move_timeout: float | None = 10.0,
    ) -> None:
        self.board = board
        self.persistence = persistence
        self.announcer = announcer
        self.move_timeout = move_timeout
        self._pending: dict[str, PendingMove] = {}
        self._journal: list[PendingMove] = []
        self._sequence = itertools.count(1)

    @property
    def pending(self) -> dict[str, PendingMove]:
        """In-flight moves keyed by task id."""
        return dict(self._pending)

    def is_pending(self, task_id: str) -> bool:
        return task_id in self._pending

    # --- Pipeline ---

    async def move(self, gesture: MoveGesture) -> MoveOutcome:
        """Apply a move optimistically, persist it and reconcile the result."""
        started = self.start(gesture)
        if isinstance(started, MoveOutcome):
            return started
        return await self.persist(started)

    def start(self, gesture: MoveGesture) -> PendingMove | MoveOutcome:
        """
        Apply a move to the board immediately.

        Returns the pending move, or a finished outcome for no-op and
        rejected gestures (no command is issued for those).
        """
        snapshot = self.board.snapshot
        task = snapshot.get_task(gesture.task_id)
        if task is None:
            return self._reject(gesture, "task is not on the board")

        landed = snapshot.landing_position(gesture)
        if not gesture.is_cross_column and landed == gesture.source_position:
            logger.debug("No-op move: %s stays at %s[%d]", task.id, task.column_id, landed)
            return MoveOutcome(task_id=task.id, state=MoveState.NOOP)

        try:
            snapshot_after = self.board.apply_move(gesture)
        except InvalidMoveError as e:
            return self._reject(gesture, str(e))

        if self._journal and self._journal[-1].snapshot_after is not snapshot:
            # The board was replaced (e.g. refetched); older moves cannot be replayed
            logger.debug("Board replaced, dropping %d journaled moves", len(self._journal))
            self._journal.clear()

        sequence = next(self._sequence)
        previous = self._pending.get(task.id)
        if previous is not None:
            previous.state = MoveState.SUPERSEDED
            logger.info(
                "Move #%d of %s supersedes in-flight move #%d",
                sequence,
                task.id,
                previous.sequence,
            )
            restore_column_id = previous.restore_column_id
            restore_position = previous.restore_position
            supersedes = previous.sequence
        else:
            restore_column_id = gesture.source_column_id
            restore_position = gesture.source_position
            supersedes = None

        pending = PendingMove(
            gesture=gesture,
            snapshot_before=snapshot,
            snapshot_after=snapshot_after,
            landed_position=landed,
            restore_column_id=restore_column_id,
            restore_position=restore_position,
            sequence=sequence,
            state=MoveState.APPLYING,
            supersedes=supersedes,
        )
        self._pending[task.id] = pending
        self._journal.append(pending)

        logger.info(
            "Task moved: %s (%s[%d] -> %s[%d])",
            task.id,
            gesture.source_column_id,
            gesture.source_position,
            gesture.target_column_id,
            landed,
        )
        column_name = snapshot_after.column_name(gesture.target_column_id)
        count = len(snapshot_after.order.get(gesture.target_column_id, ()))
        self._announce(
            f"Moved {task.title} to {column_name}, position {landed + 1} of {count}",
            Politeness.POLITE,
        )
        return pending

    async def persist(self, pending: PendingMove) -> MoveOutcome:
        """Send the move to the persistence API and reconcile the answer."""
        if not pending.superseded:
            pending.state = MoveState.PERSISTING
        gesture = pending.gesture
        try:
            call = self.persistence.submit_move(
                gesture.task_id, gesture.target_column_id, pending.landed_position
            )
            if self.move_timeout is not None:
                # A timed out call keeps running; its late answer is never read
                result = await asyncio.wait_for(asyncio.shield(call), self.move_timeout)
            else:
                result = await call
        except PersistenceError as e:
            result = MoveResult.failed(e.kind, str(e) or type(e).__name__)
        except TimeoutError:
            result = MoveResult.failed(FailureKind.TRANSPORT, "Timed out")
        except OSError as e:
            result = MoveResult.failed(FailureKind.TRANSPORT, str(e) or type(e).__name__)
        except asyncio.CancelledError:
            self.reconcile(pending, MoveResult.failed(FailureKind.TRANSPORT, "Cancelled"))
            raise
        except Exception as e:
            logger.exception("Unexpected error saving move of %s", gesture.task_id)
            result = MoveResult.failed(FailureKind.TRANSPORT, str(e) or type(e).__name__)

        return self.reconcile(pending, result)

    def reconcile(self, pending: PendingMove, result: MoveResult) -> MoveOutcome:
        """Confirm or roll back a pending move once the server has answered."""
        task_id = pending.task_id
        if pending.superseded or self._pending.get(task_id) is not pending:
            logger.debug(
                "Ignoring result of superseded move #%d of %s (success=%s)",
                pending.sequence,
                task_id,
                result.success,
            )
            return MoveOutcome(
                task_id=task_id,
                state=MoveState.SUPERSEDED,
                failure_kind=result.kind,
                reason=result.reason,
            )

        del self._pending[task_id]

        if result.success:
            pending.state = MoveState.CONFIRMED
            logger.debug("Move #%d of %s confirmed", pending.sequence, task_id)
            outcome = MoveOutcome(task_id=task_id, state=MoveState.CONFIRMED)
        else:
            outcome = self._rollback(pending, result)

        self._prune_journal()
        return outcome

    # --- Gesture builders ---

    def keyboard_gesture(
        self,
        task_id: str,
        delta: int = 0,
        column_delta: int = 0,
        visible_ids: Sequence[str] = (),
    ) -> MoveGesture | None:
        """
        Build the gesture for a keyboard move of ``task_id``.

        ``delta`` moves past the neighbouring visible task (so hidden tasks
        are skipped); ``column_delta`` moves to a neighbouring column keeping
        the row, clamped to the end. Returns None at the board edges.
        """
        if column_delta:
            return self._column_gesture(task_id, column_delta)
        if delta:
            return self._row_gesture(task_id, delta, visible_ids)
        return None

    def _row_gesture(
        self, task_id: str, delta: int, visible_ids: Sequence[str]
    ) -> MoveGesture | None:
        snapshot = self.board.snapshot
        task = snapshot.get_task(task_id)
        if task is None:
            return None

        ids = list(visible_ids) or list(snapshot.order.get(task.column_id, ()))
        if task_id not in ids:
            return None
        neighbour_index = ids.index(task_id) + delta
        if neighbour_index < 0 or neighbour_index >= len(ids):
            return None
        neighbour = snapshot.get_task(ids[neighbour_index])
        if neighbour is None:
            return None

        if neighbour.column_id == task.column_id:
            target_position = neighbour.position
        else:
            # List view: crossing into the neighbour's column
            target_position = neighbour.position + (1 if delta > 0 else 0)

        return MoveGesture(
            task_id=task_id,
            source_column_id=task.column_id,
            source_position=task.position,
            target_column_id=neighbour.column_id,
            target_position=target_position,
        )

    def _column_gesture(self, task_id: str, column_delta: int) -> MoveGesture | None:
        snapshot = self.board.snapshot
        task = snapshot.get_task(task_id)
        if task is None:
            return None

        column_ids = snapshot.column_ids
        index = column_ids.index(task.column_id)
        new_index = max(0, min(index + column_delta, len(column_ids) - 1))
        if new_index == index:
            return None

        target_column_id = column_ids[new_index]
        return MoveGesture(
            task_id=task_id,
            source_column_id=task.column_id,
            source_position=task.position,
            target_column_id=target_column_id,
            target_position=min(task.position, len(snapshot.order[target_column_id])),
        )

    # --- Helpers ---

    def _rollback(self, pending: PendingMove, result: MoveResult) -> MoveOutcome:
        task_id = pending.task_id
        kind = result.kind or FailureKind.SERVER
        task = self.board.snapshot.get_task(task_id)
        title = task.title if task else task_id

        rebuilt = self._rebuild_without(pending)
        if rebuilt is None:
            pending.state = MoveState.SKIPPED
            logger.warning(
                "Rollback of %s skipped: board changed since move #%d (%s: %s)",
                task_id,
                pending.sequence,
                kind.value,
                result.reason,
            )
            message = f"Move of {title} could not be saved. The board may be out of date."
            self._announce(message, Politeness.POLITE)
            return MoveOutcome(
                task_id=task_id,
                state=MoveState.SKIPPED,
                failure_kind=kind,
                reason=result.reason,
                announcements=[message],
            )

        self.board.restore_snapshot(rebuilt)
        pending.state = MoveState.ROLLED_BACK
        location = rebuilt.locate(task_id)
        restored_column_id = location[0] if location else pending.restore_column_id
        column_name = rebuilt.column_name(restored_column_id)
        logger.warning(
            "Move of %s failed (%s: %s), restored to %s",
            task_id,
            kind.value,
            result.reason,
            restored_column_id,
        )
        if kind == FailureKind.TRANSPORT:
            message = f"Move failed (connection problem), task restored to {column_name}"
        else:
            message = f"Move failed, task restored to {column_name}"
        self._announce(message, Politeness.ASSERTIVE)
        return MoveOutcome(
            task_id=task_id,
            state=MoveState.ROLLED_BACK,
            failure_kind=kind,
            reason=result.reason,
            announcements=[message],
        )

    def _rebuild_without(self, failed: PendingMove) -> BoardSnapshot | None:
        """
        The board as it would be had ``failed`` (and the moves it superseded)
        never been made, or None when that cannot be worked out.

        Starts from the base of the oldest journaled move and replays every
        other journaled move in sequence order. Replays move the task to the
        column and position it originally landed at, from wherever it is in
        the rebuilt board.
        """
        journal = self._journal
        if (
            not journal
            or journal[-1].snapshot_after is not self.board.snapshot
            or all(entry.sequence != failed.sequence for entry in journal)
        ):
            # Board replaced since the move; the refetched state stands
            journal.clear()
            return None

        excluded = self._chain(failed)
        snapshot = journal[0].snapshot_before
        replayed: list[tuple[PendingMove, BoardSnapshot, BoardSnapshot]] = []
        for entry in journal:
            if entry.sequence in excluded:
                continue
            location = snapshot.locate(entry.task_id)
            if location is None:
                return None
            column_id, position = location
            try:
                after = snapshot.apply_move(
                    MoveGesture(
                        task_id=entry.task_id,
                        source_column_id=column_id,
                        source_position=position,
                        target_column_id=entry.target_column_id,
                        target_position=entry.landed_position,
                    )
                )
            except InvalidMoveError as e:
                logger.debug("Cannot replay move #%d: %s", entry.sequence, e)
                return None
            replayed.append((entry, snapshot, after))
            snapshot = after

        for entry, before, after in replayed:
            entry.snapshot_before = before
            entry.snapshot_after = after
        self._journal = [entry for entry, _before, _after in replayed]
        return snapshot

    def _chain(self, pending: PendingMove) -> set[int]:
        """Sequences of ``pending`` and every move it superseded."""
        by_sequence = {entry.sequence: entry for entry in self._journal}
        chain = {pending.sequence}
        current: PendingMove | None = pending
        while current is not None and current.supersedes is not None:
            chain.add(current.supersedes)
            current = by_sequence.get(current.supersedes)
        return chain

    def _prune_journal(self) -> None:
        """Drop settled moves from the front of the journal."""
        live: set[int] = set()
        for pending in self._pending.values():
            live |= self._chain(pending)
        while self._journal and self._journal[0].sequence not in live:
            self._journal.pop(0)

    def _reject(self, gesture: MoveGesture, reason: str) -> MoveOutcome:
        logger.warning("Rejected move of %s: %s", gesture.task_id, reason)
        return MoveOutcome(task_id=gesture.task_id, state=MoveState.REJECTED, reason=reason)

    def _announce(self, message: str, politeness: Politeness) -> None:
        if self.announcer is not None:
            self.announcer.announce(message, politeness)

