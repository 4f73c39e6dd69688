"""Tests for BoardService."""

import pytest

from conftest import make_board
from taskboard.errors import PersistenceError
from taskboard.models import BoardSnapshot, MoveGesture
from taskboard.repositories import InMemoryPersistence
from taskboard.services import BoardService


@pytest.fixture
def service(board):
    return BoardService(InMemoryPersistence(board), board)


class TestBoardService:
    """Tests for snapshot publishing."""

    def test_defaults_to_empty_board(self, board):
        service = BoardService(InMemoryPersistence(board))
        assert service.snapshot == BoardSnapshot.empty()

    def test_apply_move_publishes_new_snapshot(self, service, board):
        seen = []
        service.subscribe(seen.append)

        result = service.apply_move(
            MoveGesture(
                task_id="t1",
                source_column_id="todo",
                source_position=0,
                target_column_id="done",
                target_position=0,
            )
        )

        assert service.snapshot is result
        assert seen == [result]
        # The previous snapshot is untouched
        assert board.order["todo"] == ("t1", "t2", "t3")

    def test_noop_move_does_not_notify(self, service):
        seen = []
        service.subscribe(seen.append)

        service.apply_move(
            MoveGesture(
                task_id="t2",
                source_column_id="todo",
                source_position=1,
                target_column_id="todo",
                target_position=1,
            )
        )

        assert seen == []

    def test_unsubscribe(self, service, board):
        seen = []
        unsubscribe = service.subscribe(seen.append)
        unsubscribe()
        unsubscribe()

        service.restore_snapshot(make_board({"todo": []}))

        assert seen == []

    def test_restore_snapshot_replaces_wholesale(self, service):
        replacement = make_board({"backlog": ["x"]})
        service.restore_snapshot(replacement)

        assert service.snapshot is replacement
        assert service.get_column_tasks("todo") == ()
        assert [t.id for t in service.get_column_tasks("backlog")] == ["x"]

    async def test_load_fetches_from_persistence(self, board):
        server_board = board.apply_move(
            MoveGesture(
                task_id="t4",
                source_column_id="doing",
                source_position=0,
                target_column_id="done",
                target_position=0,
            )
        )
        service = BoardService(InMemoryPersistence(server_board), board)

        loaded = await service.load()

        assert loaded is server_board
        assert service.snapshot is server_board

    async def test_load_unknown_board_raises(self, service):
        with pytest.raises(PersistenceError, match="Board not found"):
            await service.load("other")
