"""Tests for the in-memory persistence backend."""

import random

import pytest

from taskboard.errors import FailureKind, ValidationFailure
from taskboard.repositories import InMemoryPersistence, MoveResult


class TestInMemoryPersistence:
    """Tests for InMemoryPersistence."""

    async def test_submit_move_updates_server_board(self, board):
        persistence = InMemoryPersistence(board)

        result = await persistence.submit_move("t1", "done", 0)

        assert result == MoveResult.ok()
        assert persistence.snapshot.order["done"] == ("t1",)
        assert persistence.calls == [("t1", "done", 0)]

    async def test_unknown_task_is_validation_failure(self, board):
        result = await InMemoryPersistence(board).submit_move("ghost", "done", 0)

        assert not result.success
        assert result.kind == FailureKind.VALIDATION

    async def test_unknown_column_is_validation_failure(self, board):
        result = await InMemoryPersistence(board).submit_move("t1", "archive", 0)

        assert result.kind == FailureKind.VALIDATION
        assert "Unknown target column" in result.reason

    async def test_scripted_results_are_used_in_order(self, board):
        persistence = InMemoryPersistence(board)
        persistence.fail_next(FailureKind.SERVER, "first")
        persistence.raise_next(ValidationFailure("second"))

        assert (await persistence.submit_move("t1", "done", 0)).reason == "first"
        with pytest.raises(ValidationFailure):
            await persistence.submit_move("t1", "done", 0)
        assert (await persistence.submit_move("t1", "done", 0)).success
        # Failed calls leave the server board alone
        assert persistence.snapshot.order["done"] == ("t1",)

    async def test_failure_rate_one_always_fails(self, board):
        persistence = InMemoryPersistence(board, failure_rate=1.0, rng=random.Random(1))

        result = await persistence.submit_move("t1", "done", 0)

        assert result.kind == FailureKind.SERVER
        assert persistence.snapshot is board

    async def test_fetch_board(self, board):
        assert await InMemoryPersistence(board).fetch_board("default") is board
