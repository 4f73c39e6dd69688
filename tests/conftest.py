"""Shared fixtures for taskboard tests."""

import asyncio
from datetime import date

import pytest

from taskboard.a11y import Announcement
from taskboard.models import BoardSnapshot, Column, Priority, Task, TaskStatus
from taskboard.repositories import MoveResult


def make_task(task_id: str, column_id: str, position: int = 0, **kwargs) -> Task:
    """Build a task with a generated title unless one is given."""
    kwargs.setdefault("title", f"Task {task_id}")
    return Task(id=task_id, column_id=column_id, position=position, **kwargs)


def make_board(layout: dict[str, list[str]], **task_fields) -> BoardSnapshot:
    """Board with one column per key, tasks in the listed order.

    ``task_fields`` maps task id to extra Task fields.
    """
    columns = [
        Column(id=column_id, name=column_id.replace("_", " ").title(), sort_order=index)
        for index, column_id in enumerate(layout)
    ]
    tasks = [
        make_task(task_id, column_id, position, **task_fields.get(task_id, {}))
        for column_id, task_ids in layout.items()
        for position, task_id in enumerate(task_ids)
    ]
    return BoardSnapshot.from_records(columns, tasks)


@pytest.fixture
def board() -> BoardSnapshot:
    """Three columns; the last one is empty."""
    return make_board(
        {"todo": ["t1", "t2", "t3"], "doing": ["t4"], "done": []},
        t1={"title": "Fix login bug", "priority": Priority.HIGH},
        t2={"title": "Write docs", "description": "User guide"},
        t3={"title": "Bug triage", "assignee": "sam"},
        t4={
            "title": "Refactor API",
            "status": TaskStatus.COMPLETED,
            "due_date": date(2020, 1, 1),
        },
    )


class RecordingHost:
    """LiveRegionHost that records mounts and removals."""

    def __init__(self) -> None:
        self.mounted: list[Announcement] = []
        self.removed: list[Announcement] = []

    def mount_region(self, announcement: Announcement) -> None:
        self.mounted.append(announcement)

    def remove_region(self, announcement: Announcement) -> None:
        self.removed.append(announcement)

    @property
    def visible(self) -> list[str]:
        removed_ids = {a.id for a in self.removed}
        return [a.message for a in self.mounted if a.id not in removed_ids]


class FakeFocusHost:
    """FocusHost over plain objects; records every focus call."""

    def __init__(self, focused=None) -> None:
        self._focused = focused
        self.calls: list[object] = []

    @property
    def focused(self):
        return self._focused

    def focus(self, element) -> None:
        self.calls.append(element)
        self._focused = element


class ControlledPersistence:
    """Persistence whose move results are resolved by the test."""

    def __init__(self, snapshot: BoardSnapshot) -> None:
        self.snapshot = snapshot
        self.calls: list[tuple[str, str, int]] = []
        self.futures: list[asyncio.Future] = []

    async def submit_move(
        self, task_id: str, target_column_id: str, target_position: int
    ) -> MoveResult:
        self.calls.append((task_id, target_column_id, target_position))
        future = asyncio.get_running_loop().create_future()
        self.futures.append(future)
        return await future

    async def fetch_board(self, board_id: str) -> BoardSnapshot:
        return self.snapshot

    async def wait_for_calls(self, count: int) -> None:
        """Yield to the loop until ``count`` moves have been submitted."""
        for _ in range(100):
            if len(self.futures) >= count:
                return
            await asyncio.sleep(0)
        raise AssertionError(f"expected {count} calls, got {len(self.futures)}")

    def resolve(self, index: int, result: MoveResult) -> None:
        self.futures[index].set_result(result)


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()
