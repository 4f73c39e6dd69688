"""Keyboard navigation state machines for task lists and the board."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from ..models import Task

logger = logging.getLogger(__name__)

# Key names follow Textual's key naming ("shift+up", "enter", ...)
FOCUS_KEYS: dict[str, int] = {
    "up": -1,
    "k": -1,
    "down": 1,
    "j": 1,
}
FIRST_KEYS = frozenset({"home", "g"})
LAST_KEYS = frozenset({"end", "G"})
ACTIVATE_KEYS = frozenset({"enter", "space"})
COLUMN_KEYS: dict[str, int] = {
    "left": -1,
    "h": -1,
    "right": 1,
    "l": 1,
}
# (column delta, position delta). Always modifier-qualified so they never
# collide with activation or with text editing inside an open modal.
MOVE_KEYS: dict[str, tuple[int, int]] = {
    "shift+up": (0, -1),
    "K": (0, -1),
    "shift+down": (0, 1),
    "J": (0, 1),
    "shift+left": (-1, 0),
    "H": (-1, 0),
    "shift+right": (1, 0),
    "L": (1, 0),
}


class NavAction(str, Enum):
    """What a key press did."""

    NONE = "none"
    FOCUS = "focus"
    ACTIVATE = "activate"
    MOVE = "move"
    COLUMN = "column"


@dataclass
class FocusState:
    """Keyboard cursor within one visible list."""

    list_id: str
    index: int = 0


@dataclass(frozen=True)
class MoveRequest:
    """A keyboard move the host should hand to the reorder engine."""

    task: Task
    list_id: str
    index: int
    delta: int  # Position delta within the visible list
    column_delta: int  # Column delta (cross-column move)
    visible_ids: tuple[str, ...]


ActivateCallback = Callable[[Task], None]
MoveCallback = Callable[[MoveRequest], None]


class ListNavigator:
    """
    Focus index over one visible list.

    The index is always within ``[0, len(items) - 1]`` (0 for an empty list).
    Activation and move keys only call back; they never reorder items.
    """

    def __init__(
        self,
        list_id: str,
        items: Sequence[Task] = (),
        on_activate: ActivateCallback | None = None,
        on_move: MoveCallback | None = None,
    ) -> None:
        self.state = FocusState(list_id=list_id)
        self.on_activate = on_activate
        self.on_move = on_move
        self._items: list[Task] = list(items)

    @property
    def list_id(self) -> str:
        return self.state.list_id

    @property
    def index(self) -> int:
        return self.state.index

    @property
    def items(self) -> list[Task]:
        return list(self._items)

    @property
    def current(self) -> Task | None:
        if 0 <= self.state.index < len(self._items):
            return self._items[self.state.index]
        return None

    def set_items(self, items: Sequence[Task]) -> None:
        """
        Replace the visible items.

        Focus follows the previously focused task if it is still visible;
        otherwise the index resets to 0.
        """
        previous = self.current
        self._items = list(items)

        if previous is not None:
            for index, task in enumerate(self._items):
                if task.id == previous.id:
                    self.state.index = index
                    return
        self.state.index = 0

    def move_focus(self, delta: int) -> bool:
        """Move the cursor by ``delta``, clamped. Returns True if it moved."""
        return self.focus_index(self.state.index + delta)

    def focus_index(self, index: int) -> bool:
        """Focus a specific index (-1 for last), clamped. Returns True if it moved."""
        if not self._items:
            self.state.index = 0
            return False
        if index < 0:
            index = len(self._items) + index
        new_index = max(0, min(index, len(self._items) - 1))
        if new_index == self.state.index:
            return False
        self.state.index = new_index
        return True

    def focus_id(self, task_id: str) -> bool:
        """Focus the task with ``task_id`` if it is visible."""
        for index, task in enumerate(self._items):
            if task.id == task_id:
                self.state.index = index
                return True
        return False

    def activate(self) -> bool:
        """Call the activation callback with the focused task."""
        task = self.current
        if task is None or self.on_activate is None:
            return False
        self.on_activate(task)
        return True

    def request_move(self, delta: int, column_delta: int = 0) -> bool:
        """Ask the host to move the focused task."""
        task = self.current
        if task is None or self.on_move is None:
            return False
        self.on_move(
            MoveRequest(
                task=task,
                list_id=self.list_id,
                index=self.state.index,
                delta=delta,
                column_delta=column_delta,
                visible_ids=tuple(t.id for t in self._items),
            )
        )
        return True

    def handle_key(self, key: str) -> NavAction:
        """Interpret a key press for this list."""
        if key in FOCUS_KEYS:
            self.move_focus(FOCUS_KEYS[key])
            return NavAction.FOCUS
        if key in FIRST_KEYS:
            self.focus_index(0)
            return NavAction.FOCUS
        if key in LAST_KEYS:
            self.focus_index(-1)
            return NavAction.FOCUS
        if key in ACTIVATE_KEYS:
            return NavAction.ACTIVATE if self.activate() else NavAction.NONE
        if key in MOVE_KEYS:
            column_delta, delta = MOVE_KEYS[key]
            moved = self.request_move(delta, column_delta)
            return NavAction.MOVE if moved else NavAction.NONE
        return NavAction.NONE


class BoardNavigator:
    """
    Keyboard cursor over the whole board: a current list plus one
    ``ListNavigator`` per visible list.

    While ``suspended`` (a focus trap is open) every key is ignored.
    """

    def __init__(
        self,
        on_activate: ActivateCallback | None = None,
        on_move: MoveCallback | None = None,
    ) -> None:
        self.on_activate = on_activate
        self.on_move = on_move
        self.suspended = False
        self._lists: list[ListNavigator] = []
        self._current = 0

    @property
    def lists(self) -> list[ListNavigator]:
        return list(self._lists)

    @property
    def current_list_index(self) -> int:
        return self._current

    @property
    def current_list(self) -> ListNavigator | None:
        if 0 <= self._current < len(self._lists):
            return self._lists[self._current]
        return None

    @property
    def current_task(self) -> Task | None:
        navigator = self.current_list
        return navigator.current if navigator else None

    def set_lists(self, lists: Sequence[tuple[str, Sequence[Task]]]) -> None:
        """
        Replace the visible lists (after a board change, filter or view switch).

        Navigators are kept per list id so each list remembers its focus.
        """
        current_id = self.current_list.list_id if self.current_list else None
        existing = {nav.list_id: nav for nav in self._lists}

        navigators: list[ListNavigator] = []
        for list_id, items in lists:
            navigator = existing.get(list_id)
            if navigator is None:
                navigator = ListNavigator(
                    list_id, items, on_activate=self.on_activate, on_move=self.on_move
                )
            else:
                navigator.set_items(items)
            navigators.append(navigator)
        self._lists = navigators

        ids = [nav.list_id for nav in navigators]
        self._current = ids.index(current_id) if current_id in ids else 0

    def navigate_column(self, delta: int) -> bool:
        """Switch to a neighbouring list, clamped. Carries the row index over."""
        if not self._lists:
            return False
        new_column = max(0, min(self._current + delta, len(self._lists) - 1))
        if new_column == self._current:
            return False

        row = self._lists[self._current].index
        self._current = new_column
        target = self._lists[new_column]
        target.state.index = 0
        target.focus_index(row)
        return True

    def focus_task(self, task_id: str) -> bool:
        """Put the cursor on a task wherever it is visible."""
        for list_index, navigator in enumerate(self._lists):
            if navigator.focus_id(task_id):
                self._current = list_index
                return True
        return False

    def handle_key(self, key: str) -> NavAction:
        """Interpret a key press for the board."""
        if self.suspended:
            return NavAction.NONE
        if key in COLUMN_KEYS:
            self.navigate_column(COLUMN_KEYS[key])
            return NavAction.COLUMN
        navigator = self.current_list
        if navigator is None:
            return NavAction.NONE
        return navigator.handle_key(key)
