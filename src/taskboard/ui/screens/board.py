"""Main kanban board screen."""

from __future__ import annotations

import logging

from textual import events, on
from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.css.query import NoMatches
from textual.screen import Screen
from textual.widgets import Footer, Header, Static

from ...a11y import BoardNavigator, MoveRequest, NavAction
from ...errors import TaskboardError
from ...models import BoardSnapshot, MoveOutcome, MoveState, PendingMove, Politeness, Task, ViewMode
from ...services.filter_service import LIST_VIEW_ID
from ..widgets.column import KanbanColumn, css_id
from ..widgets.live_region import LiveRegion
from ..widgets.search_bar import SearchBar
from ..widgets.task_preview_modal import TaskPreviewModal

logger = logging.getLogger(__name__)


class BoardScreen(Screen):
    """Main board screen: visible lists, keyboard navigation and moves."""

    # Layers for z-ordering (later = higher)
    LAYERS = ["base", "command"]

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.view = ViewMode.KANBAN
        self.query_text = ""
        self.navigator = BoardNavigator(on_activate=self.open_task, on_move=self.request_move)
        self._list_ids: list[str] = []
        self._unsubscribe = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Static("", id="stats-bar", classes="stats-bar")
        with Container(id="board-container"):
            yield Horizontal(id="columns")
        yield Static("", id="filter-status", classes="filter-status-bar")
        yield SearchBar()
        yield LiveRegion(id="live-region")
        yield Footer()

    def on_mount(self) -> None:
        app = self.app
        app.announcer.init(self.query_one(LiveRegion))  # pyrefly: ignore[missing-attribute]
        self._unsubscribe = app.board_service.subscribe(  # pyrefly: ignore[missing-attribute]
            self._on_board_changed
        )
        self.refresh_board()

    def on_unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.app.announcer.teardown()  # pyrefly: ignore[missing-attribute]

    def on_screen_suspend(self) -> None:
        # A modal is on top; it owns the keyboard until it closes
        self.navigator.suspended = True

    def on_screen_resume(self) -> None:
        self.navigator.suspended = False

    # --- Rendering ---

    @property
    def snapshot(self) -> BoardSnapshot:
        return self.app.board_service.snapshot  # pyrefly: ignore[missing-attribute]

    def visible_lists(self) -> list[tuple[str, str, list[Task]]]:
        """(list_id, title, tasks) for the current view and search."""
        return self.app.filter_service.visible_board(  # pyrefly: ignore[missing-attribute]
            self.snapshot, self.query_text, self.view
        )

    def refresh_board(self) -> None:
        """Re-render the visible lists from the current board."""
        lists = self.visible_lists()
        self.navigator.set_lists([(list_id, tasks) for list_id, _title, tasks in lists])

        list_ids = [list_id for list_id, _title, _tasks in lists]
        if list_ids != self._list_ids:
            self._list_ids = list_ids
            self.call_later(self._rebuild_columns, lists)
        else:
            pending_ids = self._pending_ids()
            for list_id, _title, tasks in lists:
                column = self._get_column(list_id)
                if column is not None:
                    column.set_tasks(tasks, self._describe_list(list_id, tasks), pending_ids)
            self.call_after_refresh(self._schedule_focus)

        self._update_stats()
        self._update_filter_status()

    async def _rebuild_columns(self, lists: list[tuple[str, str, list[Task]]]) -> None:
        """Replace the column widgets (view switch or a board with new columns)."""
        try:
            container = self.query_one("#columns", Horizontal)
        except NoMatches:
            return
        await container.remove_children()

        pending_ids = self._pending_ids()
        columns = [
            KanbanColumn(
                title=title,
                list_id=list_id,
                tasks=tasks,
                description=self._describe_list(list_id, tasks),
                pending_ids=pending_ids,
                id=f"column-{css_id(list_id)}",
            )
            for list_id, title, tasks in lists
        ]
        await container.mount_all(columns)
        self.call_after_refresh(self._schedule_focus)

    def _describe_list(self, list_id: str, tasks: list[Task]) -> str:
        if list_id == LIST_VIEW_ID and self.view == ViewMode.LIST:
            return f"All tasks. {len(tasks)} shown."
        column = self.snapshot.get_column(list_id)
        if column is None:
            return ""
        return column.accessible_label(self.snapshot.column_stats(list_id))

    def _pending_ids(self) -> set[str]:
        return set(self.app.reorder_engine.pending)  # pyrefly: ignore[missing-attribute]

    def _on_board_changed(self, snapshot: BoardSnapshot) -> None:
        self.refresh_board()

    # --- Focus ---

    def _schedule_focus(self) -> None:
        """Focus after one more refresh cycle so the cards are mounted."""
        self.call_after_refresh(self._update_focus)

    def _get_column(self, list_id: str) -> KanbanColumn | None:
        try:
            return self.query_one(f"#column-{css_id(list_id)}", KanbanColumn)
        except NoMatches:
            return None

    def _update_focus(self) -> None:
        """Move widget focus to the navigator's current task."""
        navigator = self.navigator.current_list
        if navigator is None:
            return
        column = self._get_column(navigator.list_id)
        if column is not None:
            column.focus_task(navigator.index)

    def get_current_task(self) -> Task | None:
        """Get the task under the keyboard cursor."""
        return self.navigator.current_task

    def on_key(self, event: events.Key) -> None:
        if self.query_one(SearchBar).is_visible:
            return
        action = self.navigator.handle_key(event.key)
        if action == NavAction.NONE:
            return
        event.prevent_default()
        event.stop()
        if action in (NavAction.FOCUS, NavAction.COLUMN):
            self._update_focus()

    # --- Activation and moves ---

    def open_task(self, task: Task) -> None:
        """Show the details of a task."""
        self.app.push_screen(TaskPreviewModal(task, self.snapshot.column_name(task.column_id)))

    def request_move(self, request: MoveRequest) -> None:
        """Start a keyboard move; saving continues in a worker."""
        engine = self.app.reorder_engine  # pyrefly: ignore[missing-attribute]
        gesture = engine.keyboard_gesture(
            request.task.id,
            delta=request.delta,
            column_delta=request.column_delta,
            visible_ids=request.visible_ids,
        )
        if gesture is None:
            return

        started = engine.start(gesture)
        if isinstance(started, MoveOutcome):
            if started.state == MoveState.REJECTED:
                self.app.notify(f"Cannot move task: {started.reason}", severity="error")
            return

        # Focus follows the moved task
        self.navigator.focus_task(request.task.id)
        self.run_worker(self._persist_move(started), group="moves")

    async def _persist_move(self, pending: PendingMove) -> MoveOutcome:
        engine = self.app.reorder_engine  # pyrefly: ignore[missing-attribute]
        outcome = await engine.persist(pending)
        if outcome.rolled_back:
            self.app.notify(outcome.announcements[0], severity="error", timeout=5)
        elif outcome.state == MoveState.SKIPPED:
            self.app.notify(outcome.announcements[0], severity="warning", timeout=5)
        # Confirmation does not change the board; the saving marker still has to go
        self.refresh_board()
        return outcome

    # --- View, search and reload ---

    def toggle_view(self) -> None:
        """Switch between kanban and list view."""
        self.view = ViewMode.LIST if self.view == ViewMode.KANBAN else ViewMode.KANBAN
        self.refresh_board()
        self.app.announcer.announce(  # pyrefly: ignore[missing-attribute]
            f"{self.view.value.capitalize()} view", Politeness.POLITE
        )

    def set_query(self, query: str) -> None:
        """Apply a search expression to every visible list."""
        self.query_text = query
        self.refresh_board()

    @on(SearchBar.QueryChanged)
    def _on_query_changed(self, event: SearchBar.QueryChanged) -> None:
        self.set_query(event.query)
        search_bar = self.query_one(SearchBar)
        if not search_bar.is_visible:
            self._update_focus()

    async def reload_board(self) -> None:
        """Fetch the board from the persistence API."""
        try:
            await self.app.board_service.load()  # pyrefly: ignore[missing-attribute]
        except TaskboardError as e:
            logger.warning("Board reload failed: %s", e)
            self.app.notify(f"Failed to reload board: {e}", severity="error", timeout=5)
            return
        self.refresh_board()
        self.app.notify("Board reloaded", timeout=2)

    def _update_stats(self) -> None:
        try:
            bar = self.query_one("#stats-bar", Static)
        except NoMatches:
            return
        stats = self.snapshot.board_stats()
        text = (
            f"Total: {stats.total}  Completed: {stats.completed}  "
            f"In progress: {stats.in_progress}  Overdue: {stats.overdue}"
            f"  [dim]| {self.view.value} view[/]"
        )
        saving = len(self._pending_ids())
        if saving:
            text += f"  [dim]| saving {saving}…[/]"
        bar.update(text)

    def _update_filter_status(self) -> None:
        try:
            status = self.query_one("#filter-status", Static)
        except NoMatches:
            return
        if self.query_text.strip():
            status.update(f"[dim]Search:[/] {self.query_text} [dim](Esc to clear)[/]")
            status.display = True
        else:
            status.update("")
            status.display = False
