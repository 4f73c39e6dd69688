"""Kanban column widget."""

from collections.abc import Collection

from textual.actions import SkipAction
from textual.app import ComposeResult
from textual.containers import VerticalScroll
from textual.css.query import NoMatches
from textual.widget import Widget
from textual.widgets import Static

from ...models import Task
from .task_card import TaskCard


def css_id(identifier: str) -> str:
    """Widget id fragment for a task or list id.

    ASCII letters, digits and hyphens are kept as they are; every other
    character is written as ``_<hex code>_``, so distinct ids never share a
    widget id.
    """
    return "".join(
        char if (char.isascii() and char.isalnum()) or char == "-" else f"_{ord(char):x}_"
        for char in identifier
    )


class TaskListScroll(VerticalScroll):
    """Scroll container for task lists.

    Raises SkipAction for navigation keys so they reach the board's
    keyboard navigator instead of scrolling.
    """

    def action_scroll_up(self) -> None:
        raise SkipAction()

    def action_scroll_down(self) -> None:
        raise SkipAction()

    def action_scroll_home(self) -> None:
        raise SkipAction()

    def action_scroll_end(self) -> None:
        raise SkipAction()

    def action_page_up(self) -> None:
        raise SkipAction()

    def action_page_down(self) -> None:
        raise SkipAction()


class EmptyColumnMessage(Static):
    """Displayed when a column has no visible tasks."""

    pass


class KanbanColumn(Widget):
    """One visible list: a board column in kanban view, every task in list view."""

    def __init__(
        self,
        title: str,
        list_id: str,
        tasks: list[Task] | None = None,
        description: str = "",
        pending_ids: Collection[str] = (),
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.title = title
        self.list_id = list_id
        self._tasks: list[Task] = list(tasks or [])
        self._pending_ids = set(pending_ids)
        self.tooltip = description or None

    @property
    def _list_css_id(self) -> str:
        return css_id(self.list_id)

    def compose(self) -> ComposeResult:
        """Create column layout."""
        yield Static(self._header_text, classes="column-header", id=f"header-{self._list_css_id}")
        yield TaskListScroll(classes="column-content", id=f"content-{self._list_css_id}")

    def on_mount(self) -> None:
        """Render cards once the scroll container exists."""
        self.call_after_refresh(self._refresh_tasks)

    @property
    def _header_text(self) -> str:
        """Header text with styled task count."""
        return f"{self.title} [dim]({len(self._tasks)})[/]"

    def set_tasks(
        self,
        tasks: list[Task],
        description: str = "",
        pending_ids: Collection[str] = (),
    ) -> None:
        """Replace the visible tasks and re-render the cards.

        Args:
            tasks: Visible tasks in display order
            description: Accessible description of the column
            pending_ids: Task ids with a move still being saved
        """
        self._tasks = list(tasks)
        self._pending_ids = set(pending_ids)
        self.tooltip = description or None
        self.call_after_refresh(self._refresh_tasks)

    async def _refresh_tasks(self) -> None:
        """Refresh the task cards in this column."""
        content_id = f"#content-{self._list_css_id}"
        try:
            content = self.query_one(content_id, TaskListScroll)
        except NoMatches as e:
            self.log.error(f"Cannot find {content_id}: {e}")
            return

        await content.remove_children()

        if not self._tasks:
            await content.mount(EmptyColumnMessage("No tasks"))
        else:
            cards = [
                TaskCard(
                    task,
                    pending=task.id in self._pending_ids,
                    id=f"task-{css_id(task.id)}",
                )
                for task in self._tasks
            ]
            await content.mount_all(cards)

        try:
            header = self.query_one(f"#header-{self._list_css_id}", Static)
            header.update(self._header_text)
        except NoMatches:
            pass

    def focus_task(self, index: int) -> bool:
        """
        Focus the card at the given index.

        Returns:
            True if a card was focused, False otherwise
        """
        if not self._tasks or index < 0 or index >= len(self._tasks):
            return False

        task = self._tasks[index]
        try:
            card = self.query_one(f"#task-{css_id(task.id)}", TaskCard)
        except NoMatches:
            return False
        card.focus()
        card.scroll_visible()
        return True
