"""Task card widget."""

from __future__ import annotations

from datetime import date

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.widget import Widget
from textual.widgets import Static

from ...models import Priority, Task, TaskStatus


class TaskCard(Widget, can_focus=True):
    """A task card displayed in a column."""

    PRIORITY_DISPLAY: dict[Priority, tuple[str, str]] = {
        Priority.URGENT: ("●", "red"),
        Priority.HIGH: ("●", "orange1"),
        Priority.MEDIUM: ("●", "yellow"),
        Priority.LOW: ("●", "green"),
    }

    STATUS_DISPLAY: dict[TaskStatus, str] = {
        TaskStatus.ACTIVE: "",
        TaskStatus.COMPLETED: "[green]✓[/] done",
        TaskStatus.ARCHIVED: "[dim]archived[/]",
    }

    def __init__(
        self,
        task_data: Task,
        pending: bool = False,
        today: date | None = None,
        *args,
        **kwargs,
    ) -> None:
        super().__init__(*args, **kwargs)
        self._task_data = task_data
        self._pending = pending
        self._today = today
        # Screen reader text; terminals expose it through the tooltip
        self.tooltip = f"{task_data.accessible_label()} {task_data.accessible_hint()}"
        if task_data.is_completed:
            self.add_class("-completed")
        if pending:
            self.add_class("-pending")

    @property
    def task(self) -> Task:  # pyrefly: ignore[bad-override]
        """Get the task for this card."""
        return self._task_data

    def compose(self) -> ComposeResult:
        """Create card layout."""
        title = self._truncate(self._task_data.title, 40)
        if self._task_data.ticket_key:
            title = f"[dim]{self._task_data.ticket_key}[/] {title}"
        yield Static(title, classes="task-title")

        with Horizontal(classes="task-meta"):
            yield Static(self._format_priority(), classes="task-priority")
            status_text = self.STATUS_DISPLAY.get(self._task_data.status, "")
            if status_text:
                yield Static(status_text, classes="task-status")
            due_text = self._format_due_date()
            if due_text:
                yield Static(due_text, classes="task-due")
            if self._pending:
                yield Static("[dim]saving…[/]", classes="sync-indicator")

        if self._task_data.assignee:
            yield Static(f"@{self._task_data.assignee}", classes="task-assignee")
        elif (self._task_data.description or "").strip():
            preview = self._get_description_preview()
            if preview:
                yield Static(preview, classes="task-preview")

    def _format_priority(self) -> str:
        symbol, color = self.PRIORITY_DISPLAY.get(self._task_data.priority, ("●", "white"))
        return f"[{color}]{symbol}[/] {self._task_data.priority.value}"

    def _format_due_date(self) -> str:
        due = self._task_data.due_date
        if due is None:
            return ""
        if self._task_data.is_overdue(self._today or date.today()):
            return f"[red]due {due.isoformat()}[/]"
        return f"[dim]due {due.isoformat()}[/]"

    def _truncate(self, text: str, max_len: int) -> str:
        """Truncate text with ellipsis."""
        if len(text) <= max_len:
            return text
        return text[: max_len - 1] + "…"

    def _get_description_preview(self) -> str:
        """First non-empty line of the description."""
        for line in (self._task_data.description or "").split("\n"):
            line = line.strip()
            if line:
                return self._truncate(line, 50)
        return ""
