"""Task details modal."""

from textual.app import ComposeResult
from textual.containers import Horizontal, VerticalScroll
from textual.widgets import Button, Static

from ...models import Task
from .trapped_modal import TrappedModal


def format_task_details(task: Task, column_name: str) -> str:
    """Plain-text details shown in the preview modal."""
    lines = [
        task.title,
        "",
        f"Column:    {column_name}",
        f"Priority:  {task.priority.value}",
        f"Status:    {task.status.value}",
        f"Due:       {task.due_date.isoformat() if task.due_date else 'No due date'}",
        f"Assignee:  {task.assignee or 'Unassigned'}",
    ]
    if task.ticket_key:
        lines.append(f"Ticket:    {task.ticket_key}")
    if task.estimated_hours is not None or task.actual_hours is not None:
        estimated = task.estimated_hours if task.estimated_hours is not None else "-"
        actual = task.actual_hours if task.actual_hours is not None else "-"
        lines.append(f"Hours:     {actual} of {estimated} estimated")
    if task.description:
        lines.extend(["", task.description])
    return "\n".join(lines)


class TaskPreviewModal(TrappedModal[None]):
    """Read-only details of a task, opened by activating its card."""

    DEFAULT_CSS = """
    TaskPreviewModal {
        align: center middle;
    }

    TaskPreviewModal > VerticalScroll {
        width: 80%;
        height: 80%;
        border: solid $primary;
        background: $surface;
    }

    TaskPreviewModal #title-bar {
        height: 1;
        width: 100%;
        background: $primary-darken-2;
        color: $text;
        text-align: center;
    }

    TaskPreviewModal #content {
        width: 100%;
        height: auto;
        padding: 0 1;
    }

    TaskPreviewModal .buttons {
        height: auto;
        align: center middle;
    }
    """

    def __init__(self, task_data: Task, column_name: str = "") -> None:
        super().__init__()
        self._task_data = task_data
        self._column_name = column_name or task_data.column_id

    def compose(self) -> ComposeResult:
        with VerticalScroll():
            yield Static(self._task_data.title, id="title-bar", markup=False)
            yield Static(
                format_task_details(self._task_data, self._column_name),
                id="content",
                markup=False,
            )
            with Horizontal(classes="buttons"):
                yield Button("Close", id="close", variant="primary")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(None)
