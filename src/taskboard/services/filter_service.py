"""Search predicate and filter expressions."""

import contextlib
import re
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..models import BoardSnapshot, Priority, Task, TaskStatus, ViewMode

LIST_VIEW_ID = "all"
LIST_VIEW_TITLE = "All Tasks"


def matches_query(task: Task, query: str) -> bool:
    """
    Case-insensitive substring match on title, description or ticket key.

    The query is matched as typed, surrounding spaces included, so "bug "
    does not match "bugfix". A blank query matches everything.
    """
    if not query.strip():
        return True
    needle = query.lower()
    for haystack in (task.title, task.description, task.ticket_key):
        if haystack and needle in haystack.lower():
            return True
    return False


def visible_tasks(all_tasks: Iterable[Task], query: str) -> list[Task]:
    """
    The visible subset of ``all_tasks``, in source order.

    Rendering and keyboard navigation both call this, so focus can never land
    on a task that is hidden. An empty query is the identity filter.
    """
    if not query.strip():
        return list(all_tasks)
    return [task for task in all_tasks if matches_query(task, query)]


def visible_board(
    snapshot: BoardSnapshot,
    query: str,
    view: ViewMode = ViewMode.KANBAN,
) -> list[tuple[str, str, list[Task]]]:
    """
    Visible lists for a view as (list_id, title, tasks) tuples.

    Kanban view yields one list per column; list view yields a single list
    with every task in column order. Both use ``visible_tasks``.
    """
    if view == ViewMode.LIST:
        return [(LIST_VIEW_ID, LIST_VIEW_TITLE, visible_tasks(snapshot.all_tasks(), query))]
    return [
        (col.id, col.name, visible_tasks(snapshot.get_column_tasks(col.id), query))
        for col in snapshot.columns
    ]


@dataclass
class Filter:
    """Represents a parsed filter expression."""

    text: str | None = None  # Free text search
    priorities: list[Priority] = field(default_factory=list)  # priority:value
    statuses: list[TaskStatus] = field(default_factory=list)  # status:value
    assignees: list[str] = field(default_factory=list)  # assignee:value
    show_archived: bool = False  # archived:true


class FilterService:
    """Service for parsing and applying filter expressions."""

    # Pattern for key:value tokens
    TOKEN_PATTERN = re.compile(r"(?:(priority|status|assignee|archived):)?(\S+)")

    def parse(self, expression: str) -> Filter:
        """
        Parse a filter expression string.

        Syntax:
        - Free text: matches title, description or ticket key
        - priority:low/medium/high/urgent
        - status:active/completed/archived
        - assignee:name
        - archived:true - show archived tasks

        Multiple conditions are ANDed together. Plain text without any
        key:value token is kept exactly as typed, so it matches the same tasks
        as the search predicate; otherwise the free-text words are joined
        with single spaces.
        """
        f = Filter()
        text_parts: list[str] = []

        for match in self.TOKEN_PATTERN.finditer(expression):
            key = match.group(1)
            value = match.group(2).lower()

            if key is None:
                text_parts.append(match.group(2))

            elif key == "priority":
                with contextlib.suppress(ValueError):
                    f.priorities.append(Priority(value))

            elif key == "status":
                with contextlib.suppress(ValueError):
                    f.statuses.append(TaskStatus(value))
                if value == TaskStatus.ARCHIVED.value:
                    f.show_archived = True

            elif key == "assignee":
                f.assignees.append(value)

            elif key == "archived":
                f.show_archived = value == "true"

        if text_parts and len(text_parts) == len(expression.split()):
            f.text = expression
        elif text_parts:
            f.text = " ".join(text_parts)

        return f

    def apply(self, tasks: Iterable[Task], filter_: Filter) -> list[Task]:
        """Apply filter to a list of tasks, preserving order."""
        return [task for task in tasks if self._matches(task, filter_)]

    def visible_board(
        self,
        snapshot: BoardSnapshot,
        expression: str,
        view: ViewMode = ViewMode.KANBAN,
    ) -> list[tuple[str, str, list[Task]]]:
        """Like ``visible_board`` but with a full filter expression."""
        filter_ = self.parse(expression)
        return [
            (list_id, title, self.apply(tasks, filter_))
            for list_id, title, tasks in visible_board(snapshot, "", view)
        ]

    def _matches(self, task: Task, f: Filter) -> bool:
        """Check if a task matches the filter."""
        # Hide archived by default unless explicitly requested
        if task.status == TaskStatus.ARCHIVED and not f.show_archived:
            return False

        if f.text and not matches_query(task, f.text):
            return False

        if f.priorities and task.priority not in f.priorities:
            return False

        if f.statuses and task.status not in f.statuses:
            return False

        if f.assignees:
            assignee = (task.assignee or "").lower()
            if assignee not in f.assignees:
                return False

        return True
