"""Task domain model."""

from datetime import date, datetime

from pydantic import BaseModel, Field

from .enums import Priority, TaskStatus


class Task(BaseModel):
    """A single card on the board.

    Tasks are immutable; the board replaces them (``model_copy``) when a move
    changes their column or position.
    """

    model_config = {"frozen": True}

    # Identification
    id: str = Field(..., min_length=1)
    column_id: str = Field(..., min_length=1)

    # Content
    title: str = Field(..., min_length=1)
    description: str | None = None
    ticket_key: str | None = None  # External ticket key, e.g. "PROJ-123"

    # Planning fields
    priority: Priority = Priority.MEDIUM
    status: TaskStatus = TaskStatus.ACTIVE
    due_date: date | None = None
    assignee: str | None = None
    estimated_hours: float | None = Field(default=None, ge=0)
    actual_hours: float | None = Field(default=None, ge=0)

    # Rank within the owning column, dense from 0
    position: int = Field(default=0, ge=0)

    created: datetime | None = None
    updated: datetime | None = None

    @property
    def is_completed(self) -> bool:
        return self.status == TaskStatus.COMPLETED

    def is_overdue(self, today: date) -> bool:
        """Due before ``today`` and not completed."""
        if self.due_date is None or self.is_completed:
            return False
        return self.due_date < today

    def accessible_label(self) -> str:
        """One-line summary read by screen readers when the card gets focus."""
        due = self.due_date.isoformat() if self.due_date else "No due date"
        assignee = self.assignee or "Unassigned"
        return (
            f"{self.title}. Priority: {self.priority.value}. "
            f"Status: {self.status.value}. Due: {due}. Assigned to: {assignee}."
        )

    def accessible_hint(self) -> str:
        """Longer description with the keyboard instructions for the card."""
        parts: list[str] = []
        if self.description:
            parts.append(f"Description: {self.description}.")
        if self.ticket_key:
            parts.append(f"Ticket: {self.ticket_key}.")
        parts.append("Press Enter to view details, Shift+arrows to move.")
        return " ".join(parts)
