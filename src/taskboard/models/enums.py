"""Enums for task status and priority."""

from enum import Enum


class TaskStatus(str, Enum):
    """Lifecycle status of a task (independent of its column)."""

    ACTIVE = "active"
    COMPLETED = "completed"
    ARCHIVED = "archived"


class Priority(str, Enum):
    """Priority levels for tasks."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class Politeness(str, Enum):
    """Urgency of a live announcement."""

    POLITE = "polite"
    ASSERTIVE = "assertive"


class ViewMode(str, Enum):
    """How the board is laid out."""

    KANBAN = "kanban"
    LIST = "list"
