"""taskboard - keyboard-accessible kanban board with optimistic reordering."""

__version__ = "0.1.0"
