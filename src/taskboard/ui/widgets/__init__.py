"""Widget components."""

from .column import EmptyColumnMessage, KanbanColumn
from .confirm_modal import ConfirmModal
from .live_region import LiveRegion
from .search_bar import SearchBar
from .task_card import TaskCard
from .task_preview_modal import TaskPreviewModal
from .trapped_modal import AppFocusHost, TrappedModal

__all__ = [
    "AppFocusHost",
    "ConfirmModal",
    "EmptyColumnMessage",
    "KanbanColumn",
    "LiveRegion",
    "SearchBar",
    "TaskCard",
    "TaskPreviewModal",
    "TrappedModal",
]
