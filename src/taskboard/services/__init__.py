"""Service layer for board logic."""

from .board_service import BoardService
from .config_service import ConfigService
from .filter_service import Filter, FilterService, matches_query, visible_board, visible_tasks
from .reorder_engine import ReorderEngine

__all__ = [
    "BoardService",
    "ConfigService",
    "Filter",
    "FilterService",
    "ReorderEngine",
    "matches_query",
    "visible_board",
    "visible_tasks",
]
