"""Accessibility state machines: keyboard navigation, focus trap, announcements."""

from .announcer import Announcement, Announcer, LiveRegionHost
from .focus_trap import FocusHost, FocusTrap, TrapContext
from .navigation import (
    BoardNavigator,
    FocusState,
    ListNavigator,
    MoveRequest,
    NavAction,
)

__all__ = [
    "Announcement",
    "Announcer",
    "BoardNavigator",
    "FocusHost",
    "FocusState",
    "FocusTrap",
    "ListNavigator",
    "LiveRegionHost",
    "MoveRequest",
    "NavAction",
    "TrapContext",
]
