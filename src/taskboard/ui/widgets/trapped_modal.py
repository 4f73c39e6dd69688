"""Modal screen base class that keeps keyboard focus inside the modal."""

from __future__ import annotations

from typing import Any, TypeVar

from textual.app import App
from textual.binding import Binding
from textual.screen import ModalScreen
from textual.widget import Widget

from ...a11y import FocusTrap

ResultType = TypeVar("ResultType")


class AppFocusHost:
    """``FocusHost`` over a Textual app's focused widget."""

    def __init__(self, app: App) -> None:
        self.app = app

    @property
    def focused(self) -> Widget | None:
        return self.app.focused

    def focus(self, element: Any) -> None:
        # Widgets removed by a board refresh cannot take focus back
        if isinstance(element, Widget) and element.is_attached:
            element.focus()


class TrappedModal(ModalScreen[ResultType]):
    """A modal whose Tab/Shift+Tab cycle stays inside it.

    The focused widget is recorded when the modal is created (before it is
    pushed) and focus returns there when it is removed. Escape dismisses
    with ``ESCAPE_RESULT``.
    """

    BINDINGS = [
        Binding("tab", "trap_tab(False)", "Next", show=False, priority=True),
        Binding("shift+tab", "trap_tab(True)", "Previous", show=False, priority=True),
        Binding("escape", "trap_escape", "Close", show=False),
    ]

    ESCAPE_RESULT: Any = None

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.focus_trap = FocusTrap(AppFocusHost(self.app), on_close=self._close_from_escape)
        self.focus_trap.activate()

    def on_mount(self) -> None:
        self.call_after_refresh(self._focus_initial)

    def _focus_initial(self) -> None:
        self.focus_trap.update_focusables(self.focus_chain)
        self.focus_trap.focus_initial()

    def on_unmount(self) -> None:
        self.focus_trap.deactivate()

    def action_trap_tab(self, shift: bool) -> None:
        self.focus_trap.update_focusables(self.focus_chain)
        self.focus_trap.handle_tab(shift)

    def action_trap_escape(self) -> None:
        self.focus_trap.handle_escape()

    def _close_from_escape(self) -> None:
        self.dismiss(self.ESCAPE_RESULT)
