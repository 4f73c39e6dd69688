"""Focus containment for modal-like surfaces."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class FocusHost(Protocol):
    """Reads and moves keyboard focus in the host UI."""

    @property
    def focused(self) -> Any | None:
        """The element that currently has focus, if any."""
        ...

    def focus(self, element: Any) -> None:
        """Move focus to ``element``. Must not raise for detached elements."""
        ...


@dataclass
class TrapContext:
    """State that exists only while a trapped surface is open."""

    previous_focused: Any | None
    focusables: list[Any] = field(default_factory=list)
    is_active: bool = True

    @property
    def first_focusable(self) -> Any | None:
        return self.focusables[0] if self.focusables else None

    @property
    def last_focusable(self) -> Any | None:
        return self.focusables[-1] if self.focusables else None


class FocusTrap:
    """
    Keeps keyboard focus inside an open surface.

    Lifecycle: ``activate`` when the surface opens (records the focused
    element), ``focus_initial`` once its content is mounted, ``handle_tab``
    for every Tab/Shift+Tab, ``deactivate`` when it closes (restores focus).
    A surface with no focusable elements is tolerated: focus is simply not
    moved.
    """

    def __init__(
        self,
        host: FocusHost,
        on_close: Callable[[], None] | None = None,
    ) -> None:
        self.host = host
        self.on_close = on_close
        self._context: TrapContext | None = None

    @property
    def context(self) -> TrapContext | None:
        return self._context

    @property
    def is_active(self) -> bool:
        return self._context is not None and self._context.is_active

    def activate(self, focusables: Sequence[Any] = ()) -> TrapContext:
        """Open the trap, remembering where focus was."""
        if self._context is not None:
            logger.debug("Focus trap already active, re-activating")
            self._context.is_active = False
            previous = self._context.previous_focused
        else:
            previous = self.host.focused
        self._context = TrapContext(previous_focused=previous, focusables=list(focusables))
        return self._context

    def update_focusables(self, focusables: Sequence[Any]) -> None:
        """Replace the focusable elements (content re-rendered)."""
        if self._context is not None:
            self._context.focusables = list(focusables)

    def focus_initial(self) -> bool:
        """Focus the first focusable element. Returns False if there is none."""
        context = self._context
        if context is None or context.first_focusable is None:
            logger.debug("Focus trap has no focusable element")
            return False
        self.host.focus(context.first_focusable)
        return True

    def handle_tab(self, shift: bool = False) -> bool:
        """
        Move focus to the next (or previous) element, wrapping at the ends.

        Returns True if the key was consumed.
        """
        context = self._context
        if context is None or not context.is_active:
            return False
        if not context.focusables:
            # Nothing to cycle through, but focus must not escape either
            return True

        current = self.host.focused
        count = len(context.focusables)
        try:
            index = context.focusables.index(current)
        except ValueError:
            target = context.last_focusable if shift else context.first_focusable
        else:
            step = -1 if shift else 1
            target = context.focusables[(index + step) % count]

        self.host.focus(target)
        return True

    def handle_escape(self) -> bool:
        """Request closure from the caller. Returns True if a handler ran."""
        if not self.is_active or self.on_close is None:
            return False
        self.on_close()
        return True

    def deactivate(self) -> None:
        """Close the trap and give focus back to the element focused at activation."""
        context = self._context
        if context is None:
            return
        context.is_active = False
        self._context = None
        if context.previous_focused is not None:
            self.host.focus(context.previous_focused)
