"""Confirmation before discarding moves that are still being saved."""

from collections.abc import Sequence

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Center, Vertical
from textual.widgets import Button, Label, Static

from .trapped_modal import TrappedModal


class ConfirmModal(TrappedModal[bool]):
    """
    Ask before an action that may throw away unsaved moves.

    The cancel button comes first so it is the one the focus trap focuses
    when the dialog opens; confirming always takes a deliberate key.
    Dismisses with True only when confirmed.
    """

    DEFAULT_CSS = """
    ConfirmModal {
        align: center middle;
    }

    ConfirmModal > Vertical {
        width: 56;
        height: auto;
        max-height: 80%;
        padding: 1 2;
        background: $surface;
        border: solid $warning;
    }

    ConfirmModal #confirm-message {
        width: 100%;
        text-align: center;
        margin-bottom: 1;
    }

    ConfirmModal #confirm-details {
        width: 100%;
        color: $text-muted;
        margin-bottom: 1;
    }

    ConfirmModal .buttons {
        width: 100%;
        height: auto;
        align: center middle;
    }

    ConfirmModal Button {
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("y", "confirm", "Confirm"),
        Binding("n", "cancel", "Cancel"),
    ]

    ESCAPE_RESULT = False

    # Longer lists are summarised
    MAX_DETAILS = 5

    def __init__(
        self,
        message: str,
        details: Sequence[str] = (),
        confirm_label: str = "Reload",
        cancel_label: str = "Keep waiting",
    ) -> None:
        super().__init__()
        self.message = message
        self.details = list(details)
        self.confirm_label = confirm_label
        self.cancel_label = cancel_label

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label(self.message, id="confirm-message")
            if self.details:
                yield Static(
                    format_details(self.details, self.MAX_DETAILS),
                    id="confirm-details",
                    markup=False,
                )
            with Center(classes="buttons"):
                yield Button(f"{self.cancel_label} (n)", id="cancel", variant="primary")
                yield Button(f"{self.confirm_label} (y)", id="confirm", variant="warning")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm")

    def action_confirm(self) -> None:
        self.dismiss(True)

    def action_cancel(self) -> None:
        self.dismiss(False)


def format_details(details: Sequence[str], limit: int) -> str:
    """Bullet list of ``details``, with a count of whatever did not fit."""
    lines = [f"• {item}" for item in details[:limit]]
    hidden = len(details) - limit
    if hidden > 0:
        lines.append(f"  and {hidden} more")
    return "\n".join(lines)
