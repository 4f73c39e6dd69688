"""Search bar widget."""

from textual import on
from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Input, Static


class SearchBar(Widget):
    """Search/filter bar at the bottom of the screen."""

    DEFAULT_CSS = """
    SearchBar {
        height: 1;
        dock: bottom;
        background: $surface;
        display: none;
        layer: command;
    }

    SearchBar.-visible {
        display: block;
    }

    SearchBar .mode-indicator {
        width: auto;
        padding: 0 1;
        background: $primary;
        color: $text;
    }

    SearchBar .search-input {
        width: 1fr;
        border: none;
        background: $surface;
    }

    SearchBar .search-input:focus {
        border: none;
    }

    SearchBar .search-status {
        width: auto;
        padding: 0 1;
        color: $text-muted;
    }
    """

    class QueryChanged(Message):
        """Posted on every edit of the search input."""

        def __init__(self, query: str) -> None:
            super().__init__()
            self.query = query

    def __init__(self) -> None:
        super().__init__()
        self._active_query: str = ""

    def compose(self) -> ComposeResult:
        with Horizontal():
            yield Static("Search:", id="mode-indicator", classes="mode-indicator")
            yield Input(
                placeholder="text priority:high status:completed assignee:name...",
                id="search-input",
                classes="search-input",
            )
            yield Static("", id="search-status", classes="search-status")

    def show(self) -> None:
        """Open the search input."""
        self.add_class("-visible")
        input_widget = self.query_one("#search-input", Input)
        input_widget.value = self._active_query
        input_widget.focus()

    def hide(self) -> None:
        """Close the search input, keeping the active query."""
        self.remove_class("-visible")

    def clear(self) -> None:
        """Clear the active query."""
        self._active_query = ""
        self.query_one("#search-input", Input).value = ""
        self._update_status()

    @on(Input.Changed, "#search-input")
    def _on_input_changed(self, event: Input.Changed) -> None:
        event.stop()
        self._active_query = event.value
        self._update_status()
        self.post_message(self.QueryChanged(self._active_query))

    @on(Input.Submitted, "#search-input")
    def _on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.hide()
        self.post_message(self.QueryChanged(self._active_query))

    def _update_status(self) -> None:
        status = self.query_one("#search-status", Static)
        if self._active_query.strip():
            status.update(f"[dim]Active: {self._active_query}[/]")
        else:
            status.update("")

    @property
    def active_query(self) -> str:
        """The query applied to the board."""
        return self._active_query

    @property
    def is_visible(self) -> bool:
        """Check if the search input is open."""
        return self.has_class("-visible")
