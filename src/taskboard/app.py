"""taskboard TUI Application."""

import logging

from textual.app import App
from textual.binding import Binding

from .a11y import Announcer
from .config import Settings
from .repositories import InMemoryPersistence
from .services import BoardService, ConfigService, FilterService, ReorderEngine
from .ui.screens import BoardScreen, HelpScreen
from .ui.widgets import ConfirmModal, SearchBar

logger = logging.getLogger(__name__)


class TaskboardApp(App):
    """taskboard - keyboard-accessible kanban board."""

    TITLE = "taskboard"

    CSS_PATH = "ui/styles.tcss"

    # Task navigation and move keys are routed through the board's navigator
    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("?", "help", "Help", show=True),
        Binding("r", "refresh", "Reload", show=True),
        Binding("v", "toggle_view", "View", show=True),
        Binding("/", "enter_search", "Search", show=True),
        Binding("escape", "escape", "Back", show=False),
    ]

    SCREENS = {
        "board": BoardScreen,
    }

    def __init__(self, settings: Settings | None = None) -> None:
        super().__init__()
        self.settings = settings or Settings()
        self._init_services()

    def _init_services(self) -> None:
        """Initialize persistence and services."""
        self.config_service = ConfigService(self.settings.board_file)
        snapshot = self.config_service.get_snapshot()

        self.persistence = InMemoryPersistence(
            snapshot,
            latency=self.settings.simulated_latency,
            failure_rate=self.settings.failure_rate,
        )
        self.board_service = BoardService(self.persistence, snapshot)
        self.announcer = Announcer(delay=self.settings.announcement_delay)
        self.reorder_engine = ReorderEngine(
            self.board_service,
            self.persistence,
            announcer=self.announcer,
            move_timeout=self.settings.move_timeout,
        )
        self.filter_service = FilterService()

    def on_mount(self) -> None:
        """Called when app is mounted."""
        self.push_screen("board")
        if self.config_service.has_config_error:
            self.notify(
                f"{self.config_service.config_error}. Using the default board.",
                severity="warning",
                timeout=5,
            )

    def action_refresh(self) -> None:
        """Reload the board, confirming first if moves are still being saved."""
        screen = self.screen
        if not isinstance(screen, BoardScreen):
            return

        pending = self.reorder_engine.pending
        if pending:
            snapshot = self.board_service.snapshot
            titles = []
            for task_id in pending:
                task = snapshot.get_task(task_id)
                titles.append(task.title if task else task_id)
            count = len(titles)
            self.push_screen(  # pyrefly: ignore[no-matching-overload]
                ConfirmModal(
                    f"{count} move{'s' if count != 1 else ''} still being saved. "
                    "Reloading shows the server's board and may undo them.",
                    details=titles,
                ),
                callback=self._handle_refresh_confirm,
            )
            return
        screen.run_worker(screen.reload_board(), exclusive=True, group="reload")

    def _handle_refresh_confirm(self, confirmed: bool) -> None:
        """Handle reload confirmation result."""
        if not confirmed:
            return

        screen = self.screen
        if isinstance(screen, BoardScreen):
            screen.run_worker(screen.reload_board(), exclusive=True, group="reload")

    def action_help(self) -> None:
        """Show help screen."""
        self.push_screen(HelpScreen())

    def action_toggle_view(self) -> None:
        """Switch between kanban and list view."""
        screen = self.screen
        if isinstance(screen, BoardScreen):
            screen.toggle_view()

    def action_enter_search(self) -> None:
        """Open the search bar."""
        screen = self.screen
        if not isinstance(screen, BoardScreen):
            return
        screen.query_one(SearchBar).show()

    def action_escape(self) -> None:
        """Handle escape: close the search bar, or clear the active search."""
        screen = self.screen
        if not isinstance(screen, BoardScreen):
            return

        search_bar = screen.query_one(SearchBar)
        if search_bar.is_visible:
            search_bar.hide()
            screen.set_focus(None)
            screen.set_query(search_bar.active_query)
        elif search_bar.active_query:
            search_bar.clear()
            screen.set_query("")


def run(settings: Settings | None = None) -> None:
    """Run the taskboard application."""
    app = TaskboardApp(settings)
    app.run()
