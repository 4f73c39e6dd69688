"""Live region container for announcements."""

from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.widgets import Static

from ...a11y import Announcement


class LiveRegion(Vertical):
    """Mounts one line per live announcement.

    Implements the announcer's ``LiveRegionHost`` protocol. Terminal screen
    readers speak newly printed text, so each announcement is a visible
    line that goes away when the announcer expires it.
    """

    DEFAULT_CSS = """
    LiveRegion {
        height: auto;
        max-height: 3;
        dock: bottom;
        background: $surface;
    }

    LiveRegion .announcement {
        height: 1;
        padding: 0 1;
        color: $text-muted;
    }

    LiveRegion .announcement.-assertive {
        color: $error;
        text-style: bold;
    }
    """

    def mount_region(self, announcement: Announcement) -> None:
        region = Static(
            announcement.message,
            id=f"announcement-{announcement.id}",
            classes=f"announcement -{announcement.politeness.value}",
            markup=False,
        )
        self.mount(region)

    def remove_region(self, announcement: Announcement) -> None:
        try:
            self.query_one(f"#announcement-{announcement.id}", Static).remove()
        except NoMatches:
            pass

