"""Live announcements for assistive technology."""

from __future__ import annotations

import asyncio
import itertools
import logging
from collections import deque
from dataclasses import dataclass
from typing import Protocol

from ..models import Politeness

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Announcement:
    """A single transient message exposed to screen readers."""

    id: int
    message: str
    politeness: Politeness


class LiveRegionHost(Protocol):
    """Where announcement regions are mounted (a DOM, a widget tree, a log)."""

    def mount_region(self, announcement: Announcement) -> None:
        """Expose a new live region holding the announcement."""
        ...

    def remove_region(self, announcement: Announcement) -> None:
        """Remove the live region of a previously mounted announcement."""
        ...


class Announcer:
    """
    Process-wide announcement service.

    Must be initialised with a host before use and torn down when the host
    goes away. Every announcement gets its own region which is removed after
    ``delay`` seconds; announcements do not queue and are not deduplicated.
    """

    DEFAULT_DELAY = 1.0
    HISTORY_SIZE = 50

    def __init__(self, delay: float = DEFAULT_DELAY) -> None:
        self.delay = delay
        self._host: LiveRegionHost | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._ids = itertools.count(1)
        self._live: dict[int, Announcement] = {}
        self._timers: dict[int, asyncio.TimerHandle] = {}
        self._history: deque[Announcement] = deque(maxlen=self.HISTORY_SIZE)

    @property
    def is_initialized(self) -> bool:
        return self._host is not None

    @property
    def live(self) -> list[Announcement]:
        """Announcements whose regions are currently mounted."""
        return list(self._live.values())

    @property
    def history(self) -> list[Announcement]:
        """Most recent announcements, oldest first."""
        return list(self._history)

    def init(
        self,
        host: LiveRegionHost,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        """Attach the service to a host. Re-initialising tears down the old host first."""
        if self._host is not None:
            self.teardown()
        self._host = host
        self._loop = loop
        logger.debug("Announcer initialised with %s", type(host).__name__)

    def teardown(self) -> None:
        """Cancel pending removals and remove every live region."""
        for timer in self._timers.values():
            timer.cancel()
        self._timers.clear()

        host = self._host
        live = list(self._live.values())
        self._live.clear()
        self._host = None
        self._loop = None

        if host is not None:
            for announcement in live:
                host.remove_region(announcement)

    def announce(
        self,
        message: str,
        politeness: Politeness = Politeness.POLITE,
    ) -> Announcement | None:
        """
        Announce a message.

        Returns the announcement, or None if the service has no host (the
        message is then only logged).
        """
        if self._host is None:
            logger.debug("Announcer not initialised, dropping: %s", message)
            return None

        announcement = Announcement(next(self._ids), message, politeness)
        self._history.append(announcement)
        self._live[announcement.id] = announcement
        self._host.mount_region(announcement)
        logger.debug("Announced (%s): %s", politeness.value, message)

        loop = self._loop or self._running_loop()
        if loop is not None:
            self._timers[announcement.id] = loop.call_later(
                self.delay, self._expire, announcement.id
            )
        return announcement

    def _expire(self, announcement_id: int) -> None:
        self._timers.pop(announcement_id, None)
        announcement = self._live.pop(announcement_id, None)
        if announcement is not None and self._host is not None:
            self._host.remove_region(announcement)

    @staticmethod
    def _running_loop() -> asyncio.AbstractEventLoop | None:
        try:
            return asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; region stays until teardown")
            return None
