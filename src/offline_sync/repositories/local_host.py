"""In-process implementation of WorkerHost.

Keeps the host-side effects of the worker (notifications shown, windows
opened, activation signals) where the gateway's HTTP surface and tests can
inspect them.
"""

import itertools
import logging

from offline_sync.entities import NotificationEntity

logger = logging.getLogger(__name__)


class LocalWorkerHost:
    """Records what a browser would do in response to worker calls."""

    def __init__(self) -> None:
        self.waiting_skipped = False
        self.clients_claimed = False
        self.notifications: dict[str, NotificationEntity] = {}
        self.windows: list[str] = []
        self.focused: str | None = None
        self._ids = itertools.count(1)

    async def skip_waiting(self) -> None:
        self.waiting_skipped = True

    async def claim_clients(self) -> None:
        self.clients_claimed = True

    async def show_notification(self, notification: NotificationEntity) -> str:
        notification_id = str(next(self._ids))
        self.notifications[notification_id] = notification
        logger.info("Notification %s shown: %s", notification_id, notification.title)
        return notification_id

    async def close_notification(self, notification_id: str) -> None:
        self.notifications.pop(notification_id, None)

    async def open_window(self, url: str) -> None:
        if url not in self.windows:
            self.windows.append(url)
        self.focused = url
