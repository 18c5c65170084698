"""Host environment protocol.

The parts of the browser a service worker talks to directly: the
registration (skip waiting, notifications) and the clients of its scope.
"""

from typing import Protocol, runtime_checkable

from offline_sync.entities import NotificationEntity


@runtime_checkable
class WorkerHost(Protocol):
    """Protocol for the environment hosting the worker."""

    async def skip_waiting(self) -> None:
        """Ask for immediate activation of the installed worker."""
        ...

    async def claim_clients(self) -> None:
        """Take control of every already-open client."""
        ...

    async def show_notification(self, notification: NotificationEntity) -> str:
        """Display a notification.

        Returns:
            Identifier of the displayed notification
        """
        ...

    async def close_notification(self, notification_id: str) -> None:
        """Dismiss a displayed notification."""
        ...

    async def open_window(self, url: str) -> None:
        """Focus a client showing url, or open a new one."""
        ...
