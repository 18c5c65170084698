"""Push notification handling and subscription forwarding."""

import json
import logging
import time
from dataclasses import replace
from typing import Any

from offline_sync.config import Settings, settings
from offline_sync.entities import NotificationAction, NotificationEntity, PushSubscriptionEntity
from offline_sync.errors import NetworkError
from offline_sync.protocols import HttpClient, WorkerHost

logger = logging.getLogger(__name__)

PRIMARY_ACTION = "explore"
CLOSE_ACTION = "close"


class PushResponder:
    """Turns push messages into notifications and routes clicks.

    One inbound push always yields exactly one displayed notification,
    whatever the payload looks like.
    """

    def __init__(self, host: WorkerHost, config: Settings | None = None) -> None:
        self._host = host
        self._config = config or settings

    def default_notification(self) -> NotificationEntity:
        icon = self._config.push_icon
        return NotificationEntity(
            title=self._config.push_title,
            body=self._config.push_body,
            icon=icon,
            badge=icon,
            vibrate=(100, 50, 100),
            actions=(
                NotificationAction(action=PRIMARY_ACTION, title="View Updates", icon=icon),
                NotificationAction(action=CLOSE_ACTION, title="Close", icon=icon),
            ),
            data={"dateOfArrival": int(time.time() * 1000), "primaryKey": 1},
        )

    @staticmethod
    def parse_payload(data: bytes | str | None) -> dict[str, Any]:
        """Decode a push payload, treating anything but a JSON object as empty."""
        if not data:
            return {}
        try:
            payload = json.loads(data)
        except (UnicodeDecodeError, json.JSONDecodeError):
            logger.warning("Malformed push payload, using defaults")
            return {}
        if not isinstance(payload, dict):
            logger.warning("Push payload is not an object, using defaults")
            return {}
        return payload

    def build_notification(self, data: bytes | str | None) -> NotificationEntity:
        notification = self.default_notification()
        payload = self.parse_payload(data)
        if not payload:
            return notification

        return replace(
            notification,
            title=str(payload.get("title") or notification.title),
            body=str(payload.get("body") or notification.body),
            data={**notification.data, **payload},
        )

    async def on_push(self, data: bytes | str | None) -> str:
        """Display the notification for a push message.

        Returns:
            Identifier of the displayed notification
        """
        notification = self.build_notification(data)
        return await self._host.show_notification(notification)

    async def on_notification_click(self, notification_id: str, action: str) -> None:
        await self._host.close_notification(notification_id)
        if action == PRIMARY_ACTION:
            await self._host.open_window(self._config.app_root)


class PushSubscriptionService:
    """Forwards push subscriptions to the application server.

    Server failures are logged and reported, never raised: the subscription
    stays usable locally either way.
    """

    SUBSCRIBE_URL = "/api/notifications/subscribe"
    UNSUBSCRIBE_URL = "/api/notifications/unsubscribe"

    def __init__(self, http_client: HttpClient) -> None:
        self._http = http_client

    async def _send(self, url: str, body: dict[str, Any]) -> bool:
        try:
            response = await self._http.post_json(url, body)
        except NetworkError as e:
            logger.error("Failed to reach %s: %s", url, e)
            return False
        if not response.ok:
            logger.error("Server responded with status: %d", response.status)
            return False
        return True

    async def subscribe(self, subscription: PushSubscriptionEntity, user_agent: str = "") -> bool:
        return await self._send(
            self.SUBSCRIBE_URL,
            {
                "subscription": subscription.to_json(),
                "userAgent": user_agent,
                "timestamp": int(time.time() * 1000),
            },
        )

    async def unsubscribe(self, subscription: PushSubscriptionEntity) -> bool:
        return await self._send(self.UNSUBSCRIBE_URL, {"subscription": subscription.to_json()})
