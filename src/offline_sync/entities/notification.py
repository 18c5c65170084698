"""Notification and push subscription entities."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class NotificationAction:
    action: str
    title: str
    icon: str | None = None


@dataclass(frozen=True)
class NotificationEntity:
    """A notification ready to be displayed by the host.

    Attributes:
        title: Notification title
        body: Notification body text
        icon: Icon URL
        badge: Badge URL
        vibrate: Vibration pattern in milliseconds
        actions: Buttons shown with the notification
        data: Arbitrary data carried back on click
    """

    title: str
    body: str
    icon: str
    badge: str
    vibrate: tuple[int, ...] = ()
    actions: tuple[NotificationAction, ...] = ()
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PushSubscriptionEntity:
    """Browser-issued push endpoint descriptor.

    Owned by the push service; never mutated here. Re-fetch to get a new one.
    """

    endpoint: str
    keys: tuple[tuple[str, str], ...] = ()
    expiration_time: int | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "endpoint": self.endpoint,
            "expirationTime": self.expiration_time,
            "keys": dict(self.keys),
        }
