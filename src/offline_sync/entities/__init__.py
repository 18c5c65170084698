"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .events import (
    ActivateEvent,
    FetchEvent,
    InstallEvent,
    NotificationClickEvent,
    PushEvent,
    SyncEvent,
    WorkerEvent,
)
from .mutation import MutationCategory, PendingMutationEntity, SyncReport
from .notification import NotificationAction, NotificationEntity, PushSubscriptionEntity
from .request import RequestEntity
from .response import ResponseEntity

__all__ = [
    "RequestEntity",
    "ResponseEntity",
    "MutationCategory",
    "PendingMutationEntity",
    "SyncReport",
    "NotificationAction",
    "NotificationEntity",
    "PushSubscriptionEntity",
    "WorkerEvent",
    "InstallEvent",
    "ActivateEvent",
    "FetchEvent",
    "SyncEvent",
    "PushEvent",
    "NotificationClickEvent",
]
