"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract of the gateway's
control surface. Internal logic uses entities from the entities package.
"""

from .requests import EnqueueMutationRequest, NotificationClickRequest, PushMessageRequest, PushSubscriptionRequest
from .responses import (
    ActivateResponse,
    EnqueueMutationResponse,
    HealthCheckResponse,
    InstallResponse,
    NotificationItem,
    PartitionsResponse,
    PendingMutationItem,
    PushResponse,
    SubscriptionResponse,
    SyncReportResponse,
)

__all__ = [
    "EnqueueMutationRequest",
    "NotificationClickRequest",
    "PushMessageRequest",
    "PushSubscriptionRequest",
    "ActivateResponse",
    "EnqueueMutationResponse",
    "HealthCheckResponse",
    "InstallResponse",
    "NotificationItem",
    "PartitionsResponse",
    "PendingMutationItem",
    "PushResponse",
    "SubscriptionResponse",
    "SyncReportResponse",
]
