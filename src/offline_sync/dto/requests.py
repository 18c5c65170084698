"""Request DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class EnqueueMutationRequest(BaseModel):
    """Request DTO for queueing an offline mutation."""

    payload: Any = Field(..., description="Opaque JSON body replayed to the backend")


class PushMessageRequest(BaseModel):
    """Request DTO for delivering a push message.

    `data` is passed through as raw text, so malformed JSON is accepted here
    and handled by the worker.
    """

    data: str | None = Field(None, description="Raw push payload, normally a JSON object")


class NotificationClickRequest(BaseModel):
    """Request DTO for a notification click."""

    notification_id: str = Field(..., description="Identifier returned when the notification was shown", min_length=1)
    action: str = Field("", description="Action button clicked; empty for the notification body")


class PushSubscriptionRequest(BaseModel):
    """Request DTO for forwarding a browser push subscription."""

    endpoint: str = Field(..., description="Push service endpoint URL", min_length=1)
    keys: dict[str, str] = Field(default_factory=dict, description="p256dh and auth keys")
    expiration_time: int | None = Field(None, alias="expirationTime")
    user_agent: str = Field("", alias="userAgent")

    model_config = {"populate_by_name": True}
