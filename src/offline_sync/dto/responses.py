"""Response DTOs for API endpoints."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class InstallResponse(BaseModel):
    state: str = Field(..., description="Worker lifecycle state after install")
    cached_assets: int = Field(..., description="Number of app-shell assets cached", ge=0)


class ActivateResponse(BaseModel):
    state: str = Field(..., description="Worker lifecycle state after activate")
    deleted_partitions: list[str] = Field(default_factory=list, description="Stale partitions removed")


class PartitionsResponse(BaseModel):
    partitions: dict[str, int] = Field(..., description="Live partition name -> entry count")
    current: list[str] = Field(..., description="Partition names of the running version")


class SyncReportResponse(BaseModel):
    tag: str
    category: str | None = Field(None, description="Category replayed; null for foreign tags")
    attempted: int = 0
    synced: int = 0
    remaining: int = 0
    aborted: bool = False


class EnqueueMutationResponse(BaseModel):
    id: int = Field(..., description="Identifier of the queued record")
    category: str
    sync_tag: str = Field(..., description="Tag to register for replay")


class PendingMutationItem(BaseModel):
    id: int
    payload: Any
    created_at: datetime


class PushResponse(BaseModel):
    notification_id: str
    title: str
    body: str


class NotificationItem(BaseModel):
    notification_id: str
    title: str
    body: str
    data: dict[str, Any] = Field(default_factory=dict)


class SubscriptionResponse(BaseModel):
    success: bool = Field(..., description="Whether the application server accepted the call")


class HealthCheckResponse(BaseModel):
    status: str = Field(..., description="Health status: 'healthy' or 'degraded'")
    state: str = Field(..., description="Worker lifecycle state")
    detached_tasks: int = Field(..., description="Background revalidations in flight", ge=0)
