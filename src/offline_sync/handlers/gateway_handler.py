"""HTTP handlers for the gateway.

Handlers convert between HTTP (FastAPI requests, DTOs) and worker events,
and map worker errors to status codes.
"""

import logging

from fastapi import HTTPException, Request, Response, status

from offline_sync.config import Settings, settings
from offline_sync.dto import (
    ActivateResponse,
    EnqueueMutationResponse,
    HealthCheckResponse,
    InstallResponse,
    NotificationClickRequest,
    PartitionsResponse,
    PendingMutationItem,
    PushMessageRequest,
    PushResponse,
    PushSubscriptionRequest,
    SubscriptionResponse,
    SyncReportResponse,
)
from offline_sync.entities import (
    ActivateEvent,
    FetchEvent,
    InstallEvent,
    MutationCategory,
    NotificationClickEvent,
    PushEvent,
    PushSubscriptionEntity,
    RequestEntity,
    ResponseEntity,
    SyncEvent,
)
from offline_sync.errors import InstallationError, NetworkError, StoreUnavailableError, WorkerStateError
from offline_sync.repositories import LocalWorkerHost
from offline_sync.services import OfflineFallback, ServiceWorker

logger = logging.getLogger(__name__)

# Not forwarded upstream; httpx sets its own
_SKIPPED_REQUEST_HEADERS = frozenset({"host", "content-length", "connection", "accept-encoding"})


class GatewayHandler:
    """HTTP handlers for worker control and proxied traffic."""

    def __init__(self, worker: ServiceWorker, host: LocalWorkerHost, config: Settings | None = None) -> None:
        """Initialize the gateway handler.

        Args:
            worker: The service worker (required).
            host: The LocalWorkerHost the worker reports to (required).
            config: Settings providing the upstream origin.
        """
        self._worker = worker
        self._host = host
        self._config = config or settings

    @staticmethod
    def _category(name: str) -> MutationCategory:
        try:
            return MutationCategory(name)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail=f"Unknown category: {name}",
            ) from None

    def to_entity(self, request: Request, body: bytes = b"") -> RequestEntity:
        """Rewrite an incoming request onto the upstream origin."""
        url = self._config.upstream_origin.rstrip("/") + request.url.path
        if request.url.query:
            url = f"{url}?{request.url.query}"

        mode = request.headers.get("sec-fetch-mode")
        if mode is None:
            mode = "navigate" if "text/html" in request.headers.get("accept", "") else "cors"

        headers = {
            name: value
            for name, value in request.headers.items()
            if name.lower() not in _SKIPPED_REQUEST_HEADERS
        }
        return RequestEntity(url=url, method=request.method, mode=mode, headers=headers, body=body)

    @staticmethod
    def to_response(entity: ResponseEntity) -> Response:
        return Response(content=entity.body, status_code=entity.status, headers=entity.headers)

    async def proxy(self, request: Request) -> Response:
        """Handle any request outside the control surface."""
        entity = self.to_entity(request, await request.body())
        response = await self._worker.dispatch(FetchEvent(entity))
        if response is not None:
            return self.to_response(response)

        # Not intercepted: straight to the network
        try:
            response = await self._worker.http_client.fetch(entity)
        except NetworkError as e:
            logger.error("Pass-through %s %s failed: %s", entity.method, entity.url, e)
            offline = OfflineFallback.offline_response(entity)
            return Response(content=offline.body, status_code=status.HTTP_502_BAD_GATEWAY, headers=offline.headers)
        return self.to_response(response)

    async def install(self) -> InstallResponse:
        try:
            count = await self._worker.dispatch(InstallEvent())
        except (InstallationError, StoreUnavailableError) as e:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"Installation failed: {e}",
            ) from e
        return InstallResponse(state=self._worker.state.value, cached_assets=count)

    async def activate(self) -> ActivateResponse:
        try:
            deleted = await self._worker.dispatch(ActivateEvent())
        except WorkerStateError as e:
            raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
        return ActivateResponse(state=self._worker.state.value, deleted_partitions=deleted)

    async def partitions(self) -> PartitionsResponse:
        store = self._worker.cache.store
        counts = {}
        for name in await store.list_partitions():
            counts[name] = len(await store.keys(name))
        return PartitionsResponse(partitions=counts, current=list(self._worker.cache.current_partitions))

    async def sync(self, tag: str) -> SyncReportResponse:
        report = await self._worker.dispatch(SyncEvent(tag))
        if report is None:
            return SyncReportResponse(tag=tag)
        return SyncReportResponse(
            tag=tag,
            category=report.category.value,
            attempted=report.attempted,
            synced=report.synced,
            remaining=report.remaining,
            aborted=report.aborted,
        )

    async def enqueue(self, category_name: str, payload) -> EnqueueMutationResponse:
        category = self._category(category_name)
        try:
            record_id = await self._worker.sync.enqueue(category, payload)
        except StoreUnavailableError as e:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
        return EnqueueMutationResponse(id=record_id, category=category.value, sync_tag=category.sync_tag)

    async def pending(self, category_name: str) -> list[PendingMutationItem]:
        category = self._category(category_name)
        try:
            records = await self._worker.sync.pending(category)
        except StoreUnavailableError as e:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
        return [
            PendingMutationItem(id=record.id, payload=record.payload, created_at=record.created_at)
            for record in records
        ]

    async def push(self, request: PushMessageRequest) -> PushResponse:
        data = request.data.encode("utf-8") if request.data is not None else None
        notification_id = await self._worker.dispatch(PushEvent(data))
        notification = self._host.notifications[notification_id]
        return PushResponse(notification_id=notification_id, title=notification.title, body=notification.body)

    async def notification_click(self, request: NotificationClickRequest) -> dict:
        await self._worker.dispatch(NotificationClickEvent(request.notification_id, request.action))
        return {"closed": request.notification_id, "focused": self._host.focused}

    def notifications(self) -> list[dict]:
        return [
            {
                "notification_id": notification_id,
                "title": notification.title,
                "body": notification.body,
                "data": notification.data,
            }
            for notification_id, notification in self._host.notifications.items()
        ]

    @staticmethod
    def _subscription(request: PushSubscriptionRequest) -> PushSubscriptionEntity:
        return PushSubscriptionEntity(
            endpoint=request.endpoint,
            keys=tuple(sorted(request.keys.items())),
            expiration_time=request.expiration_time,
        )

    async def subscribe(self, request: PushSubscriptionRequest) -> SubscriptionResponse:
        success = await self._worker.subscriptions.subscribe(self._subscription(request), request.user_agent)
        return SubscriptionResponse(success=success)

    async def unsubscribe(self, request: PushSubscriptionRequest) -> SubscriptionResponse:
        success = await self._worker.subscriptions.unsubscribe(self._subscription(request))
        return SubscriptionResponse(success=success)

    async def drain(self) -> dict:
        await self._worker.tasks.drain()
        return {"detached_tasks": self._worker.tasks.pending}

    async def health_check(self) -> HealthCheckResponse:
        state = self._worker.state.value
        return HealthCheckResponse(
            status="healthy" if state == "activated" else "degraded",
            state=state,
            detached_tasks=self._worker.tasks.pending,
        )
