from typing import Any

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from offline_sync.api.dependencies import HandlerDep, lifespan
from offline_sync.config import Settings, settings
from offline_sync.dto import (
    ActivateResponse,
    EnqueueMutationRequest,
    EnqueueMutationResponse,
    HealthCheckResponse,
    InstallResponse,
    NotificationClickRequest,
    NotificationItem,
    PartitionsResponse,
    PendingMutationItem,
    PushMessageRequest,
    PushResponse,
    PushSubscriptionRequest,
    SubscriptionResponse,
    SyncReportResponse,
)

CONTROL_PREFIX = "/_worker"
PROXIED_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(
    config: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Build the gateway application.

    Args:
        config: Settings override. Defaults to the environment settings.
        transport: httpx transport for the upstream (e.g. MockTransport in tests).
    """
    app = FastAPI(
        title="Offline Sync Gateway",
        description="Offline-first caching and background sync in front of a web origin",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.config = config or settings
    app.state.transport = transport

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get(CONTROL_PREFIX)
    async def root() -> dict[str, Any]:
        """Control surface information."""
        return {
            "name": "Offline Sync Gateway",
            "version": "0.1.0",
            "upstream": app.state.config.upstream_origin,
            "endpoints": {
                "lifecycle": f"{CONTROL_PREFIX}/install, {CONTROL_PREFIX}/activate",
                "sync": f"{CONTROL_PREFIX}/sync/{{tag}}",
                "queue": f"{CONTROL_PREFIX}/queue/{{category}}",
                "push": f"{CONTROL_PREFIX}/push",
                "health": f"{CONTROL_PREFIX}/health",
                "docs": "/docs",
            },
        }

    @app.get(f"{CONTROL_PREFIX}/health", response_model=HealthCheckResponse)
    async def health(handler: HandlerDep) -> HealthCheckResponse:
        return await handler.health_check()

    @app.post(f"{CONTROL_PREFIX}/install", response_model=InstallResponse)
    async def install(handler: HandlerDep) -> InstallResponse:
        """Cache the app shell. 503 if any asset is unreachable."""
        return await handler.install()

    @app.post(f"{CONTROL_PREFIX}/activate", response_model=ActivateResponse)
    async def activate(handler: HandlerDep) -> ActivateResponse:
        """Prune stale partitions and claim clients."""
        return await handler.activate()

    @app.get(f"{CONTROL_PREFIX}/partitions", response_model=PartitionsResponse)
    async def partitions(handler: HandlerDep) -> PartitionsResponse:
        return await handler.partitions()

    @app.post(f"{CONTROL_PREFIX}/sync/{{tag}}", response_model=SyncReportResponse)
    async def sync(tag: str, handler: HandlerDep) -> SyncReportResponse:
        """Deliver a sync event for a background-sync tag."""
        return await handler.sync(tag)

    @app.post(
        f"{CONTROL_PREFIX}/queue/{{category}}",
        response_model=EnqueueMutationResponse,
        status_code=201,
    )
    async def enqueue(
        category: str,
        request: EnqueueMutationRequest,
        handler: HandlerDep,
    ) -> EnqueueMutationResponse:
        """Queue a mutation that could not reach the backend."""
        return await handler.enqueue(category, request.payload)

    @app.get(f"{CONTROL_PREFIX}/queue/{{category}}", response_model=list[PendingMutationItem])
    async def pending(category: str, handler: HandlerDep) -> list[PendingMutationItem]:
        return await handler.pending(category)

    @app.post(f"{CONTROL_PREFIX}/push", response_model=PushResponse)
    async def push(request: PushMessageRequest, handler: HandlerDep) -> PushResponse:
        """Deliver a push message; always shows exactly one notification."""
        return await handler.push(request)

    @app.post(f"{CONTROL_PREFIX}/notifications/click")
    async def notification_click(request: NotificationClickRequest, handler: HandlerDep) -> dict[str, Any]:
        return await handler.notification_click(request)

    @app.get(f"{CONTROL_PREFIX}/notifications", response_model=list[NotificationItem])
    async def notifications(handler: HandlerDep) -> list[dict[str, Any]]:
        return handler.notifications()

    @app.post(f"{CONTROL_PREFIX}/subscriptions", response_model=SubscriptionResponse)
    async def subscribe(request: PushSubscriptionRequest, handler: HandlerDep) -> SubscriptionResponse:
        """Forward a push subscription to the application server."""
        return await handler.subscribe(request)

    @app.delete(f"{CONTROL_PREFIX}/subscriptions", response_model=SubscriptionResponse)
    async def unsubscribe(request: PushSubscriptionRequest, handler: HandlerDep) -> SubscriptionResponse:
        return await handler.unsubscribe(request)

    @app.post(f"{CONTROL_PREFIX}/drain")
    async def drain(handler: HandlerDep) -> dict[str, int]:
        """Wait for background revalidations to settle."""
        return await handler.drain()

    # Registered last: everything outside the control surface goes through the worker
    @app.api_route("/{path:path}", methods=PROXIED_METHODS, include_in_schema=False)
    async def proxy(request: Request, handler: HandlerDep) -> Response:
        return await handler.proxy(request)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "offline_sync.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
