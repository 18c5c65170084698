"""Offline Sync - offline-first caching and background sync gateway.

This package provides a layered architecture for the caching/sync layer
a service worker gives a web app, runnable as a standalone service:

Layers:
    - protocols: Interface contracts (CacheStore, MutationQueue, HttpClient, WorkerHost)
    - repositories: Data access implementations (Redis, in-memory, httpx)
    - services: Business logic (strategies, router, sync, push, ServiceWorker)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models and worker events (internal)

Usage:
    ```python
    from offline_sync.services import ServiceWorker

    worker = ServiceWorker.create(
        cache_store=InMemoryCacheStore(),
        queue=InMemoryMutationQueue(),
        http_client=HttpxClient.create(),
        host=LocalWorkerHost(),
    )
    await worker.dispatch(InstallEvent())
    ```

For HTTP API:
    ```python
    from offline_sync.api.app import app
    ```
"""

from offline_sync.config import get_redis_client, settings
from offline_sync.entities import (
    ActivateEvent,
    FetchEvent,
    InstallEvent,
    MutationCategory,
    NotificationClickEvent,
    PushEvent,
    RequestEntity,
    ResponseEntity,
    SyncEvent,
)
from offline_sync.errors import (
    InstallationError,
    NetworkError,
    OfflineSyncError,
    StoreUnavailableError,
    WorkerStateError,
)
from offline_sync.handlers import GatewayHandler
from offline_sync.protocols import CacheStore, HttpClient, MutationQueue, WorkerHost
from offline_sync.repositories import (
    HttpxClient,
    InMemoryCacheStore,
    InMemoryMutationQueue,
    LocalWorkerHost,
    RedisCacheStore,
    RedisMutationQueue,
)
from offline_sync.services import ServiceWorker

__all__ = [
    # Configuration
    "settings",
    "get_redis_client",
    # Protocols (interfaces)
    "CacheStore",
    "HttpClient",
    "MutationQueue",
    "WorkerHost",
    # Services (business logic)
    "ServiceWorker",
    # Handlers (HTTP)
    "GatewayHandler",
    # Repositories (data access)
    "HttpxClient",
    "InMemoryCacheStore",
    "InMemoryMutationQueue",
    "LocalWorkerHost",
    "RedisCacheStore",
    "RedisMutationQueue",
    # Entities (domain models and events)
    "RequestEntity",
    "ResponseEntity",
    "MutationCategory",
    "InstallEvent",
    "ActivateEvent",
    "FetchEvent",
    "SyncEvent",
    "PushEvent",
    "NotificationClickEvent",
    # Errors
    "OfflineSyncError",
    "NetworkError",
    "InstallationError",
    "StoreUnavailableError",
    "WorkerStateError",
]
