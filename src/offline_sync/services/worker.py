"""Service worker facade.

Browser events become plain event objects; a dispatch table maps each
event type to the handler that processes it. The worker holds no hidden
global state: every collaborator is injected.
"""

import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any

from offline_sync.config import Settings, settings
from offline_sync.entities import (
    ActivateEvent,
    FetchEvent,
    InstallEvent,
    NotificationClickEvent,
    PushEvent,
    SyncEvent,
    WorkerEvent,
)
from offline_sync.errors import WorkerStateError
from offline_sync.protocols import CacheStore, HttpClient, MutationQueue, WorkerHost

from .cache_manager import CacheManager
from .fallback import OfflineFallback
from .push_service import PushResponder, PushSubscriptionService
from .router import RequestRouter
from .strategies import FetchStrategies
from .sync_service import BackgroundSyncService
from .tasks import DetachedTaskTracker

logger = logging.getLogger(__name__)


class WorkerState(str, Enum):
    PARSED = "parsed"
    INSTALLING = "installing"
    INSTALLED = "installed"
    ACTIVATING = "activating"
    ACTIVATED = "activated"
    REDUNDANT = "redundant"


class ServiceWorker:
    """Entry point for every event the host delivers.

    Example:
        ```python
        worker = ServiceWorker.create(
            cache_store=InMemoryCacheStore(),
            queue=InMemoryMutationQueue(),
            http_client=HttpxClient.create(),
            host=LocalWorkerHost(),
        )
        await worker.dispatch(InstallEvent())
        await worker.dispatch(ActivateEvent())
        response = await worker.dispatch(FetchEvent(RequestEntity(url="http://localhost:3000/")))
        ```
    """

    def __init__(
        self,
        cache: CacheManager,
        router: RequestRouter,
        sync: BackgroundSyncService,
        push: PushResponder,
        subscriptions: PushSubscriptionService,
        tasks: DetachedTaskTracker,
        http_client: HttpClient,
    ) -> None:
        self._cache = cache
        self._router = router
        self._sync = sync
        self._push = push
        self._subscriptions = subscriptions
        self._tasks = tasks
        self._http = http_client
        self._state = WorkerState.PARSED
        self._handlers: dict[type, Callable[[Any], Awaitable[Any]]] = {
            InstallEvent: self._on_install,
            ActivateEvent: self._on_activate,
            FetchEvent: self._on_fetch,
            SyncEvent: self._on_sync,
            PushEvent: self._on_push,
            NotificationClickEvent: self._on_notification_click,
        }

    @classmethod
    def create(
        cls,
        cache_store: CacheStore,
        queue: MutationQueue,
        http_client: HttpClient,
        host: WorkerHost,
        config: Settings | None = None,
    ) -> "ServiceWorker":
        """Factory method wiring every service from its collaborators."""
        config = config or settings
        tasks = DetachedTaskTracker()
        cache = CacheManager(store=cache_store, http_client=http_client, host=host, config=config)
        strategies = FetchStrategies(cache=cache, http_client=http_client, tasks=tasks)
        router = RequestRouter(
            cache=cache,
            strategies=strategies,
            fallback=OfflineFallback(cache=cache, config=config),
        )
        return cls(
            cache=cache,
            router=router,
            sync=BackgroundSyncService(queue=queue, http_client=http_client),
            push=PushResponder(host=host, config=config),
            subscriptions=PushSubscriptionService(http_client=http_client),
            tasks=tasks,
            http_client=http_client,
        )

    async def dispatch(self, event: WorkerEvent) -> Any:
        """Route an event to its handler and return the handler's result."""
        handler = self._handlers.get(type(event))
        if handler is None:
            raise TypeError(f"Unsupported worker event: {type(event).__name__}")
        return await handler(event)

    async def _on_install(self, event: InstallEvent) -> int:
        self._state = WorkerState.INSTALLING
        try:
            count = await self._cache.install()
        except Exception:
            logger.error("Installation failed", exc_info=True)
            self._state = WorkerState.REDUNDANT
            raise
        self._state = WorkerState.INSTALLED
        logger.info("Installation complete")
        return count

    async def _on_activate(self, event: ActivateEvent) -> list[str]:
        if self._state is WorkerState.REDUNDANT:
            raise WorkerStateError("Cannot activate a worker whose install failed")
        self._state = WorkerState.ACTIVATING
        deleted = await self._cache.activate()
        self._state = WorkerState.ACTIVATED
        return deleted

    async def _on_fetch(self, event: FetchEvent):
        return await self._router.handle(event.request)

    async def _on_sync(self, event: SyncEvent):
        return await self._sync.handle_tag(event.tag)

    async def _on_push(self, event: PushEvent) -> str:
        return await self._push.on_push(event.data)

    async def _on_notification_click(self, event: NotificationClickEvent) -> None:
        await self._push.on_notification_click(event.notification_id, event.action)

    @property
    def state(self) -> WorkerState:
        return self._state

    @property
    def cache(self) -> CacheManager:
        return self._cache

    @property
    def sync(self) -> BackgroundSyncService:
        return self._sync

    @property
    def subscriptions(self) -> PushSubscriptionService:
        return self._subscriptions

    @property
    def tasks(self) -> DetachedTaskTracker:
        return self._tasks

    @property
    def http_client(self) -> HttpClient:
        return self._http

    async def close(self) -> None:
        """Settle background work and release the network client."""
        await self._tasks.drain()
        await self._http.aclose()
