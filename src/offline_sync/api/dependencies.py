"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Worker and handler stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Collaborators placed on app.state before startup (config, transport)
      override the defaults, which is how tests run without Redis or an
      upstream server
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from offline_sync.config import Settings, get_redis_client, settings, setup_logging
from offline_sync.entities import ActivateEvent, InstallEvent
from offline_sync.errors import InstallationError, StoreUnavailableError, WorkerStateError
from offline_sync.handlers import GatewayHandler
from offline_sync.repositories import (
    HttpxClient,
    InMemoryCacheStore,
    InMemoryMutationQueue,
    LocalWorkerHost,
    RedisCacheStore,
    RedisMutationQueue,
)
from offline_sync.services import ServiceWorker

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> GatewayHandler:
    """Dependency injection for GatewayHandler from app.state.

    Raises:
        RuntimeError: If the handler is not initialized
    """
    handler = getattr(request.app.state, "gateway_handler", None)
    if handler is None:
        raise RuntimeError("GatewayHandler not initialized. Check lifespan setup.")
    return handler


async def _bring_up(worker: ServiceWorker) -> None:
    """Install and activate, leaving the previous version serving on failure."""
    try:
        await worker.dispatch(InstallEvent())
        await worker.dispatch(ActivateEvent())
    except (InstallationError, StoreUnavailableError, WorkerStateError) as e:
        logger.warning("Worker not activated at startup: %s", e)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Repositories (cache store, mutation queue, network client, host)
    2. ServiceWorker (dispatch table) - app.state.worker
    3. Handler (HTTP endpoints) - app.state.gateway_handler

    Cleanup:
        Settles detached tasks, closes clients and removes state on shutdown
    """
    config: Settings = getattr(app.state, "config", None) or settings
    setup_logging(config.log_level)

    redis_client = None
    if config.store_backend == "memory":
        cache_store = InMemoryCacheStore()
        queue = InMemoryMutationQueue()
    else:
        redis_client = get_redis_client(config)
        cache_store = RedisCacheStore(redis_client=redis_client, namespace=f"{config.cache_prefix}:caches")
        queue = RedisMutationQueue(redis_client=redis_client, db_name=config.queue_db_name)

    http_client = HttpxClient(
        base_url=config.upstream_origin,
        timeout=config.request_timeout,
        transport=getattr(app.state, "transport", None),
    )
    host = LocalWorkerHost()

    worker = ServiceWorker.create(
        cache_store=cache_store,
        queue=queue,
        http_client=http_client,
        host=host,
        config=config,
    )

    app.state.worker = worker
    app.state.host = host
    app.state.gateway_handler = GatewayHandler(worker=worker, host=host, config=config)

    logger.info("Gateway for %s started (%s backend)", config.upstream_origin, config.store_backend)
    if config.auto_install:
        await _bring_up(worker)

    yield

    await worker.close()
    if redis_client is not None:
        await redis_client.aclose()

    del app.state.gateway_handler
    del app.state.worker
    del app.state.host
    logger.info("Gateway shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[GatewayHandler, Depends(get_handler)]
