"""Fetch strategies.

Each strategy resolves a request against one partition and the network.
Only 2xx responses are written to the cache; other statuses are still
returned to the caller.
"""

import logging

from offline_sync.entities import RequestEntity, ResponseEntity
from offline_sync.errors import NetworkError
from offline_sync.protocols import HttpClient

from .cache_manager import CacheManager
from .tasks import DetachedTaskTracker

logger = logging.getLogger(__name__)


class FetchStrategies:
    """Cache-First, Network-First and Stale-While-Revalidate."""

    def __init__(
        self,
        cache: CacheManager,
        http_client: HttpClient,
        tasks: DetachedTaskTracker | None = None,
    ) -> None:
        self._cache = cache
        self._http = http_client
        self._tasks = tasks or DetachedTaskTracker()

    @property
    def tasks(self) -> DetachedTaskTracker:
        return self._tasks

    async def _fetch_and_store(self, request: RequestEntity, partition: str) -> ResponseEntity:
        response = await self._http.fetch(request)
        if response.ok:
            await self._cache.put(partition, request, response)
        return response

    async def cache_first(self, request: RequestEntity, partition: str) -> ResponseEntity:
        """Serve from cache; go to the network only on a miss.

        Raises:
            NetworkError: On a miss when the network is unreachable
        """
        cached = await self._cache.match(partition, request)
        if cached is not None:
            return cached
        return await self._fetch_and_store(request, partition)

    async def network_first(self, request: RequestEntity, partition: str) -> ResponseEntity:
        """Prefer fresh data; fall back to the cached copy when offline.

        Raises:
            NetworkError: When offline and nothing is cached
        """
        try:
            return await self._fetch_and_store(request, partition)
        except NetworkError:
            cached = await self._cache.match(partition, request)
            if cached is not None:
                logger.debug("Network failed, serving cached %s", request.url)
                return cached
            raise

    async def stale_while_revalidate(self, request: RequestEntity, partition: str) -> ResponseEntity:
        """Serve the cached copy at once and refresh it in the background.

        With nothing cached, waits for the revalidation fetch itself.

        Raises:
            NetworkError: On a miss when the network is unreachable
        """
        cached = await self._cache.match(partition, request)
        revalidation = self._tasks.spawn(
            self._fetch_and_store(request, partition),
            name=f"revalidate {request.url}",
        )
        if cached is not None:
            return cached
        return await revalidation
