"""Cache partition lifecycle.

Owns the static and dynamic partitions of the current version and
guarantees a clean takeover when a new version activates.
"""

import asyncio
import logging

from offline_sync.config import Settings, settings
from offline_sync.entities import RequestEntity, ResponseEntity
from offline_sync.errors import InstallationError, NetworkError
from offline_sync.protocols import CacheStore, HttpClient, WorkerHost

logger = logging.getLogger(__name__)


class CacheManager:
    """Install and activate logic over a CacheStore.

    Example:
        ```python
        manager = CacheManager(store=InMemoryCacheStore(), http_client=client, host=host)
        await manager.install()
        await manager.activate()
        ```
    """

    def __init__(
        self,
        store: CacheStore,
        http_client: HttpClient,
        host: WorkerHost,
        config: Settings | None = None,
    ) -> None:
        """Initialize the cache manager.

        Args:
            store: Partition storage backend (required).
            http_client: Network client used to fetch the app shell (required).
            host: Host receiving skip-waiting and claim signals (required).
            config: Settings providing partition names and the manifest.
        """
        self._store = store
        self._http = http_client
        self._host = host
        self._config = config or settings

    @property
    def static_cache_name(self) -> str:
        return self._config.static_cache_name

    @property
    def dynamic_cache_name(self) -> str:
        return self._config.dynamic_cache_name

    @property
    def current_partitions(self) -> tuple[str, str]:
        return (self.static_cache_name, self.dynamic_cache_name)

    @property
    def store(self) -> CacheStore:
        return self._store

    def manifest_requests(self) -> list[RequestEntity]:
        """Build GET requests for every app-shell asset."""
        origin = self._config.upstream_origin.rstrip("/") + "/"
        root = RequestEntity(url=origin)
        return [root.resolve(asset) for asset in self._config.static_assets]

    async def _fetch_asset(self, request: RequestEntity) -> ResponseEntity:
        try:
            response = await self._http.fetch(request)
        except NetworkError as e:
            raise InstallationError(f"Failed to fetch {request.url}: {e}") from e
        if not response.ok:
            raise InstallationError(f"Failed to fetch {request.url}: HTTP {response.status}")
        return response

    async def install(self) -> int:
        """Populate the static partition with the app shell.

        All-or-nothing: every asset is fetched before any is stored, so a
        single failure leaves the partition untouched.

        Returns:
            Number of assets cached

        Raises:
            InstallationError: If any asset is unreachable or non-2xx
        """
        logger.info("Installing %s", self.static_cache_name)
        await self._store.open(self.static_cache_name)

        requests = self.manifest_requests()
        results = await asyncio.gather(*(self._fetch_asset(r) for r in requests), return_exceptions=True)
        for result in results:
            if isinstance(result, BaseException):
                raise result

        for request, response in zip(requests, results):
            await self._store.put(self.static_cache_name, request.cache_key, response)

        logger.info("Cached %d static assets", len(requests))
        await self._host.skip_waiting()
        return len(requests)

    async def activate(self) -> list[str]:
        """Delete stale partitions and claim open clients.

        Returns:
            Names of the partitions that were deleted
        """
        logger.info("Activating %s", self._config.root_cache_name)
        deleted = []
        for name in await self._store.list_partitions():
            if name not in self.current_partitions:
                logger.info("Deleting old cache: %s", name)
                await self._store.delete(name)
                deleted.append(name)

        for name in self.current_partitions:
            await self._store.open(name)

        await self._host.claim_clients()
        logger.info("Activation complete")
        return deleted

    async def match(self, partition: str, request: RequestEntity) -> ResponseEntity | None:
        return await self._store.get(partition, request.cache_key)

    async def put(self, partition: str, request: RequestEntity, response: ResponseEntity) -> None:
        await self._store.put(partition, request.cache_key, response)
