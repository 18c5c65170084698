"""Last-resort responder for requests every strategy failed on."""

import logging
from datetime import datetime, timezone

from offline_sync.config import Settings, settings
from offline_sync.entities import RequestEntity, ResponseEntity

from .cache_manager import CacheManager

logger = logging.getLogger(__name__)

OFFLINE_MESSAGE = "You are currently offline. Please check your internet connection."


class OfflineFallback:
    """Always produces a response: cached shell, cached entry, or a 503."""

    def __init__(self, cache: CacheManager, config: Settings | None = None) -> None:
        self._cache = cache
        self._config = config or settings

    @staticmethod
    def offline_response(request: RequestEntity | None = None) -> ResponseEntity:
        """The hard floor: a JSON 503 body flagged as offline."""
        return ResponseEntity.json_response(
            {
                "error": "offline",
                "message": OFFLINE_MESSAGE,
                "timestamp": datetime.now(timezone.utc).isoformat(),
            },
            status=503,
            url=request.url if request else "",
        )

    async def _lookup(self, request: RequestEntity) -> ResponseEntity | None:
        if request.is_navigation:
            shell = await self._cache.match(
                self._cache.static_cache_name,
                request.resolve(self._config.app_root),
            )
            if shell is not None:
                return shell
            return ResponseEntity.redirect(self._config.app_root)

        return await self._cache.match(self._cache.dynamic_cache_name, request)

    async def respond(self, request: RequestEntity) -> ResponseEntity:
        """Never raises: a failing cache store still yields the offline 503."""
        try:
            cached = await self._lookup(request)
        except Exception as e:
            logger.error("Cache lookup failed for %s: %s", request.url, e)
            return self.offline_response(request)

        if cached is not None:
            return cached

        logger.warning("Offline with nothing cached for %s", request.url)
        return self.offline_response(request)
