"""Request classification and strategy dispatch."""

import logging
import re
from enum import Enum

from offline_sync.entities import RequestEntity, ResponseEntity

from .cache_manager import CacheManager
from .fallback import OfflineFallback
from .strategies import FetchStrategies

logger = logging.getLogger(__name__)

STATIC_PREFIX = "/static/"
API_PREFIX = "/api/"
STATIC_EXTENSIONS = (".js", ".css", ".png", ".jpg", ".jpeg", ".gif", ".svg", ".ico")
API_PATTERNS = (
    re.compile(r"^.*/api/ngos.*"),
    re.compile(r"^.*/api/programs.*"),
    re.compile(r"^.*/api/dashboard.*"),
    re.compile(r"^.*/api/analytics.*"),
)


class RequestKind(str, Enum):
    STATIC = "static"
    API = "api"
    OTHER = "other"


class RequestRouter:
    """Picks a strategy per request and guarantees a response for it."""

    def __init__(
        self,
        cache: CacheManager,
        strategies: FetchStrategies,
        fallback: OfflineFallback,
    ) -> None:
        self._cache = cache
        self._strategies = strategies
        self._fallback = fallback

    @staticmethod
    def should_intercept(request: RequestEntity) -> bool:
        """Only safe reads over HTTP(S) are handled; everything else passes through."""
        return request.method.upper() == "GET" and request.scheme in ("http", "https")

    @staticmethod
    def classify(request: RequestEntity) -> RequestKind:
        path = request.path
        if path.startswith(STATIC_PREFIX) or path.lower().endswith(STATIC_EXTENSIONS):
            return RequestKind.STATIC
        if path.startswith(API_PREFIX) or any(p.match(request.url) for p in API_PATTERNS):
            return RequestKind.API
        return RequestKind.OTHER

    async def _dispatch(self, request: RequestEntity) -> ResponseEntity:
        kind = self.classify(request)
        if kind is RequestKind.STATIC:
            return await self._strategies.cache_first(request, self._cache.static_cache_name)
        if kind is RequestKind.API:
            return await self._strategies.network_first(request, self._cache.dynamic_cache_name)
        return await self._strategies.stale_while_revalidate(request, self._cache.dynamic_cache_name)

    async def handle(self, request: RequestEntity) -> ResponseEntity | None:
        """Resolve an intercepted request.

        Returns:
            The response, or None when the request is not intercepted
        """
        if not self.should_intercept(request):
            return None

        try:
            return await self._dispatch(request)
        except Exception as e:
            logger.error("Fetch failed for %s: %s", request.url, e)
            return await self._fallback.respond(request)
