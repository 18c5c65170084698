"""httpx-based implementation of HttpClient.

All worker network traffic goes through one shared AsyncClient whose
base_url is the upstream origin, so sync endpoints can be given as paths.
"""

import logging
from typing import Any

import httpx

from offline_sync.config import settings
from offline_sync.entities import RequestEntity, ResponseEntity
from offline_sync.errors import NetworkError

logger = logging.getLogger(__name__)

# httpx hands back a decoded body, so framing headers no longer apply
_DROPPED_HEADERS = frozenset(
    {
        "connection",
        "content-encoding",
        "content-length",
        "keep-alive",
        "transfer-encoding",
    }
)


class HttpxClient:
    """Upstream client built on httpx.AsyncClient.

    Example:
        ```python
        client = HttpxClient.create(base_url="http://localhost:3000")
        response = await client.fetch(RequestEntity(url="http://localhost:3000/api/ngos"))
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Upstream origin. Defaults to settings.upstream_origin.
            timeout: Request timeout in seconds. Defaults to settings.request_timeout.
            transport: Custom transport (e.g. httpx.MockTransport in tests).
        """
        self._base_url = base_url or settings.upstream_origin
        self._timeout = timeout or settings.request_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
                limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            )
        return self._client

    @classmethod
    def create(
        cls,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HttpxClient":
        """Factory method to create HttpxClient with defaults."""
        return cls(base_url=base_url, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    @staticmethod
    def _to_entity(response: httpx.Response) -> ResponseEntity:
        headers = {
            name.lower(): value
            for name, value in response.headers.items()
            if name.lower() not in _DROPPED_HEADERS
        }
        return ResponseEntity(
            status=response.status_code,
            headers=headers,
            body=response.content,
            url=str(response.request.url),
        )

    async def fetch(self, request: RequestEntity) -> ResponseEntity:
        try:
            response = await self.client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body or None,
            )
        except httpx.TransportError as e:
            raise NetworkError(f"{request.method} {request.url} failed: {e}") from e
        return self._to_entity(response)

    async def post_json(self, url: str, payload: Any) -> ResponseEntity:
        try:
            response = await self.client.post(url, json=payload)
        except httpx.TransportError as e:
            raise NetworkError(f"POST {url} failed: {e}") from e
        return self._to_entity(response)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
