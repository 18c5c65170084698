"""Intercepted request entity."""

from dataclasses import dataclass, field
from urllib.parse import urljoin, urlsplit


@dataclass(frozen=True)
class RequestEntity:
    """A request as seen by the worker's fetch handler.

    Attributes:
        url: Absolute URL of the resource
        method: HTTP method, upper case
        mode: Fetch mode; "navigate" marks a full-page navigation
        headers: Request headers forwarded to the upstream
        body: Raw request body (empty for GET)
    """

    url: str
    method: str = "GET"
    mode: str = "cors"
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def scheme(self) -> str:
        return urlsplit(self.url).scheme.lower()

    @property
    def path(self) -> str:
        return urlsplit(self.url).path or "/"

    @property
    def is_navigation(self) -> bool:
        return self.mode == "navigate"

    @property
    def cache_key(self) -> str:
        """Identity of the request inside a cache partition."""
        return f"{self.method.upper()} {self.url}"

    def resolve(self, path: str) -> "RequestEntity":
        """Build a plain GET request for another path on the same origin."""
        return RequestEntity(url=urljoin(self.url, path))
