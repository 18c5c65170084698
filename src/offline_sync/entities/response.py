"""Response entity shared by the cache store and the network client."""

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ResponseEntity:
    """Snapshot of an HTTP response.

    Immutable, so the same instance can be handed to the caller and written
    to a cache partition without cloning.

    Attributes:
        status: HTTP status code
        headers: Response headers (lower-case names)
        body: Raw response body
        url: URL the response was obtained for
    """

    status: int
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    url: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status <= 299

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    def json(self) -> Any:
        return json.loads(self.body.decode("utf-8"))

    @classmethod
    def json_response(cls, payload: Any, status: int = 200, url: str = "") -> "ResponseEntity":
        return cls(
            status=status,
            headers={"content-type": "application/json"},
            body=json.dumps(payload).encode("utf-8"),
            url=url,
        )

    @classmethod
    def redirect(cls, location: str, status: int = 302) -> "ResponseEntity":
        return cls(status=status, headers={"location": location}, url=location)
