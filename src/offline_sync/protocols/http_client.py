"""Network client protocol.

Non-2xx responses are returned, not raised. Only transport failures raise
NetworkError, which is what strategies treat as "offline".
"""

from typing import Any, Protocol, runtime_checkable

from offline_sync.entities import RequestEntity, ResponseEntity


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the upstream network client."""

    async def fetch(self, request: RequestEntity) -> ResponseEntity:
        """Send the request to the network.

        Raises:
            NetworkError: If no response could be obtained
        """
        ...

    async def post_json(self, url: str, payload: Any) -> ResponseEntity:
        """POST a JSON body to an upstream endpoint.

        Args:
            url: Absolute URL or a path relative to the upstream origin
            payload: JSON-serializable body

        Raises:
            NetworkError: If no response could be obtained
        """
        ...

    async def aclose(self) -> None:
        """Release network resources."""
        ...
