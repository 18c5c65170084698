"""Handler layer for HTTP endpoints.

Handlers depend on the ServiceWorker, not directly on repositories.
"""

from .gateway_handler import GatewayHandler

__all__ = [
    "GatewayHandler",
]
