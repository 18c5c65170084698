"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Swapping Redis for an in-memory store without touching the services
- Unit testing with in-memory fakes and a mocked upstream
- Keeping the worker free of hidden global state

Usage:
    ```python
    from offline_sync.protocols import CacheStore, MutationQueue

    store: CacheStore = RedisCacheStore.create()      # works
    store: CacheStore = InMemoryCacheStore()          # also works
    ```
"""

from .cache_store import CacheStore
from .http_client import HttpClient
from .mutation_queue import MutationQueue
from .worker_host import WorkerHost

__all__ = [
    "CacheStore",
    "HttpClient",
    "MutationQueue",
    "WorkerHost",
]
