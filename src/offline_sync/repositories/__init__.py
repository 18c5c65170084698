"""Repository layer for data access.

This layer abstracts external dependencies (Redis, the upstream origin, the
browser-side host) behind protocol-based interfaces. The repositories are
protocol-based (structural typing), not inheritance-based. Any class
implementing the required methods will satisfy the protocol.
"""

from offline_sync.protocols import CacheStore, HttpClient, MutationQueue, WorkerHost

from .httpx_client import HttpxClient
from .local_host import LocalWorkerHost
from .memory_cache_store import InMemoryCacheStore
from .memory_mutation_queue import InMemoryMutationQueue
from .redis_cache_store import RedisCacheStore
from .redis_mutation_queue import RedisMutationQueue

__all__ = [
    "CacheStore",
    "HttpClient",
    "MutationQueue",
    "WorkerHost",
    "HttpxClient",
    "LocalWorkerHost",
    "InMemoryCacheStore",
    "InMemoryMutationQueue",
    "RedisCacheStore",
    "RedisMutationQueue",
]
