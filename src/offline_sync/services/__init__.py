"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable with in-memory fakes.

Architecture:
    Handler -> ServiceWorker -> Router / CacheManager / Sync / Push -> Repository
    (HTTP)  -> (Dispatch)    -> (Business)                          -> (Data Access)
"""

from .cache_manager import CacheManager
from .fallback import OfflineFallback
from .push_service import PushResponder, PushSubscriptionService
from .router import RequestKind, RequestRouter
from .strategies import FetchStrategies
from .sync_service import BackgroundSyncService
from .tasks import DetachedTaskTracker
from .worker import ServiceWorker, WorkerState

__all__ = [
    "BackgroundSyncService",
    "CacheManager",
    "DetachedTaskTracker",
    "FetchStrategies",
    "OfflineFallback",
    "PushResponder",
    "PushSubscriptionService",
    "RequestKind",
    "RequestRouter",
    "ServiceWorker",
    "WorkerState",
]
