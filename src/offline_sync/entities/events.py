"""Events the host delivers to the worker."""

from dataclasses import dataclass

from .request import RequestEntity


@dataclass(frozen=True)
class InstallEvent:
    pass


@dataclass(frozen=True)
class ActivateEvent:
    pass


@dataclass(frozen=True)
class FetchEvent:
    request: RequestEntity


@dataclass(frozen=True)
class SyncEvent:
    tag: str


@dataclass(frozen=True)
class PushEvent:
    """Inbound push message; data is the raw, possibly malformed, payload."""

    data: bytes | None = None


@dataclass(frozen=True)
class NotificationClickEvent:
    notification_id: str
    action: str = ""


WorkerEvent = InstallEvent | ActivateEvent | FetchEvent | SyncEvent | PushEvent | NotificationClickEvent
