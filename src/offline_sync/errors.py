"""Error taxonomy for the offline gateway.

HTTP status codes are never errors here: a 404 or 500 from the upstream is a
valid response that strategies return to the caller (they just don't cache
it). Errors are raised only when no response could be obtained at all.
"""


class OfflineSyncError(Exception):
    """Base class for all gateway errors."""


class NetworkError(OfflineSyncError):
    """The upstream could not be reached (DNS, connect, timeout, reset)."""


class InstallationError(OfflineSyncError):
    """An app-shell asset could not be fetched during install."""


class StoreUnavailableError(OfflineSyncError):
    """The durable mutation store could not be opened."""


class WorkerStateError(OfflineSyncError):
    """A lifecycle event arrived in a state that cannot accept it."""
