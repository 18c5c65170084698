"""Durable mutation queue protocol.

A local database holding one auto-incrementing record collection per
mutation category. Records survive process restarts; they are removed
only when acknowledged after a successful replay.
"""

from typing import Any, Protocol, runtime_checkable

from offline_sync.entities import MutationCategory, PendingMutationEntity


@runtime_checkable
class MutationQueue(Protocol):
    """Protocol for durable queue backends."""

    async def open(self) -> None:
        """Open the store, creating the schema on first use.

        Raises:
            StoreUnavailableError: If the store cannot be reached or its
                schema is newer than this code understands
        """
        ...

    async def enqueue(self, category: MutationCategory, payload: Any) -> int:
        """Persist a pending mutation.

        Returns:
            The new record's identifier
        """
        ...

    async def list_pending(self, category: MutationCategory) -> list[PendingMutationEntity]:
        """List pending records of a category, oldest first."""
        ...

    async def ack(self, category: MutationCategory, record_id: int) -> bool:
        """Delete a record after it was replayed successfully.

        Returns:
            True if the record existed, False otherwise
        """
        ...

    async def count(self, category: MutationCategory) -> int:
        """Count pending records of a category."""
        ...
