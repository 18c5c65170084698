"""Cache partition storage protocol.

Defines the interface for a set of named partitions, each mapping a request
identity to a stored response. This is the shape of the browser Cache
Storage API reduced to what the worker needs.

Implementations can include:
- In-memory dictionaries (tests, single process)
- Redis hashes (default, shared across gateway processes)
"""

from typing import Protocol, runtime_checkable

from offline_sync.entities import ResponseEntity


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for cache partition backends."""

    async def open(self, partition: str) -> None:
        """Create the partition if it does not exist yet.

        Args:
            partition: Partition name
        """
        ...

    async def get(self, partition: str, key: str) -> ResponseEntity | None:
        """Look up a stored response.

        Args:
            partition: Partition name
            key: Request identity (see RequestEntity.cache_key)

        Returns:
            The stored response, or None on a miss
        """
        ...

    async def put(self, partition: str, key: str, entry: ResponseEntity) -> None:
        """Store a response, replacing any previous entry for the key.

        Opens the partition implicitly.

        Args:
            partition: Partition name
            key: Request identity
            entry: Response to store
        """
        ...

    async def keys(self, partition: str) -> list[str]:
        """List the request identities stored in a partition.

        Returns:
            Keys in the partition (empty for unknown partitions)
        """
        ...

    async def list_partitions(self) -> list[str]:
        """List the names of all live partitions.

        Returns:
            Partition names
        """
        ...

    async def delete(self, partition: str) -> bool:
        """Delete a partition and every entry in it.

        Returns:
            True if the partition existed, False otherwise
        """
        ...
