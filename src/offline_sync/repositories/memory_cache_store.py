"""In-memory implementation of CacheStore."""

from offline_sync.entities import ResponseEntity


class InMemoryCacheStore:
    """Dictionary-backed partitions, lost when the process exits."""

    def __init__(self) -> None:
        self._partitions: dict[str, dict[str, ResponseEntity]] = {}

    async def open(self, partition: str) -> None:
        self._partitions.setdefault(partition, {})

    async def get(self, partition: str, key: str) -> ResponseEntity | None:
        return self._partitions.get(partition, {}).get(key)

    async def put(self, partition: str, key: str, entry: ResponseEntity) -> None:
        self._partitions.setdefault(partition, {})[key] = entry

    async def keys(self, partition: str) -> list[str]:
        return list(self._partitions.get(partition, {}))

    async def list_partitions(self) -> list[str]:
        return list(self._partitions)

    async def delete(self, partition: str) -> bool:
        return self._partitions.pop(partition, None) is not None
