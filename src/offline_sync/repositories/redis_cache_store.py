"""Redis implementation of CacheStore.

Each partition is a Redis hash keyed by request identity; a set tracks
which partitions are live so they can be enumerated and pruned on activate.
"""

import base64
import json

import redis.asyncio as redis

from offline_sync.config import get_redis_client, settings
from offline_sync.entities import ResponseEntity
from offline_sync.errors import StoreUnavailableError


def encode_entry(entry: ResponseEntity) -> str:
    """Serialize a response for storage in a hash field."""
    return json.dumps(
        {
            "status": entry.status,
            "headers": entry.headers,
            "body": base64.b64encode(entry.body).decode("ascii"),
            "url": entry.url,
        }
    )


def decode_entry(raw: str) -> ResponseEntity:
    """Inverse of encode_entry."""
    data = json.loads(raw)
    return ResponseEntity(
        status=int(data["status"]),
        headers=dict(data.get("headers") or {}),
        body=base64.b64decode(data.get("body") or ""),
        url=data.get("url", ""),
    )


class RedisCacheStore:
    """Redis implementation using one hash per partition.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        namespace: str | None = None,
    ) -> None:
        """Initialize the Redis cache store.

        Args:
            redis_client: Redis client instance. If None, creates default.
            namespace: Key prefix for partitions. Defaults to the cache prefix.
        """
        self._client = redis_client or get_redis_client()
        self._namespace = namespace or f"{settings.cache_prefix}:caches"

    @classmethod
    def create(cls, namespace: str | None = None) -> "RedisCacheStore":
        """Factory method to create RedisCacheStore with defaults."""
        return cls(namespace=namespace)

    @property
    def _registry_key(self) -> str:
        return f"{self._namespace}:partitions"

    def _partition_key(self, partition: str) -> str:
        return f"{self._namespace}:partition:{partition}"

    async def open(self, partition: str) -> None:
        try:
            await self._client.sadd(self._registry_key, partition)
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cannot open partition {partition}: {e}") from e

    async def get(self, partition: str, key: str) -> ResponseEntity | None:
        try:
            raw = await self._client.hget(self._partition_key(partition), key)
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cannot read {key} from {partition}: {e}") from e
        if raw is None:
            return None
        return decode_entry(raw)

    async def put(self, partition: str, key: str, entry: ResponseEntity) -> None:
        pipe = self._client.pipeline(transaction=True)
        pipe.sadd(self._registry_key, partition)
        pipe.hset(self._partition_key(partition), key, encode_entry(entry))
        try:
            await pipe.execute()
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cannot write {key} to {partition}: {e}") from e

    async def keys(self, partition: str) -> list[str]:
        try:
            return list(await self._client.hkeys(self._partition_key(partition)))
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cannot list keys of {partition}: {e}") from e

    async def list_partitions(self) -> list[str]:
        try:
            return sorted(await self._client.smembers(self._registry_key))
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cannot list partitions: {e}") from e

    async def delete(self, partition: str) -> bool:
        pipe = self._client.pipeline(transaction=True)
        pipe.srem(self._registry_key, partition)
        pipe.delete(self._partition_key(partition))
        try:
            removed, _ = await pipe.execute()
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cannot delete partition {partition}: {e}") from e
        return bool(removed)

    async def health_check(self) -> bool:
        """Check if Redis is accessible."""
        try:
            return bool(await self._client.ping())
        except redis.RedisError:
            return False

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
