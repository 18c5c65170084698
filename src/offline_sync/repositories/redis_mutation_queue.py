"""Redis implementation of MutationQueue.

Layout under the database name:
    {db}:schema_version          -> integer schema version
    {db}:{category}:seq          -> auto-increment counter
    {db}:{category}              -> hash of record id -> JSON record
"""

import json
from datetime import datetime, timezone
from typing import Any

import redis.asyncio as redis

from offline_sync.config import get_redis_client, settings
from offline_sync.entities import MutationCategory, PendingMutationEntity
from offline_sync.errors import StoreUnavailableError

SCHEMA_VERSION = 1


class RedisMutationQueue:
    """Durable queue backed by Redis hashes and counters.

    This class satisfies the MutationQueue protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(
        self,
        redis_client: redis.Redis | None = None,
        db_name: str | None = None,
    ) -> None:
        """Initialize the Redis mutation queue.

        Args:
            redis_client: Redis client instance. If None, creates default.
            db_name: Database name used as key prefix.
        """
        self._client = redis_client or get_redis_client()
        self._db_name = db_name or settings.queue_db_name

    @classmethod
    def create(cls, db_name: str | None = None) -> "RedisMutationQueue":
        """Factory method to create RedisMutationQueue with defaults."""
        return cls(db_name=db_name)

    def _records_key(self, category: MutationCategory) -> str:
        return f"{self._db_name}:{category.value}"

    def _sequence_key(self, category: MutationCategory) -> str:
        return f"{self._db_name}:{category.value}:seq"

    async def open(self) -> None:
        version_key = f"{self._db_name}:schema_version"
        try:
            await self._client.set(version_key, SCHEMA_VERSION, nx=True)
            stored = await self._client.get(version_key)
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cannot open {self._db_name}: {e}") from e

        if stored is not None and int(stored) > SCHEMA_VERSION:
            raise StoreUnavailableError(
                f"{self._db_name} has schema version {stored}, expected at most {SCHEMA_VERSION}"
            )

    async def enqueue(self, category: MutationCategory, payload: Any) -> int:
        record = {
            "data": payload,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            record_id = int(await self._client.incr(self._sequence_key(category)))
            await self._client.hset(self._records_key(category), str(record_id), json.dumps(record))
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cannot enqueue {category.value} record: {e}") from e
        return record_id

    async def list_pending(self, category: MutationCategory) -> list[PendingMutationEntity]:
        try:
            raw_records = await self._client.hgetall(self._records_key(category))
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cannot read {category.value} records: {e}") from e

        records = []
        for raw_id, raw in raw_records.items():
            record = json.loads(raw)
            records.append(
                PendingMutationEntity(
                    id=int(raw_id),
                    category=category,
                    payload=record.get("data"),
                    created_at=datetime.fromisoformat(record["created_at"]),
                )
            )

        records.sort(key=lambda r: r.id)
        return records

    async def ack(self, category: MutationCategory, record_id: int) -> bool:
        try:
            removed = await self._client.hdel(self._records_key(category), str(record_id))
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cannot delete {category.value} record {record_id}: {e}") from e
        return removed > 0

    async def count(self, category: MutationCategory) -> int:
        try:
            return int(await self._client.hlen(self._records_key(category)))
        except redis.RedisError as e:
            raise StoreUnavailableError(f"Cannot count {category.value} records: {e}") from e
