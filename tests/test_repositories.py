"""Tests for repository implementations."""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import redis.asyncio as redis

from offline_sync.entities import MutationCategory, RequestEntity, ResponseEntity
from offline_sync.errors import NetworkError, StoreUnavailableError
from offline_sync.protocols import CacheStore, HttpClient, MutationQueue, WorkerHost
from offline_sync.repositories import (
    HttpxClient,
    InMemoryCacheStore,
    InMemoryMutationQueue,
    LocalWorkerHost,
    RedisCacheStore,
    RedisMutationQueue,
)
from offline_sync.repositories.redis_cache_store import decode_entry, encode_entry

from .conftest import ORIGIN


def test_implementations_satisfy_protocols():
    assert isinstance(InMemoryCacheStore(), CacheStore)
    assert isinstance(RedisCacheStore(redis_client=MagicMock()), CacheStore)
    assert isinstance(InMemoryMutationQueue(), MutationQueue)
    assert isinstance(RedisMutationQueue(redis_client=MagicMock()), MutationQueue)
    assert isinstance(HttpxClient(base_url=ORIGIN), HttpClient)
    assert isinstance(LocalWorkerHost(), WorkerHost)


class TestHttpxClient:
    async def test_transport_error_becomes_network_error(self, http_client, upstream):
        upstream.offline = True

        with pytest.raises(NetworkError, match="connection refused"):
            await http_client.fetch(RequestEntity(url=f"{ORIGIN}/"))

    async def test_error_status_is_a_response(self, http_client):
        response = await http_client.fetch(RequestEntity(url=f"{ORIGIN}/nowhere"))

        assert response.status == 404
        assert not response.ok

    async def test_framing_headers_dropped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, content=b"hi", headers={"Content-Type": "text/plain", "X-Trace": "1"})

        client = HttpxClient(base_url=ORIGIN, transport=httpx.MockTransport(handler))
        response = await client.fetch(RequestEntity(url=f"{ORIGIN}/hello"))
        await client.aclose()

        assert response.headers == {"content-type": "text/plain", "x-trace": "1"}
        assert response.url == f"{ORIGIN}/hello"

    async def test_post_json_resolves_relative_paths(self, http_client, upstream):
        response = await http_client.post_json("/api/donations", {"amount": 5})

        assert response.status == 201
        assert upstream.requests[0].url == httpx.URL(f"{ORIGIN}/api/donations")


class TestRedisCacheStore:
    def test_entry_encoding_keeps_binary_body(self):
        entry = ResponseEntity(status=200, headers={"content-type": "image/png"}, body=b"\x89PNG\x00", url="u")

        assert decode_entry(encode_entry(entry)) == entry

    async def test_get_miss(self):
        client = MagicMock()
        client.hget = AsyncMock(return_value=None)
        store = RedisCacheStore(redis_client=client, namespace="ns")

        assert await store.get("p", "GET /") is None
        client.hget.assert_awaited_once_with("ns:partition:p", "GET /")

    async def test_read_errors_become_store_unavailable(self):
        client = MagicMock()
        client.hget = AsyncMock(side_effect=redis.ConnectionError("down"))
        store = RedisCacheStore(redis_client=client, namespace="ns")

        with pytest.raises(StoreUnavailableError, match="down"):
            await store.get("p", "GET /")

    async def test_write_errors_become_store_unavailable(self):
        pipe = MagicMock()
        pipe.execute = AsyncMock(side_effect=redis.TimeoutError("slow"))
        client = MagicMock()
        client.pipeline.return_value = pipe
        store = RedisCacheStore(redis_client=client, namespace="ns")

        with pytest.raises(StoreUnavailableError):
            await store.put("p", "GET /", ResponseEntity(status=200))

    async def test_delete_removes_registry_entry_and_hash(self):
        pipe = MagicMock()
        pipe.execute = AsyncMock(return_value=[1, 1])
        client = MagicMock()
        client.pipeline.return_value = pipe
        store = RedisCacheStore(redis_client=client, namespace="ns")

        assert await store.delete("old")
        pipe.srem.assert_called_once_with("ns:partitions", "old")
        pipe.delete.assert_called_once_with("ns:partition:old")

    async def test_health_check_handles_redis_errors(self):
        client = MagicMock()
        client.ping = AsyncMock(side_effect=redis.ConnectionError("down"))

        assert not await RedisCacheStore(redis_client=client).health_check()


class TestRedisMutationQueue:
    async def test_open_failure_raises_store_unavailable(self):
        client = MagicMock()
        client.set = AsyncMock(side_effect=redis.ConnectionError("refused"))
        queue = RedisMutationQueue(redis_client=client, db_name="db")

        with pytest.raises(StoreUnavailableError, match="db"):
            await queue.open()

    async def test_newer_schema_rejected(self):
        client = MagicMock()
        client.set = AsyncMock(return_value=None)
        client.get = AsyncMock(return_value="2")

        with pytest.raises(StoreUnavailableError, match="schema version"):
            await RedisMutationQueue(redis_client=client, db_name="db").open()

    @pytest.mark.parametrize(
        "method, args",
        [("ack", (MutationCategory.DONATIONS, 1)), ("count", (MutationCategory.ANALYTICS,))],
    )
    async def test_record_errors_become_store_unavailable(self, method, args):
        client = MagicMock()
        client.hdel = AsyncMock(side_effect=redis.ConnectionError("down"))
        client.hlen = AsyncMock(side_effect=redis.ConnectionError("down"))
        queue = RedisMutationQueue(redis_client=client, db_name="db")

        with pytest.raises(StoreUnavailableError):
            await getattr(queue, method)(*args)

    async def test_enqueue_and_list(self):
        stored = {}
        client = MagicMock()
        client.incr = AsyncMock(side_effect=[1, 2])

        async def hset(key, field, value):
            stored[field] = value

        async def hgetall(key):
            return dict(stored)

        client.hset = AsyncMock(side_effect=hset)
        client.hgetall = AsyncMock(side_effect=hgetall)
        queue = RedisMutationQueue(redis_client=client, db_name="db")

        await queue.enqueue(MutationCategory.DONATIONS, {"amount": 1})
        await queue.enqueue(MutationCategory.DONATIONS, {"amount": 2})
        records = await queue.list_pending(MutationCategory.DONATIONS)

        assert [(r.id, r.payload) for r in records] == [(1, {"amount": 1}), (2, {"amount": 2})]
        client.incr.assert_awaited_with("db:donations:seq")


async def test_memory_queue_ack():
    queue = InMemoryMutationQueue()
    record_id = await queue.enqueue(MutationCategory.ANALYTICS, {"event": "view"})

    assert await queue.ack(MutationCategory.ANALYTICS, record_id)
    assert not await queue.ack(MutationCategory.ANALYTICS, record_id)
    assert await queue.count(MutationCategory.ANALYTICS) == 0
