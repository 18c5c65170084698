"""Shared fixtures: an httpx.MockTransport upstream and in-memory collaborators."""

import json

import httpx
import pytest

from offline_sync.config import Settings
from offline_sync.repositories import HttpxClient, InMemoryCacheStore, InMemoryMutationQueue, LocalWorkerHost
from offline_sync.services import ServiceWorker

ORIGIN = "http://upstream.test"


class Upstream:
    """Scriptable origin server.

    GET paths answer from `pages`; POST bodies are recorded and answered
    with 500 when the JSON body carries "fail": true, 201 otherwise.
    """

    def __init__(self) -> None:
        self.pages: dict[str, tuple[int, bytes, str]] = {}
        self.requests: list[httpx.Request] = []
        self.posts: list[tuple[str, object]] = []
        self.offline = False
        self.post_status: int | None = None

    def page(self, path: str, body: str | bytes, status: int = 200, content_type: str = "text/plain") -> None:
        if isinstance(body, str):
            body = body.encode("utf-8")
        self.pages[path] = (status, body, content_type)

    def count(self, path: str) -> int:
        return sum(1 for r in self.requests if r.url.path == path)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.offline:
            raise httpx.ConnectError("connection refused", request=request)

        if request.method == "POST":
            payload = json.loads(request.content or b"null")
            self.posts.append((request.url.path, payload))
            status = self.post_status
            if status is None:
                status = 500 if isinstance(payload, dict) and payload.get("fail") else 201
            return httpx.Response(status, json={"ok": status < 400})

        status, body, content_type = self.pages.get(request.url.path, (404, b"not found", "text/plain"))
        return httpx.Response(status, content=body, headers={"content-type": content_type})


@pytest.fixture
def config() -> Settings:
    return Settings(
        upstream_origin=ORIGIN,
        store_backend="memory",
        auto_install=False,
        cache_prefix="test",
        cache_version="v2",
    )


@pytest.fixture
def upstream(config) -> Upstream:
    server = Upstream()
    for asset in config.static_assets:
        server.page(asset, f"asset {asset}")
    server.page("/", "<html>shell</html>", content_type="text/html")
    return server


@pytest.fixture
async def http_client(upstream):
    client = HttpxClient(base_url=ORIGIN, transport=httpx.MockTransport(upstream))
    yield client
    await client.aclose()


@pytest.fixture
def cache_store() -> InMemoryCacheStore:
    return InMemoryCacheStore()


@pytest.fixture
def queue() -> InMemoryMutationQueue:
    return InMemoryMutationQueue()


@pytest.fixture
def host() -> LocalWorkerHost:
    return LocalWorkerHost()


@pytest.fixture
def worker(config, cache_store, queue, http_client, host) -> ServiceWorker:
    return ServiceWorker.create(
        cache_store=cache_store,
        queue=queue,
        http_client=http_client,
        host=host,
        config=config,
    )
