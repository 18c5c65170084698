#!/usr/bin/env python3
"""
Demo script for the offline sync gateway.

Runs the worker in-process against a simulated origin that can be switched
offline, showing each fetch strategy, the offline fallback, background sync
replay and push notifications.
"""

import asyncio

import httpx

from offline_sync import (
    ActivateEvent,
    FetchEvent,
    HttpxClient,
    InMemoryCacheStore,
    InMemoryMutationQueue,
    InstallEvent,
    LocalWorkerHost,
    MutationCategory,
    PushEvent,
    RequestEntity,
    ServiceWorker,
    SyncEvent,
)
from offline_sync.config import settings

ORIGIN = settings.upstream_origin.rstrip("/")


class DemoOrigin:
    """A tiny NGO backend with an on/off switch."""

    def __init__(self) -> None:
        self.online = True
        self.hits = 0
        self.version = 1

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.hits += 1
        if not self.online:
            raise httpx.ConnectError("origin unreachable", request=request)
        if request.method == "POST":
            return httpx.Response(201, json={"received": True})
        if request.url.path.startswith("/api/"):
            return httpx.Response(200, json={"ngos": ["Seva", "Daan"], "version": self.version})
        return httpx.Response(200, text=f"<html>page v{self.version}</html>", headers={"content-type": "text/html"})


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


async def demo_lifecycle(worker: ServiceWorker) -> None:
    """Install the app shell and activate."""
    print_section("Install & Activate")

    count = await worker.dispatch(InstallEvent())
    print(f"\n📦 Cached {count} app-shell assets")
    deleted = await worker.dispatch(ActivateEvent())
    print(f"  ✓ State: {worker.state.value}, stale partitions removed: {deleted or 'none'}")


async def demo_strategies(worker: ServiceWorker, origin: DemoOrigin) -> None:
    """Show each strategy online and offline."""
    print_section("Fetch Strategies")

    for path in ("/static/js/bundle.js", "/api/ngos", "/about"):
        request = RequestEntity(url=f"{ORIGIN}{path}")
        before = origin.hits
        response = await worker.dispatch(FetchEvent(request))
        print(f"\n  GET {path}")
        print(f"  ✓ {response.status}, network calls: {origin.hits - before}")

    origin.version = 2
    stale = await worker.dispatch(FetchEvent(RequestEntity(url=f"{ORIGIN}/about")))
    await worker.tasks.drain()
    fresh = await worker.dispatch(FetchEvent(RequestEntity(url=f"{ORIGIN}/about")))
    print("\n🔄 Stale-while-revalidate:")
    print(f"  First answer:  {stale.body.decode()}")
    print(f"  After refresh: {fresh.body.decode()}")

    origin.online = False
    print("\n📴 Origin offline:")
    for path in ("/api/ngos", "/api/programs"):
        response = await worker.dispatch(FetchEvent(RequestEntity(url=f"{ORIGIN}{path}")))
        print(f"  GET {path} -> {response.status} {response.body.decode()[:60]}")
    origin.online = True
    await worker.tasks.drain()


async def demo_background_sync(worker: ServiceWorker, origin: DemoOrigin) -> None:
    """Queue donations while offline and replay them."""
    print_section("Background Sync")

    origin.online = False
    for amount in (500, 1200):
        record_id = await worker.sync.enqueue(MutationCategory.DONATIONS, {"amount": amount, "currency": "INR"})
        print(f"  ✓ Queued donation #{record_id} ({amount} INR)")

    report = await worker.dispatch(SyncEvent(MutationCategory.DONATIONS.sync_tag))
    print(f"\n📴 Sync while offline: synced {report.synced}, remaining {report.remaining}")

    origin.online = True
    report = await worker.dispatch(SyncEvent(MutationCategory.DONATIONS.sync_tag))
    print(f"🌐 Sync when back online: synced {report.synced}, remaining {report.remaining}")


async def demo_push(worker: ServiceWorker, host: LocalWorkerHost) -> None:
    """Deliver a valid and a malformed push payload."""
    print_section("Push Notifications")

    for data in (b'{"title": "New volunteer", "body": "Priya joined Food Drive"}', b"{broken"):
        notification_id = await worker.dispatch(PushEvent(data))
        notification = host.notifications[notification_id]
        print(f"\n  Payload: {data.decode()}")
        print(f"  ✓ Shown: {notification.title} - {notification.body}")


async def run() -> None:
    origin = DemoOrigin()
    host = LocalWorkerHost()
    worker = ServiceWorker.create(
        cache_store=InMemoryCacheStore(),
        queue=InMemoryMutationQueue(),
        http_client=HttpxClient.create(base_url=ORIGIN, transport=httpx.MockTransport(origin)),
        host=host,
    )
    try:
        await demo_lifecycle(worker)
        await demo_strategies(worker, origin)
        await demo_background_sync(worker, origin)
        await demo_push(worker, host)
    finally:
        await worker.close()


def main() -> None:
    """Run all demos."""
    print("\n🚀 Offline Sync Gateway Demo")
    print("=" * 70)
    print("This demo runs the worker against a simulated NGO backend")

    try:
        asyncio.run(run())

        print("\n" + "=" * 70)
        print("✅ Demo completed successfully!")
        print("=" * 70)

    except Exception as e:
        print(f"\n❌ Error: {e}")


if __name__ == "__main__":
    main()
