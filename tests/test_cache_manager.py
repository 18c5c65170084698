"""Tests for partition install/activate lifecycle."""

from dataclasses import replace

import pytest

from offline_sync.entities import RequestEntity, ResponseEntity
from offline_sync.errors import InstallationError
from offline_sync.services import CacheManager

from .conftest import ORIGIN


@pytest.fixture
def manager(cache_store, http_client, host, config) -> CacheManager:
    return CacheManager(store=cache_store, http_client=http_client, host=host, config=config)


def test_partition_names(manager):
    assert manager.static_cache_name == "test-static-v2"
    assert manager.dynamic_cache_name == "test-dynamic-v2"
    assert manager.current_partitions == ("test-static-v2", "test-dynamic-v2")


async def test_install_caches_every_asset(manager, cache_store, host, config):
    count = await manager.install()

    assert count == len(config.static_assets)
    keys = await cache_store.keys("test-static-v2")
    assert f"GET {ORIGIN}/static/js/bundle.js" in keys
    assert f"GET {ORIGIN}/" in keys
    assert len(keys) == len(config.static_assets)
    assert host.waiting_skipped


async def test_install_is_all_or_nothing(manager, cache_store, upstream, host):
    upstream.page("/logo512.png", "gone", status=404)

    with pytest.raises(InstallationError, match="logo512"):
        await manager.install()

    assert await cache_store.keys("test-static-v2") == []
    assert not host.waiting_skipped


async def test_install_waits_for_every_asset_and_reports_first_failure(manager, upstream, cache_store):
    upstream.page("/static/css/main.css", "", status=500)
    upstream.page("/logo512.png", "", status=404)

    with pytest.raises(InstallationError, match="main.css"):
        await manager.install()

    assert upstream.count("/logo512.png") == 1
    assert upstream.count("/favicon.ico") == 1
    assert await cache_store.keys("test-static-v2") == []


async def test_install_fails_when_offline(manager, upstream):
    upstream.offline = True

    with pytest.raises(InstallationError):
        await manager.install()


async def test_activate_deletes_stale_partitions(manager, cache_store, host):
    stale = ResponseEntity(status=200, body=b"old")
    await cache_store.put("test-static-v1", "GET x", stale)
    await cache_store.put("test-dynamic-v1", "GET y", stale)
    await cache_store.put("someone-else", "GET z", stale)

    deleted = await manager.activate()

    assert sorted(deleted) == ["someone-else", "test-dynamic-v1", "test-static-v1"]
    assert sorted(await cache_store.list_partitions()) == ["test-dynamic-v2", "test-static-v2"]
    assert host.clients_claimed


async def test_repeated_cycles_leave_two_current_partitions(cache_store, http_client, host, config):
    for version in ("v1", "v2", "v3"):
        versioned = replace(config, cache_version=version)
        manager = CacheManager(store=cache_store, http_client=http_client, host=host, config=versioned)
        await manager.install()
        await manager.put(
            manager.dynamic_cache_name,
            RequestEntity(url=f"{ORIGIN}/api/ngos"),
            ResponseEntity(status=200, body=version.encode()),
        )
        await manager.activate()

        assert sorted(await cache_store.list_partitions()) == sorted(manager.current_partitions)

    assert await cache_store.keys("test-static-v3")
