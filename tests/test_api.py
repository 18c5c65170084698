"""
Tests for the gateway API.
"""

from dataclasses import replace

import httpx
import pytest
from fastapi.testclient import TestClient

from offline_sync.api.app import create_app


@pytest.fixture
def client(config, upstream):
    """Create a test client with a mocked upstream and in-memory stores."""
    app = create_app(config=config, transport=httpx.MockTransport(upstream))
    with TestClient(app) as test_client:
        yield test_client


def test_root(client):
    """Test control surface info endpoint."""
    response = client.get("/_worker")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Offline Sync Gateway"
    assert data["upstream"] == "http://upstream.test"


def test_health_before_install(client):
    response = client.get("/_worker/health")
    assert response.status_code == 200
    assert response.json() == {"status": "degraded", "state": "parsed", "detached_tasks": 0}


def test_install_and_activate(client):
    response = client.post("/_worker/install")
    assert response.status_code == 200
    assert response.json() == {"state": "installed", "cached_assets": 7}

    response = client.post("/_worker/activate")
    assert response.status_code == 200
    assert response.json()["state"] == "activated"

    partitions = client.get("/_worker/partitions").json()
    assert partitions["current"] == ["test-static-v2", "test-dynamic-v2"]
    assert partitions["partitions"] == {"test-static-v2": 7, "test-dynamic-v2": 0}
    assert client.get("/_worker/health").json()["status"] == "healthy"


def test_install_failure_is_503_and_blocks_activate(client, upstream):
    upstream.page("/favicon.ico", "", status=404)

    response = client.post("/_worker/install")
    assert response.status_code == 503
    assert "favicon" in response.json()["detail"]

    assert client.post("/_worker/activate").status_code == 409


def test_auto_install_on_startup(config, upstream):
    app = create_app(config=replace(config, auto_install=True), transport=httpx.MockTransport(upstream))
    with TestClient(app) as client:
        assert client.get("/_worker/health").json()["state"] == "activated"


def test_auto_install_failure_keeps_gateway_up(config, upstream):
    upstream.offline = True
    app = create_app(config=replace(config, auto_install=True), transport=httpx.MockTransport(upstream))
    with TestClient(app) as client:
        assert client.get("/_worker/health").json()["state"] == "redundant"


def test_proxy_serves_and_caches_pages(client, upstream):
    upstream.page("/programs", "<h1>Programs</h1>", content_type="text/html")

    response = client.get("/programs")
    assert response.status_code == 200
    assert response.text == "<h1>Programs</h1>"
    assert response.headers["content-type"].startswith("text/html")

    client.post("/_worker/drain")
    upstream.offline = True
    assert client.get("/programs").text == "<h1>Programs</h1>"


def test_proxy_forwards_query_string(client, upstream):
    upstream.page("/api/ngos", "[]", content_type="application/json")

    client.get("/api/ngos?city=Pune")

    assert upstream.requests[-1].url.params["city"] == "Pune"


def test_proxy_offline_api_returns_503(client, upstream):
    upstream.offline = True

    response = client.get("/api/dashboard")

    assert response.status_code == 503
    assert response.headers["content-type"] == "application/json"
    assert response.json()["error"] == "offline"


def test_proxy_offline_navigation_redirects_to_root(client, upstream):
    upstream.offline = True

    response = client.get("/volunteers", headers={"sec-fetch-mode": "navigate"}, follow_redirects=False)

    assert response.status_code == 302
    assert response.headers["location"] == "/"


def test_proxy_passes_mutations_through(client, upstream):
    response = client.post("/api/donations", json={"amount": 500})

    assert response.status_code == 201
    assert upstream.posts == [("/api/donations", {"amount": 500})]


def test_proxy_mutation_offline_is_502(client, upstream):
    upstream.offline = True

    response = client.post("/api/donations", json={"amount": 500})

    assert response.status_code == 502
    assert response.json()["error"] == "offline"


def test_queue_and_sync(client, upstream):
    for amount in (1, 2):
        response = client.post("/_worker/queue/donations", json={"payload": {"amount": amount}})
        assert response.status_code == 201
    assert response.json() == {"id": 2, "category": "donations", "sync_tag": "background-sync-donations"}
    assert len(client.get("/_worker/queue/donations").json()) == 2

    report = client.post("/_worker/sync/background-sync-donations").json()

    assert report["synced"] == 2
    assert report["category"] == "donations"
    assert client.get("/_worker/queue/donations").json() == []


def test_unknown_category_is_404(client):
    assert client.post("/_worker/queue/payments", json={"payload": {}}).status_code == 404
    assert client.get("/_worker/queue/payments").status_code == 404


def test_foreign_sync_tag(client):
    response = client.post("/_worker/sync/content-refresh")

    assert response.status_code == 200
    assert response.json()["category"] is None


def test_push_and_click(client):
    response = client.post("/_worker/push", json={"data": "not json at all"})
    assert response.status_code == 200
    pushed = response.json()
    assert pushed["title"] == "SevaDaan NGO Platform"
    assert len(client.get("/_worker/notifications").json()) == 1

    response = client.post(
        "/_worker/notifications/click",
        json={"notification_id": pushed["notification_id"], "action": "explore"},
    )
    assert response.json() == {"closed": pushed["notification_id"], "focused": "/"}
    assert client.get("/_worker/notifications").json() == []


def test_subscriptions(client, upstream):
    subscription = {"endpoint": "https://push.example/1", "keys": {"auth": "a"}, "userAgent": "tests"}

    assert client.post("/_worker/subscriptions", json=subscription).json() == {"success": True}
    assert client.request("DELETE", "/_worker/subscriptions", json=subscription).json() == {"success": True}
    assert [path for path, _ in upstream.posts] == [
        "/api/notifications/subscribe",
        "/api/notifications/unsubscribe",
    ]
