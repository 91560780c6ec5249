"""
Tests for the application shell: /health, /ready and the root endpoint.
"""

import pytest
from fastapi.testclient import TestClient

from sermon_search.api.health import HealthService, get_health_service
from sermon_search.clients.document_store import InMemoryDocumentStore
from sermon_search.search.service import SearchService


@pytest.fixture
def client():
    """Create test client without triggering lifespan."""
    from sermon_search.main import app

    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def memory_store(make_document) -> InMemoryDocumentStore:
    return InMemoryDocumentStore([make_document(id=1), make_document(id=2)])


@pytest.fixture
def attached_store(memory_store):
    """Attach a search service as the lifespan would, then detach it."""
    from sermon_search.main import app

    app.state.search_service = SearchService(memory_store)
    get_health_service().set_store_ready(True)
    yield memory_store
    get_health_service().set_store_ready(False)
    app.state.search_service = None


class TestAppShell:
    def test_app_metadata(self):
        from sermon_search.main import app

        assert app.title == "Sermon-Search-Service"
        assert app.router.lifespan_context is not None

    def test_request_id_echoed(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-1"})
        assert response.headers["X-Request-ID"] == "req-1"
        assert client.get("/health").headers["X-Request-ID"]

    def test_root(self, client):
        data = client.get("/").json()
        assert data["service"] == "sermon-search-service"
        assert data["docs"] == "/docs"


class TestHealthEndpoint:
    """/health is liveness only and never depends on the store."""

    def test_health_returns_200(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.headers.get("content-type") == "application/json"

    def test_health_payload(self, client):
        data = client.get("/health").json()
        assert data["status"] == "healthy"
        assert data["service"] == "sermon-search-service"
        assert "version" in data


class TestReadinessEndpoint:
    def test_not_ready_without_store(self, client):
        response = client.get("/ready")
        assert response.status_code == 503
        assert response.json() == {
            "status": "not_ready",
            "checks": {"store_ready": False, "store_reachable": False},
            "sermon_count": None,
        }

    def test_ready_once_store_attached(self, client, attached_store):
        response = client.get("/ready")
        assert response.status_code == 200
        assert response.json()["status"] == "ready"
        assert response.json()["sermon_count"] == 2

    def test_not_ready_when_store_unreachable(self, client, attached_store):
        attached_store.available = False
        response = client.get("/ready")
        assert response.status_code == 503
        assert response.json()["checks"] == {"store_ready": True, "store_reachable": False}

    def test_search_without_service_is_500(self, client):
        # No lifespan, so app.state has no search service.
        response = client.get("/v1/search", params={"q": "grace"})
        assert response.status_code == 500


class TestHealthService:
    @pytest.mark.asyncio
    async def test_readiness_needs_flag_and_answering_store(self, memory_store):
        health = HealthService(version="9.9.9")
        search_service = SearchService(memory_store)

        assert (await health.check_readiness(search_service))[1] is False

        health.set_store_ready(True)
        payload, ready = await health.check_readiness(search_service)
        assert ready is True
        assert payload["sermon_count"] == 2
        assert health.check_health()["version"] == "9.9.9"

    @pytest.mark.asyncio
    async def test_no_service_is_not_ready(self):
        health = HealthService()
        health.set_store_ready(True)
        payload, ready = await health.check_readiness(None)
        assert ready is False
        assert payload["checks"]["store_reachable"] is False
