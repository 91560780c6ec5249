"""
Integration tests: the full application with its lifespan, over the sample
catalogue in data/catalog.json.
"""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from sermon_search import main
from sermon_search.clients.document_store import HttpDocumentStore, InMemoryDocumentStore
from sermon_search.core.config import Settings
from sermon_search.core.exceptions import ConfigurationError

CATALOG_PATH = Path(__file__).resolve().parents[2] / "data" / "catalog.json"

pytestmark = pytest.mark.integration


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    settings = Settings(_env_file=None, store_backend="memory", catalog_path=str(CATALOG_PATH))
    monkeypatch.setattr(main, "settings", settings)
    return settings


class TestCreateDocumentStore:
    def test_memory_backend(self, settings: Settings) -> None:
        assert isinstance(main.create_document_store(settings), InMemoryDocumentStore)

    def test_http_backend(self) -> None:
        store = main.create_document_store(
            Settings(_env_file=None, store_backend="HTTP", store_url="http://catalog:8090")
        )
        assert isinstance(store, HttpDocumentStore)
        assert store.base_url == "http://catalog:8090"

    def test_unknown_backend(self) -> None:
        with pytest.raises(ConfigurationError):
            main.create_document_store(Settings(_env_file=None, store_backend="sqlite"))

    def test_missing_catalogue(self, tmp_path: Path) -> None:
        settings = Settings(
            _env_file=None, store_backend="memory", catalog_path=str(tmp_path / "none.json")
        )
        with pytest.raises(ConfigurationError):
            main.create_document_store(settings)


class TestLifespan:
    """Startup attaches the service and flips readiness; shutdown reverses it."""

    def test_ready_and_searchable(self, settings: Settings) -> None:
        with TestClient(main.app) as client:
            assert client.get("/ready").status_code == 200

            data = client.get("/v1/search", params={"q": "Romans 8:1"}).json()
            assert data["scripture_reference"]["display"] == "Romans 8:1"
            assert data["sermons"][0]["sermon"]["id"] == 101
            assert data["sermons"][0]["scripture_boost"] == 700

        assert main.app.state.search_service is None
        assert TestClient(main.app).get("/ready").status_code == 503

    def test_transcript_banner_stripped(self, settings: Settings) -> None:
        with TestClient(main.app) as client:
            data = client.get("/v1/sermons/101/transcript").json()
        assert data["paragraphs"]
        assert not any("WATCH NOW" in p for p in data["paragraphs"])

    def test_string_llm_metadata_is_browsable(self, settings: Settings) -> None:
        with TestClient(main.app) as client:
            books = client.get("/v1/scripture/books").json()["books"]
            types = client.get("/v1/metadata/sermon-types").json()["values"]
        assert books[0]["book"] == "Romans"
        assert types
