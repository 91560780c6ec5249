"""
API test fixtures: an app with every router and a SearchService over an
in-memory store, injected through dependency_overrides.
"""

from datetime import date

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from sermon_search.api.dependencies import get_search_service
from sermon_search.api.errors import register_exception_handlers
from sermon_search.api.metadata import metadata_router
from sermon_search.api.scripture import scripture_router
from sermon_search.api.search import search_router
from sermon_search.api.sermons import sermons_router
from sermon_search.api.snippets import snippets_router
from sermon_search.clients.document_store import InMemoryDocumentStore
from sermon_search.search.service import SearchService


@pytest.fixture
def store(make_document, make_series) -> InMemoryDocumentStore:
    documents = [
        make_document(
            id=101,
            title="No Condemnation",
            description="Grace for those in Christ",
            transcript="There is therefore now no condemnation, and this is the heart of grace for every believer.",
            preached=date(2019, 3, 10),
            tags=[("Romans", 8, 1, 4)],
            metadata={"keywords": ["grace"], "summary": {"sermon_type": "Expository"}},
            series_id=1,
            series_name="Romans",
        ),
        make_document(
            id=102,
            title="Living Sacrifices",
            description="Renewed minds by grace",
            preached=date(2019, 4, 14),
            tags=[("Romans", 12, 1, 2)],
            metadata={"keywords": ["worship", "grace"], "summary": {"sermon_type": "Expository"}},
            series_id=1,
            series_name="Romans",
        ),
        make_document(
            id=201,
            title="My Help",
            transcript="My help comes from the Lord. Romans 8 reminds us all things work for good.",
            preached=date(2021, 7, 4),
            tags=[("Psalms", 121, 1, 8), ("Romans", 8, 28)],
            metadata={"summary": {"sermon_type": "Topical"}},
        ),
    ]
    return InMemoryDocumentStore(
        documents, [make_series(1, "Romans", documents[:2], "Paul's letter")]
    )


@pytest.fixture
def service(store: InMemoryDocumentStore) -> SearchService:
    return SearchService(store, page_size=2)


@pytest.fixture
def app(service: SearchService) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    for router in (search_router, snippets_router, scripture_router, metadata_router, sermons_router):
        app.include_router(router)
    app.dependency_overrides[get_search_service] = lambda: service
    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
