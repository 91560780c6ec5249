"""
Sermon-Search-Service - Main Application Entry Point

uvicorn sermon_search.main:app

The lifespan builds the document store named by SSS_STORE_BACKEND
("memory" loads SSS_CATALOG_PATH, "http" talks to SSS_STORE_URL), wraps it
in a SearchService kept on app.state, and closes it on shutdown.
"""

from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from sermon_search.api.errors import register_exception_handlers
from sermon_search.api.health import get_health_service
from sermon_search.api.health import router as health_router
from sermon_search.api.metadata import metadata_router
from sermon_search.api.scripture import scripture_router
from sermon_search.api.search import search_router
from sermon_search.api.sermons import sermons_router
from sermon_search.api.snippets import snippets_router
from sermon_search.clients.document_store import (
    DocumentStoreProtocol,
    HttpDocumentStore,
    InMemoryDocumentStore,
)
from sermon_search.core.config import Settings, get_settings
from sermon_search.core.exceptions import ConfigurationError
from sermon_search.core.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
)
from sermon_search.core.tracing import configure_tracing
from sermon_search.search.service import SearchService
from sermon_search.snippets.extractor import SnippetExtractor

settings = get_settings()

configure_logging(
    log_level=settings.log_level,
    json_output=settings.log_json,
    service_name=settings.service_name,
)

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


# =============================================================================
# Wiring
# =============================================================================


def create_document_store(settings: Settings) -> DocumentStoreProtocol:
    """Build the configured document store.

    Raises:
        ConfigurationError: Unknown backend or missing catalogue file.
    """
    backend = settings.store_backend.strip().lower()
    if backend == "http":
        return HttpDocumentStore(
            base_url=settings.store_url,
            timeout=settings.store_timeout,
            max_retries=settings.store_max_retries,
            retry_delay=settings.store_retry_delay,
        )
    if backend == "memory":
        try:
            return InMemoryDocumentStore.from_catalog_file(Path(settings.catalog_path))
        except FileNotFoundError as e:
            raise ConfigurationError(str(e)) from e
    raise ConfigurationError(f"Unknown store backend: {settings.store_backend}")


def create_search_service(settings: Settings, store: DocumentStoreProtocol) -> SearchService:
    return SearchService(
        store=store,
        snippets=SnippetExtractor(
            max_snippets=settings.snippet_count,
            snippet_length=settings.snippet_length,
        ),
        page_size=settings.search_page_size,
        max_page_size=settings.max_page_size,
        series_limit=settings.series_limit,
        transcript_page_size=settings.transcript_page_size,
    )


# =============================================================================
# Lifespan Context Manager
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the store and search service on startup; close the store on shutdown."""
    logger.info(
        "startup",
        service=settings.service_name,
        version=settings.version,
        environment=settings.environment,
        store_backend=settings.store_backend,
    )

    if settings.tracing_enabled:
        configure_tracing(
            service_name=settings.service_name,
            console_export=settings.tracing_console_export,
        )
        logger.info("tracing_configured")

    store = create_document_store(settings)
    app.state.search_service = create_search_service(settings, store)
    app.state.environment = settings.environment
    get_health_service().set_store_ready(True)

    yield

    logger.info("shutdown", service=settings.service_name)
    get_health_service().set_store_ready(False)
    await store.close()
    app.state.search_service = None


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title="Sermon-Search-Service",
    description="Scripture-aware relevance search over a sermon archive",
    version=settings.version,
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.environment == "development" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Tag every log event of a request with its id; echo the id back."""
    request_id = bind_request_context(request.url.path, request.headers.get(REQUEST_ID_HEADER))
    try:
        response = await call_next(request)
    finally:
        clear_request_context()
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


register_exception_handlers(app)

app.include_router(health_router)
app.include_router(search_router)
app.include_router(snippets_router)
app.include_router(scripture_router)
app.include_router(metadata_router)
app.include_router(sermons_router)


@app.get("/", include_in_schema=False)
async def root() -> dict[str, str]:
    return {
        "service": settings.service_name,
        "version": settings.version,
        "docs": "/docs",
    }
