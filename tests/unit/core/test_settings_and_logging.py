"""
Tests for configuration, structured logging and exceptions.
"""

import pytest
import structlog
from structlog.testing import capture_logs

from sermon_search.core import logging as logging_module
from sermon_search.core.config import Settings, get_settings
from sermon_search.core.exceptions import (
    DocumentStoreError,
    DocumentStoreRequestError,
    DocumentStoreUnavailableError,
    SermonSearchError,
    UnknownDimensionError,
)
from sermon_search.core.logging import (
    bind_request_context,
    clear_request_context,
    configure_logging,
    get_logger,
    reset_logging,
)


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.store_backend == "memory"
        assert settings.port == 8084
        assert settings.search_page_size == 50
        assert settings.snippet_length == 150

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SSS_STORE_BACKEND", "http")
        monkeypatch.setenv("SSS_STORE_URL", "http://catalog:8090")
        monkeypatch.setenv("SSS_SEARCH_PAGE_SIZE", "25")

        settings = get_settings()

        assert settings.store_backend == "http"
        assert settings.store_url == "http://catalog:8090"
        assert settings.search_page_size == 25

    def test_unprefixed_variables_ignored(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("STORE_BACKEND", "http")
        assert Settings(_env_file=None).store_backend == "memory"


class TestLogging:
    """structlog is configured once; reset_logging() re-arms it."""

    @pytest.fixture(autouse=True)
    def _reset(self):
        reset_logging()
        yield
        reset_logging()

    def test_configure_is_idempotent(self) -> None:
        configure_logging(service_name="first")
        configure_logging(service_name="second")
        assert logging_module._service_name == "first"

    def test_reset_allows_reconfiguration(self) -> None:
        configure_logging(service_name="first")
        reset_logging()
        configure_logging(service_name="second")
        assert logging_module._service_name == "second"

    def test_service_name_added_to_events(self) -> None:
        configure_logging(service_name="sermon-search-service")
        event = logging_module.add_service_info(None, "info", {"event": "x"})
        assert event["service"] == "sermon-search-service"

    def test_document_text_replaced_by_length(self) -> None:
        event = logging_module.redact_document_text(
            None, "info", {"event": "x", "text": "grace " * 10, "sermons": 3}
        )
        assert event["text"] == "<60 chars>"
        assert event["sermons"] == 3

    def test_long_queries_capped(self) -> None:
        event = logging_module.redact_document_text(None, "info", {"query": "q" * 500})
        assert len(event["query"]) == logging_module.MAX_LOGGED_QUERY_LENGTH + 3

    def test_request_context_bound_and_cleared(self) -> None:
        request_id = bind_request_context("/v1/search", "abc")
        assert request_id == "abc"
        assert structlog.contextvars.get_contextvars() == {"request_id": "abc", "path": "/v1/search"}
        clear_request_context()
        assert structlog.contextvars.get_contextvars() == {}

    def test_logs_structured_events(self) -> None:
        with capture_logs() as logs:
            get_logger(__name__).info("search_completed", results=3)
        assert logs == [{"event": "search_completed", "results": 3, "log_level": "info"}]


class TestExceptions:
    def test_hierarchy(self) -> None:
        assert issubclass(DocumentStoreUnavailableError, DocumentStoreError)
        assert issubclass(DocumentStoreRequestError, DocumentStoreError)
        assert issubclass(UnknownDimensionError, SermonSearchError)
        assert not issubclass(DocumentStoreUnavailableError, ConnectionError)

    def test_status_code_carried(self) -> None:
        error = DocumentStoreRequestError("bad", status_code=422)
        assert error.status_code == 422

    def test_unknown_dimension_slug(self) -> None:
        error = UnknownDimensionError("colours")
        assert error.slug == "colours"
        assert "colours" in str(error)
