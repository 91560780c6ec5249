"""
Document Store Client

The relational archive is an external collaborator. The search service only
needs three calls from it, one per search:

- find_candidates(criteria) -> sermons matching the criteria
- count_candidates(criteria) -> how many sermons match
- find_series(criteria) -> series (with all members) that have a matching member

Implementations:
- HttpDocumentStore: catalogue service over HTTP, pooled httpx.AsyncClient,
  bounded retry with exponential backoff
- InMemoryDocumentStore: a JSON catalogue loaded at startup; also the fake
  used by tests

A store that cannot answer raises DocumentStoreUnavailableError. It never
returns an empty list in place of an error.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any, Protocol

import httpx

from sermon_search.core.exceptions import (
    DocumentStoreError,
    DocumentStoreRequestError,
    DocumentStoreUnavailableError,
)
from sermon_search.core.logging import get_logger
from sermon_search.ranking.candidates import CandidateCriteria, text_matches
from sermon_search.ranking.models import (
    Document,
    Series,
    document_from_payload,
    series_from_payload,
)

logger = get_logger(__name__)


# =============================================================================
# Protocol for Duck Typing (Repository Pattern)
# =============================================================================


class DocumentStoreProtocol(Protocol):
    """Protocol for document stores; lets tests swap in InMemoryDocumentStore."""

    async def find_candidates(self, criteria: CandidateCriteria) -> list[Document]:
        """Return every sermon matching criteria."""
        ...

    async def count_candidates(self, criteria: CandidateCriteria) -> int:
        """Return the number of sermons matching criteria."""
        ...

    async def find_series(self, criteria: CandidateCriteria) -> list[Series]:
        """Return series with at least one matching member or a matching name."""
        ...

    async def close(self) -> None:
        """Release any held resources."""
        ...


# =============================================================================
# HttpDocumentStore Implementation
# =============================================================================


class HttpDocumentStore:
    """HTTP client for the sermon catalogue service.

    One httpx.AsyncClient is reused for every request. 5xx responses,
    timeouts and connection failures are retried with exponential backoff;
    4xx responses fail immediately.

    Attributes:
        base_url: Base URL of the catalogue service (e.g., http://localhost:8090)
        timeout: Request timeout in seconds (default: 30)
        max_retries: Maximum attempts per call (default: 3)
        retry_delay: Initial delay between attempts in seconds (default: 1.0)
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ) -> None:
        self.base_url = base_url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay

        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=httpx.Timeout(timeout),
        )

    async def find_candidates(self, criteria: CandidateCriteria) -> list[Document]:
        data = await self._execute_request("/v1/documents/candidates", criteria)
        return [document_from_payload(item) for item in data.get("documents", [])]

    async def count_candidates(self, criteria: CandidateCriteria) -> int:
        data = await self._execute_request("/v1/documents/count", criteria)
        return int(data.get("count", 0))

    async def find_series(self, criteria: CandidateCriteria) -> list[Series]:
        data = await self._execute_request("/v1/series/candidates", criteria)
        return [series_from_payload(item) for item in data.get("series", [])]

    async def _execute_request(
        self,
        path: str,
        criteria: CandidateCriteria,
    ) -> dict[str, Any]:
        """POST criteria to path with retry.

        Raises:
            DocumentStoreRequestError: On a 4xx response
            DocumentStoreUnavailableError: When every attempt failed
        """
        last_error: Exception | None = None

        for attempt in range(self.max_retries):
            try:
                response = await self._client.post(path, json=criteria.to_payload())

                if 400 <= response.status_code < 500:
                    raise DocumentStoreRequestError(
                        f"Store rejected request: {response.text}",
                        status_code=response.status_code,
                    )
                if response.status_code >= 500:
                    raise DocumentStoreError(
                        f"Store error: {response.text}",
                        status_code=response.status_code,
                    )

                result: dict[str, Any] = response.json()
                return result

            except DocumentStoreRequestError:
                raise
            except (DocumentStoreError, httpx.HTTPError, TimeoutError, ValueError) as e:
                last_error = e

            logger.warning(
                "store_request_failed",
                path=path,
                attempt=attempt + 1,
                max_retries=self.max_retries,
                error=str(last_error),
            )

            if attempt < self.max_retries - 1:
                await asyncio.sleep(self.retry_delay * (2**attempt))

        raise DocumentStoreUnavailableError(
            f"Store request {path} failed after {self.max_retries} attempts: {last_error}",
            status_code=getattr(last_error, "status_code", None),
        )

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self._client.aclose()


# =============================================================================
# InMemoryDocumentStore
# =============================================================================


class InMemoryDocumentStore:
    """Store over an in-process list of sermons and series.

    Applies CandidateCriteria exactly as the scorer does. Set available=False
    to simulate an outage.
    """

    def __init__(
        self,
        documents: Iterable[Document] = (),
        series: Iterable[Series] = (),
    ) -> None:
        self._documents = list(documents)
        self._series = list(series)
        self.available = True

    @classmethod
    def from_catalog_file(cls, path: Path) -> InMemoryDocumentStore:
        """Load a catalogue JSON file.

        Expected structure:
        {
            "sermons": [{"id": 1, "title": "...", "series_id": 3, ...}, ...],
            "series": [{"id": 3, "name": "...", "description": "..."}, ...]
        }
        Series members are the sermons whose series_id points at the series.

        Raises:
            FileNotFoundError: If the catalogue file doesn't exist.
            json.JSONDecodeError: If the file contains invalid JSON.
        """
        if not path.exists():
            raise FileNotFoundError(f"Catalogue file not found: {path}")

        with path.open("r", encoding="utf-8") as f:
            raw: dict[str, Any] = json.load(f)

        series_names = {int(s["id"]): s.get("name") for s in raw.get("series", [])}
        documents = []
        for item in raw.get("sermons", []):
            if item.get("series_id") is not None and not item.get("series_name"):
                item = {**item, "series_name": series_names.get(int(item["series_id"]))}
            documents.append(document_from_payload(item))

        series = [
            Series(
                id=int(s["id"]),
                name=s.get("name") or "",
                description=s.get("description"),
                sermons=tuple(d for d in documents if d.series_id == int(s["id"])),
            )
            for s in raw.get("series", [])
        ]
        logger.info("catalog_loaded", path=str(path), sermons=len(documents), series=len(series))
        return cls(documents, series)

    def _check_available(self) -> None:
        if not self.available:
            raise DocumentStoreUnavailableError("In-memory store marked unavailable")

    async def find_candidates(self, criteria: CandidateCriteria) -> list[Document]:
        self._check_available()
        await asyncio.sleep(0)
        return [d for d in self._documents if criteria.matches(d)]

    async def count_candidates(self, criteria: CandidateCriteria) -> int:
        return len(await self.find_candidates(criteria))

    async def find_series(self, criteria: CandidateCriteria) -> list[Series]:
        self._check_available()
        await asyncio.sleep(0)
        text = (criteria.text or "").strip()
        if not text:
            return list(self._series)
        return [
            s
            for s in self._series
            if text.lower() in s.name.lower() or any(text_matches(m, text) for m in s.sermons)
        ]

    async def close(self) -> None:
        await asyncio.sleep(0)

    def set_documents(self, documents: Iterable[Document]) -> None:
        self._documents = list(documents)

    def set_series(self, series: Iterable[Series]) -> None:
        self._series = list(series)
