"""
Search Service

Orchestrates one search call:

    query -> parse_scripture_query -> store.find_candidates / store.find_series
          -> RelevanceScorer -> page (+ snippets for transcript hits)

The service holds no per-request state; concurrent searches share only the
immutable scorer and extractor. Store failures propagate as
DocumentStoreUnavailableError so callers can tell "found nothing" from
"could not search"; when one of the concurrent sermon and series fetches
fails, the other is cancelled.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any

from sermon_search.browse.metadata import (
    BrowseSort,
    MetadataValue,
    count_dimension_values,
    dimension_values,
    documents_by_dimension_value,
    documents_with_value,
    require_dimension,
)
from sermon_search.browse.scripture import (
    BookCount,
    ChapterCount,
    PassageSort,
    ReferencingPage,
    book_counts,
    chapter_counts,
    referencing_sermons,
    sermons_by_scripture,
)
from sermon_search.clients.document_store import DocumentStoreProtocol
from sermon_search.core.logging import get_logger
from sermon_search.core.tracing import get_tracer, search_span
from sermon_search.ranking.candidates import CandidateCriteria, occurrence_count
from sermon_search.ranking.filters import ContentType, Pagination, SearchFilters
from sermon_search.ranking.models import Document, RankedResult, SeriesResult
from sermon_search.ranking.scorer import RelevanceScorer
from sermon_search.scripture.parser import ScriptureReference, parse_scripture_query
from sermon_search.snippets.extractor import Snippet, SnippetExtractor
from sermon_search.snippets.transcript import (
    TranscriptParagraphs,
    clean_transcript_text,
    transcript_paragraphs,
)

logger = get_logger(__name__)
tracer = get_tracer(__name__)


# =============================================================================
# Result Models
# =============================================================================


@dataclass(frozen=True, slots=True)
class SearchPage:
    """Combined series + sermon results for one search call."""

    query: str
    scripture_reference: ScriptureReference | None = None
    series: list[SeriesResult] = field(default_factory=list)
    sermons: list[RankedResult] = field(default_factory=list)
    has_more: bool = False
    offset: int = 0

    @property
    def total_results(self) -> int:
        return len(self.series) + len(self.sermons)

    @property
    def next_offset(self) -> int:
        return self.offset + len(self.sermons)


@dataclass(frozen=True, slots=True)
class TranscriptHit:
    document: Document
    transcript_matches: int
    snippets: list[Snippet]


@dataclass(frozen=True, slots=True)
class TranscriptPage:
    query: str
    search_text: str
    results: list[TranscriptHit] = field(default_factory=list)
    has_more: bool = False
    offset: int = 0


@dataclass(frozen=True, slots=True)
class DimensionValuesPage:
    values: list[MetadataValue]
    total: int


@dataclass(frozen=True, slots=True)
class DimensionDocumentsPage:
    documents: list[Document]
    total: int


# =============================================================================
# SearchService
# =============================================================================


class SearchService:
    """Scripture-aware sermon search over a document store.

    Attributes:
        store: Document store collaborator
        scorer: Relevance scorer
        snippets: Snippet extractor for transcript previews
    """

    def __init__(
        self,
        store: DocumentStoreProtocol,
        scorer: RelevanceScorer | None = None,
        snippets: SnippetExtractor | None = None,
        page_size: int = 50,
        max_page_size: int = 100,
        series_limit: int = 10,
        transcript_page_size: int = 30,
    ) -> None:
        self.store = store
        self.scorer = scorer or RelevanceScorer()
        self.snippets = snippets or SnippetExtractor()
        self.page_size = page_size
        self.max_page_size = max_page_size
        self.series_limit = series_limit
        self.transcript_page_size = transcript_page_size

    def paginate(self, limit: int | None, offset: int | None, default: int | None = None) -> Pagination:
        return Pagination.normalize(
            limit, offset, default_limit=default or self.page_size, max_limit=self.max_page_size
        )

    # -------------------------------------------------------------------------
    # Relevance search
    # -------------------------------------------------------------------------

    async def search(
        self,
        query: str,
        filters: SearchFilters | None = None,
        offset: int | None = 0,
        limit: int | None = None,
    ) -> SearchPage:
        """Ranked sermons (and, on the first page, series) for a query.

        An empty or whitespace-only query returns an empty page.

        Raises:
            DocumentStoreUnavailableError: If the store cannot be reached.
        """
        filters = filters or SearchFilters()
        pagination = self.paginate(limit, offset)
        query = (query or "").strip()
        if not query:
            return SearchPage(query="", offset=pagination.offset)

        start_time = time.perf_counter()
        reference = parse_scripture_query(query)
        criteria = CandidateCriteria(text=query, reference=reference, filters=filters)

        want_series = filters.content is not ContentType.SERMONS and pagination.offset == 0
        want_sermons = filters.content is not ContentType.SERIES

        with search_span(
            tracer,
            "search.fetch_candidates",
            query,
            reference,
            **{"search.offset": pagination.offset},
        ):
            sermon_candidates, series_candidates = await _fetch_both(
                self.store.find_candidates(criteria) if want_sermons else _nothing(),
                self.store.find_series(criteria) if want_series else _nothing(),
            )

        with search_span(tracer, "search.rank", query, reference) as span:
            page = self.scorer.rank_sermons(
                query, reference, sermon_candidates, filters, pagination
            )
            series = self.scorer.rank_series(query, series_candidates, self.series_limit)
            span.set_attribute("search.sermon_count", len(page.results))
            span.set_attribute("search.series_count", len(series))

        logger.info(
            "search_completed",
            query=query,
            scripture_reference=str(reference) if reference else None,
            sermons=len(page.results),
            series=len(series),
            has_more=page.has_more,
            offset=pagination.offset,
            elapsed_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

        return SearchPage(
            query=query,
            scripture_reference=reference,
            series=series,
            sermons=page.results,
            has_more=page.has_more,
            offset=pagination.offset,
        )

    # -------------------------------------------------------------------------
    # Transcript search
    # -------------------------------------------------------------------------

    async def search_transcripts(
        self,
        query: str,
        offset: int | None = 0,
        limit: int | None = None,
    ) -> TranscriptPage:
        """Sermons whose transcript contains the query, with snippets.

        A scripture query searches the expanded passage text instead, so
        "Rom 12:2" looks for "Romans 12" inside transcripts.
        """
        pagination = self.paginate(limit, offset, default=self.transcript_page_size)
        query = (query or "").strip()
        if not query:
            return TranscriptPage(query="", search_text="", offset=pagination.offset)

        reference = parse_scripture_query(query)
        search_text = reference.search_text if reference else query
        criteria = CandidateCriteria(text=search_text, require_transcript_text=True)

        with search_span(tracer, "search.fetch_transcripts", search_text, reference):
            candidates = await self.store.find_candidates(criteria)

        counted = [
            (document, occurrence_count(document.transcript_text, search_text))
            for document in candidates
            if criteria.matches(document)
        ]
        counted.sort(
            key=lambda item: (
                -item[1],
                item[0].date_preached is None,
                -(item[0].date_preached.toordinal() if item[0].date_preached else 0),
                item[0].id,
            )
        )

        window = counted[pagination.offset : pagination.offset + pagination.limit + 1]
        hits = [
            TranscriptHit(
                document=document,
                transcript_matches=matches,
                snippets=self.snippets.extract(document.transcript_text, search_text),
            )
            for document, matches in window[: pagination.limit]
        ]

        logger.info("transcript_search_completed", query=query, search_text=search_text, results=len(hits))
        return TranscriptPage(
            query=query,
            search_text=search_text,
            results=hits,
            has_more=len(window) > pagination.limit,
            offset=pagination.offset,
        )

    def extract_snippets(
        self,
        text: str,
        query: str,
        max_snippets: int | None = None,
        snippet_length: int | None = None,
    ) -> list[Snippet]:
        extractor = SnippetExtractor(
            max_snippets=max_snippets or self.snippets.max_snippets,
            snippet_length=snippet_length or self.snippets.snippet_length,
            open_marker=self.snippets.open_marker,
            close_marker=self.snippets.close_marker,
            escape=self.snippets.escape,
        )
        return extractor.extract(text, query)

    # -------------------------------------------------------------------------
    # Browse flows
    # -------------------------------------------------------------------------

    async def _all_documents(self, has_transcript: bool = False) -> list[Document]:
        criteria = CandidateCriteria(filters=SearchFilters(has_transcript=has_transcript))
        with search_span(
            tracer, "browse.fetch_documents", **{"browse.has_transcript": has_transcript}
        ):
            return await self.store.find_candidates(criteria)

    async def dimension_values(
        self,
        slug: str,
        search: str | None = None,
        min_count: int | None = None,
        limit: int | None = None,
        offset: int | None = 0,
    ) -> DimensionValuesPage:
        """Distinct values of a metadata dimension with sermon counts.

        Raises:
            UnknownDimensionError: If slug is not a registered dimension.
        """
        dimension = require_dimension(slug)
        pagination = self.paginate(limit, offset, default=self.max_page_size)
        documents = await self._all_documents()
        return DimensionValuesPage(
            values=dimension_values(
                documents, dimension, search, min_count, pagination.limit, pagination.offset
            ),
            total=count_dimension_values(documents, dimension, search),
        )

    async def documents_for_value(
        self,
        slug: str,
        value: str,
        sort: BrowseSort = BrowseSort.DATE_DESC,
        has_transcript: bool = False,
        limit: int | None = None,
        offset: int | None = 0,
    ) -> DimensionDocumentsPage:
        dimension = require_dimension(slug)
        pagination = self.paginate(limit, offset, default=20)
        documents = await self._all_documents(has_transcript)
        return DimensionDocumentsPage(
            documents=documents_by_dimension_value(
                documents, dimension, value, sort, has_transcript,
                pagination.limit, pagination.offset,
            ),
            total=len(documents_with_value(documents, dimension, value, has_transcript)),
        )

    async def sermons_for_passage(
        self,
        book: str,
        chapter: int | None = None,
        verse: int | None = None,
        sort: PassageSort = PassageSort.DATE_DESC,
        has_transcript: bool = False,
        limit: int | None = None,
    ) -> list[Document]:
        pagination = self.paginate(limit, 0)
        documents = await self._all_documents(has_transcript)
        return sermons_by_scripture(
            documents, book, chapter, verse, sort, has_transcript, pagination.limit
        )

    async def referencing_sermons(
        self,
        book: str,
        chapter: int,
        limit: int | None = None,
        offset: int | None = 0,
    ) -> ReferencingPage:
        pagination = self.paginate(limit, offset, default=5)
        documents = await self._all_documents()
        return referencing_sermons(documents, book, chapter, pagination.limit, pagination.offset)

    async def books(self) -> list[BookCount]:
        return book_counts(await self._all_documents())

    async def chapters(self, book: str) -> list[ChapterCount]:
        return chapter_counts(await self._all_documents(), book)

    async def transcript(self, document_id: int, query: str | None = None) -> TranscriptParagraphs | None:
        """Cleaned transcript paragraphs of one sermon, or None when it has no transcript."""
        criteria = CandidateCriteria(
            filters=SearchFilters(has_transcript=True), document_id=document_id
        )
        for document in await self.store.find_candidates(criteria):
            if document.id == document_id:
                return transcript_paragraphs(clean_transcript_text(document.transcript_text), query)
        return None

    async def catalog_size(self) -> int:
        """Number of sermons the store holds; used by the readiness probe."""
        return await self.store.count_candidates(CandidateCriteria())


async def _nothing() -> list:
    return []


async def _fetch_both(
    first: Coroutine[Any, Any, list], second: Coroutine[Any, Any, list]
) -> tuple[list, list]:
    """Run two store fetches together; a failure in one cancels the other.

    The first failure is re-raised as itself, not as an ExceptionGroup, so
    callers still catch DocumentStoreUnavailableError.
    """
    try:
        async with asyncio.TaskGroup() as group:
            first_task = group.create_task(first)
            second_task = group.create_task(second)
    except ExceptionGroup as errors:
        raise errors.exceptions[0] from None
    return first_task.result(), second_task.result()
