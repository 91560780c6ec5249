"""
Search endpoints.

GET /v1/search             - ranked series + sermons for a text or scripture query
GET /v1/search/transcripts - sermons whose transcript contains the query, with snippets

Filter values arrive as raw strings and are normalised, never rejected: an
unknown sort falls back to relevance, a bad decade is ignored, a negative
limit takes the default.
"""

import time
from typing import Annotated, Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from sermon_search.api.dependencies import get_search_service, lenient_int
from sermon_search.api.schemas import (
    RankedSeriesModel,
    RankedSermonModel,
    ScriptureReferenceModel,
    SermonModel,
    SnippetModel,
    ranked_series_model,
    ranked_sermon_model,
    reference_model,
    sermon_model,
    snippet_model,
)
from sermon_search.ranking.filters import SearchFilters
from sermon_search.search.service import SearchService

# =============================================================================
# Response Models
# =============================================================================


class SearchMetadata(BaseModel):
    processing_time_ms: float
    total_results: int
    offset: int
    next_offset: int
    has_more: bool


class SearchResponse(BaseModel):
    query: str
    scripture_reference: ScriptureReferenceModel | None = None
    filters: dict[str, Any]
    series: list[RankedSeriesModel]
    sermons: list[RankedSermonModel]
    metadata: SearchMetadata


class TranscriptHitModel(BaseModel):
    sermon: SermonModel
    transcript_matches: int
    snippets: list[SnippetModel]


class TranscriptSearchResponse(BaseModel):
    query: str
    search_text: str
    results: list[TranscriptHitModel]
    has_more: bool
    offset: int


# =============================================================================
# Router
# =============================================================================

search_router = APIRouter(prefix="/v1", tags=["search"])


@search_router.get("/search", response_model=SearchResponse)
async def search(
    service: Annotated[SearchService, Depends(get_search_service)],
    q: str = "",
    sort: str | None = None,
    transcript: str | None = None,
    type: str | None = None,
    cat: str | None = None,
    decade: str | None = None,
    outline: str | None = None,
    content: str | None = None,
    offset: str | None = None,
    limit: str | None = None,
) -> SearchResponse:
    """Relevance search over sermons and series.

    Series are only returned on the first page (offset 0).
    """
    start_time = time.perf_counter()
    filters = SearchFilters.from_raw(
        sort=sort,
        content=content,
        has_transcript=transcript,
        sermon_type=type,
        category=cat,
        decade=decade,
        has_outline=outline,
    )
    page = await service.search(q, filters, lenient_int(offset), lenient_int(limit))

    return SearchResponse(
        query=page.query,
        scripture_reference=reference_model(page.scripture_reference),
        filters=filters.to_payload(),
        series=[ranked_series_model(s) for s in page.series],
        sermons=[ranked_sermon_model(r) for r in page.sermons],
        metadata=SearchMetadata(
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
            total_results=page.total_results,
            offset=page.offset,
            next_offset=page.next_offset,
            has_more=page.has_more,
        ),
    )


@search_router.get("/search/transcripts", response_model=TranscriptSearchResponse)
async def search_transcripts(
    service: Annotated[SearchService, Depends(get_search_service)],
    q: str = "",
    offset: str | None = None,
    limit: str | None = None,
) -> TranscriptSearchResponse:
    page = await service.search_transcripts(q, lenient_int(offset), lenient_int(limit))
    return TranscriptSearchResponse(
        query=page.query,
        search_text=page.search_text,
        results=[
            TranscriptHitModel(
                sermon=sermon_model(hit.document),
                transcript_matches=hit.transcript_matches,
                snippets=[snippet_model(s) for s in hit.snippets],
            )
            for hit in page.results
        ],
        has_more=page.has_more,
        offset=page.offset,
    )
