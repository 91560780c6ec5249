"""
Scripture endpoints.

GET /v1/scripture/parse?q=                       - parse a query into a reference
GET /v1/scripture/books                          - books with sermon counts
GET /v1/scripture/{book}                         - sermons on a passage
GET /v1/scripture/{book}/chapters                - chapters of a book with counts
GET /v1/scripture/{book}/{chapter}/referencing   - sermons from other books tagging the chapter

{book} accepts any registered abbreviation ("rom", "1 cor").
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel

from sermon_search.api.dependencies import get_search_service, lenient_int
from sermon_search.api.schemas import (
    ScriptureReferenceModel,
    SermonModel,
    reference_model,
    sermon_model,
)
from sermon_search.browse.scripture import PassageSort
from sermon_search.ranking.filters import parse_flag
from sermon_search.scripture.normalizer import normalize_book_name
from sermon_search.scripture.parser import parse_scripture_query
from sermon_search.search.service import SearchService

# =============================================================================
# Response Models
# =============================================================================


class ParseResponse(BaseModel):
    query: str
    reference: ScriptureReferenceModel | None = None


class BookCountModel(BaseModel):
    book: str
    sermon_count: int


class BooksResponse(BaseModel):
    books: list[BookCountModel]


class ChapterCountModel(BaseModel):
    chapter: int
    sermon_count: int
    total_count: int


class ChaptersResponse(BaseModel):
    book: str
    chapters: list[ChapterCountModel]


class PassageResponse(BaseModel):
    book: str
    chapter: int | None = None
    verse: int | None = None
    sort: str
    sermons: list[SermonModel]


class ReferencingSermonModel(BaseModel):
    sermon: SermonModel
    ref_count: int


class ReferencingResponse(BaseModel):
    book: str
    chapter: int
    results: list[ReferencingSermonModel]
    has_more: bool


# =============================================================================
# Router
# =============================================================================

scripture_router = APIRouter(prefix="/v1/scripture", tags=["scripture"])


def _canonical_book(book: str) -> str:
    canonical = normalize_book_name(book)
    if canonical is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown book: {book}",
        )
    return canonical


@scripture_router.get("/parse", response_model=ParseResponse)
async def parse_reference(q: str = "") -> ParseResponse:
    return ParseResponse(query=q, reference=reference_model(parse_scripture_query(q)))


@scripture_router.get("/books", response_model=BooksResponse)
async def list_books(
    service: Annotated[SearchService, Depends(get_search_service)],
) -> BooksResponse:
    counts = await service.books()
    return BooksResponse(
        books=[BookCountModel(book=c.book, sermon_count=c.sermon_count) for c in counts]
    )


@scripture_router.get("/{book}", response_model=PassageResponse)
async def passage_sermons(
    book: str,
    service: Annotated[SearchService, Depends(get_search_service)],
    chapter: str | None = None,
    verse: str | None = None,
    sort: str | None = None,
    transcript: str | None = None,
    limit: str | None = None,
) -> PassageResponse:
    """Sermons whose primary book is {book}, optionally narrowed to a chapter and verse.

    A verse without a chapter is ignored.
    """
    canonical = _canonical_book(book)
    chapter_number = lenient_int(chapter)
    verse_number = lenient_int(verse) if chapter_number is not None else None
    passage_sort = PassageSort.parse(sort)

    documents = await service.sermons_for_passage(
        canonical,
        chapter_number,
        verse_number,
        passage_sort,
        parse_flag(transcript),
        lenient_int(limit),
    )
    return PassageResponse(
        book=canonical,
        chapter=chapter_number,
        verse=verse_number,
        sort=passage_sort.value,
        sermons=[sermon_model(d) for d in documents],
    )


@scripture_router.get("/{book}/chapters", response_model=ChaptersResponse)
async def book_chapters(
    book: str,
    service: Annotated[SearchService, Depends(get_search_service)],
) -> ChaptersResponse:
    canonical = _canonical_book(book)
    counts = await service.chapters(canonical)
    return ChaptersResponse(
        book=canonical,
        chapters=[
            ChapterCountModel(
                chapter=c.chapter, sermon_count=c.sermon_count, total_count=c.total_count
            )
            for c in counts
        ],
    )


@scripture_router.get("/{book}/{chapter}/referencing", response_model=ReferencingResponse)
async def referencing(
    book: str,
    chapter: int,
    service: Annotated[SearchService, Depends(get_search_service)],
    offset: str | None = None,
    limit: str | None = None,
) -> ReferencingResponse:
    canonical = _canonical_book(book)
    page = await service.referencing_sermons(
        canonical, chapter, lenient_int(limit), lenient_int(offset)
    )
    return ReferencingResponse(
        book=canonical,
        chapter=chapter,
        results=[
            ReferencingSermonModel(sermon=sermon_model(r.document), ref_count=r.ref_count)
            for r in page.results
        ],
        has_more=page.has_more,
    )
