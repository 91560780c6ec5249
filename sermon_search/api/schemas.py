"""
Pydantic response models shared by the API routers, and converters from the
domain dataclasses.
"""

from datetime import date

from pydantic import BaseModel, Field

from sermon_search.ranking.models import Document, RankedResult, ScriptureTag, SeriesResult
from sermon_search.scripture.parser import ScriptureReference
from sermon_search.snippets.extractor import Snippet

# =============================================================================
# Models
# =============================================================================


class ScriptureTagModel(BaseModel):
    book: str
    chapter: int
    verse_start: int | None = None
    verse_end: int | None = None
    reference_text: str = ""


class ScriptureReferenceModel(BaseModel):
    """A parsed scripture query."""

    book: str
    chapter: int | None = None
    verse: int | None = None
    display: str
    search_text: str


class SermonModel(BaseModel):
    id: int
    title: str
    code: str = ""
    description: str | None = None
    date_preached: date | None = None
    series_id: int | None = None
    series_name: str | None = None
    has_transcript: bool = False
    primary_reference: str | None = None
    scripture_tags: list[ScriptureTagModel] = Field(default_factory=list)


class MatchCountsModel(BaseModel):
    title: int = 0
    description: int = 0
    transcript: int = 0


class RankedSermonModel(BaseModel):
    sermon: SermonModel
    relevance_score: float
    scripture_boost: int = 0
    match_counts: MatchCountsModel


class RankedSeriesModel(BaseModel):
    id: int
    name: str
    description: str | None = None
    relevance_score: float
    sermon_count: int
    matching_sermons: int
    match_count: int


class SnippetModel(BaseModel):
    text: str
    position: int


# =============================================================================
# Converters
# =============================================================================


def tag_model(tag: ScriptureTag) -> ScriptureTagModel:
    return ScriptureTagModel(
        book=tag.book,
        chapter=tag.chapter,
        verse_start=tag.verse_start,
        verse_end=tag.verse_end,
        reference_text=tag.reference_text,
    )


def reference_model(reference: ScriptureReference | None) -> ScriptureReferenceModel | None:
    if reference is None:
        return None
    return ScriptureReferenceModel(
        book=reference.book,
        chapter=reference.chapter,
        verse=reference.verse,
        display=str(reference),
        search_text=reference.search_text,
    )


def sermon_model(document: Document) -> SermonModel:
    """Convert a Document; transcript text is never included in listings."""
    return SermonModel(
        id=document.id,
        title=document.title,
        code=document.code,
        description=document.description,
        date_preached=document.date_preached,
        series_id=document.series_id,
        series_name=document.series_name,
        has_transcript=document.has_transcript,
        primary_reference=document.primary_reference_text,
        scripture_tags=[tag_model(t) for t in document.scripture_tags],
    )


def ranked_sermon_model(result: RankedResult) -> RankedSermonModel:
    counts = result.match_counts
    return RankedSermonModel(
        sermon=sermon_model(result.document),
        relevance_score=result.relevance_score,
        scripture_boost=result.scripture_boost,
        match_counts=MatchCountsModel(
            title=counts.title,
            description=counts.description,
            transcript=counts.transcript,
        ),
    )


def ranked_series_model(result: SeriesResult) -> RankedSeriesModel:
    return RankedSeriesModel(
        id=result.series.id,
        name=result.series.name,
        description=result.series.description,
        relevance_score=result.relevance_score,
        sermon_count=result.sermon_count,
        matching_sermons=result.matching_sermons,
        match_count=result.match_count,
    )


def snippet_model(snippet: Snippet) -> SnippetModel:
    return SnippetModel(text=snippet.text, position=snippet.position)
