"""
Ranking Models

Read-only views of the documents held by the external store, and the
transient result types produced per search call.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from types import MappingProxyType
from typing import Any, Mapping

_EMPTY_METADATA: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True, slots=True)
class ScriptureTag:
    """A structured scripture annotation attached to a sermon.

    Attributes:
        book: Canonical book name
        chapter: Chapter number
        verse_start: First verse covered, if the tag is verse-level
        verse_end: Last verse covered; None means open-ended from verse_start
        reference_text: Display form as stored, e.g. "Romans 8:1-4"
    """

    book: str
    chapter: int
    verse_start: int | None = None
    verse_end: int | None = None
    reference_text: str = ""

    def matches(self, book: str, chapter: int | None = None) -> bool:
        """True when the tag is in book (and chapter, when given)."""
        if self.book != book:
            return False
        return chapter is None or self.chapter == chapter

    def contains_verse(self, verse: int) -> bool:
        """True when verse falls inside this tag's verse span."""
        if self.verse_start is None:
            return False
        if self.verse_start == verse:
            return True
        return self.verse_start <= verse and (
            self.verse_end is None or self.verse_end >= verse
        )


@dataclass(frozen=True, slots=True)
class Document:
    """A sermon as served by the document store.

    scripture_tags keep their stored order; the first tag is the sermon's
    primary reference.
    """

    id: int
    title: str
    code: str = ""
    description: str | None = None
    transcript_text: str | None = None
    date_preached: date | None = None
    series_id: int | None = None
    series_name: str | None = None
    scripture_tags: tuple[ScriptureTag, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=lambda: _EMPTY_METADATA)

    @property
    def primary_tag(self) -> ScriptureTag | None:
        return self.scripture_tags[0] if self.scripture_tags else None

    @property
    def primary_reference_text(self) -> str | None:
        tag = self.primary_tag
        if tag is None or not tag.reference_text:
            return None
        return tag.reference_text

    @property
    def has_transcript(self) -> bool:
        return self.transcript_text is not None


@dataclass(frozen=True, slots=True)
class Series:
    """A sermon series together with all of its member sermons."""

    id: int
    name: str
    description: str | None = None
    sermons: tuple[Document, ...] = ()

    @property
    def sermon_count(self) -> int:
        return len(self.sermons)


@dataclass(frozen=True, slots=True)
class MatchCounts:
    """Approximate query occurrences per field."""

    title: int = 0
    description: int = 0
    transcript: int = 0

    @property
    def total(self) -> int:
        return self.title + self.description + self.transcript

    @property
    def any(self) -> bool:
        return self.total > 0


@dataclass(frozen=True, slots=True)
class RankedResult:
    """A sermon with its relevance score for one search call."""

    document: Document
    relevance_score: float
    match_counts: MatchCounts
    scripture_boost: int = 0


@dataclass(frozen=True, slots=True)
class SeriesResult:
    """A series with its aggregated relevance score for one search call."""

    series: Series
    relevance_score: float
    sermon_count: int
    matching_sermons: int
    match_count: int


@dataclass(frozen=True, slots=True)
class RankedPage:
    """One page of ranked sermons.

    has_more is derived from fetching one item past the page, never from a
    total count.
    """

    results: list[RankedResult]
    has_more: bool
    offset: int = 0

    @property
    def next_offset(self) -> int:
        return self.offset + len(self.results)


def _parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def tag_from_payload(payload: Mapping[str, Any]) -> ScriptureTag:
    """Build a ScriptureTag from a store JSON object."""
    return ScriptureTag(
        book=payload["book"],
        chapter=int(payload["chapter"]),
        verse_start=payload.get("verse_start"),
        verse_end=payload.get("verse_end"),
        reference_text=payload.get("reference_text") or "",
    )


def document_from_payload(payload: Mapping[str, Any]) -> Document:
    """Build a Document from a store JSON object.

    Sermon metadata may arrive as "metadata" (object) or as "llm_metadata"
    (object or JSON text, as stored in the archive database).
    """
    metadata = payload.get("metadata") or payload.get("llm_metadata") or {}
    if isinstance(metadata, str):
        metadata = json.loads(metadata)
    return Document(
        id=int(payload["id"]),
        code=payload.get("sermon_code") or payload.get("code") or "",
        title=payload.get("title") or "",
        description=payload.get("description"),
        transcript_text=payload.get("transcript_text"),
        date_preached=_parse_date(payload.get("date_preached")),
        series_id=payload.get("series_id"),
        series_name=payload.get("series_name"),
        scripture_tags=tuple(
            tag_from_payload(tag) for tag in payload.get("scripture_references", [])
        ),
        metadata=MappingProxyType(dict(metadata)),
    )


def series_from_payload(payload: Mapping[str, Any]) -> Series:
    """Build a Series (with members) from a store JSON object."""
    return Series(
        id=int(payload["id"]),
        name=payload.get("name") or "",
        description=payload.get("description"),
        sermons=tuple(document_from_payload(s) for s in payload.get("sermons", [])),
    )
