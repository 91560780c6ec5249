"""
Candidate Eligibility

Decides which documents take part in a search and counts raw query
occurrences per field. Shared by the scorer and by the in-memory store so
that both apply exactly the same predicates.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sermon_search.browse.dimensions import resolve_json_path
from sermon_search.ranking.filters import SearchFilters
from sermon_search.ranking.models import Document, MatchCounts
from sermon_search.scripture.parser import ScriptureReference

SERMON_TYPE_PATH = "$.summary.sermon_type"
CATEGORIES_PATH = "$.themes.theological_categories"
OUTLINE_PATH = "$.structure.main_points"


def occurrence_count(text: str | None, query: str) -> int:
    """Approximate count of query inside text, case-insensitive.

    Computed as the length removed by deleting every occurrence divided by
    the query length. This is a coarse substring count: partial words match
    ("grace" counts inside "graceful") and repeated text counts each time.

    Args:
        text: Field text; None counts as empty
        query: Query string (any case)
    """
    if not text or not query:
        return 0
    haystack = text.lower()
    needle = query.lower()
    removed = len(haystack) - len(haystack.replace(needle, ""))
    return removed // len(needle)


def match_counts(document: Document, query: str) -> MatchCounts:
    return MatchCounts(
        title=occurrence_count(document.title, query),
        description=occurrence_count(document.description, query),
        transcript=occurrence_count(document.transcript_text, query),
    )


def text_matches(document: Document, query: str) -> bool:
    needle = query.lower()
    return any(
        needle in (text or "").lower()
        for text in (document.title, document.description, document.transcript_text)
    )


def reference_matches(document: Document, reference: ScriptureReference) -> bool:
    """True when any tag is in the reference's book (and chapter, if given)."""
    return any(
        tag.matches(reference.book, reference.chapter) for tag in document.scripture_tags
    )


def _has_category(metadata: Any, category: str) -> bool:
    categories = resolve_json_path(metadata, CATEGORIES_PATH)
    if not isinstance(categories, list):
        return False
    prefix = category.lower()
    return any(isinstance(c, str) and c.lower().startswith(prefix) for c in categories)


def _has_outline(metadata: Any) -> bool:
    points = resolve_json_path(metadata, OUTLINE_PATH)
    return isinstance(points, list) and len(points) > 0


def passes_filters(document: Document, filters: SearchFilters) -> bool:
    """Apply the hard inclusion predicates of a search."""
    if filters.has_transcript and not document.has_transcript:
        return False
    if filters.sermon_type is not None:
        if resolve_json_path(document.metadata, SERMON_TYPE_PATH) != filters.sermon_type:
            return False
    if filters.category is not None and not _has_category(document.metadata, filters.category):
        return False
    decade_range = filters.decade_range
    if decade_range is not None:
        start, end = decade_range
        if document.date_preached is None or not start <= document.date_preached < end:
            return False
    if filters.has_outline and not _has_outline(document.metadata):
        return False
    return True


@dataclass(frozen=True, slots=True)
class CandidateCriteria:
    """What the scorer asks the document store for.

    A document is a candidate when it passes the filters and either contains
    text (title, description or transcript) or carries a scripture tag
    matching reference. With neither text nor reference every document
    passing the filters is a candidate (the browse flows use this).
    require_transcript_text narrows the text match to the transcript alone.
    document_id restricts the result to that one sermon.
    """

    text: str | None = None
    reference: ScriptureReference | None = None
    filters: SearchFilters = field(default_factory=SearchFilters)
    require_transcript_text: bool = False
    document_id: int | None = None

    def matches(self, document: Document) -> bool:
        if self.document_id is not None and document.id != self.document_id:
            return False
        if not passes_filters(document, self.filters):
            return False
        if self.require_transcript_text:
            needle = (self.text or "").lower()
            return document.has_transcript and needle in document.transcript_text.lower()
        if self.text is None and self.reference is None:
            return True
        if self.text and text_matches(document, self.text):
            return True
        return self.reference is not None and reference_matches(document, self.reference)

    def to_payload(self) -> dict[str, Any]:
        reference = None
        if self.reference is not None:
            reference = {
                "book": self.reference.book,
                "chapter": self.reference.chapter,
                "verse": self.reference.verse,
            }
        return {
            "text": self.text,
            "reference": reference,
            "filters": self.filters.to_payload(),
            "require_transcript_text": self.require_transcript_text,
            "document_id": self.document_id,
        }
