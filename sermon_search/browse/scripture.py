"""
Browse by scripture passage.

A sermon "belongs" to the book of its primary (first) tag. Passage pages list
the sermons whose primary book is the page's book; the "also referenced in"
section lists sermons that tag the chapter but belong to another book.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from sermon_search.ranking.models import Document, ScriptureTag
from sermon_search.scripture.books import CANONICAL_BOOKS, book_position


class PassageSort(str, Enum):
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    VERSE = "verse"

    @classmethod
    def parse(cls, value: str | None) -> PassageSort:
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.DATE_DESC


@dataclass(frozen=True, slots=True)
class BookCount:
    book: str
    sermon_count: int


@dataclass(frozen=True, slots=True)
class ChapterCount:
    """sermon_count counts sermons whose primary book is the book; total_count any tagging sermon."""

    chapter: int
    sermon_count: int
    total_count: int


@dataclass(frozen=True, slots=True)
class ReferencingSermon:
    document: Document
    ref_count: int


@dataclass(frozen=True, slots=True)
class ReferencingPage:
    results: list[ReferencingSermon]
    has_more: bool


def _primary_book(document: Document) -> str | None:
    tag = document.primary_tag
    return tag.book if tag else None


def _tag_covers(tag: ScriptureTag, book: str, chapter: int | None, verse: int | None) -> bool:
    if not tag.matches(book, chapter):
        return False
    if verse is None:
        return True
    return tag.contains_verse(verse)


def _newest_first(document: Document) -> tuple:
    preached = document.date_preached
    return (preached is None, -(preached.toordinal() if preached else 0), document.id)


def _oldest_first(document: Document) -> tuple:
    preached = document.date_preached
    return (preached is None, preached.toordinal() if preached else 0, document.id)


def sermons_by_scripture(
    documents: Iterable[Document],
    book: str,
    chapter: int | None = None,
    verse: int | None = None,
    sort: PassageSort = PassageSort.DATE_DESC,
    has_transcript: bool = False,
    limit: int = 50,
) -> list[Document]:
    """Sermons on a passage whose primary book is book."""
    matches: list[tuple[Document, int | None]] = []
    for document in documents:
        if _primary_book(document) != book:
            continue
        if has_transcript and not document.has_transcript:
            continue
        covering = [t for t in document.scripture_tags if _tag_covers(t, book, chapter, verse)]
        if not covering:
            continue
        starts = [t.verse_start for t in covering if t.verse_start is not None]
        matches.append((document, min(starts) if starts else None))

    if sort is PassageSort.VERSE:
        matches.sort(
            key=lambda m: (m[1] is None, m[1] or 0, _oldest_first(m[0]))
        )
    elif sort is PassageSort.DATE_ASC:
        matches.sort(key=lambda m: _oldest_first(m[0]))
    else:
        matches.sort(key=lambda m: _newest_first(m[0]))

    return [document for document, _ in matches[: max(0, limit)]]


def referencing_sermons(
    documents: Iterable[Document],
    book: str,
    chapter: int,
    limit: int = 5,
    offset: int = 0,
) -> ReferencingPage:
    """Sermons tagging book+chapter whose primary book is a different book.

    Ordered by how many of their tags hit the chapter, then newest first.
    """
    found: list[ReferencingSermon] = []
    for document in documents:
        primary = _primary_book(document)
        if primary is None or primary == book:
            continue
        hits = sum(1 for t in document.scripture_tags if t.matches(book, chapter))
        if hits:
            found.append(ReferencingSermon(document=document, ref_count=hits))

    found.sort(key=lambda r: (-r.ref_count, _newest_first(r.document)))
    offset = max(0, offset)
    window = found[offset : offset + limit + 1]
    return ReferencingPage(results=window[:limit], has_more=len(window) > limit)


def book_counts(documents: Iterable[Document]) -> list[BookCount]:
    """Sermon counts per primary book, most preached first."""
    counts = Counter(
        book for book in (_primary_book(d) for d in documents) if book is not None
    )

    def canon_order(book: str) -> int:
        try:
            return book_position(book)
        except ValueError:
            return len(CANONICAL_BOOKS)

    return [
        BookCount(book=book, sermon_count=count)
        for book, count in sorted(counts.items(), key=lambda i: (-i[1], canon_order(i[0])))
    ]


def chapter_counts(documents: Iterable[Document], book: str) -> list[ChapterCount]:
    """Chapters of book that any sermon tags, in chapter order."""
    primary: dict[int, set[int]] = {}
    total: dict[int, set[int]] = {}
    for document in documents:
        is_primary = _primary_book(document) == book
        for tag in document.scripture_tags:
            if tag.book != book:
                continue
            total.setdefault(tag.chapter, set()).add(document.id)
            primary.setdefault(tag.chapter, set())
            if is_primary:
                primary[tag.chapter].add(document.id)

    return [
        ChapterCount(
            chapter=chapter,
            sermon_count=len(primary[chapter]),
            total_count=len(total[chapter]),
        )
        for chapter in sorted(total)
    ]
